"""
API test fixtures.

Routes run against real SQLite stores on a temporary database; only the
alert dispatcher is replaced. Tokens are minted directly so most tests
skip the login round trip.
"""

from collections.abc import AsyncIterator, Callable
from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import get_alerts
from src.api.main import app
from src.core.entities.user import User, UserRole
from src.infrastructure.security import create_access_token, hash_password
from src.infrastructure.storage.sqlite import SQLiteUserStore

API_PASSWORD = "correct-horse-1"


@pytest.fixture
async def api_users(seeded) -> dict[UserRole, User]:
    """One user per role, all with API_PASSWORD."""
    store = SQLiteUserStore()
    password_hash = hash_password(API_PASSWORD)
    users = {}
    for role in UserRole:
        users[role] = await store.create_user(
            User(
                email=f"{role.value}@ics.com",
                password_hash=password_hash,
                name=role.value.replace("_", " ").title(),
                role=role,
            )
        )
    return users


@pytest.fixture
def auth_headers(api_users) -> Callable[[UserRole], dict[str, str]]:
    def headers(role: UserRole) -> dict[str, str]:
        user = api_users[role]
        token = create_access_token(user.id, role.value)
        return {"Authorization": f"Bearer {token}"}

    return headers


@pytest.fixture
def mock_alerts() -> MagicMock:
    alerts = MagicMock()
    alerts.publish.return_value = True
    return alerts


@pytest.fixture
async def client(mock_alerts) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_alerts] = lambda: mock_alerts
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_alerts, None)
