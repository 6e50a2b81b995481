"""User and identity entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class UserRole(str, Enum):
    """Access roles, most to least privileged."""

    ADMIN = "admin"
    MANAGER = "manager"
    STOCK_CONTROLLER = "stock_controller"
    VIEWER = "viewer"


class User(BaseModel):
    """Application user. ``password_hash`` never leaves the application layer."""

    id: int | None = None
    email: str
    password_hash: str
    name: str
    role: UserRole = UserRole.VIEWER
    telegram_chat_id: str | None = None
    created_at: datetime | None = None


class Actor(BaseModel):
    """Authenticated identity passed explicitly into core operations."""

    id: int
    name: str
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(id=user.id, name=user.name, role=user.role)  # type: ignore[arg-type]
