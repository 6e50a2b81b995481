"""Authenticate User Use Case: login and token resolution."""

from dataclasses import dataclass
from typing import Protocol

from src.application.dto.requests import LoginRequest
from src.application.dto.responses import LoginResponse, UserResponse
from src.config import get_logger
from src.core.entities.user import Actor, User
from src.core.exceptions import AuthenticationError
from src.core.interfaces import IUserStore

logger = get_logger(__name__)


class Credentials(Protocol):
    def verify_password(self, password: str, password_hash: str) -> bool: ...

    def create_access_token(self, user_id: int, role: str) -> str: ...

    def decode_access_token(self, token: str) -> int: ...


@dataclass
class AuthenticationResult:
    user: User
    access_token: str


class AuthenticateUserUseCase:
    """Exchange credentials for a bearer token, and tokens for actors."""

    def __init__(
        self,
        user_store: IUserStore | None = None,
        credentials: Credentials | None = None,
    ):
        self._user_store = user_store
        self._credentials = credentials

    async def _get_user_store(self) -> IUserStore:
        if self._user_store is None:
            from src.infrastructure.storage.sqlite import get_user_store

            self._user_store = await get_user_store()
        return self._user_store

    def _get_credentials(self) -> Credentials:
        if self._credentials is None:
            from src.infrastructure import security

            self._credentials = security
        return self._credentials

    async def execute(self, request: LoginRequest) -> AuthenticationResult:
        """
        Check credentials.

        Raises:
            AuthenticationError: unknown user or wrong password. The two
                cases are indistinguishable to the caller.
        """
        credentials = self._get_credentials()
        store = await self._get_user_store()
        user = await store.get_user_by_email(request.username.strip())

        if user is None or not credentials.verify_password(
            request.password, user.password_hash
        ):
            logger.info("login_failed", username=request.username)
            raise AuthenticationError("Invalid username or password")

        token = credentials.create_access_token(user.id, user.role.value)  # type: ignore[arg-type]
        logger.info("login_succeeded", user_id=user.id, role=user.role.value)
        return AuthenticationResult(user=user, access_token=token)

    async def resolve_token(self, token: str) -> User:
        """
        Load the user a bearer token was issued for.

        Raises:
            AuthenticationError: token invalid or user since deleted.
        """
        user_id = self._get_credentials().decode_access_token(token)
        store = await self._get_user_store()
        user = await store.get_user(user_id)
        if user is None:
            raise AuthenticationError("User no longer exists")
        return user

    async def resolve_actor(self, token: str) -> Actor:
        return Actor.from_user(await self.resolve_token(token))

    def to_response(self, result: AuthenticationResult) -> LoginResponse:
        return LoginResponse(
            user=UserResponse.from_entity(result.user),
            access_token=result.access_token,
        )
