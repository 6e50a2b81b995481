"""User management use cases (admin only at the API layer)."""

from src.application.dto.requests import CreateUserRequest
from src.application.dto.responses import UserResponse
from src.config import get_logger
from src.core.entities.user import Actor, User
from src.core.exceptions import NotFoundError, ValidationError
from src.core.interfaces import IUserStore

logger = get_logger(__name__)


class _UserStoreMixin:
    _user_store: IUserStore | None

    async def _get_user_store(self) -> IUserStore:
        if self._user_store is None:
            from src.infrastructure.storage.sqlite import get_user_store

            self._user_store = await get_user_store()
        return self._user_store


class CreateUserUseCase(_UserStoreMixin):
    """Create a user with a bcrypt-hashed password."""

    def __init__(self, user_store: IUserStore | None = None):
        self._user_store = user_store

    async def execute(self, request: CreateUserRequest) -> User:
        from src.infrastructure.security import hash_password

        email = request.email.strip().lower()
        if "@" not in email:
            raise ValidationError("email", "Email address is invalid", request.email)

        user = User(
            email=email,
            password_hash=hash_password(request.password),
            name=request.name.strip(),
            role=request.role,
            telegram_chat_id=request.telegram_chat_id or None,
        )
        store = await self._get_user_store()
        return await store.create_user(user)

    def to_response(self, user: User) -> UserResponse:
        return UserResponse.from_entity(user)


class DeleteUserUseCase(_UserStoreMixin):
    """Delete a user who has not recorded any ledger entries."""

    def __init__(self, user_store: IUserStore | None = None):
        self._user_store = user_store

    async def execute(self, user_id: int, actor: Actor) -> None:
        """
        Raises:
            ValidationError: actor tried to delete themselves.
            NotFoundError: no such user.
            EntityInUseError: user recorded ledger entries.
        """
        if user_id == actor.id:
            raise ValidationError("id", "You cannot delete your own account", user_id)

        store = await self._get_user_store()
        if await store.get_user(user_id) is None:
            raise NotFoundError("user", user_id)
        await store.delete_user(user_id)
        logger.info("user_removed", user_id=user_id, actor_id=actor.id)
