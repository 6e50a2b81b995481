"""Abstract interface for user storage."""

from abc import ABC, abstractmethod

from src.core.entities.user import User, UserRole


class IUserStore(ABC):
    """Interface for user persistence."""

    @abstractmethod
    async def list_users(self) -> list[User]:
        """List users ordered by id."""
        pass

    @abstractmethod
    async def get_user(self, user_id: int) -> User | None:
        """Get user by ID."""
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by login email."""
        pass

    @abstractmethod
    async def create_user(self, user: User) -> User:
        """Create a user. Raises DuplicateEntityError on a taken email."""
        pass

    @abstractmethod
    async def delete_user(self, user_id: int) -> None:
        """
        Hard-delete a user.

        Raises:
            NotFoundError: no such user.
            EntityInUseError: the user recorded ledger entries.
        """
        pass

    @abstractmethod
    async def list_alert_recipients(self, roles: list[UserRole]) -> list[User]:
        """Users in the given roles with a Telegram chat id."""
        pass
