"""SQLite implementation of user storage."""

from datetime import datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.user import User, UserRole
from src.core.exceptions import DuplicateEntityError, EntityInUseError, NotFoundError
from src.core.interfaces.user_store import IUserStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteUserStore(IUserStore):
    """SQLite implementation of user persistence."""

    async def list_users(self) -> list[User]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users ORDER BY id")
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    async def get_user(self, user_id: int) -> User | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def get_user_by_email(self, email: str) -> User | None:
        """Emails are matched case-insensitively."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM users WHERE lower(email) = lower(?)", (email,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def create_user(self, user: User) -> User:
        user.created_at = user.created_at or datetime.now()
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO users (
                        email, password_hash, name, role, telegram_chat_id, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        user.email,
                        user.password_hash,
                        user.name,
                        user.role.value,
                        user.telegram_chat_id,
                        user.created_at.isoformat(),
                    ),
                )
                user.id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            raise DuplicateEntityError("user", "email", user.email) from e

        logger.info("user_created", user_id=user.id, role=user.role.value)
        return user

    async def delete_user(self, user_id: int) -> None:
        """Hard delete, refused while the user has recorded ledger entries."""
        async with get_transaction() as conn:
            movements = await self._count_recorded(conn, user_id)
            if movements:
                raise EntityInUseError(
                    "user", user_id, f"user recorded {movements} ledger entries"
                )

            try:
                cursor = await conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            except aiosqlite.IntegrityError as e:
                raise EntityInUseError("user", user_id, "user recorded ledger entries") from e
            if cursor.rowcount == 0:
                raise NotFoundError("user", user_id)

        logger.info("user_deleted", user_id=user_id)

    async def list_alert_recipients(self, roles: list[UserRole]) -> list[User]:
        if not roles:
            return []
        placeholders = ", ".join("?" for _ in roles)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM users
                WHERE role IN ({placeholders})
                  AND telegram_chat_id IS NOT NULL AND telegram_chat_id != ''
                ORDER BY id
                """,
                [role.value for role in roles],
            )
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    @staticmethod
    async def _count_recorded(conn: aiosqlite.Connection, user_id: int) -> int:
        cursor = await conn.execute(
            """
            SELECT (SELECT COUNT(*) FROM stock_in WHERE recorded_by = ?)
                 + (SELECT COUNT(*) FROM stock_out WHERE recorded_by = ?)
            """,
            (user_id, user_id),
        )
        return (await cursor.fetchone())[0]

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        return User(
            id=row["id"],
            email=row["email"],
            password_hash=row["password_hash"],
            name=row["name"],
            role=UserRole(row["role"]),
            telegram_chat_id=row["telegram_chat_id"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
