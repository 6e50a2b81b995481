"""bcrypt password hashing."""

import bcrypt

from src.config import get_settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password; the returned string embeds salt and cost."""
    rounds = rounds or get_settings().auth.bcrypt_rounds
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of a password against a stored hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
