"""JWT access tokens signed with python-jose."""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from src.config import get_logger, get_settings
from src.core.exceptions import AuthenticationError

logger = get_logger(__name__)


def create_access_token(
    user_id: int,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token for a user.

    The subject is the user id; the role is included for logging only,
    callers always reload the user before authorizing.
    """
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.auth.token_expire_minutes)
    )
    payload: dict[str, Any] = {"sub": str(user_id), "role": role, "exp": expire}
    return jwt.encode(payload, settings.auth.secret_key, algorithm=settings.auth.algorithm)


def decode_access_token(token: str) -> int:
    """
    Verify a token and return the user id it was issued for.

    Raises:
        AuthenticationError: signature, expiry or subject invalid.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.auth.secret_key, algorithms=[settings.auth.algorithm]
        )
    except JWTError as e:
        logger.info("access_token_rejected", error=str(e))
        raise AuthenticationError("Invalid or expired token") from e

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as e:
        raise AuthenticationError("Invalid token subject") from e
