"""Password hashing and access tokens."""

from src.infrastructure.security.passwords import hash_password, verify_password
from src.infrastructure.security.tokens import create_access_token, decode_access_token

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_access_token",
]
