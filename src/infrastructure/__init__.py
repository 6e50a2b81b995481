"""Infrastructure layer implementations."""

from src.infrastructure import notifications, security, storage

__all__ = ["storage", "security", "notifications"]
