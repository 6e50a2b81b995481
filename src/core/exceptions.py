"""
Domain exceptions for the inventory ledger.

Every failure a core operation can report has its own type, so callers
can map them to responses without parsing messages.
"""

from typing import Any


class InventoryError(Exception):
    """Base exception for all inventory errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


# Validation Exceptions
class ValidationError(InventoryError):
    """Input shape or range is invalid."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "value": str(value)[:100] if value is not None else None,
            },
        )
        self.field = field


class MissingReferenceError(InventoryError):
    """A referenced row (product, supplier, user, category) does not exist."""

    def __init__(self, entity: str, entity_id: int | None):
        super().__init__(
            f"Referenced {entity} does not exist: {entity_id}",
            code="REFERENCE_ERROR",
            details={"entity": entity, "entity_id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class InsufficientStockError(InventoryError):
    """Dispatch quantity exceeds the derived current stock."""

    def __init__(self, product_id: int, requested: int, available: int):
        super().__init__(
            "Insufficient stock",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "requested": requested,
                "available": available,
            },
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


# Storage Exceptions
class StorageError(InventoryError):
    """Base exception for storage operations."""

    pass


class NotFoundError(StorageError):
    """Entity id absent on read, update or delete."""

    def __init__(self, entity: str, entity_id: int | str):
        super().__init__(
            f"{entity.capitalize()} not found: {entity_id}",
            code="NOT_FOUND",
            details={"entity": entity, "entity_id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class DuplicateEntityError(StorageError):
    """A unique field already holds this value."""

    def __init__(self, entity: str, field: str, value: Any):
        super().__init__(
            f"{entity.capitalize()} with {field} '{value}' already exists",
            code="DUPLICATE_ENTITY",
            details={"entity": entity, "field": field, "value": str(value)[:100]},
        )


class EntityInUseError(StorageError):
    """Delete refused because ledger entries still reference the entity."""

    def __init__(self, entity: str, entity_id: int, reason: str):
        super().__init__(
            f"Cannot delete {entity} {entity_id}: {reason}",
            code="ENTITY_IN_USE",
            details={"entity": entity, "entity_id": entity_id, "reason": reason},
        )


# Access Exceptions
class AuthenticationError(InventoryError):
    """Credentials or token missing or invalid."""

    def __init__(self, reason: str = "Not authenticated"):
        super().__init__(reason, code="AUTHENTICATION_FAILED")


class UnauthorizedError(InventoryError):
    """Caller's role does not grant the requested permission."""

    def __init__(self, role: str, permission: str):
        super().__init__(
            f"Role '{role}' is not allowed to {permission.replace('_', ' ')}",
            code="UNAUTHORIZED",
            details={"role": role, "permission": permission},
        )


# Notification Exceptions
class NotificationError(InventoryError):
    """Alert could not be delivered to the external channel."""

    def __init__(self, channel: str, reason: str):
        super().__init__(
            f"Notification via {channel} failed: {reason}",
            code="NOTIFICATION_FAILED",
            details={"channel": channel, "reason": reason},
        )
