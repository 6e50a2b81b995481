"""
Role-based access policy.

The ledger itself is role-agnostic; callers check permissions here
before invoking a use case.
"""

from enum import Enum

from src.core.entities.user import Actor, UserRole
from src.core.exceptions import UnauthorizedError


class Permission(str, Enum):
    VIEW_INVENTORY = "view_inventory"
    MANAGE_CATALOG = "manage_catalog"
    RECORD_STOCK = "record_stock"
    VIEW_REPORTS = "view_reports"
    MANAGE_USERS = "manage_users"


ROLE_PERMISSIONS: dict[UserRole, frozenset[Permission]] = {
    UserRole.ADMIN: frozenset(Permission),
    UserRole.MANAGER: frozenset(
        {
            Permission.VIEW_INVENTORY,
            Permission.MANAGE_CATALOG,
            Permission.RECORD_STOCK,
            Permission.VIEW_REPORTS,
        }
    ),
    UserRole.STOCK_CONTROLLER: frozenset(
        {Permission.VIEW_INVENTORY, Permission.RECORD_STOCK}
    ),
    UserRole.VIEWER: frozenset({Permission.VIEW_INVENTORY, Permission.VIEW_REPORTS}),
}

# Roles that receive low-stock alerts
ALERT_ROLES: list[UserRole] = [UserRole.ADMIN, UserRole.MANAGER]


def has_permission(role: UserRole, permission: Permission) -> bool:
    return permission in ROLE_PERMISSIONS.get(role, frozenset())


def ensure_permission(actor: Actor, permission: Permission) -> None:
    """Raise UnauthorizedError unless the actor's role grants ``permission``."""
    if not has_permission(actor.role, permission):
        raise UnauthorizedError(actor.role.value, permission.value)
