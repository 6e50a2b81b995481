"""Tests for the role permission matrix."""

import pytest

from src.core.entities.user import Actor, UserRole
from src.core.exceptions import UnauthorizedError
from src.core.services.access_policy import (
    ALERT_ROLES,
    Permission,
    ensure_permission,
    has_permission,
)


@pytest.mark.parametrize(
    "role,permission,allowed",
    [
        (UserRole.ADMIN, Permission.MANAGE_USERS, True),
        (UserRole.MANAGER, Permission.MANAGE_USERS, False),
        (UserRole.MANAGER, Permission.MANAGE_CATALOG, True),
        (UserRole.STOCK_CONTROLLER, Permission.RECORD_STOCK, True),
        (UserRole.STOCK_CONTROLLER, Permission.MANAGE_CATALOG, False),
        (UserRole.STOCK_CONTROLLER, Permission.VIEW_REPORTS, False),
        (UserRole.VIEWER, Permission.VIEW_INVENTORY, True),
        (UserRole.VIEWER, Permission.RECORD_STOCK, False),
    ],
)
def test_has_permission(role, permission, allowed):
    assert has_permission(role, permission) is allowed


def test_admin_has_everything():
    assert all(has_permission(UserRole.ADMIN, p) for p in Permission)


def test_ensure_permission_raises(viewer_actor: Actor):
    with pytest.raises(UnauthorizedError) as exc_info:
        ensure_permission(viewer_actor, Permission.RECORD_STOCK)
    assert exc_info.value.details == {"role": "viewer", "permission": "record_stock"}


def test_ensure_permission_passes(clerk_actor: Actor):
    ensure_permission(clerk_actor, Permission.RECORD_STOCK)


def test_alerts_go_to_admins_and_managers():
    assert set(ALERT_ROLES) == {UserRole.ADMIN, UserRole.MANAGER}
