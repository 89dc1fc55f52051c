"""
Shared permission system for role-based access control.

This module provides the role model and the permission matrix used by the
authorization decision engine.

Usage:
    from taskauthz.shared.permissions import Action, Role, can

    if can(Role.Admin, Action.TASK_DELETE):
        ...
"""

from .models import (
    AUDIT_ACTIONS,
    BASE_GRANTS,
    TASK_ACTIONS,
    Action,
    is_well_formed_action,
    parse_action,
)
from .roles import (
    ALL_ROLES,
    DEFAULT_ROLE,
    Role,
    expand_inheritance,
    is_at_least,
    parse_role,
    rank,
)
from .services import PERMISSIONS, PermissionMatrix, can

__all__ = [
    "ALL_ROLES",
    "AUDIT_ACTIONS",
    "BASE_GRANTS",
    "DEFAULT_ROLE",
    "PERMISSIONS",
    "TASK_ACTIONS",
    "Action",
    "PermissionMatrix",
    "Role",
    "can",
    "expand_inheritance",
    "is_at_least",
    "is_well_formed_action",
    "parse_action",
    "parse_role",
    "rank",
]
