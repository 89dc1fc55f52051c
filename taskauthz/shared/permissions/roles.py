"""
Role definitions and helpers for role-based access control.

Roles are ordered Viewer < Admin < Owner. Inheritance follows the ordering:
Owner inherits Admin and Viewer grants, Admin inherits Viewer grants.
"""

from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional


class Role(str, Enum):
    """System roles (lowest to highest privilege)."""

    Viewer = "Viewer"
    Admin = "Admin"
    Owner = "Owner"


ALL_ROLES: List[Role] = [Role.Viewer, Role.Admin, Role.Owner]

# Role given to new users when none is specified
DEFAULT_ROLE: Role = Role.Viewer

ROLE_RANK: Mapping[Role, int] = MappingProxyType(
    {
        Role.Viewer: 0,
        Role.Admin: 1,
        Role.Owner: 2,
    }
)

# Direct inheritance edges: Owner -> Admin -> Viewer
_INHERITS: Mapping[Role, tuple] = MappingProxyType(
    {
        Role.Viewer: (),
        Role.Admin: (Role.Viewer,),
        Role.Owner: (Role.Admin,),
    }
)


def _walk_inheritance(role: Role) -> FrozenSet[Role]:
    seen: set[Role] = set()
    stack = [role]
    while stack:
        current = stack.pop()
        if current in seen:
            continue
        seen.add(current)
        stack.extend(_INHERITS[current])
    return frozenset(seen)


# Computed once at import; the graph is fixed configuration
EFFECTIVE_ROLES: Mapping[Role, FrozenSet[Role]] = MappingProxyType(
    {role: _walk_inheritance(role) for role in ALL_ROLES}
)


def rank(role: Role) -> int:
    """Privilege rank of a role; higher means more privileged."""
    return ROLE_RANK[role]


def is_at_least(role: Role, required: Role) -> bool:
    """Is ``role`` at least as privileged as ``required``?"""
    return rank(role) >= rank(required)


def expand_inheritance(role: Role) -> FrozenSet[Role]:
    """
    Expand a role to itself plus every role it inherits.

    Example:
        expand_inheritance(Role.Owner) == {Owner, Admin, Viewer}
    """
    return EFFECTIVE_ROLES[role]


def parse_role(value: Optional[str]) -> Optional[Role]:
    """
    Case-insensitive string to Role parser.

    Returns None for anything that is not exactly one of the role names, so
    invalid input can never be mistaken for a valid (default) role.
    """
    if not value:
        return None
    normalized = str(value).strip().lower()
    for role in ALL_ROLES:
        if role.value.lower() == normalized:
            return role
    return None
