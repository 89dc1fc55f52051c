from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Union

from .models import BASE_GRANTS, Action, parse_action
from .roles import Role, expand_inheritance


class PermissionMatrix:
    """
    Action -> role lookup table with role inheritance applied.

    Built once from a base grant table. The expanded table is read-only after
    construction, so a single instance can be shared by concurrent requests.
    """

    def __init__(self, base_grants: Mapping[Action, Iterable[Role]]):
        self._grants = MappingProxyType(self.expand(base_grants))

    @staticmethod
    def expand(
        base_grants: Mapping[Action, Iterable[Role]],
    ) -> dict[Action, FrozenSet[Role]]:
        """
        Expand every directly granted role through inheritance.

        Raises:
            ValueError: If an action has no directly granted role
        """
        expanded: dict[Action, FrozenSet[Role]] = {}
        for action, roles in base_grants.items():
            direct = frozenset(roles)
            if not direct:
                raise ValueError(f"Action {action.value} has no granted role")
            effective: set[Role] = set()
            for role in direct:
                effective |= expand_inheritance(role)
            expanded[action] = frozenset(effective)
        return expanded

    @property
    def grants(self) -> Mapping[Action, FrozenSet[Role]]:
        return self._grants

    def roles_for(self, action: Union[Action, str]) -> FrozenSet[Role]:
        parsed = parse_action(action)
        if parsed is None:
            return frozenset()
        return self._grants.get(parsed, frozenset())

    def is_granted(self, role: Role, action: Union[Action, str]) -> bool:
        """
        Check if a role may perform an action.

        Unknown or malformed actions are never granted.
        """
        return role in self.roles_for(action)

    def actions_for(self, role: Role) -> list[Action]:
        """Every action the role may perform, in vocabulary order."""
        return [action for action in Action if role in self._grants.get(action, ())]


# Process-wide matrix, derived once at import
PERMISSIONS = PermissionMatrix(BASE_GRANTS)


def can(role: Role, action: Union[Action, str]) -> bool:
    """
    Check if a role has permission to perform an action.

    Args:
        role: The caller's role
        action: The requested action

    Returns:
        True if the role has the permission, False otherwise
    """
    return PERMISSIONS.is_granted(role, action)
