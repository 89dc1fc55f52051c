"""
Tests for the permission matrix (inheritance expansion and lookups).
"""

import pytest

from taskauthz.shared.permissions.models import BASE_GRANTS, Action
from taskauthz.shared.permissions.roles import ALL_ROLES, Role, expand_inheritance
from taskauthz.shared.permissions.services import PERMISSIONS, PermissionMatrix, can


class TestPermissionMatrix:
    """Test matrix construction from a base grant table."""

    def test_expanded_matrix_matches_expected_table(self):
        assert PERMISSIONS.grants == {
            Action.TASK_CREATE: {Role.Admin, Role.Owner},
            Action.TASK_READ: {Role.Viewer, Role.Admin, Role.Owner},
            Action.TASK_UPDATE: {Role.Admin, Role.Owner},
            Action.TASK_DELETE: {Role.Admin, Role.Owner},
            Action.AUDIT_VIEW: {Role.Admin, Role.Owner},
        }

    def test_rebuilding_is_deterministic(self):
        first = PermissionMatrix(BASE_GRANTS)
        second = PermissionMatrix(dict(reversed(list(BASE_GRANTS.items()))))
        assert dict(first.grants) == dict(second.grants)

    def test_action_without_grant_is_rejected(self):
        with pytest.raises(ValueError, match="Task.Delete"):
            PermissionMatrix({Action.TASK_DELETE: set()})

    def test_grants_are_read_only(self):
        with pytest.raises(TypeError):
            PERMISSIONS.grants[Action.TASK_CREATE] = frozenset({Role.Viewer})  # type: ignore[index]

    def test_redundant_direct_grants_collapse(self):
        matrix = PermissionMatrix({Action.TASK_READ: [Role.Viewer, Role.Owner]})
        assert matrix.grants[Action.TASK_READ] == {Role.Viewer, Role.Admin, Role.Owner}


class TestIsGranted:
    """Test role/action checks."""

    @pytest.mark.parametrize(
        "role,action,expected",
        [
            (Role.Owner, Action.TASK_CREATE, True),
            (Role.Owner, Action.AUDIT_VIEW, True),
            (Role.Admin, Action.TASK_DELETE, True),
            (Role.Admin, Action.AUDIT_VIEW, True),
            (Role.Viewer, Action.TASK_READ, True),
            (Role.Viewer, Action.TASK_CREATE, False),
            (Role.Viewer, Action.TASK_UPDATE, False),
            (Role.Viewer, Action.TASK_DELETE, False),
            (Role.Viewer, Action.AUDIT_VIEW, False),
        ],
    )
    def test_role_action_combinations(self, role: Role, action: Action, expected: bool):
        assert can(role, action) is expected

    def test_string_actions_are_accepted(self):
        assert PERMISSIONS.is_granted(Role.Admin, "Task.Update") is True
        assert PERMISSIONS.is_granted(Role.Viewer, "Task.Update") is False

    @pytest.mark.parametrize("role", ALL_ROLES)
    @pytest.mark.parametrize("action", ["Task.Archive", "Project.Read", "", "nonsense"])
    def test_unknown_actions_fail_closed(self, role: Role, action: str):
        assert PERMISSIONS.is_granted(role, action) is False

    @pytest.mark.parametrize("action", list(Action))
    def test_privilege_is_monotonic(self, action: Action):
        """Every role inheriting a directly granted role is granted too."""
        for granted in BASE_GRANTS[action]:
            for role in ALL_ROLES:
                if granted in expand_inheritance(role):
                    assert can(role, action), (role, action)

    def test_matrix_with_no_grants_for_role(self):
        matrix = PermissionMatrix({Action.TASK_READ: {Role.Owner}})
        assert matrix.is_granted(Role.Owner, Action.TASK_READ) is True
        assert matrix.is_granted(Role.Admin, Action.TASK_READ) is False
        assert matrix.is_granted(Role.Owner, Action.TASK_CREATE) is False


class TestActionsFor:
    def test_actions_for_each_role(self):
        assert PERMISSIONS.actions_for(Role.Viewer) == [Action.TASK_READ]
        assert PERMISSIONS.actions_for(Role.Admin) == list(Action)
        assert PERMISSIONS.actions_for(Role.Owner) == list(Action)
