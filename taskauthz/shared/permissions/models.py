import re
from enum import Enum
from typing import FrozenSet, List, Mapping, Optional

from .roles import Role


class Action(str, Enum):
    """
    Defines all actions available in the system.

    Actions follow the pattern: Resource.Verb
    Common verbs: Create, Read, Update, Delete, View
    """

    # Task actions
    TASK_CREATE = "Task.Create"
    TASK_READ = "Task.Read"
    TASK_UPDATE = "Task.Update"
    TASK_DELETE = "Task.Delete"

    # Audit actions
    AUDIT_VIEW = "Audit.View"

    @property
    def resource(self) -> str:
        return self.value.split(".", 1)[0]

    @property
    def verb(self) -> str:
        return self.value.split(".", 1)[1]


TASK_ACTIONS: List[Action] = [
    Action.TASK_CREATE,
    Action.TASK_READ,
    Action.TASK_UPDATE,
    Action.TASK_DELETE,
]
AUDIT_ACTIONS: List[Action] = [Action.AUDIT_VIEW]

ACTION_PATTERN = re.compile(r"^[A-Z][A-Za-z]*\.[A-Z][A-Za-z]*$")


# Direct grants only; inheritance is applied when the matrix is built
BASE_GRANTS: Mapping[Action, FrozenSet[Role]] = {
    Action.TASK_CREATE: frozenset({Role.Admin}),
    Action.TASK_READ: frozenset({Role.Viewer}),
    Action.TASK_UPDATE: frozenset({Role.Admin}),
    Action.TASK_DELETE: frozenset({Role.Admin}),
    Action.AUDIT_VIEW: frozenset({Role.Admin}),
}


def is_well_formed_action(value: Optional[str]) -> bool:
    """Check that ``value`` has the Resource.Verb shape."""
    return bool(value) and ACTION_PATTERN.match(str(value)) is not None


def parse_action(value: Optional[str]) -> Optional[Action]:
    """Return the Action for ``value`` or None if it is not in the vocabulary."""
    if isinstance(value, Action):
        return value
    if not is_well_formed_action(value):
        return None
    try:
        return Action(value)
    except ValueError:
        return None
