"""
Factories for audit records.
"""

from typing import Any, Callable

import pytest

from taskauthz.domains.audit.models import AuditRecord, Outcome


@pytest.fixture
def make_record() -> Callable[..., AuditRecord]:
    """Build an AuditRecord with sensible defaults; keyword args override."""

    def _make_record(**overrides: Any) -> AuditRecord:
        values: dict[str, Any] = {
            "ts": "2025-03-01T10:00:00+00:00",
            "user_id": "user-1",
            "role": "Admin",
            "org_id": "2",
            "action": "Task.Create",
            "entity": "Task",
            "outcome": Outcome.allow,
        }
        values.update(overrides)
        return AuditRecord(**values)

    return _make_record
