# taskauthz/domains/audit/models.py
import re
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Outcome(str, Enum):
    allow = "allow"
    deny = "deny"
    error = "error"


class AuditRecord(BaseModel):
    """
    Single entry in the audit trail.

    Field aliases are the persisted, storage-stable names; every backend must
    read and write exactly these keys.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ts: str
    user_id: str = Field(alias="userId")
    role: str
    org_id: str = Field(alias="orgId")
    action: str
    entity: str
    entity_id: Optional[str] = Field(None, alias="entityId")
    outcome: Outcome
    reason: Optional[str] = None

    @field_validator("user_id", "org_id", "entity_id", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> Any:
        # Organization and user IDs may arrive as integers
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("ts")
    @classmethod
    def validate_ts(cls, v: str) -> str:
        parse_timestamp(v)
        return v

    @property
    def timestamp(self) -> datetime:
        return parse_timestamp(self.ts)

    def to_wire(self) -> Dict[str, Any]:
        """Serialize using the persisted field names, omitting empty optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class AuditQuery(BaseModel):
    """
    Filters and pagination for reading the audit trail.

    All provided filters must match (AND). ``from`` and ``to`` are inclusive;
    a date-only ``to`` covers the whole day.
    """

    model_config = ConfigDict(populate_by_name=True)

    from_: Optional[datetime] = Field(None, alias="from")
    to: Optional[datetime] = None
    user_id: Optional[str] = Field(None, alias="userId")
    action: Optional[str] = None
    org_id: Optional[str] = Field(None, alias="orgId")
    limit: int = Field(100, ge=1)
    offset: int = Field(0, ge=0)

    # Set by the read endpoint to confine results to the caller's scope
    org_scope: Optional[FrozenSet[str]] = Field(None, exclude=True)

    @field_validator("from_", "to", mode="before")
    @classmethod
    def parse_boundary(
        cls, v: Union[None, str, date, datetime], info: ValidationInfo
    ) -> Optional[datetime]:
        if v is None or v == "":
            return None

        end_of_day = info.field_name == "to"
        if isinstance(v, datetime):
            parsed = v
        elif isinstance(v, date):
            parsed = datetime.combine(v, time.max if end_of_day else time.min)
        else:
            text = str(v).strip()
            if DATE_ONLY.match(text):
                day = date.fromisoformat(text)
                parsed = datetime.combine(day, time.max if end_of_day else time.min)
            else:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    @field_validator("user_id", "org_id", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("org_scope", mode="before")
    @classmethod
    def coerce_scope(cls, v: Any) -> Any:
        if v is None:
            return None
        return frozenset(str(org_id) for org_id in v)

    def matches(self, record: AuditRecord) -> bool:
        if self.from_ is not None and record.timestamp < self.from_:
            return False
        if self.to is not None and record.timestamp > self.to:
            return False
        if self.user_id is not None and record.user_id != self.user_id:
            return False
        if self.action is not None and record.action != self.action:
            return False
        if self.org_id is not None and record.org_id != self.org_id:
            return False
        if self.org_scope is not None and record.org_id not in self.org_scope:
            return False
        return True

    def paginate(self, records: List[AuditRecord]) -> List[AuditRecord]:
        return records[self.offset : self.offset + self.limit]
