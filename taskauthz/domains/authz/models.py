# taskauthz/domains/authz/models.py
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from taskauthz.domains.audit.models import Outcome
from taskauthz.domains.auth.models import CallerContext

REASON_ROLE_NOT_PERMITTED = "role not permitted for action"
REASON_OUT_OF_SCOPE = "resource outside caller's organizational scope"
REASON_MALFORMED_ACTION = "malformed action token"
REASON_LOOKUP_FAILED = "organization lookup failed"


class Decision(BaseModel):
    """
    Result of evaluating a caller, an action and an optional target org.

    ``scope`` is only set for allowed requests without a target organization,
    so the caller can restrict its own listing query.
    """

    model_config = ConfigDict(frozen=True)

    outcome: Outcome
    reason: Optional[str] = None
    scope: Optional[FrozenSet[int]] = None

    @property
    def allowed(self) -> bool:
        return self.outcome == Outcome.allow

    @field_serializer("scope")
    def serialize_scope(self, scope: Optional[FrozenSet[int]]) -> Optional[List[int]]:
        return sorted(scope) if scope is not None else None


class AuthorizationCheckRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    action: str
    target_org_id: Optional[int] = Field(None, alias="targetOrgId")
    entity: Optional[str] = None
    entity_id: Optional[str] = Field(None, alias="entityId")


class AuthorizedAction(BaseModel):
    """What a protected route receives once its action has been allowed."""

    model_config = ConfigDict(frozen=True)

    caller: CallerContext
    decision: Decision
    target_org_id: Optional[int] = None
