# taskauthz/domains/audit/routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import ValidationError

from taskauthz.domains.audit.dependencies import get_audit_service
from taskauthz.domains.audit.exceptions import AuditReadError
from taskauthz.domains.audit.models import AuditQuery, AuditRecord
from taskauthz.domains.audit.service import AuditService
from taskauthz.domains.authz.dependencies import require_action
from taskauthz.domains.authz.models import AuthorizedAction
from taskauthz.shared.exceptions import InvalidDataError, ServiceUnavailableError
from taskauthz.shared.permissions import Action

router = APIRouter(prefix="/audit-log", tags=["Audit"])


@router.get(
    "",
    response_model=List[AuditRecord],
    response_model_exclude_none=True,
    operation_id="getAuditLog",
)
async def get_audit_log(
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    action: Optional[str] = Query(None),
    limit: int = Query(100, ge=1),
    offset: int = Query(0, ge=0),
    grant: AuthorizedAction = Depends(require_action(Action.AUDIT_VIEW)),
    audit: AuditService = Depends(get_audit_service),
) -> List[AuditRecord]:
    """
    Read the audit trail.

    Access requires Audit.View. Results are confined to the caller's
    organizational scope: Admins see their own organization, root Owners see
    the root and its children. An ``orgId`` outside that scope is denied.

    Returns:
        Matching records in the order they were recorded
    """
    try:
        query = AuditQuery(
            from_=from_,
            to=to,
            user_id=user_id,
            action=action,
            org_id=grant.target_org_id,
            limit=limit,
            offset=offset,
            org_scope=grant.decision.scope,
        )
    except ValidationError as e:
        raise InvalidDataError(f"Invalid audit query: {e.errors()[0]['msg']}")

    try:
        return await audit.find(query)
    except AuditReadError:
        raise ServiceUnavailableError("Unable to read audit log")
