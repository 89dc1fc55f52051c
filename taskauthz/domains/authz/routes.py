# taskauthz/domains/authz/routes.py
from fastapi import APIRouter, Depends

from taskauthz.domains.auth.dependencies import get_current_caller
from taskauthz.domains.auth.models import CallerContext
from taskauthz.domains.authz.dependencies import get_decision_engine
from taskauthz.domains.authz.models import AuthorizationCheckRequest, Decision
from taskauthz.domains.authz.service import DecisionEngine

router = APIRouter(prefix="/authz", tags=["Authorization"])


@router.post(
    "/check",
    response_model=Decision,
    operation_id="checkAuthorization",
)
async def check_authorization(
    request: AuthorizationCheckRequest,
    caller: CallerContext = Depends(get_current_caller),
    engine: DecisionEngine = Depends(get_decision_engine),
) -> Decision:
    """
    Evaluate whether the caller may perform an action.

    Intended for services that enforce access themselves. The decision is
    returned as data (allow, deny or error) and recorded in the audit trail.
    """
    return await engine.decide(
        caller,
        request.action,
        request.target_org_id,
        entity=request.entity,
        entity_id=request.entity_id,
    )
