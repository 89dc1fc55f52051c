# taskauthz/domains/auth/routes.py
from fastapi import APIRouter, Depends

from taskauthz.domains.auth.dependencies import get_current_caller
from taskauthz.domains.auth.models import CallerContext, SessionState
from taskauthz.domains.organizations.dependencies import get_organization_lookup
from taskauthz.domains.organizations.lookup import OrganizationLookup
from taskauthz.domains.organizations.service import OrgScopeResolver
from taskauthz.shared.exceptions import ServiceUnavailableError
from taskauthz.shared.permissions import PERMISSIONS

# Add a prefix and tag to group this route clearly in OpenAPI
router = APIRouter(prefix="/session", tags=["Sessions"])


@router.get(
    "",
    response_model=SessionState,
    operation_id="getSessionState",
)
async def get_session_state(
    caller: CallerContext = Depends(get_current_caller),
    lookup: OrganizationLookup = Depends(get_organization_lookup),
) -> SessionState:
    """
    Return the caller's role, organizational scope and permitted actions.

    Used by clients to decide which controls to show; every protected
    endpoint still makes its own decision.
    """
    try:
        scope = await OrgScopeResolver(lookup).resolve_scope(caller)
    except Exception:
        raise ServiceUnavailableError("Organization lookup failed")

    return SessionState(
        user_id=caller.id,
        role=caller.role,
        organization_id=caller.org_id,
        scope=sorted(scope),
        actions=PERMISSIONS.actions_for(caller.role),
    )
