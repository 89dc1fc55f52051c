from typing import Awaitable, Callable, Optional

from fastapi import Depends, Query

from taskauthz.domains.audit.dependencies import get_audit_service
from taskauthz.domains.audit.models import Outcome
from taskauthz.domains.audit.service import AuditService
from taskauthz.domains.auth.dependencies import get_current_caller
from taskauthz.domains.auth.models import CallerContext
from taskauthz.domains.organizations.dependencies import get_organization_lookup
from taskauthz.domains.organizations.lookup import OrganizationLookup
from taskauthz.domains.organizations.service import OrgScopeResolver
from taskauthz.shared.permissions import Action

from .exceptions import ActionDeniedError, AuthorizationUnavailableError
from .models import AuthorizedAction
from .service import DecisionEngine


async def get_decision_engine(
    lookup: OrganizationLookup = Depends(get_organization_lookup),
    audit: AuditService = Depends(get_audit_service),
) -> DecisionEngine:
    """Decision engine dependency wired to the request's collaborators."""
    return DecisionEngine(OrgScopeResolver(lookup), audit)


def require_action(
    action: Action,
) -> Callable[..., Awaitable[AuthorizedAction]]:
    """
    Dependency factory for action-based authorization.

    Each route declares the action it needs by depending on
    ``require_action(Action.X)``; the ``orgId`` query parameter, when
    present, is the organization of the targeted resource.

    Args:
        action: The action required to access the endpoint

    Returns:
        Async dependency that evaluates the decision and returns the grant
    """

    async def check_action(
        caller: CallerContext = Depends(get_current_caller),
        engine: DecisionEngine = Depends(get_decision_engine),
        org_id: Optional[int] = Query(None, alias="orgId"),
    ) -> AuthorizedAction:
        """
        Evaluate the caller's access to the required action.

        Raises:
            ActionDeniedError: If the decision is deny
            AuthorizationUnavailableError: If the decision could not be made
        """
        decision = await engine.decide(caller, action, org_id)

        if decision.outcome == Outcome.error:
            raise AuthorizationUnavailableError()
        if not decision.allowed:
            raise ActionDeniedError(
                f"Insufficient permissions: {decision.reason}"
            )
        return AuthorizedAction(caller=caller, decision=decision, target_org_id=org_id)

    return check_action
