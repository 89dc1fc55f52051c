# taskauthz/domains/authz/service.py
import logging
from typing import Optional, Union

from taskauthz.domains.audit.exceptions import AuditWriteError
from taskauthz.domains.audit.models import AuditRecord, Outcome, utc_now_iso
from taskauthz.domains.audit.service import AuditService
from taskauthz.domains.auth.models import CallerContext
from taskauthz.domains.organizations.service import OrgScopeResolver
from taskauthz.shared.permissions import (
    PERMISSIONS,
    Action,
    PermissionMatrix,
    is_well_formed_action,
)

from .exceptions import DecisionNotRecordedError
from .models import (
    REASON_LOOKUP_FAILED,
    REASON_MALFORMED_ACTION,
    REASON_OUT_OF_SCOPE,
    REASON_ROLE_NOT_PERMITTED,
    Decision,
)

logger = logging.getLogger(__name__)


class DecisionEngine:
    """
    Decides whether a caller may perform an action on a resource.

    Each call is a single stateless pass: action check, then scope check.
    Every decision is appended to the audit trail before it is returned.
    """

    def __init__(
        self,
        resolver: OrgScopeResolver,
        audit: AuditService,
        matrix: PermissionMatrix = PERMISSIONS,
    ):
        self.resolver = resolver
        self.audit = audit
        self.matrix = matrix

    async def decide(
        self,
        caller: CallerContext,
        action: Union[Action, str],
        target_org_id: Optional[int] = None,
        *,
        entity: Optional[str] = None,
        entity_id: Optional[str] = None,
    ) -> Decision:
        """
        Evaluate and record an authorization decision.

        Args:
            caller: Authenticated caller context
            action: Requested Resource.Verb action
            target_org_id: Organization owning the target resource, if any
            entity: Target entity type (defaults to the action's resource)
            entity_id: Target entity ID, if any

        Returns:
            Decision with outcome allow, deny or error

        Raises:
            DecisionNotRecordedError: If the audit record could not be stored
        """
        action_name = action.value if isinstance(action, Action) else str(action)
        decision = await self._evaluate(caller, action_name, target_org_id)

        record = AuditRecord(
            ts=utc_now_iso(),
            user_id=caller.id,
            role=caller.role.value,
            org_id=target_org_id if target_org_id is not None else caller.org_id,
            action=action_name,
            entity=entity or self._resource_of(action_name),
            entity_id=entity_id,
            outcome=decision.outcome,
            reason=decision.reason,
        )
        try:
            await self.audit.record(record)
        except AuditWriteError as e:
            raise DecisionNotRecordedError(decision) from e

        if decision.outcome == Outcome.deny:
            logger.info(
                f"Denied {action_name} for user {caller.id} "
                f"(role={caller.role.value}, org={caller.org_id}): {decision.reason}"
            )
        return decision

    async def _evaluate(
        self,
        caller: CallerContext,
        action_name: str,
        target_org_id: Optional[int],
    ) -> Decision:
        if not is_well_formed_action(action_name):
            return Decision(outcome=Outcome.deny, reason=REASON_MALFORMED_ACTION)

        # Action-level denial wins; scope is not evaluated
        if not self.matrix.is_granted(caller.role, action_name):
            return Decision(outcome=Outcome.deny, reason=REASON_ROLE_NOT_PERMITTED)

        try:
            scope = await self.resolver.resolve_scope(caller)
        except Exception as e:
            logger.error(
                f"Scope resolution failed for user {caller.id} "
                f"in organization {caller.org_id}: {e}",
                exc_info=True,
            )
            return Decision(outcome=Outcome.error, reason=f"{REASON_LOOKUP_FAILED}: {e}")

        if target_org_id is None:
            return Decision(outcome=Outcome.allow, scope=scope)

        if target_org_id not in scope:
            return Decision(outcome=Outcome.deny, reason=REASON_OUT_OF_SCOPE)

        return Decision(outcome=Outcome.allow)

    @staticmethod
    def _resource_of(action_name: str) -> str:
        resource = action_name.split(".", 1)[0]
        return resource or "Unknown"

