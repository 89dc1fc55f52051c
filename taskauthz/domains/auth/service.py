import logging

from taskauthz.domains.organizations.lookup import OrganizationLookup
from taskauthz.shared.exceptions import ServiceUnavailableError
from taskauthz.shared.permissions import parse_role

from .exceptions import InvalidCallerError
from .lookup import UserLookup
from .models import CallerContext
from .types import JwtPayload

logger = logging.getLogger(__name__)


class CallerService:
    """Turns a verified token payload into a validated caller context"""

    def __init__(self, lookup: OrganizationLookup, users: UserLookup):
        self.lookup = lookup
        self.users = users

    async def build_caller_context(self, payload: JwtPayload) -> CallerContext:
        """
        Validate the token's claims against current user and organization data.

        The stored user must be active and still hold the role and home
        organization the token was issued for, so a deactivated, demoted or
        moved user is rejected on the next request.

        Args:
            payload: Claims of an already verified bearer token

        Returns:
            CallerContext for the authorization core

        Raises:
            InvalidCallerError: If the subject, role or organization is invalid
            ServiceUnavailableError: If a user or organization lookup fails
        """
        if not payload.sub:
            raise InvalidCallerError("Token has no subject")

        # Never fall back to a default role
        role = parse_role(payload.role)
        if role is None:
            logger.warning(f"Rejected token for user {payload.sub}: invalid role")
            raise InvalidCallerError("Invalid role")

        try:
            org_id = int(payload.org_id)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            raise InvalidCallerError("Invalid organization")

        try:
            user = await self.users.get_active_user(payload.sub)
        except Exception as e:
            logger.error(f"User lookup failed for {payload.sub}: {e}", exc_info=True)
            raise ServiceUnavailableError("User lookup failed")

        if user is None:
            logger.warning(f"Rejected token for user {payload.sub}: unknown or inactive")
            raise InvalidCallerError("Unknown or inactive user")

        if parse_role(user.role) != role:
            logger.warning(
                f"Rejected token for user {payload.sub}: role {role.value} "
                f"no longer matches stored role {user.role}"
            )
            raise InvalidCallerError("Invalid role")

        if user.org_id != org_id:
            logger.warning(
                f"Rejected token for user {payload.sub}: organization {org_id} "
                f"no longer matches stored organization {user.org_id}"
            )
            raise InvalidCallerError("Invalid organization")

        try:
            organization = await self.lookup.get_by_id(org_id)
        except Exception as e:
            logger.error(f"Organization lookup failed for {org_id}: {e}", exc_info=True)
            raise ServiceUnavailableError("Organization lookup failed")

        if organization is None:
            logger.warning(
                f"Rejected token for user {payload.sub}: unknown organization {org_id}"
            )
            raise InvalidCallerError("Invalid organization")

        return CallerContext(id=payload.sub, role=role, org_id=org_id)
