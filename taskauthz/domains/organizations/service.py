# taskauthz/domains/organizations/service.py
import logging
from typing import FrozenSet

from taskauthz.domains.auth.models import CallerContext
from taskauthz.shared.permissions import Role

from .lookup import OrganizationLookup

logger = logging.getLogger(__name__)


class OrgScopeResolver:
    """
    Computes the organizations a caller may operate within.

    Rules (two-level hierarchy):
    - Viewer/Admin: scope is the caller's own organization
    - Owner of a root organization: the root plus its direct children
    - Owner of a child organization: the caller's own organization

    Scope is recomputed on every call; topology may change between requests.
    """

    def __init__(self, lookup: OrganizationLookup):
        self.lookup = lookup

    async def resolve_scope(self, caller: CallerContext) -> FrozenSet[int]:
        """
        Resolve the set of organization IDs the caller may access.

        Args:
            caller: Authenticated caller context

        Returns:
            Frozen set of organization IDs

        Raises:
            Exception: Whatever the organization lookup raises, unchanged
        """
        # Non-owners never need a lookup
        if caller.role != Role.Owner:
            return frozenset({caller.org_id})

        own_org = await self.lookup.get_by_id(caller.org_id)
        if own_org is None:
            logger.warning(
                f"Organization {caller.org_id} not found for owner {caller.id}; "
                "falling back to home organization"
            )
            return frozenset({caller.org_id})

        if not own_org.is_root:
            return frozenset({caller.org_id})

        # Only one level below the root is ever visited
        children = await self.lookup.get_children(own_org.id)
        child_ids = {child.id for child in children if child.parent_id == own_org.id}
        return frozenset({own_org.id, *child_ids})
