"""
Test fixtures for the organization hierarchy.

Hierarchy used throughout the suite:
    1 Root HQ        -> 2 Child Division A, 3 Child Division B
    10 Other Tenant  -> 11 Other Child
"""

from typing import Iterable, List, Optional, Tuple

import pytest

from taskauthz.domains.organizations.models import Organization


class InMemoryOrganizationLookup:
    """OrganizationLookup over a fixed list of organizations."""

    def __init__(self, organizations: Iterable[Organization]):
        self._organizations = list(organizations)
        self.calls: List[Tuple[str, int]] = []

    async def get_by_id(self, org_id: int) -> Optional[Organization]:
        self.calls.append(("get_by_id", org_id))
        for organization in self._organizations:
            if organization.id == org_id:
                return organization
        return None

    async def get_children(self, parent_id: int) -> List[Organization]:
        self.calls.append(("get_children", parent_id))
        return [o for o in self._organizations if o.parent_id == parent_id]


@pytest.fixture
def root_org() -> Organization:
    return Organization(id=1, name="Root HQ", parent_id=None, level=0)


@pytest.fixture
def child_orgs() -> List[Organization]:
    return [
        Organization(id=2, name="Child Division A", parent_id=1, level=1),
        Organization(id=3, name="Child Division B", parent_id=1, level=1),
    ]


@pytest.fixture
def other_tenant_orgs() -> List[Organization]:
    return [
        Organization(id=10, name="Other Tenant", parent_id=None, level=0),
        Organization(id=11, name="Other Child", parent_id=10, level=1),
    ]


@pytest.fixture
def org_lookup(
    root_org: Organization,
    child_orgs: List[Organization],
    other_tenant_orgs: List[Organization],
) -> InMemoryOrganizationLookup:
    return InMemoryOrganizationLookup([root_org, *child_orgs, *other_tenant_orgs])
