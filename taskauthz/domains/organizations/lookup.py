# taskauthz/domains/organizations/lookup.py
from typing import TYPE_CHECKING, Any, List, Optional, Protocol

from .models import Organization

if TYPE_CHECKING:
    from prisma import Prisma


class OrganizationLookup(Protocol):
    """Read-only access to the organization hierarchy."""

    async def get_by_id(self, org_id: int) -> Optional[Organization]: ...

    async def get_children(self, parent_id: int) -> List[Organization]: ...


class PrismaOrganizationLookup:
    """OrganizationLookup backed by the Prisma ``organization`` table."""

    def __init__(self, db: "Prisma"):
        self.db = db

    async def get_by_id(self, org_id: int) -> Optional[Organization]:
        record = await self.db.organization.find_unique(where={"id": org_id})
        if not record:
            return None
        return self._to_model(record)

    async def get_children(self, parent_id: int) -> List[Organization]:
        records = await self.db.organization.find_many(
            where={"parentId": parent_id},
            order={"id": "asc"},
        )
        return [self._to_model(record) for record in records]

    @staticmethod
    def _to_model(record: Any) -> Organization:
        return Organization(
            id=record.id,
            name=getattr(record, "name", None),
            parent_id=record.parentId,
            level=getattr(record, "level", None),
        )
