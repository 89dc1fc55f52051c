# taskauthz/domains/auth/lookup.py
from typing import TYPE_CHECKING, Any, Optional, Protocol

from .models import StoredUser

if TYPE_CHECKING:
    from prisma import Prisma


class UserLookup(Protocol):
    """Read-only access to stored users."""

    async def get_active_user(self, user_id: str) -> Optional[StoredUser]: ...


class PrismaUserLookup:
    """UserLookup backed by the Prisma ``user`` table."""

    def __init__(self, db: "Prisma"):
        self.db = db

    async def get_active_user(self, user_id: str) -> Optional[StoredUser]:
        """
        Load an active user by ID.

        Returns None for unknown, deactivated or non-numeric IDs.
        """
        try:
            key = int(user_id)
        except (TypeError, ValueError):
            return None

        record = await self.db.user.find_first(where={"id": key, "isActive": True})
        if not record:
            return None
        return self._to_model(record)

    @staticmethod
    def _to_model(record: Any) -> StoredUser:
        return StoredUser(
            id=str(record.id),
            role=record.role,
            org_id=record.orgId,
            is_active=record.isActive,
        )
