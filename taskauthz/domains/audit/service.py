# taskauthz/domains/audit/service.py
import logging
from typing import List

from taskauthz.core.database import get_prisma
from taskauthz.core.settings import Settings

from .exceptions import AuditReadError, AuditWriteError
from .models import AuditQuery, AuditRecord
from .storage import AuditTrail, FileAuditTrail, PrismaAuditTrail

logger = logging.getLogger(__name__)


def build_audit_trail(config: Settings) -> AuditTrail:
    """Create the audit backend selected by ``AUDIT_BACKEND``."""
    if config.AUDIT_BACKEND == "database":
        return PrismaAuditTrail(get_prisma())
    return FileAuditTrail(config.AUDIT_LOG_PATH)


class AuditService:
    """Records and queries audit events through a pluggable backend."""

    def __init__(self, trail: AuditTrail):
        self.trail = trail

    async def record(self, record: AuditRecord) -> None:
        """
        Append a record, failing loudly if it could not be stored.

        Raises:
            AuditWriteError: If the backend did not durably store the record
        """
        try:
            await self.trail.append(record)
        except AuditWriteError:
            logger.error(
                f"Audit write failed for {record.action} by user {record.user_id} "
                f"(outcome={record.outcome.value})",
                exc_info=True,
            )
            raise

    async def find(self, query: AuditQuery) -> List[AuditRecord]:
        """
        Return records matching every provided filter, in insertion order.

        Raises:
            AuditReadError: If the backing store cannot be read
        """
        try:
            return await self.trail.find(query)
        except AuditReadError:
            logger.error("Audit read failed", exc_info=True)
            raise
