# taskauthz/domains/audit/dependencies.py
from typing import Optional

from taskauthz.core.settings import settings

from .service import AuditService, build_audit_trail

# Built once per process from the startup configuration
_audit_service: Optional[AuditService] = None


def get_audit_service() -> AuditService:
    """Audit service dependency for FastAPI dependency injection."""
    global _audit_service
    if _audit_service is None:
        _audit_service = AuditService(build_audit_trail(settings))
    return _audit_service
