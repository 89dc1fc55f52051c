"""
Domain-specific exceptions for authorization decisions.
"""

from fastapi import status

from taskauthz.domains.audit.exceptions import AuditWriteError
from taskauthz.shared.exceptions import BaseHTTPException

from .models import Decision


class ActionDeniedError(BaseHTTPException):
    """Raised by the transport layer when a decision is ``deny``."""

    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied"


class AuthorizationUnavailableError(BaseHTTPException):
    """Raised by the transport layer when a decision is ``error``."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Unable to determine authorization"


class DecisionNotRecordedError(AuditWriteError):
    """Raised when a decision was made but its audit record could not be stored."""

    def __init__(self, decision: Decision):
        self.decision = decision
        super().__init__(
            f"Audit record for {decision.outcome.value} decision could not be stored"
        )
