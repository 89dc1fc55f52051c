"""
Audit trail exceptions.

Raised by storage backends; absence of data is never an error.
"""


class AuditTrailError(Exception):
    """Base exception for audit storage failures."""

    pass


class AuditWriteError(AuditTrailError):
    """Raised when a record could not be durably appended."""

    pass


class AuditReadError(AuditTrailError):
    """Raised when the backing store cannot be read or holds corrupt data."""

    pass
