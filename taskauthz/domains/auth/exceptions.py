"""
Domain-specific exceptions for caller authentication.
"""

from fastapi import status

from taskauthz.shared.exceptions import BaseHTTPException


class InvalidCallerError(BaseHTTPException):
    """Raised when a token's role or organization does not match current data."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid caller context"
