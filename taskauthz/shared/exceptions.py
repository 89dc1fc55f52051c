# taskauthz/shared/exceptions.py
from typing import Optional

from fastapi import HTTPException, status


class BaseHTTPException(HTTPException):
    """
    HTTPException with class-level defaults.

    Subclasses set ``status_code`` and ``message``; callers may override the
    message per raise.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            status_code=type(self).status_code, detail=message or type(self).message
        )


# Authentication & Authorization Exceptions
class InvalidTokenError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing or invalid token"
        )


# Validation / Request Exceptions
class InvalidDataError(HTTPException):
    def __init__(self, message: str = "Invalid request data") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


# Collaborator Exceptions
class ServiceUnavailableError(HTTPException):
    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=message)
