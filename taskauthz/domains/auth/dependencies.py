# taskauthz/domains/auth/dependencies.py
from typing import Any

import jwt
from fastapi import Depends, Header, HTTPException, status
from pydantic import ValidationError

from taskauthz.core.database import get_db
from taskauthz.core.settings import settings
from taskauthz.domains.organizations.dependencies import get_organization_lookup
from taskauthz.domains.organizations.lookup import OrganizationLookup
from taskauthz.shared.exceptions import InvalidTokenError

from .lookup import PrismaUserLookup, UserLookup
from .models import CallerContext
from .service import CallerService
from .types import JwtPayload


def decode_access_token(token: str) -> JwtPayload:
    """
    Verifies a bearer token issued by the authentication service.
    """
    if not settings.JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Token verification not configured",
        )
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except jwt.PyJWTError:
        raise InvalidTokenError()

    # A validly signed token with claims of the wrong type is still invalid
    try:
        return JwtPayload(**dict(payload))
    except ValidationError:
        raise InvalidTokenError()


def get_token_payload(authorization: str = Header(None)) -> JwtPayload:
    """
    Extracts and verifies the JWT from the Authorization header.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise InvalidTokenError()

    token = authorization.split(" ", 1)[1]
    return decode_access_token(token)


async def get_user_lookup(db: Any = Depends(get_db)) -> UserLookup:
    """User lookup dependency backed by the application database."""
    return PrismaUserLookup(db)


async def get_current_caller(
    payload: JwtPayload = Depends(get_token_payload),
    lookup: OrganizationLookup = Depends(get_organization_lookup),
    users: UserLookup = Depends(get_user_lookup),
) -> CallerContext:
    """
    Builds the validated caller context for the authenticated user.
    """
    return await CallerService(lookup, users).build_caller_context(payload)
