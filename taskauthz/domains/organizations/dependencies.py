# taskauthz/domains/organizations/dependencies.py
from typing import Any

from fastapi import Depends

from taskauthz.core.database import get_db

from .lookup import OrganizationLookup, PrismaOrganizationLookup


async def get_organization_lookup(db: Any = Depends(get_db)) -> OrganizationLookup:
    """
    Organization lookup dependency backed by the application database.

    ``db`` is the Prisma client; it is typed loosely because the generated
    client module only exists after ``prisma generate``.
    """
    return PrismaOrganizationLookup(db)
