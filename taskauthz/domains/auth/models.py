# taskauthz/domains/auth/models.py
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from taskauthz.shared.permissions import Action, Role


class CallerContext(BaseModel):
    """
    Authenticated actor making a request.

    Built from a verified bearer token after its role and organization have
    been checked against current data.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    role: Role
    org_id: int = Field(alias="orgId")


class SessionState(BaseModel):
    user_id: str
    role: Role
    organization_id: int
    scope: List[int]
    actions: List[Action]


class StoredUser(BaseModel):
    """Current role and home organization of a user as persisted."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    role: str
    org_id: int = Field(alias="orgId")
    is_active: bool = Field(True, alias="isActive")
