"""Auth domain type definitions for type safety."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class JwtPayload(BaseModel):
    """Bearer token payload issued by the authentication service."""

    # Standard JWT claims
    sub: Optional[str] = Field(None, description="Subject (user ID)")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")

    # Authorization claims
    role: Optional[str] = Field(None, description="Role name: Viewer, Admin or Owner")
    org_id: Optional[Union[int, str]] = Field(
        None, alias="orgId", description="Home organization ID"
    )
    email: Optional[str] = Field(None, description="User email address")

    model_config = ConfigDict(extra="allow", populate_by_name=True)
