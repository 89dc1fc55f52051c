# taskauthz/domains/organizations/models.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Organization(BaseModel):
    """
    Node in the two-level organization hierarchy.

    Level 0 is a root; level 1 is a child whose parent is a root.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: Optional[str] = None
    parent_id: Optional[int] = Field(None, alias="parentId")
    level: Optional[int] = None

    @property
    def is_root(self) -> bool:
        # A missing level only counts as root when there is no parent
        if self.parent_id is not None:
            return False
        return (self.level or 0) == 0
