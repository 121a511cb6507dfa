"""Group schemas."""

from pydantic import BaseModel, Field

from doi_registry.schemas.doi_server import GroupDTO


class GroupCreate(BaseModel):
    """Group creation schema."""

    name: str = Field(..., min_length=1, max_length=32)


__all__ = ["GroupCreate", "GroupDTO"]
