"""Pydantic schemas for registry input and output validation."""

from doi_registry.schemas.doi_server import (
    DoiRegistrationRequest,
    DoiServerCreate,
    DoiServerCredentialsUpdate,
    DoiServerDTO,
    GroupDTO,
)
from doi_registry.schemas.group import GroupCreate
from doi_registry.schemas.publication import DoiPublicationDTO

__all__ = [
    "DoiPublicationDTO",
    "DoiRegistrationRequest",
    "DoiServerCreate",
    "DoiServerCredentialsUpdate",
    "DoiServerDTO",
    "GroupCreate",
    "GroupDTO",
]
