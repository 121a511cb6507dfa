"""Service layer for business logic."""

from doi_registry.services.doi_server_service import DoiServerService
from doi_registry.services.group_service import GroupService
from doi_registry.services.identifiers import (
    build_doi,
    doi_url,
    mint_identifier,
    resolve_landing_page,
)
from doi_registry.services.publication_catalog import (
    DoiPublicationCatalog,
    PublicationCatalog,
)

__all__ = [
    "DoiPublicationCatalog",
    "DoiServerService",
    "GroupService",
    "PublicationCatalog",
    "build_doi",
    "doi_url",
    "mint_identifier",
    "resolve_landing_page",
]
