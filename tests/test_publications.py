"""Tests for published DOIs and groups."""

import pytest

from doi_registry.core.exceptions import ConflictError, NotFoundError
from doi_registry.schemas.doi_server import DoiServerDTO
from doi_registry.schemas.group import GroupCreate
from doi_registry.services.group_service import GroupService
from doi_registry.services.publication_catalog import DoiPublicationCatalog


@pytest.mark.asyncio
async def test_add_publication(db_session, sample_server: DoiServerDTO):
    """Test recording and counting published DOIs."""
    catalog = DoiPublicationCatalog(db_session)

    publication = await catalog.add_publication(
        sample_server.id, "abc-123", "10.5072/abc-123"
    )
    await catalog.add_publication(sample_server.id, "def-456", "10.5072/def-456")

    assert publication.doi == "10.5072/abc-123"
    assert publication.created_at > 0
    assert await catalog.count_publications(sample_server.id) == 2

    found = await catalog.get_by_metadata_uuid("abc-123")
    assert [p.doi for p in found] == ["10.5072/abc-123"]


@pytest.mark.asyncio
async def test_add_publication_duplicate_doi(db_session, sample_server: DoiServerDTO):
    catalog = DoiPublicationCatalog(db_session)
    await catalog.add_publication(sample_server.id, "abc-123", "10.5072/abc-123")

    with pytest.raises(ConflictError):
        await catalog.add_publication(sample_server.id, "abc-123", "10.5072/abc-123")


@pytest.mark.asyncio
async def test_add_publication_unknown_server(db_session):
    catalog = DoiPublicationCatalog(db_session)

    with pytest.raises(NotFoundError):
        await catalog.add_publication(404, "abc-123", "10.5072/abc-123")


@pytest.mark.asyncio
async def test_count_publications_none(db_session, sample_server: DoiServerDTO):
    assert await DoiPublicationCatalog(db_session).count_publications(sample_server.id) == 0


@pytest.mark.asyncio
async def test_group_service(db_session):
    """Test group creation and lookup."""
    group_service = GroupService(db_session)

    group = await group_service.create_group(GroupCreate(name="editors"))

    assert (await group_service.get_group(group.id)).name == "editors"
    with pytest.raises(ConflictError):
        await group_service.create_group(GroupCreate(name="editors"))
    with pytest.raises(NotFoundError):
        await group_service.get_group(999)
