"""Catalog of published DOIs.

DOI server deletion asks a ``PublicationCatalog`` whether any record was
published through the server. The host catalog can supply its own
implementation; ``DoiPublicationCatalog`` keeps the records in the
registry database.
"""

from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from doi_registry.core.exceptions import ConflictError, NotFoundError
from doi_registry.models.doi_server import DoiServer
from doi_registry.models.publication import DoiPublication
from doi_registry.schemas.publication import DoiPublicationDTO
from doi_registry.services.base_service import BaseService


class PublicationCatalog(Protocol):
    """Answers which DOI servers are referenced by published records."""

    async def count_publications(self, server_id: int) -> int: ...


class DoiPublicationCatalog(BaseService[DoiPublication]):
    """Published DOIs stored alongside the DOI servers."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, DoiPublication)

    async def count_publications(self, server_id: int) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(DoiPublication)
            .where(DoiPublication.doiserver_id == server_id)
        )
        return result.scalar_one()

    async def add_publication(
        self, server_id: int, metadata_uuid: str, doi: str
    ) -> DoiPublicationDTO:
        """Record a DOI registered through a server."""
        if not await self.db.get(DoiServer, server_id):
            raise NotFoundError(f"DOI server {server_id} not found")

        result = await self.db.execute(
            select(DoiPublication).where(DoiPublication.doi == doi)
        )
        if result.scalar_one_or_none():
            raise ConflictError(f"DOI '{doi}' is already published")

        publication = await self.create(
            DoiPublication(
                doiserver_id=server_id,
                metadata_uuid=metadata_uuid,
                doi=doi,
            )
        )
        return DoiPublicationDTO.model_validate(publication)

    async def get_by_metadata_uuid(self, metadata_uuid: str) -> list[DoiPublicationDTO]:
        """Published DOIs for a metadata record."""
        result = await self.db.execute(
            select(DoiPublication)
            .where(DoiPublication.metadata_uuid == metadata_uuid)
            .order_by(DoiPublication.id)
        )
        return [DoiPublicationDTO.model_validate(p) for p in result.scalars().all()]
