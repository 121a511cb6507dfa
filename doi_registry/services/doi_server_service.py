"""DOI server service, the registry of DOI server configurations."""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic import SecretStr
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from doi_registry.core.exceptions import ConflictError, NotFoundError, ValidationError
from doi_registry.core.security import SecretCipher, get_cipher
from doi_registry.models.doi_server import DoiServer
from doi_registry.models.group import Group
from doi_registry.schemas.doi_server import (
    DoiRegistrationRequest,
    DoiServerCreate,
    DoiServerCredentialsUpdate,
    DoiServerDTO,
)
from doi_registry.services import identifiers
from doi_registry.services.base_service import BaseService
from doi_registry.services.group_service import GroupService
from doi_registry.services.publication_catalog import (
    DoiPublicationCatalog,
    PublicationCatalog,
)


class DoiServerService(BaseService[DoiServer]):
    """Create, look up, update and delete DOI server configurations.

    Passwords are encrypted with ``cipher`` before they reach the database
    and are only decrypted by ``prepare_registration``. Deletion is refused
    while ``catalog`` reports records published through the server.
    """

    def __init__(
        self,
        db: AsyncSession,
        catalog: PublicationCatalog | None = None,
        cipher: SecretCipher | None = None,
    ):
        super().__init__(db, DoiServer)
        self.catalog = catalog if catalog is not None else DoiPublicationCatalog(db)
        self.cipher = cipher if cipher is not None else get_cipher()
        self.groups = GroupService(db)

    async def get_all_dto(self) -> list[DoiServerDTO]:
        """Get all DOI servers ordered by name."""
        result = await self.db.execute(select(DoiServer).order_by(DoiServer.name))
        return [self._to_dto(s) for s in result.scalars().all()]

    async def get_for_group(self, group_id: int) -> list[DoiServerDTO]:
        """DOI servers the group is allowed to publish through."""
        await self.groups.get_group(group_id)
        result = await self.db.execute(
            select(DoiServer)
            .join(DoiServer.publication_groups)
            .where(Group.id == group_id)
            .order_by(DoiServer.name)
        )
        return [self._to_dto(s) for s in result.scalars().unique().all()]

    async def get_server(self, server_id: int) -> DoiServerDTO:
        """Get DOI server by id."""
        return self._to_dto(await self._load(server_id))

    async def get_server_by_name(self, name: str) -> DoiServerDTO:
        """Get DOI server by name."""
        server = await self._find_by_name(name)
        if not server:
            raise NotFoundError(f"DOI server '{name}' not found")
        return self._to_dto(server)

    async def create_server(
        self, data: DoiServerCreate | Mapping[str, Any]
    ) -> DoiServerDTO:
        """Create new DOI server configuration."""
        data = self._coerce(data)
        if await self._find_by_name(data.name):
            raise ConflictError(f"DOI server '{data.name}' already exists")
        groups = await self.groups.resolve(data.publication_group_ids)

        server = DoiServer()
        self._apply(server, data, groups)
        self.db.add(server)
        await self.commit()
        await self.db.refresh(server)

        logger.info(f"DOI server created: id={server.id}, name={server.name}")
        return self._to_dto(await self._load(server.id))

    async def update_server(
        self, server_id: int, data: DoiServerCreate | Mapping[str, Any]
    ) -> DoiServerDTO:
        """Overwrite all mutable fields of a DOI server.

        A payload without a password keeps the stored one.
        """
        server = await self._load(server_id)
        data = self._coerce(data)
        other = await self._find_by_name(data.name)
        if other and other.id != server_id:
            raise ConflictError(f"DOI server '{data.name}' already exists")
        groups = await self.groups.resolve(data.publication_group_ids)

        self._apply(server, data, groups)
        await self.commit()

        logger.info(f"DOI server updated: id={server_id}, name={data.name}")
        return self._to_dto(await self._load(server_id))

    async def update_credentials(
        self, server_id: int, data: DoiServerCredentialsUpdate
    ) -> DoiServerDTO:
        """Replace username and password. A missing password clears it."""
        server = await self._load(server_id)
        server.username = data.username
        server.encrypted_password = self._encrypt(data.password)
        await self.commit()

        logger.info(f"DOI server credentials updated: id={server_id}")
        return self._to_dto(await self._load(server_id))

    async def delete_server(self, server_id: int) -> None:
        """Delete a DOI server no published record refers to."""
        server = await self._load(server_id)
        name = server.name
        published = await self.catalog.count_publications(server_id)
        if published:
            raise ConflictError(
                f"DOI server '{name}' is referenced by "
                f"{published} published record(s)"
            )
        await self.delete(server)
        logger.info(f"DOI server deleted: id={server_id}, name={name}")

    async def prepare_registration(
        self,
        server_id: int,
        seed: str,
        record_id: int | None = None,
    ) -> DoiRegistrationRequest:
        """Everything a DOI provider client needs to register a record."""
        server = await self._load(server_id)
        suffix = identifiers.mint_identifier(server, seed, record_id)
        password = None
        if server.encrypted_password:
            password = SecretStr(self.cipher.decrypt(server.encrypted_password))

        return DoiRegistrationRequest(
            server_id=server.id,
            api_url=server.api_url,
            username=server.username,
            password=password,
            prefix=server.prefix,
            suffix=suffix,
            doi=identifiers.build_doi(server, suffix),
            landing_page=identifiers.resolve_landing_page(server, seed),
            doi_url=identifiers.doi_url(server, suffix),
        )

    async def _load(self, server_id: int) -> DoiServer:
        result = await self.db.execute(
            select(DoiServer)
            .where(DoiServer.id == server_id)
            .execution_options(populate_existing=True)
        )
        server = result.scalar_one_or_none()
        if not server:
            raise NotFoundError(f"DOI server {server_id} not found")
        return server

    async def _find_by_name(self, name: str) -> DoiServer | None:
        result = await self.db.execute(
            select(DoiServer).where(DoiServer.name == name)
        )
        return result.scalar_one_or_none()

    def _coerce(self, data: DoiServerCreate | Mapping[str, Any]) -> DoiServerCreate:
        if isinstance(data, DoiServerCreate):
            return data
        try:
            return DoiServerCreate.model_validate(dict(data))
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e) from e

    def _apply(
        self, server: DoiServer, data: DoiServerCreate, groups: list[Group]
    ) -> None:
        server.name = data.name
        server.description = data.description
        server.api_url = data.api_url
        server.username = data.username
        if data.password is not None:
            server.encrypted_password = self._encrypt(data.password)
        server.landing_page_template = data.landing_page_template
        server.public_url = data.public_url
        server.pattern = data.pattern
        server.prefix = data.prefix
        server.publication_groups = groups

    def _encrypt(self, password: SecretStr | None) -> str | None:
        if password is None or not password.get_secret_value():
            return None
        return self.cipher.encrypt(password.get_secret_value())

    def _to_dto(self, server: DoiServer) -> DoiServerDTO:
        """Convert DoiServer model to DTO."""
        return DoiServerDTO.model_validate(server)
