"""Database seeder for groups and DOI servers from a YAML file.

Usage: ``python -m doi_registry.db.seed [path/to/doiservers.yaml]``
"""

import asyncio
import sys
from pathlib import Path
from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from doi_registry.core.config import ServersFile, get_servers_file, get_settings
from doi_registry.core.exceptions import NotFoundError, ValidationError
from doi_registry.db.base import Base
from doi_registry.db import models_registry  # noqa: F401 - Import to register models
from doi_registry.schemas.group import GroupCreate
from doi_registry.services.doi_server_service import DoiServerService
from doi_registry.services.group_service import GroupService


async def create_tables(engine) -> None:
    """Create all tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created")


async def seed_groups(db: AsyncSession, names: list[str]) -> dict[str, int]:
    """Create missing groups. Returns name -> id for every listed group."""
    group_service = GroupService(db)
    ids = {}
    for name in names:
        existing = await group_service.get_by_name(name)
        if existing:
            ids[name] = existing.id
            continue
        group = await group_service.create_group(GroupCreate(name=name))
        ids[name] = group.id
        logger.info(f"Group created: {name}")
    return ids


async def seed_servers(
    db: AsyncSession,
    servers: list[dict[str, Any]],
    group_ids: dict[str, int],
) -> int:
    """Create DOI servers not already present by name. Returns count created."""
    settings = get_settings()
    service = DoiServerService(db)
    created = 0
    for entry in servers:
        entry = dict(entry)
        try:
            await service.get_server_by_name(entry.get("name", ""))
            logger.info(f"DOI server exists, skipping: {entry.get('name')}")
            continue
        except NotFoundError:
            pass
        # Groups are referenced by name in the seed file
        names = entry.pop("publication_groups", None) or entry.pop("publicationGroups", None) or []
        unknown = [n for n in names if n not in group_ids]
        if unknown:
            raise ValidationError.for_field(
                "publication_groups", f"unknown group(s): {', '.join(unknown)}"
            )
        entry["publication_group_ids"] = {group_ids[n] for n in names}
        if "publicUrl" not in entry:
            entry.setdefault("public_url", settings.default_public_url)
        entry.setdefault("pattern", settings.default_identifier_pattern)
        await service.create_server(entry)
        created += 1
    return created


async def seed(servers_file: ServersFile) -> None:
    """Create tables and load the seed file."""
    from doi_registry.db.session import async_session_maker, engine

    settings = get_settings()
    Path(settings.data_save_folder).mkdir(parents=True, exist_ok=True)
    logger.info(f"{settings.app_name}: seeding {settings.database_url}")
    await create_tables(engine)
    async with async_session_maker() as db:
        group_ids = await seed_groups(db, servers_file.groups)
        created = await seed_servers(db, servers_file.servers, group_ids)
    await engine.dispose()
    logger.info(f"Seeding finished: {created} DOI server(s) created")


def main() -> None:
    servers_file = ServersFile(sys.argv[1]) if len(sys.argv) > 1 else get_servers_file()
    asyncio.run(seed(servers_file))


if __name__ == "__main__":
    main()
