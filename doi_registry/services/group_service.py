"""Group service for publication group management."""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from doi_registry.core.exceptions import ConflictError, NotFoundError, ValidationError
from doi_registry.models.group import Group
from doi_registry.schemas.group import GroupCreate, GroupDTO
from doi_registry.services.base_service import BaseService


class GroupService(BaseService[Group]):
    """Authorization groups referenced by DOI server publication groups."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Group)

    async def get_by_name(self, name: str) -> Group | None:
        """Get group by name."""
        result = await self.db.execute(select(Group).where(Group.name == name))
        return result.scalar_one_or_none()

    async def create_group(self, data: GroupCreate) -> GroupDTO:
        """Create new group."""
        if await self.get_by_name(data.name):
            raise ConflictError(f"Group '{data.name}' already exists")
        group = await self.create(Group(name=data.name))
        return GroupDTO.model_validate(group)

    async def get_group(self, group_id: int) -> Group:
        """Get group by id or raise NotFoundError."""
        group = await self.get_by_id(group_id)
        if not group:
            raise NotFoundError(f"Group {group_id} not found")
        return group

    async def resolve(self, group_ids: Iterable[int]) -> list[Group]:
        """Load groups by id; every id must exist."""
        ids = set(group_ids)
        if not ids:
            return []
        result = await self.db.execute(select(Group).where(Group.id.in_(ids)))
        groups = list(result.scalars().all())
        missing = ids - {g.id for g in groups}
        if missing:
            raise ValidationError.for_field(
                "publication_groups",
                f"unknown group id(s): {', '.join(str(i) for i in sorted(missing))}",
            )
        return groups
