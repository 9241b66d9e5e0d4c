"""
Base Repository

Generic async repository over a single ORM model. Subclasses set ``model``
and may narrow every query through ``_base_criteria``.
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cms.models.orm import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Shared CRUD helpers for a single model."""

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    def _base_criteria(self) -> list[ColumnElement[bool]]:
        """Criteria applied to every query issued by the helpers below."""
        return []

    async def get_by_id(self, entity_id: UUID) -> ModelT | None:
        model: Any = self.model
        return await self.find_first(model.id == entity_id)

    async def find_first(self, *criteria: ColumnElement[bool]) -> ModelT | None:
        query = select(self.model).where(*self._base_criteria(), *criteria).limit(1)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def exists(self, *criteria: ColumnElement[bool]) -> bool:
        return await self.count(*criteria) > 0

    async def count(self, *criteria: ColumnElement[bool]) -> int:
        query = (
            select(func.count())
            .select_from(self.model)
            .where(*self._base_criteria(), *criteria)
        )
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def create(self, entity: ModelT) -> ModelT:
        """Add and flush so server-side defaults and ids are populated."""
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: ModelT, **values: Any) -> ModelT:
        for key, value in values.items():
            setattr(entity, key, value)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete_many(self, *criteria: ColumnElement[bool]) -> int:
        """
        Bulk delete matching rows.

        Returns:
            Number of rows deleted
        """
        result = await self.session.execute(
            delete(self.model).where(*self._base_criteria(), *criteria)
        )
        return result.rowcount or 0

    async def add_all(self, entities: Sequence[ModelT]) -> None:
        self.session.add_all(list(entities))
        await self.session.flush()
