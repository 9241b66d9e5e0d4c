"""
Organization-Scoped Repository

Base repository for tenant-owned tables. Every helper inherited from
BaseRepository is narrowed to the repository's organization, so a row that
belongs to another tenant is indistinguishable from a missing row.
"""

from typing import Any, Generic
from uuid import UUID

from sqlalchemy import ColumnElement, Select
from sqlalchemy.ext.asyncio import AsyncSession

from cms.repositories.base import BaseRepository, ModelT


def _org_filter(model: Any, org_id: UUID) -> Any:
    """Filter by organization_id - bypasses type checking for generic model."""
    return model.organization_id == org_id


class OrgScopedRepository(BaseRepository[ModelT], Generic[ModelT]):
    """
    Repository with strict organization scoping.

    Example usage:
        class DocumentTypeRepository(OrgScopedRepository[DocumentType]):
            model = DocumentType

            async def list_active(self) -> list[DocumentType]:
                query = select(self.model).where(self.model.is_active.is_(True))
                query = self.filter_strict(query)
                result = await self.session.execute(query)
                return list(result.scalars().all())
    """

    def __init__(self, session: AsyncSession, org_id: UUID):
        """
        Initialize repository with database session and organization scope.

        Args:
            session: SQLAlchemy async session
            org_id: Organization UUID every query is confined to
        """
        super().__init__(session)
        self.org_id = org_id

    def _base_criteria(self) -> list[ColumnElement[bool]]:
        return [_org_filter(self.model, self.org_id)]

    def filter_strict(self, query: Select[Any]) -> Select[Any]:
        """
        Apply strict organization filtering.

        The resulting query: WHERE organization_id = :org_id

        Args:
            query: SQLAlchemy select query

        Returns:
            Query with org filter applied
        """
        return query.where(_org_filter(self.model, self.org_id))
