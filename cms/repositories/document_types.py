"""
Document Type Repository

Persistence for DocumentType rows, strictly scoped to one organization.
"""

from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.orm import selectinload

from cms.models.orm import DocumentType
from cms.repositories.org_scoped import OrgScopedRepository


class DocumentTypeRepository(OrgScopedRepository[DocumentType]):
    """Document type repository using strict org scoping."""

    model = DocumentType

    async def find_title_or_slug_conflict(
        self,
        title: str | None,
        slug: str | None,
        exclude_id: UUID | None = None,
    ) -> DocumentType | None:
        """
        Find another document type in the org using the title or slug.

        Args:
            title: Title to check (skipped when None)
            slug: Slug to check (skipped when None)
            exclude_id: Document type to ignore, used on update

        Returns:
            The colliding document type, or None
        """
        matches = []
        if title is not None:
            matches.append(self.model.title == title)
        if slug is not None:
            matches.append(self.model.slug == slug)
        if not matches:
            return None

        criteria = [or_(*matches)]
        if exclude_id is not None:
            criteria.append(self.model.id != exclude_id)
        return await self.find_first(*criteria)

    async def slug_taken(self, slug: str) -> bool:
        return await self.exists(self.model.slug == slug)

    async def get_with_relations(self, document_type_id: UUID) -> DocumentType | None:
        """Get a document type with its organization loaded."""
        query = self.filter_strict(
            select(self.model)
            .options(selectinload(self.model.organization))
            .where(self.model.id == document_type_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_active_by_slug(self, slug: str) -> DocumentType | None:
        query = self.filter_strict(
            select(self.model)
            .options(selectinload(self.model.organization))
            .where(self.model.slug == slug, self.model.is_active.is_(True))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_page(
        self,
        offset: int,
        limit: int,
        search: str | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[DocumentType], int]:
        """
        List document types newest first.

        Args:
            offset: Rows to skip
            limit: Maximum rows to return
            search: Case-insensitive substring matched against title and slug
            is_active: Filter on active flag when not None

        Returns:
            Tuple of (page of document types, total matching rows)
        """
        criteria = []
        if search:
            pattern = f"%{search.lower()}%"
            criteria.append(
                or_(
                    func.lower(self.model.title).like(pattern),
                    func.lower(self.model.slug).like(pattern),
                )
            )
        if is_active is not None:
            criteria.append(self.model.is_active.is_(is_active))

        total = await self.count(*criteria)

        query = self.filter_strict(
            select(self.model)
            .options(selectinload(self.model.organization))
            .where(*criteria)
            .order_by(self.model.created_at.desc(), self.model.title)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all()), total
