"""
Content Repository

Persistence for Content rows and their category/tag association rows.
Association tables carry no organization column; they are only ever reached
through a content that has already been resolved in the caller's org.
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from cms.models.enums import ContentStatus
from cms.models.orm import Content, ContentCategory, ContentTag
from cms.repositories.base import BaseRepository
from cms.repositories.org_scoped import OrgScopedRepository


def _with_relations(query):
    return query.options(
        selectinload(Content.organization),
        selectinload(Content.categories).selectinload(ContentCategory.category),
        selectinload(Content.tags).selectinload(ContentTag.tag),
    ).execution_options(populate_existing=True)


class ContentRepository(OrgScopedRepository[Content]):
    """Content repository using strict org scoping."""

    model = Content

    async def slug_taken(self, slug: str, exclude_id: UUID | None = None) -> bool:
        criteria = [self.model.slug == slug]
        if exclude_id is not None:
            criteria.append(self.model.id != exclude_id)
        return await self.exists(*criteria)

    async def get_with_relations(self, content_id: UUID) -> Content | None:
        query = self.filter_strict(
            _with_relations(select(self.model)).where(self.model.id == content_id)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_slug_with_relations(self, slug: str) -> Content | None:
        query = self.filter_strict(
            _with_relations(select(self.model)).where(self.model.slug == slug)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def count_for_document_type(self, document_type_id: UUID) -> int:
        return await self.count(self.model.document_type_id == document_type_id)

    async def counts_by_document_type(self, document_type_ids: list[UUID]) -> dict[UUID, int]:
        """
        Count contents per document type in one query.

        Returns:
            Mapping of document type id to count; ids without contents are absent
        """
        if not document_type_ids:
            return {}
        query = self.filter_strict(
            select(self.model.document_type_id, func.count())
            .where(self.model.document_type_id.in_(document_type_ids))
            .group_by(self.model.document_type_id)
        )
        result = await self.session.execute(query)
        return {type_id: int(count) for type_id, count in result.all()}

    async def recent_for_document_type(
        self, document_type_id: UUID, limit: int = 5
    ) -> list[Content]:
        query = self.filter_strict(
            select(self.model)
            .where(self.model.document_type_id == document_type_id)
            .order_by(self.model.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_page(
        self,
        offset: int,
        limit: int,
        status: ContentStatus | None = None,
        document_type_id: UUID | None = None,
        category_ids: list[UUID] | None = None,
        tag_id: UUID | None = None,
    ) -> tuple[list[Content], int]:
        """
        List contents newest first with relations loaded.

        Args:
            offset: Rows to skip
            limit: Maximum rows to return
            status: Only contents in this status
            document_type_id: Only contents of this document type
            category_ids: Only contents linked to any of these categories
            tag_id: Only contents linked to this tag

        Returns:
            Tuple of (page of contents, total matching rows)
        """
        criteria = []
        if status is not None:
            criteria.append(self.model.status == status)
        if document_type_id is not None:
            criteria.append(self.model.document_type_id == document_type_id)
        if category_ids:
            criteria.append(
                self.model.id.in_(
                    select(ContentCategory.content_id).where(
                        ContentCategory.category_id.in_(category_ids)
                    )
                )
            )
        if tag_id is not None:
            criteria.append(
                self.model.id.in_(
                    select(ContentTag.content_id).where(ContentTag.tag_id == tag_id)
                )
            )

        total = await self.count(*criteria)

        query = self.filter_strict(
            _with_relations(select(self.model))
            .where(*criteria)
            .order_by(self.model.created_at.desc(), self.model.title)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all()), total


class ContentCategoryRepository(BaseRepository[ContentCategory]):
    """Content-category link rows."""

    model = ContentCategory

    async def replace(self, content_id: UUID, category_ids: list[UUID]) -> None:
        """Delete every link of the content, then recreate from category_ids."""
        await self.delete_many(self.model.content_id == content_id)
        await self.add_all(
            [
                ContentCategory(content_id=content_id, category_id=cid)
                for cid in dict.fromkeys(category_ids)
            ]
        )


class ContentTagRepository(BaseRepository[ContentTag]):
    """Content-tag link rows."""

    model = ContentTag

    async def replace(self, content_id: UUID, tag_ids: list[UUID]) -> None:
        """Delete every link of the content, then recreate from tag_ids."""
        await self.delete_many(self.model.content_id == content_id)
        await self.add_all(
            [ContentTag(content_id=content_id, tag_id=tid) for tid in dict.fromkeys(tag_ids)]
        )
