"""
Content Service

Aggregate operations for contents: slugs are auto-suffixed on collision
rather than rejected, and category/tag associations are rewritten wholesale
whenever a new set is supplied.

All steps of an operation run in the caller's session; the request-scoped
session from cms.core.database commits them together or not at all.
"""

import logging
from uuid import UUID

from cachetools import TTLCache
from sqlalchemy.ext.asyncio import AsyncSession

from cms.config import get_settings
from cms.core.exceptions import NotFoundError, PreconditionFailedError, ValidationFailedError
from cms.models.contracts.common import OrganizationRef, PaginationMeta, TaxonomyRef
from cms.models.contracts.contents import ContentCreate, ContentList, ContentPublic, ContentUpdate
from cms.models.enums import ContentStatus
from cms.models.orm import Content
from cms.models.orm.base import utcnow
from cms.repositories.categories import CategoryRepository, TagRepository
from cms.repositories.contents import (
    ContentCategoryRepository,
    ContentRepository,
    ContentTagRepository,
)
from cms.repositories.document_types import DocumentTypeRepository
from cms.services.pagination import sanitize_page
from cms.services.slugs import allocate_unique_slug, slugify

logger = logging.getLogger(__name__)

# (organization id, root category id) -> ids of the root and its descendants
CategoryCache = TTLCache


def create_category_cache() -> CategoryCache:
    """Build a subcategory lookup cache sized from settings."""
    settings = get_settings()
    return TTLCache(
        maxsize=settings.category_cache_max_entries,
        ttl=settings.category_cache_ttl_seconds,
    )


def content_to_public(content: Content) -> ContentPublic:
    """
    Convert a Content loaded with its relations into the response model.

    The content must have been fetched through ContentRepository so that
    organization, categories and tags are already loaded.
    """
    return ContentPublic(
        id=content.id,
        title=content.title,
        slug=content.slug,
        content=content.content,
        status=content.status,
        published_at=content.published_at,
        document_type_id=content.document_type_id,
        organization_id=content.organization_id,
        organization=(
            OrganizationRef.model_validate(content.organization) if content.organization else None
        ),
        created_by=content.created_by,
        updated_by=content.updated_by,
        created_at=content.created_at,
        updated_at=content.updated_at,
        categories=[TaxonomyRef.model_validate(link.category) for link in content.categories],
        tags=[TaxonomyRef.model_validate(link.tag) for link in content.tags],
    )


class ContentService:
    """Content aggregate operations for one organization."""

    def __init__(
        self,
        session: AsyncSession,
        org_id: UUID,
        category_cache: CategoryCache | None = None,
    ):
        """
        Args:
            session: Request-scoped database session
            org_id: Organization every operation is confined to
            category_cache: Cache of subcategory lookups; a private one is
                created when omitted
        """
        self.session = session
        self.org_id = org_id
        self.category_cache = (
            category_cache if category_cache is not None else create_category_cache()
        )
        self.repo = ContentRepository(session, org_id)
        self.document_types = DocumentTypeRepository(session, org_id)
        self.categories = CategoryRepository(session, org_id)
        self.tags = TagRepository(session, org_id)
        self.category_links = ContentCategoryRepository(session)
        self.tag_links = ContentTagRepository(session)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _load(self, content_id: UUID) -> Content:
        content = await self.repo.get_by_id(content_id)
        if not content:
            raise NotFoundError("Content not found")
        return content

    async def _public(self, content_id: UUID) -> ContentPublic:
        content = await self.repo.get_with_relations(content_id)
        if not content:
            raise NotFoundError("Content not found")
        return content_to_public(content)

    async def _check_document_type(self, document_type_id: UUID) -> None:
        document_type = await self.document_types.get_by_id(document_type_id)
        if not document_type:
            raise NotFoundError("Document type not found")
        if not document_type.is_active:
            logger.warning(f"Rejected content for inactive document type {document_type_id}")
            raise PreconditionFailedError(
                "Cannot create content for an inactive document type",
                {"field": "documentTypeId"},
            )

    async def _check_taxonomy(
        self,
        category_ids: list[UUID] | None,
        tag_ids: list[UUID] | None,
    ) -> None:
        if category_ids:
            missing = set(category_ids) - await self.categories.existing_ids(category_ids)
            if missing:
                raise NotFoundError("Category not found", {"ids": sorted(str(i) for i in missing)})
        if tag_ids:
            missing = set(tag_ids) - await self.tags.existing_ids(tag_ids)
            if missing:
                raise NotFoundError("Tag not found", {"ids": sorted(str(i) for i in missing)})

    # =========================================================================
    # Mutations
    # =========================================================================

    async def create(self, dto: ContentCreate, actor_id: str) -> ContentPublic:
        """
        Create content, suffixing the slug if it is already taken in the org.

        Args:
            dto: Creation payload; slug falls back to the slugified title
            actor_id: Actor stamped into created_by/updated_by

        Returns:
            The persisted content with categories and tags resolved

        Raises:
            NotFoundError: Unknown document type, category or tag
            PreconditionFailedError: Document type is inactive
            ValidationFailedError: No slug given and none derivable from the title
        """
        if dto.document_type_id is not None:
            await self._check_document_type(dto.document_type_id)
        await self._check_taxonomy(dto.category_ids, dto.tag_ids)

        base_slug = dto.slug or slugify(dto.title)
        if not base_slug:
            raise ValidationFailedError(
                "Cannot derive a slug from the title", field="slug", rule="required"
            )
        slug = await allocate_unique_slug(base_slug, self.repo.slug_taken)

        content = await self.repo.create(
            Content(
                title=dto.title,
                slug=slug,
                content=dto.content,
                status=dto.status,
                published_at=utcnow() if dto.status == ContentStatus.PUBLISHED else None,
                document_type_id=dto.document_type_id,
                organization_id=self.org_id,
                created_by=actor_id,
                updated_by=actor_id,
            )
        )
        await self.category_links.replace(content.id, dto.category_ids)
        await self.tag_links.replace(content.id, dto.tag_ids)

        logger.info(f"Created content '{content.slug}' ({content.id}) in org {self.org_id}")
        return await self._public(content.id)

    async def update(self, content_id: UUID, dto: ContentUpdate, actor_id: str) -> ContentPublic:
        """
        Update content.

        Only keys present in the payload are applied. A changed slug that
        collides with another content in the org is suffixed. When
        category_ids or tag_ids is sent, every existing link of that kind is
        deleted and the new set recreated.

        Raises:
            NotFoundError: Content (or a referenced document type, category or tag) not found
            PreconditionFailedError: Referenced document type is inactive
        """
        content = await self._load(content_id)

        values = dto.model_dump(exclude_unset=True, exclude={"category_ids", "tag_ids"})
        for key in ("title", "slug", "status"):
            if values.get(key) is None:
                values.pop(key, None)

        new_type_id = values.get("document_type_id")
        if new_type_id is not None and new_type_id != content.document_type_id:
            await self._check_document_type(new_type_id)
        await self._check_taxonomy(dto.category_ids, dto.tag_ids)

        new_slug = values.get("slug")
        if new_slug and new_slug != content.slug:

            async def taken(candidate: str) -> bool:
                return await self.repo.slug_taken(candidate, exclude_id=content_id)

            values["slug"] = await allocate_unique_slug(new_slug, taken)

        if values.get("status") == ContentStatus.PUBLISHED and content.published_at is None:
            values["published_at"] = utcnow()

        if dto.category_ids is not None:
            await self.category_links.replace(content_id, dto.category_ids)
        if dto.tag_ids is not None:
            await self.tag_links.replace(content_id, dto.tag_ids)

        await self.repo.update(content, **values, updated_by=actor_id)

        logger.info(f"Updated content {content_id} in org {self.org_id}")
        return await self._public(content_id)

    async def remove(self, content_id: UUID) -> None:
        """Hard delete content and its category/tag links."""
        await self._load(content_id)
        await self.category_links.delete_many(self.category_links.model.content_id == content_id)
        await self.tag_links.delete_many(self.tag_links.model.content_id == content_id)
        await self.repo.delete_many(self.repo.model.id == content_id)
        logger.info(f"Deleted content {content_id} in org {self.org_id}")

    async def publish(self, content_id: UUID, actor_id: str) -> ContentPublic:
        """Mark content published and stamp published_at with the current time."""
        content = await self._load(content_id)
        await self.repo.update(
            content,
            status=ContentStatus.PUBLISHED,
            published_at=utcnow(),
            updated_by=actor_id,
        )
        logger.info(f"Published content {content_id} in org {self.org_id}")
        return await self._public(content_id)

    # =========================================================================
    # Queries
    # =========================================================================

    async def get(self, content_id: UUID) -> ContentPublic:
        return await self._public(content_id)

    async def get_by_slug(self, slug: str) -> ContentPublic:
        content = await self.repo.get_by_slug_with_relations(slug)
        if not content:
            raise NotFoundError("Content not found")
        return content_to_public(content)

    async def list(
        self,
        page: int | None = None,
        limit: int | None = None,
        status: ContentStatus | None = None,
        document_type_id: UUID | None = None,
        category_id: UUID | None = None,
        tag_id: UUID | None = None,
        include_subcategories: bool = False,
    ) -> ContentList:
        """
        List contents newest first.

        Args:
            page: 1-based page number (clamped to >= 1)
            limit: Page size (clamped to 1..max_page_size)
            status: Only contents in this status
            document_type_id: Only contents of this document type
            category_id: Only contents linked to this category
            tag_id: Only contents linked to this tag
            include_subcategories: Also match contents linked to any
                descendant of category_id (lookup is cached)

        Returns:
            Page of contents with pagination meta
        """
        page, limit, offset = sanitize_page(page, limit)

        category_ids: list[UUID] | None = None
        if category_id is not None:
            if include_subcategories:
                category_ids = list(await self.subcategory_ids(category_id))
            else:
                category_ids = [category_id]

        rows, total = await self.repo.list_page(
            offset,
            limit,
            status=status,
            document_type_id=document_type_id,
            category_ids=category_ids,
            tag_id=tag_id,
        )
        return ContentList(
            data=[content_to_public(row) for row in rows],
            meta=PaginationMeta.build(total, page, limit),
        )

    async def subcategory_ids(self, category_id: UUID) -> tuple[UUID, ...]:
        """Return the category and all of its descendants, through the cache."""
        key = (self.org_id, category_id)
        cached = self.category_cache.get(key)
        if cached is not None:
            return cached

        ids = tuple(await self.categories.descendant_ids(category_id))
        self.category_cache[key] = ids
        logger.debug(f"Cached {len(ids)} category ids under {category_id} for org {self.org_id}")
        return ids
