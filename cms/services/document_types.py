"""
Document Type Service

Aggregate operations for document types. A title or slug collision is a
hard conflict here (never auto-suffixed), and a submitted form schema must
pass the structural validator before anything is written.

Within each operation the order is fixed: not-found, then conflict, then
schema validation, then persistence.
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from cms.core.exceptions import (
    ConflictError,
    NotFoundError,
    PreconditionFailedError,
    ValidationFailedError,
)
from cms.models.contracts.common import PaginationMeta
from cms.models.contracts.contents import ContentList
from cms.models.contracts.document_types import (
    DocumentSummary,
    DocumentTypeCreate,
    DocumentTypeList,
    DocumentTypePublic,
    DocumentTypeUpdate,
    SlugSuggestion,
)
from cms.models.orm import DocumentType
from cms.repositories.categories import CategoryRepository
from cms.repositories.contents import ContentRepository
from cms.repositories.document_types import DocumentTypeRepository
from cms.services.contents import content_to_public
from cms.services.form_schema_validator import parse_form_schema
from cms.services.pagination import sanitize_page
from cms.services.slugs import allocate_unique_slug, slugify

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "Document type with this title or slug already exists"
HAS_DOCUMENTS_MESSAGE = (
    "Cannot delete document type that has associated documents. "
    "Please delete or reassign the documents first."
)
RECENT_DOCUMENTS_LIMIT = 5


def _normalize_fields(fields: Any) -> list[dict[str, Any]]:
    """Validate raw field definitions and return them in stored (wire) form."""
    schema = parse_form_schema({"fields": fields})
    return schema.to_wire()["fields"]


def _to_public(
    document_type: DocumentType,
    document_count: int,
    recent_documents: list[DocumentSummary] | None = None,
) -> DocumentTypePublic:
    public = DocumentTypePublic.model_validate(document_type)
    public.document_count = document_count
    public.recent_documents = recent_documents
    return public


class DocumentTypeService:
    """Document type aggregate operations for one organization."""

    def __init__(self, session: AsyncSession, org_id: UUID):
        self.session = session
        self.org_id = org_id
        self.repo = DocumentTypeRepository(session, org_id)
        self.contents = ContentRepository(session, org_id)
        self.categories = CategoryRepository(session, org_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _load(self, document_type_id: UUID) -> DocumentType:
        document_type = await self.repo.get_by_id(document_type_id)
        if not document_type:
            raise NotFoundError("Document type not found")
        return document_type

    async def _public(self, document_type_id: UUID) -> DocumentTypePublic:
        document_type = await self.repo.get_with_relations(document_type_id)
        if not document_type:
            raise NotFoundError("Document type not found")
        count = await self.contents.count_for_document_type(document_type_id)
        return _to_public(document_type, count)

    async def _check_category(self, category_id: UUID | None) -> None:
        if category_id is not None and not await self.categories.get_by_id(category_id):
            raise NotFoundError("Category not found")

    async def _check_conflict(
        self,
        title: str | None,
        slug: str | None,
        exclude_id: UUID | None = None,
    ) -> None:
        existing = await self.repo.find_title_or_slug_conflict(title, slug, exclude_id)
        if existing is None:
            return
        field = "title" if title is not None and existing.title == title else "slug"
        logger.warning(
            f"Rejected document type {field} '{title if field == 'title' else slug}': "
            f"already used by {existing.id} in org {self.org_id}"
        )
        raise ConflictError(CONFLICT_MESSAGE, {"field": field})

    # =========================================================================
    # Mutations
    # =========================================================================

    async def create(self, dto: DocumentTypeCreate, actor_id: str) -> DocumentTypePublic:
        """
        Create a document type.

        Args:
            dto: Creation payload; ``fields`` is validated when present
            actor_id: Actor stamped into created_by/updated_by

        Returns:
            The persisted document type with documentCount 0

        Raises:
            NotFoundError: category_id is not a category of this org
            ConflictError: Title or slug already used in the org
            ValidationFailedError: First form schema violation
        """
        await self._check_category(dto.category_id)
        await self._check_conflict(dto.title, dto.slug)

        fields: list[dict[str, Any]] = []
        if dto.fields is not None:
            fields = _normalize_fields(dto.fields)

        document_type = await self.repo.create(
            DocumentType(
                title=dto.title,
                slug=dto.slug,
                description=dto.description,
                fields=fields,
                category_id=dto.category_id,
                organization_id=self.org_id,
                is_active=True,
                created_by=actor_id,
                updated_by=actor_id,
            )
        )

        logger.info(
            f"Created document type '{document_type.slug}' ({document_type.id}) "
            f"with {len(fields)} fields in org {self.org_id}"
        )
        return await self._public(document_type.id)

    async def update(
        self, document_type_id: UUID, dto: DocumentTypeUpdate, actor_id: str
    ) -> DocumentTypePublic:
        """
        Update a document type. Only keys present in the payload are applied.

        Raises:
            NotFoundError: Document type (or category) not found in the org
            ConflictError: New title or slug used by another document type
            ValidationFailedError: First form schema violation
        """
        document_type = await self._load(document_type_id)

        values = dto.model_dump(exclude_unset=True)
        for key in ("title", "slug", "fields"):
            if values.get(key) is None:
                values.pop(key, None)

        if "category_id" in values:
            await self._check_category(values["category_id"])

        if "title" in values or "slug" in values:
            await self._check_conflict(
                values.get("title"), values.get("slug"), exclude_id=document_type_id
            )

        if "fields" in values:
            values["fields"] = _normalize_fields(dto.fields)

        await self.repo.update(document_type, **values, updated_by=actor_id)

        changed = ", ".join(sorted(values)) or "audit only"
        logger.info(f"Updated document type {document_type_id} ({changed}) in org {self.org_id}")
        return await self._public(document_type_id)

    async def remove(self, document_type_id: UUID) -> DocumentTypePublic:
        """
        Deactivate a document type that has no documents.

        The record is kept with is_active=False.

        Raises:
            NotFoundError: Document type not found in the org
            PreconditionFailedError: Contents still reference the document type
        """
        document_type = await self._load(document_type_id)

        count = await self.contents.count_for_document_type(document_type_id)
        if count > 0:
            logger.warning(
                f"Refused to delete document type {document_type_id}: {count} documents attached"
            )
            raise PreconditionFailedError(HAS_DOCUMENTS_MESSAGE, {"documentCount": count})

        await self.repo.update(document_type, is_active=False)
        logger.info(f"Deactivated document type {document_type_id} in org {self.org_id}")
        return await self._public(document_type_id)

    async def toggle_active(self, document_type_id: UUID, actor_id: str) -> DocumentTypePublic:
        """Flip is_active unconditionally."""
        document_type = await self._load(document_type_id)
        await self.repo.update(
            document_type, is_active=not document_type.is_active, updated_by=actor_id
        )
        logger.info(
            f"Document type {document_type_id} is now "
            f"{'active' if document_type.is_active else 'inactive'}"
        )
        return await self._public(document_type_id)

    # =========================================================================
    # Queries
    # =========================================================================

    async def list(
        self,
        page: int | None = None,
        limit: int | None = None,
        search: str | None = None,
        is_active: bool | None = None,
    ) -> DocumentTypeList:
        """
        List document types newest first, each with its document count.

        Args:
            page: 1-based page number (clamped to >= 1)
            limit: Page size (clamped to 1..max_page_size)
            search: Case-insensitive match on title or slug
            is_active: Filter on the active flag

        Returns:
            Page of document types with pagination meta
        """
        page, limit, offset = sanitize_page(page, limit)
        rows, total = await self.repo.list_page(offset, limit, search=search, is_active=is_active)
        counts = await self.contents.counts_by_document_type([row.id for row in rows])
        return DocumentTypeList(
            data=[_to_public(row, counts.get(row.id, 0)) for row in rows],
            meta=PaginationMeta.build(total, page, limit),
        )

    async def get(self, document_type_id: UUID) -> DocumentTypePublic:
        """Get a document type with its five most recent documents."""
        public = await self._public(document_type_id)
        recent = await self.contents.recent_for_document_type(
            document_type_id, RECENT_DOCUMENTS_LIMIT
        )
        public.recent_documents = [DocumentSummary.model_validate(row) for row in recent]
        return public

    async def get_by_slug(self, slug: str) -> DocumentTypePublic:
        """Get an active document type by slug; inactive ones are not found."""
        document_type = await self.repo.get_active_by_slug(slug)
        if not document_type:
            raise NotFoundError("Document type not found")
        count = await self.contents.count_for_document_type(document_type.id)
        return _to_public(document_type, count)

    async def list_documents(
        self,
        document_type_id: UUID,
        page: int | None = None,
        limit: int | None = None,
    ) -> ContentList:
        """List the contents of a document type, newest first."""
        await self._load(document_type_id)
        page, limit, offset = sanitize_page(page, limit)
        rows, total = await self.contents.list_page(
            offset, limit, document_type_id=document_type_id
        )
        return ContentList(
            data=[content_to_public(row) for row in rows],
            meta=PaginationMeta.build(total, page, limit),
        )

    async def suggest_slug(self, title: str, slug: str | None = None) -> SlugSuggestion:
        """
        Propose a free slug for a new document type.

        The base (``slug`` or the slugified title) is kept when neither the
        title nor the base collides; otherwise the slug is suffixed with
        ``-1``, ``-2``, ... until a free slug is found. The title is returned
        to the caller unchanged, so a title collision still has to be fixed
        by hand before create succeeds.
        """
        base = slug or slugify(title)
        if not base:
            raise ValidationFailedError(
                "Cannot derive a slug from the title", field="title", rule="required"
            )

        async def original_taken(candidate: str) -> bool:
            return await self.repo.find_title_or_slug_conflict(title or None, candidate) is not None

        return SlugSuggestion(
            slug=await allocate_unique_slug(base, self.repo.slug_taken, original_taken)
        )
