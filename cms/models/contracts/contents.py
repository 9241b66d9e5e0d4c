"""
Content contract models.

``content`` is an opaque JSON payload; it is stored as sent and not checked
against the document type's form schema.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from cms.models.contracts.common import OrganizationRef, PaginationMeta, TaxonomyRef
from cms.models.contracts.document_types import SLUG_PATTERN
from cms.models.contracts.form_schema import WireModel
from cms.models.enums import ContentStatus


class ContentCreate(WireModel):
    """Request model for creating content"""
    title: str = Field(..., min_length=1, max_length=200)
    slug: str | None = Field(
        default=None, min_length=1, max_length=100, pattern=SLUG_PATTERN,
        description="Derived from the title when omitted",
    )
    content: Any = None
    status: ContentStatus = ContentStatus.DRAFT
    document_type_id: UUID | None = None
    category_ids: list[UUID] = Field(default_factory=list)
    tag_ids: list[UUID] = Field(default_factory=list)


class ContentUpdate(WireModel):
    """
    Request model for updating content.

    category_ids/tag_ids, when sent, replace the whole association set.
    """
    title: str | None = Field(default=None, min_length=1, max_length=200)
    slug: str | None = Field(default=None, min_length=1, max_length=100, pattern=SLUG_PATTERN)
    content: Any = None
    status: ContentStatus | None = None
    document_type_id: UUID | None = None
    category_ids: list[UUID] | None = None
    tag_ids: list[UUID] | None = None


class ContentPublic(WireModel):
    """Content response with categories and tags resolved"""
    id: UUID
    title: str
    slug: str
    content: Any = None
    status: ContentStatus
    published_at: datetime | None = None
    document_type_id: UUID | None = None
    organization_id: UUID
    organization: OrganizationRef | None = None
    created_by: str
    updated_by: str
    created_at: datetime
    updated_at: datetime
    categories: list[TaxonomyRef] = Field(default_factory=list)
    tags: list[TaxonomyRef] = Field(default_factory=list)


class ContentList(WireModel):
    """Paginated content list"""
    data: list[ContentPublic]
    meta: PaginationMeta
