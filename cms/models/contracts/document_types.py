"""
Document type contract models.

``fields`` arrives as raw JSON on purpose: the form schema validator must see
the payload exactly as sent to report its first violation reproducibly, so it
is not pre-parsed here.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field, field_validator

from cms.models.contracts.common import OrganizationRef, PaginationMeta
from cms.models.contracts.form_schema import WireModel
from cms.models.enums import ContentStatus

SLUG_PATTERN = r"^[a-z0-9-]+$"


def _strip_title(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Title cannot be empty")
    return value


class DocumentTypeCreate(WireModel):
    """Request model for creating a document type"""
    title: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100, pattern=SLUG_PATTERN)
    description: str | None = Field(default=None, max_length=500)
    fields: Any = Field(default=None, description="Form schema field definitions")
    category_id: UUID | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _strip_title(v)  # type: ignore[return-value]


class DocumentTypeUpdate(WireModel):
    """Request model for updating a document type (only set keys are applied)"""
    title: str | None = Field(default=None, min_length=1, max_length=100)
    slug: str | None = Field(default=None, min_length=1, max_length=100, pattern=SLUG_PATTERN)
    description: str | None = Field(default=None, max_length=500)
    fields: Any = Field(default=None, description="Form schema field definitions")
    category_id: UUID | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return _strip_title(v)


class DocumentSummary(WireModel):
    """Recent content entry shown on a document type detail"""
    id: UUID
    title: str
    slug: str
    status: ContentStatus
    created_at: datetime


class DocumentTypePublic(WireModel):
    """Document type response with resolved relations"""
    id: UUID
    title: str
    slug: str
    description: str | None = None
    fields: list[dict[str, Any]] = Field(default_factory=list)
    category_id: UUID | None = None
    organization_id: UUID
    organization: OrganizationRef | None = None
    is_active: bool
    created_by: str
    updated_by: str
    created_at: datetime
    updated_at: datetime
    document_count: int = 0
    recent_documents: list[DocumentSummary] | None = None

    @field_validator("fields", mode="before")
    @classmethod
    def default_fields(cls, v: Any) -> Any:
        return [] if v is None else v


class DocumentTypeList(WireModel):
    """Paginated document type list"""
    data: list[DocumentTypePublic]
    meta: PaginationMeta


class SlugSuggestion(WireModel):
    """Free slug proposed for a new document type"""
    slug: str
