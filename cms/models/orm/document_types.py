"""
DocumentType ORM model.

A document type is a tenant-defined content schema. Its form schema is stored
verbatim as a JSON list of field definitions (order is display order); fields
have no table or lifecycle of their own.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cms.models.orm.base import Base, JSONType, utcnow

if TYPE_CHECKING:
    from cms.models.orm.organizations import Organization


class DocumentType(Base):
    """Document type database table."""

    __tablename__ = "document_types"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(100))
    slug: Mapped[str] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(Text, default=None)
    fields: Mapped[list[dict[str, Any]] | None] = mapped_column(JSONType, default=None)
    category_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), default=None
    )
    organization_id: Mapped[UUID] = mapped_column(ForeignKey("organizations.id"), index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_by: Mapped[str] = mapped_column(String(255))
    updated_by: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    # Relationships
    organization: Mapped["Organization | None"] = relationship()

    __table_args__ = (
        UniqueConstraint("organization_id", "slug", name="uq_document_types_org_slug"),
        UniqueConstraint("organization_id", "title", name="uq_document_types_org_title"),
    )
