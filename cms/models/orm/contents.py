"""
Content, ContentCategory, and ContentTag ORM models.

A content is an instance of data, optionally associated with a document type.
Category and tag links are plain association rows, rewritten wholesale when a
content's taxonomy changes.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Enum as SQLAlchemyEnum, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cms.models.enums import ContentStatus
from cms.models.orm.base import Base, JSONType, utcnow

if TYPE_CHECKING:
    from cms.models.orm.categories import Category, Tag
    from cms.models.orm.organizations import Organization


class Content(Base):
    """Content database table."""

    __tablename__ = "contents"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(200))
    slug: Mapped[str] = mapped_column(String(100))
    content: Mapped[Any | None] = mapped_column(JSONType, default=None)
    status: Mapped[ContentStatus] = mapped_column(
        SQLAlchemyEnum(
            ContentStatus,
            name="content_status",
            values_callable=lambda x: [e.value for e in x],
        ),
        default=ContentStatus.DRAFT,
    )
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
    document_type_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("document_types.id"), default=None, index=True
    )
    organization_id: Mapped[UUID] = mapped_column(ForeignKey("organizations.id"), index=True)
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
    categories: Mapped[list["ContentCategory"]] = relationship(
        back_populates="content", passive_deletes=True
    )
    tags: Mapped[list["ContentTag"]] = relationship(
        back_populates="content", passive_deletes=True
    )

    __table_args__ = (
        UniqueConstraint("organization_id", "slug", name="uq_contents_org_slug"),
    )


class ContentCategory(Base):
    """Content-Category association table."""

    __tablename__ = "content_categories"

    content_id: Mapped[UUID] = mapped_column(
        ForeignKey("contents.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[UUID] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )

    content: Mapped["Content"] = relationship(back_populates="categories")
    category: Mapped["Category"] = relationship()


class ContentTag(Base):
    """Content-Tag association table."""

    __tablename__ = "content_tags"

    content_id: Mapped[UUID] = mapped_column(
        ForeignKey("contents.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[UUID] = mapped_column(
        ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
    )

    content: Mapped["Content"] = relationship(back_populates="tags")
    tag: Mapped["Tag"] = relationship()
