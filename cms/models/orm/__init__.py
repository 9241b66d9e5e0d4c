"""
SQLAlchemy ORM Models

Pure database models using SQLAlchemy 2.0 declarative style.
For API schemas (Create/Update/Public), see cms.models.contracts.
"""

from cms.models.orm.base import Base
from cms.models.orm.categories import Category, Tag
from cms.models.orm.contents import Content, ContentCategory, ContentTag
from cms.models.orm.document_types import DocumentType
from cms.models.orm.organizations import Organization

__all__ = [
    "Base",
    "Organization",
    "Category",
    "Tag",
    "DocumentType",
    "Content",
    "ContentCategory",
    "ContentTag",
]
