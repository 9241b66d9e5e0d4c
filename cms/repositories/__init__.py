"""
Repositories

Data access layer over SQLAlchemy. Every tenant-owned table is reached
through an OrgScopedRepository.
"""

from cms.repositories.base import BaseRepository
from cms.repositories.categories import CategoryRepository, TagRepository
from cms.repositories.contents import (
    ContentCategoryRepository,
    ContentRepository,
    ContentTagRepository,
)
from cms.repositories.document_types import DocumentTypeRepository
from cms.repositories.org_scoped import OrgScopedRepository

__all__ = [
    "BaseRepository",
    "OrgScopedRepository",
    "CategoryRepository",
    "TagRepository",
    "ContentRepository",
    "ContentCategoryRepository",
    "ContentTagRepository",
    "DocumentTypeRepository",
]
