"""
Shared contract models: pagination meta and lightweight relation refs.
"""

import math
from uuid import UUID

from cms.models.contracts.form_schema import WireModel


class PaginationMeta(WireModel):
    """Pagination metadata returned alongside list results"""
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PaginationMeta":
        return cls(total=total, page=page, limit=limit, total_pages=math.ceil(total / limit))


class OrganizationRef(WireModel):
    """Organization summary embedded in responses"""
    id: UUID
    name: str
    slug: str


class TaxonomyRef(WireModel):
    """Category or tag summary embedded in content responses"""
    id: UUID
    name: str
    slug: str
    color: str | None = None
