"""
Category and Tag Repositories

Taxonomy lookups used when attaching categories and tags to contents.
"""

from uuid import UUID

from sqlalchemy import select

from cms.models.orm import Category, Tag
from cms.repositories.org_scoped import OrgScopedRepository


class CategoryRepository(OrgScopedRepository[Category]):
    """Category repository using strict org scoping."""

    model = Category

    async def existing_ids(self, category_ids: list[UUID]) -> set[UUID]:
        """Return the subset of ids that are categories in this org."""
        if not category_ids:
            return set()
        query = self.filter_strict(
            select(self.model.id).where(self.model.id.in_(category_ids))
        )
        result = await self.session.execute(query)
        return set(result.scalars().all())

    async def descendant_ids(self, root_id: UUID) -> list[UUID]:
        """
        Collect a category and all of its subcategories.

        Walks the tree breadth first, one query per level. Cycles in
        parent_id are tolerated: each id is visited once.

        Args:
            root_id: Category to start from (included in the result)

        Returns:
            Category ids, root first
        """
        collected = [root_id]
        seen = {root_id}
        frontier = [root_id]
        while frontier:
            query = self.filter_strict(
                select(self.model.id).where(self.model.parent_id.in_(frontier))
            )
            result = await self.session.execute(query)
            frontier = [cid for cid in result.scalars().all() if cid not in seen]
            seen.update(frontier)
            collected.extend(frontier)
        return collected


class TagRepository(OrgScopedRepository[Tag]):
    """Tag repository using strict org scoping."""

    model = Tag

    async def existing_ids(self, tag_ids: list[UUID]) -> set[UUID]:
        """Return the subset of ids that are tags in this org."""
        if not tag_ids:
            return set()
        query = self.filter_strict(select(self.model.id).where(self.model.id.in_(tag_ids)))
        result = await self.session.execute(query)
        return set(result.scalars().all())
