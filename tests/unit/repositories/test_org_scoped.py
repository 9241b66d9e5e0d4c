"""Unit tests for organization scoping in repositories"""

import pytest_asyncio

from cms.models.orm import DocumentType
from cms.repositories.categories import CategoryRepository
from cms.repositories.document_types import DocumentTypeRepository
from tests.helpers.factories import make_category


@pytest_asyncio.fixture
async def two_types(db_session, org, other_org):
    mine = DocumentType(
        title="Permit", slug="permit", fields=[], organization_id=org.id,
        created_by="user-1", updated_by="user-1",
    )
    theirs = DocumentType(
        title="Permit", slug="permit", fields=[], organization_id=other_org.id,
        created_by="user-9", updated_by="user-9",
    )
    db_session.add_all([mine, theirs])
    await db_session.flush()
    return mine, theirs


class TestOrgScopedRepository:
    async def test_get_by_id_hides_other_org(self, db_session, org, two_types):
        mine, theirs = two_types
        repo = DocumentTypeRepository(db_session, org.id)

        assert (await repo.get_by_id(mine.id)).id == mine.id
        assert await repo.get_by_id(theirs.id) is None

    async def test_count_and_exists_scoped(self, db_session, org, two_types):
        repo = DocumentTypeRepository(db_session, org.id)

        assert await repo.count() == 1
        assert await repo.slug_taken("permit") is True
        assert await repo.slug_taken("licence") is False

    async def test_delete_many_scoped(self, db_session, org, other_org, two_types):
        repo = DocumentTypeRepository(db_session, org.id)

        deleted = await repo.delete_many(DocumentType.slug == "permit")

        assert deleted == 1
        assert await DocumentTypeRepository(db_session, other_org.id).count() == 1

    async def test_conflict_lookup_excludes_self(self, db_session, org, two_types):
        mine, _ = two_types
        repo = DocumentTypeRepository(db_session, org.id)

        assert await repo.find_title_or_slug_conflict("Permit", None) is not None
        assert await repo.find_title_or_slug_conflict("Permit", "permit", exclude_id=mine.id) is None
        assert await repo.find_title_or_slug_conflict(None, None) is None

    async def test_update_stamps_values(self, db_session, org, two_types):
        mine, _ = two_types
        repo = DocumentTypeRepository(db_session, org.id)

        updated = await repo.update(mine, description="Changed", updated_by="user-2")

        assert updated.description == "Changed"
        assert updated.updated_by == "user-2"


class TestCategoryRepository:
    async def test_descendants_walk_the_tree(self, db_session, org):
        root = make_category(org.id, slug="root")
        db_session.add(root)
        await db_session.flush()
        child = make_category(org.id, slug="child", parent_id=root.id)
        db_session.add(child)
        await db_session.flush()
        grandchild = make_category(org.id, slug="grandchild", parent_id=child.id)
        unrelated = make_category(org.id, slug="unrelated")
        db_session.add_all([grandchild, unrelated])
        await db_session.flush()

        ids = await CategoryRepository(db_session, org.id).descendant_ids(root.id)

        assert ids[0] == root.id
        assert set(ids) == {root.id, child.id, grandchild.id}

    async def test_existing_ids_scoped(self, db_session, org, other_org):
        mine = make_category(org.id)
        theirs = make_category(other_org.id)
        db_session.add_all([mine, theirs])
        await db_session.flush()

        found = await CategoryRepository(db_session, org.id).existing_ids([mine.id, theirs.id])

        assert found == {mine.id}
