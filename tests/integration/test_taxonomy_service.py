"""
Integration tests for category and tag administration.
"""

import pytest

from inkpress.shared.core.exceptions import (
    ConflictError,
    InvalidCategoryError,
    TermNotFoundError,
    ValidationError,
)
from inkpress.shared.models import Term, TermRelationship, TaxonomyKind
from inkpress.shared.schemas.post import PostCreate
from inkpress.shared.schemas.taxonomy import CategoryCreate, CategoryUpdate, TagCreate, TagUpdate
from inkpress.shared.services.post_service import PostService
from inkpress.shared.services.taxonomy_service import TaxonomyService, term_slug


@pytest.fixture
def taxonomy(session):
    return TaxonomyService(session)


class TestCategories:
    async def test_create_root_and_child(self, taxonomy):
        news = await taxonomy.create_category(CategoryCreate(name="News"))
        local = await taxonomy.create_category(CategoryCreate(name="Local News", parent=news.id))

        assert news.slug == "news"
        assert news.parent == 0
        assert news.count == 0
        assert local.slug == "local-news"
        assert local.parent == news.id

    async def test_duplicate_slug_conflicts(self, taxonomy):
        await taxonomy.create_category(CategoryCreate(name="News"))
        with pytest.raises(ConflictError):
            await taxonomy.create_category(CategoryCreate(name="NEWS"))

    async def test_tag_with_same_slug_does_not_block_category(self, taxonomy):
        tag = await taxonomy.create_tag(TagCreate(name="Sports"))
        category = await taxonomy.create_category(CategoryCreate(name="Sports"))

        assert category.term_id == tag.term_id
        assert category.id != tag.id

    async def test_category_on_tag_slug_shares_the_term_name(self, taxonomy):
        tag_id = (await taxonomy.create_tag(TagCreate(name="Cricket"))).id
        category = await taxonomy.create_category(CategoryCreate(name="CRICKET"))
        assert category.name == "Cricket"

        await taxonomy.update_category(category.id, CategoryUpdate(name="Cricket World"))

        tag = await taxonomy.get_term(TaxonomyKind.TAG, tag_id)
        assert tag.name == "Cricket World"
        assert tag.slug == "cricket"

    async def test_unknown_parent_rejected(self, taxonomy):
        with pytest.raises(InvalidCategoryError):
            await taxonomy.create_category(CategoryCreate(name="Orphan", parent=999))

    async def test_blank_name_rejected(self, taxonomy):
        with pytest.raises(ValidationError):
            await taxonomy.create_category(CategoryCreate(name="   "))

    async def test_cannot_be_own_parent(self, taxonomy):
        news = await taxonomy.create_category(CategoryCreate(name="News"))
        with pytest.raises(InvalidCategoryError):
            await taxonomy.update_category(news.id, CategoryUpdate(parent=news.id))

    async def test_cannot_move_below_descendant(self, taxonomy):
        root_id = (await taxonomy.create_category(CategoryCreate(name="World"))).id
        child_id = (await taxonomy.create_category(CategoryCreate(name="Asia", parent=root_id))).id
        grandchild_id = (
            await taxonomy.create_category(CategoryCreate(name="Dhaka", parent=child_id))
        ).id

        # the rollback expires every loaded instance
        with pytest.raises(InvalidCategoryError):
            await taxonomy.update_category(root_id, CategoryUpdate(parent=grandchild_id))

        assert (await taxonomy.get_term(TaxonomyKind.CATEGORY, root_id)).parent == 0

    async def test_update_name_slug_and_parent(self, taxonomy):
        news = await taxonomy.create_category(CategoryCreate(name="News"))
        misc = await taxonomy.create_category(CategoryCreate(name="Misc"))

        updated = await taxonomy.update_category(
            misc.id,
            CategoryUpdate(name="Features", slug="features", parent=news.id, description="Long reads"),
        )

        assert updated.name == "Features"
        assert updated.slug == "features"
        assert updated.parent == news.id
        assert updated.description == "Long reads"

    async def test_update_slug_conflict(self, taxonomy):
        await taxonomy.create_category(CategoryCreate(name="News"))
        misc = await taxonomy.create_category(CategoryCreate(name="Misc"))
        with pytest.raises(ConflictError):
            await taxonomy.update_category(misc.id, CategoryUpdate(slug="news"))

    async def test_delete_moves_children_to_root(self, taxonomy, count_rows):
        parent = await taxonomy.create_category(CategoryCreate(name="Parent"))
        child = await taxonomy.create_category(CategoryCreate(name="Child", parent=parent.id))

        await taxonomy.delete_category(parent.id)

        assert (await taxonomy.get_term(TaxonomyKind.CATEGORY, child.id)).parent == 0
        assert await count_rows(Term, Term.slug == "parent") == 0
        with pytest.raises(TermNotFoundError):
            await taxonomy.get_term(TaxonomyKind.CATEGORY, parent.id)

    async def test_delete_detaches_posts(self, session, clock, author, taxonomy, count_rows):
        news = await taxonomy.create_category(CategoryCreate(name="News"))
        await PostService(session, clock).create(
            PostCreate(author_id=author.id, title="Story", category_ids=[news.id])
        )

        await taxonomy.delete_category(news.id)

        assert await count_rows(TermRelationship) == 0

    async def test_tag_id_is_not_a_category(self, taxonomy):
        tag = await taxonomy.create_tag(TagCreate(name="Python"))
        with pytest.raises(TermNotFoundError):
            await taxonomy.get_term(TaxonomyKind.CATEGORY, tag.id)

    async def test_list_with_search(self, taxonomy):
        for name in ("Sports", "News", "Local News"):
            await taxonomy.create_category(CategoryCreate(name=name))

        everything = await taxonomy.list_terms(TaxonomyKind.CATEGORY)
        assert [b.name for b in everything] == ["Local News", "News", "Sports"]

        matched = await taxonomy.list_terms(TaxonomyKind.CATEGORY, search="news")
        assert [b.name for b in matched] == ["Local News", "News"]


class TestTags:
    async def test_create_is_idempotent(self, taxonomy, count_rows):
        first = await taxonomy.create_tag(TagCreate(name="Python"))
        second = await taxonomy.create_tag(TagCreate(name="python"))

        assert first.id == second.id
        assert await count_rows(Term) == 1

    async def test_bengali_name_keeps_its_slug(self, taxonomy):
        tag = await taxonomy.create_tag(TagCreate(name="রাজনীতি"))
        assert tag.slug == "রাজনীতি"

    async def test_blank_name_rejected(self, taxonomy):
        with pytest.raises(ValidationError):
            await taxonomy.create_tag(TagCreate(name="  "))

    async def test_update_slug_conflict(self, taxonomy):
        await taxonomy.create_tag(TagCreate(name="Python"))
        rust = await taxonomy.create_tag(TagCreate(name="Rust"))
        with pytest.raises(ConflictError):
            await taxonomy.update_tag(rust.id, TagUpdate(slug="python"))

    async def test_update_name(self, taxonomy):
        rust = await taxonomy.create_tag(TagCreate(name="Rust"))
        updated = await taxonomy.update_tag(rust.id, TagUpdate(name="Rust Lang"))
        assert updated.name == "Rust Lang"
        assert updated.slug == "rust"

    async def test_shared_by_posts_counts_each(self, session, clock, author, taxonomy):
        service = PostService(session, clock)
        for title in ("One", "Two"):
            await service.create(PostCreate(author_id=author.id, title=title, tag_names=["Python"]))

        tags = await taxonomy.list_terms(TaxonomyKind.TAG)
        assert [(t.name, t.count) for t in tags] == [("Python", 2)]

    async def test_delete_removes_term(self, taxonomy, count_rows):
        tag = await taxonomy.create_tag(TagCreate(name="Gone"))
        await taxonomy.delete_tag(tag.id)
        assert await count_rows(Term) == 0

    async def test_delete_missing(self, taxonomy):
        with pytest.raises(TermNotFoundError):
            await taxonomy.delete_tag(12345)


@pytest.mark.parametrize(
    "slug, name, expected",
    [
        (None, "Hello World", "hello-world"),
        ("Custom Slug", "ignored", "custom-slug"),
        (None, "খেলা", "খেলা"),
        (None, "!!!", "!!!"),
    ],
)
def test_term_slug(slug, name, expected):
    assert term_slug(slug, name) == expected
