"""
Integration tests for the post lifecycle: create, update, quick edit,
trash, restore, hard delete, and scheduled promotion.

Clock: 2025-03-01 12:00 UTC, i.e. 18:00 site time (+6).
"""

from datetime import datetime

import pytest
from sqlalchemy import select

from inkpress.shared.core.exceptions import InvalidCategoryError, PostNotFoundError
from inkpress.shared.models import (
    Comment,
    MetaKey,
    Post,
    PostExtra,
    PostMeta,
    PostStatus,
    TaxonomyKind,
    TermRelationship,
    TermTaxonomy,
)
from inkpress.shared.repositories.post_meta_repository import PostMetaRepository
from inkpress.shared.repositories.taxonomy_repository import TaxonomyRepository
from inkpress.shared.schemas.post import PostCreate, PostUpdate, QuickEdit
from inkpress.shared.services.post_service import PostService


LOCAL_NOW = datetime(2025, 3, 1, 18, 0)
UTC_NOW = datetime(2025, 3, 1, 12, 0)


@pytest.fixture
def service(session, clock):
    return PostService(session, clock)


async def load(session, post_id):
    result = await session.execute(
        select(Post).where(Post.id == post_id).execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def category_count(session, ttid):
    result = await session.execute(select(TermTaxonomy.count).where(TermTaxonomy.id == ttid))
    return result.scalar_one()


# ----- Create -----

class TestCreate:
    async def test_defaults(self, service, session, author):
        created = await service.create(PostCreate(author_id=author.id, title="Hello World"))

        assert created.slug == "hello-world"
        assert created.status == PostStatus.DRAFT
        post = await load(session, created.id)
        assert post.post_date == LOCAL_NOW
        assert post.post_date_gmt == UTC_NOW
        assert post.post_modified == LOCAL_NOW
        assert post.post_type == "post"

    async def test_slug_collision_then_reuse_after_trash(self, service, author):
        first = await service.create(PostCreate(author_id=author.id, title="Hello World"))
        second = await service.create(PostCreate(author_id=author.id, title="Hello World"))
        assert second.slug == "hello-world-2"

        await service.move_to_trash(first.id)
        third = await service.create(PostCreate(author_id=author.id, title="Hello World"))
        assert third.slug == "hello-world"

    async def test_explicit_slug_wins_over_title(self, service, author):
        created = await service.create(
            PostCreate(author_id=author.id, title="Hello World", slug="Custom Slug!")
        )
        assert created.slug == "custom-slug"

    async def test_unsluggable_title_falls_back(self, service, author):
        created = await service.create(PostCreate(author_id=author.id, title="বাংলা"))
        again = await service.create(PostCreate(author_id=author.id, title="!!!"))
        assert created.slug == "post"
        assert again.slug == "post-2"

    async def test_max_length_slugs_stay_unique(self, service, author):
        first = await service.create(PostCreate(author_id=author.id, title="a" * 200))
        second = await service.create(PostCreate(author_id=author.id, title="a" * 200))
        assert len(first.slug) == 190
        assert len(second.slug) == 190
        assert second.slug.endswith("-2")

    async def test_future_schedule_forces_future(self, service, session, author):
        created = await service.create(
            PostCreate(
                author_id=author.id,
                title="Tomorrow",
                status=PostStatus.PUBLISH,
                scheduled_at=datetime(2025, 3, 2, 9, 0),
            )
        )

        assert created.status == PostStatus.FUTURE
        post = await load(session, created.id)
        assert post.post_date == datetime(2025, 3, 2, 9, 0)
        assert post.post_date_gmt == datetime(2025, 3, 2, 3, 0)
        assert post.post_modified == LOCAL_NOW
        meta = PostMetaRepository(session)
        assert await meta.get_meta(created.id, MetaKey.SCHEDULED_AT) == "2025-03-02 09:00:00"

    async def test_past_schedule_keeps_status_and_backdates(self, service, session, author):
        created = await service.create(
            PostCreate(
                author_id=author.id,
                title="Archive",
                status=PostStatus.PUBLISH,
                scheduled_at=datetime(2025, 2, 1, 9, 0),
            )
        )

        assert created.status == PostStatus.PUBLISH
        post = await load(session, created.id)
        assert post.post_date == datetime(2025, 2, 1, 9, 0)
        assert post.post_date_gmt == datetime(2025, 2, 1, 3, 0)

    async def test_taxonomy_thumbnail_and_extras(
        self, service, session, author, make_category, make_attachment
    ):
        news = await make_category("News")
        cover = await make_attachment()

        created = await service.create(
            PostCreate(
                author_id=author.id,
                title="Rich",
                category_ids=[news, news],
                tag_names=["Python", "python", " "],
                featured_image_id=cover,
                subtitle="Sub",
                format="gallery",
                gallery=[cover, {"id": 99, "url": "https://cdn/b.jpg"}],
            )
        )

        repo = TaxonomyRepository(session)
        assert await repo.relationship_ids(created.id, TaxonomyKind.CATEGORY) == [news]
        tags = await repo.bindings_for_post(created.id, TaxonomyKind.TAG)
        assert [t.name for t in tags] == ["Python"]
        assert await category_count(session, news) == 1

        meta = PostMetaRepository(session)
        assert await meta.get_meta(created.id, MetaKey.THUMBNAIL_ID) == str(cover)
        assert await meta.get_meta(created.id, MetaKey.SUBTITLE) == "Sub"
        assert await meta.get_meta(created.id, MetaKey.FORMAT) == "gallery"

        detail = await service.get_post(created.id)
        assert detail.subtitle == "Sub"
        assert detail.format.value == "gallery"
        assert [item["id"] for item in detail.gallery] == [cover, 99]
        assert detail.featured_image_url == "https://cdn.example.com/cover.jpg"
        assert detail.author_name == "Desk Editor"

    async def test_unknown_category_writes_nothing(self, service, author, count_rows):
        with pytest.raises(InvalidCategoryError) as exc:
            await service.create(
                PostCreate(author_id=author.id, title="Nope", category_ids=[9999])
            )

        assert exc.value.details == {"category_ids": [9999]}
        assert await count_rows(Post) == 0

    async def test_failure_mid_create_rolls_back(
        self, service, author, make_category, count_rows, monkeypatch
    ):
        news = await make_category("News")

        async def broken(self, name):
            raise RuntimeError("tag store unavailable")

        monkeypatch.setattr(TaxonomyRepository, "get_or_create_tag", broken)

        with pytest.raises(RuntimeError):
            await service.create(
                PostCreate(author_id=author.id, title="Half", category_ids=[news], tag_names=["x"])
            )

        assert await count_rows(Post) == 0
        assert await count_rows(TermRelationship) == 0
        assert await count_rows(PostMeta) == 0

    async def test_audio_intent_queues_narration(self, service, session, author):
        created = await service.create(
            PostCreate(author_id=author.id, title="Listen", audio={"generate": True})
        )

        detail = await service.get_post(created.id)
        assert detail.audio.status.value == "queued"
        assert detail.audio.lang == "bn"


# ----- Update -----

class TestUpdate:
    async def test_replaces_categories_and_recounts(self, service, session, author, make_category):
        a = await make_category("Alpha")
        b = await make_category("Beta")
        created = await service.create(
            PostCreate(author_id=author.id, title="Counted", category_ids=[a, b])
        )
        assert await category_count(session, a) == 1

        await service.update(created.id, PostUpdate(category_ids=[b]))

        assert await category_count(session, a) == 0
        assert await category_count(session, b) == 1

    async def test_only_supplied_fields_change(self, service, session, author, clock):
        created = await service.create(
            PostCreate(author_id=author.id, title="Original", content="Body", subtitle="Keep")
        )
        clock.advance(hours=1)

        await service.update(created.id, PostUpdate(content="New body"))

        post = await load(session, created.id)
        assert post.post_title == "Original"
        assert post.post_content == "New body"
        assert post.post_name == "original"
        assert post.post_date == LOCAL_NOW
        assert post.post_modified == datetime(2025, 3, 1, 19, 0)
        assert (await service.get_post(created.id)).subtitle == "Keep"

    async def test_slug_update_ignores_own_slug(self, service, author):
        created = await service.create(PostCreate(author_id=author.id, title="Mine"))
        await service.update(created.id, PostUpdate(slug="mine"))
        assert (await service.get_post(created.id)).slug == "mine"

    async def test_future_schedule_and_clear(self, service, session, author):
        created = await service.create(
            PostCreate(author_id=author.id, title="Plan", status=PostStatus.PUBLISH)
        )

        await service.update(created.id, PostUpdate(scheduled_at=datetime(2025, 3, 5, 8, 0)))
        post = await load(session, created.id)
        assert post.post_status == PostStatus.FUTURE
        assert post.post_date == datetime(2025, 3, 5, 8, 0)

        await service.update(
            created.id, PostUpdate(scheduled_at=None, status=PostStatus.DRAFT)
        )
        post = await load(session, created.id)
        assert post.post_status == PostStatus.DRAFT
        assert post.post_date == LOCAL_NOW
        meta = PostMetaRepository(session)
        assert await meta.get_meta(created.id, MetaKey.SCHEDULED_AT) is None

    async def test_past_schedule_publishes_by_default(self, service, session, author):
        created = await service.create(PostCreate(author_id=author.id, title="Late"))
        await service.update(created.id, PostUpdate(scheduled_at=datetime(2025, 1, 10, 10, 0)))

        post = await load(session, created.id)
        assert post.post_status == PostStatus.PUBLISH
        assert post.post_date_gmt == datetime(2025, 1, 10, 4, 0)

    async def test_null_featured_image_clears(self, service, session, author, make_attachment):
        cover = await make_attachment()
        created = await service.create(
            PostCreate(author_id=author.id, title="Pic", featured_image_id=cover)
        )

        await service.update(created.id, PostUpdate(title="Pic 2"))
        assert (await service.get_post(created.id)).featured_image_id == cover

        await service.update(created.id, PostUpdate(featured_image_id=None))
        assert (await service.get_post(created.id)).featured_image_id is None

    async def test_tags_by_name_replace_previous(self, service, session, author):
        created = await service.create(
            PostCreate(author_id=author.id, title="Tagged", tag_names=["One", "Two"])
        )
        await service.update(created.id, PostUpdate(tag_names=["Two", "Three"]))

        tags = await TaxonomyRepository(session).bindings_for_post(created.id, TaxonomyKind.TAG)
        assert [t.name for t in tags] == ["Three", "Two"]

    async def test_invalid_category_keeps_post_unchanged(
        self, service, session, author, make_category
    ):
        a = await make_category("Alpha")
        created = await service.create(
            PostCreate(author_id=author.id, title="Stable", category_ids=[a])
        )

        with pytest.raises(InvalidCategoryError):
            await service.update(created.id, PostUpdate(title="Changed", category_ids=[a, 4242]))

        post = await load(session, created.id)
        assert post.post_title == "Stable"
        assert await category_count(session, a) == 1

    async def test_missing_post(self, service):
        with pytest.raises(PostNotFoundError):
            await service.update(404, PostUpdate(title="x"))

    async def test_status_out_of_trash_picks_new_slug(self, service, session, author):
        first = await service.create(PostCreate(author_id=author.id, title="Hello World"))
        await service.move_to_trash(first.id)
        second = await service.create(PostCreate(author_id=author.id, title="Hello World"))

        await service.update(first.id, PostUpdate(status=PostStatus.PUBLISH))

        post = await load(session, first.id)
        assert post.post_status == PostStatus.PUBLISH
        assert post.post_name == "hello-world-2"
        assert (await load(session, second.id)).post_name == "hello-world"


# ----- Quick edit -----

class TestQuickEdit:
    async def test_status_only(self, service, session, author, make_category):
        a = await make_category("Alpha")
        created = await service.create(
            PostCreate(author_id=author.id, title="Quick", category_ids=[a])
        )

        await service.quick_edit(created.id, QuickEdit(status="publish"))

        post = await load(session, created.id)
        assert post.post_status == PostStatus.PUBLISH
        assert post.post_title == "Quick"
        assert post.post_name == "quick"
        assert await TaxonomyRepository(session).relationship_ids(created.id, TaxonomyKind.CATEGORY) == [a]

    async def test_tags_by_id_and_empty_list_clears(self, service, session, author):
        created = await service.create(
            PostCreate(author_id=author.id, title="Ids", tag_names=["Red", "Blue"])
        )
        repo = TaxonomyRepository(session)
        red = [t.id for t in await repo.bindings_for_post(created.id, TaxonomyKind.TAG) if t.name == "Red"]

        await service.quick_edit(created.id, QuickEdit(tag_ids=red))
        assert await repo.relationship_ids(created.id, TaxonomyKind.TAG) == red

        await service.quick_edit(created.id, QuickEdit(tag_ids=[]))
        assert await repo.relationship_ids(created.id, TaxonomyKind.TAG) == []
        assert await category_count(session, red[0]) == 0

    async def test_category_id_rejected_as_tag(self, service, author, make_category):
        a = await make_category("Alpha")
        created = await service.create(PostCreate(author_id=author.id, title="Mixed"))

        with pytest.raises(InvalidCategoryError):
            await service.quick_edit(created.id, QuickEdit(tag_ids=[a]))

    async def test_title_keeps_existing_slug(self, service, session, author):
        created = await service.create(PostCreate(author_id=author.id, title="First Name"))
        await service.quick_edit(created.id, QuickEdit(title="Second Name"))

        post = await load(session, created.id)
        assert post.post_title == "Second Name"
        assert post.post_name == "first-name"

    async def test_status_out_of_trash_picks_new_slug(self, service, session, author):
        first = await service.create(PostCreate(author_id=author.id, title="Hello World"))
        await service.move_to_trash(first.id)
        await service.create(PostCreate(author_id=author.id, title="Hello World"))

        await service.quick_edit(first.id, QuickEdit(status="draft"))

        post = await load(session, first.id)
        assert post.post_status == PostStatus.DRAFT
        assert post.post_name == "hello-world-2"


# ----- Trash / restore / delete -----

class TestTrashRestoreDelete:
    async def test_trash_and_restore_round_trip(self, service, session, author, clock):
        created = await service.create(
            PostCreate(author_id=author.id, title="Bin", status=PostStatus.PENDING)
        )
        meta = PostMetaRepository(session)

        await service.move_to_trash(created.id)
        post = await load(session, created.id)
        assert post.post_status == PostStatus.TRASH
        assert await meta.get_meta(created.id, MetaKey.TRASH_STATUS) == "pending"
        assert await meta.get_meta(created.id, MetaKey.TRASH_TIME) == str(int(clock.now().timestamp()))

        await service.restore_from_trash(created.id)
        post = await load(session, created.id)
        assert post.post_status == PostStatus.PENDING
        assert await meta.get_meta(created.id, MetaKey.TRASH_STATUS) is None
        assert await meta.get_meta(created.id, MetaKey.TRASH_TIME) is None

    async def test_trash_twice_keeps_original_status(self, service, session, author):
        created = await service.create(
            PostCreate(author_id=author.id, title="Twice", status=PostStatus.PUBLISH)
        )
        await service.move_to_trash(created.id)
        await service.move_to_trash(created.id)
        await service.restore_from_trash(created.id)

        assert (await load(session, created.id)).post_status == PostStatus.PUBLISH

    async def test_restore_without_saved_status_goes_to_draft(self, service, session, author):
        created = await service.create(
            PostCreate(author_id=author.id, title="Lost", status=PostStatus.PUBLISH)
        )
        await service.move_to_trash(created.id)
        await PostMetaRepository(session).set_meta(created.id, MetaKey.TRASH_STATUS, None)
        await session.commit()

        await service.restore_from_trash(created.id)
        assert (await load(session, created.id)).post_status == PostStatus.DRAFT

    async def test_restore_leaves_live_post_alone(self, service, session, author):
        created = await service.create(
            PostCreate(author_id=author.id, title="Live", status=PostStatus.PUBLISH)
        )
        await service.restore_from_trash(created.id)
        assert (await load(session, created.id)).post_status == PostStatus.PUBLISH

    async def test_restore_picks_new_slug_when_taken(self, service, session, author):
        first = await service.create(PostCreate(author_id=author.id, title="Hello World"))
        await service.move_to_trash(first.id)
        second = await service.create(PostCreate(author_id=author.id, title="Hello World"))
        assert second.slug == "hello-world"

        await service.restore_from_trash(first.id)

        assert (await load(session, first.id)).post_name == "hello-world-2"
        assert (await load(session, second.id)).post_name == "hello-world"

    async def test_restore_keeps_free_slug(self, service, session, author):
        created = await service.create(PostCreate(author_id=author.id, title="Only One"))
        await service.move_to_trash(created.id)
        await service.restore_from_trash(created.id)

        assert (await load(session, created.id)).post_name == "only-one"

    async def test_trash_missing_post(self, service):
        with pytest.raises(PostNotFoundError):
            await service.move_to_trash(404)

    async def test_hard_delete_removes_everything(
        self, service, session, author, make_category, count_rows
    ):
        a = await make_category("Alpha")
        created = await service.create(
            PostCreate(
                author_id=author.id,
                title="Doomed",
                category_ids=[a],
                tag_names=["gone"],
                subtitle="s",
                scheduled_at=datetime(2025, 2, 1, 9, 0),
            )
        )
        session.add(
            Comment(
                comment_post_id=created.id,
                comment_author="Reader",
                comment_content="Nice",
                comment_date=datetime(2025, 3, 1, 18, 30),
            )
        )
        await session.commit()

        await service.hard_delete(created.id)

        assert await count_rows(Post, Post.id == created.id) == 0
        assert await count_rows(PostMeta, PostMeta.post_id == created.id) == 0
        assert await count_rows(TermRelationship, TermRelationship.object_id == created.id) == 0
        assert await count_rows(Comment, Comment.comment_post_id == created.id) == 0
        assert await count_rows(PostExtra, PostExtra.post_id == created.id) == 0
        assert await category_count(session, a) == 0

    async def test_hard_delete_missing_is_noop(self, service):
        await service.hard_delete(404)


# ----- Scheduled promotion -----

class TestPublishDue:
    async def test_promotes_only_due_posts(self, service, session, author, clock):
        soon = await service.create(
            PostCreate(author_id=author.id, title="Soon", scheduled_at=datetime(2025, 3, 1, 19, 0))
        )
        later = await service.create(
            PostCreate(author_id=author.id, title="Later", scheduled_at=datetime(2025, 3, 3, 9, 0))
        )

        assert await service.publish_due() == []

        clock.advance(hours=2)
        assert await service.publish_due() == [soon.id]

        assert (await load(session, soon.id)).post_status == PostStatus.PUBLISH
        assert (await load(session, soon.id)).post_date == datetime(2025, 3, 1, 19, 0)
        assert (await load(session, later.id)).post_status == PostStatus.FUTURE
