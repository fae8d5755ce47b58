import asyncio

import pytest

from blogstore.post_repository import PostRepository
from blogstore.store_context import StoreManager

SLUG = "nextjs-15-new-features"


class TestViewCounting:
    """Only the public single-post fetch counts views."""

    @pytest.mark.asyncio
    async def test_each_display_fetch_counts_once(self, service):
        """Two fetches of a post with 1250 views leave it at 1252."""
        first = await service.get_post_for_display(SLUG)
        second = await service.get_post_for_display(SLUG)

        assert first.view_count == 1251
        assert second.view_count == 1252
        assert (await service.get_post_by_slug(SLUG)).view_count == 1252

    @pytest.mark.asyncio
    async def test_display_fetch_is_resolved(self, service):
        post = await service.get_post_for_display(SLUG)

        assert post.author.name == "Taro Tanaka"
        assert post.category.name == "Next.js"

    @pytest.mark.asyncio
    async def test_concurrent_fetches_are_all_counted(self, service):
        """No increment is lost when fetches run concurrently."""
        results = await asyncio.gather(
            *(service.get_post_for_display(SLUG) for _ in range(25))
        )

        assert sorted(post.view_count for post in results) == list(range(1251, 1276))
        assert (await service.get_post_by_id("1")).view_count == 1275

    @pytest.mark.asyncio
    async def test_missing_post(self, service):
        assert await service.get_post_for_display("no-such-post") is None

    @pytest.mark.asyncio
    async def test_unpublished_post_is_hidden_but_counted(self, service):
        """A draft stays hidden from display, yet each fetch still counts."""
        assert await service.get_post_for_display("modern-css-techniques") is None
        assert (await service.get_post_by_slug("modern-css-techniques")).view_count == 1

        await service.get_post_for_display("modern-css-techniques")
        assert (await service.get_post_by_slug("modern-css-techniques")).view_count == 2

    @pytest.mark.asyncio
    async def test_draft_views_reach_total_but_not_post_count(self, service):
        """Views on a hidden draft show up in total views only."""
        await service.get_post_for_display("modern-css-techniques")
        stats = await service.get_stats()

        assert stats.total_posts == 5
        assert stats.total_views == 5347 + 1

    @pytest.mark.asyncio
    async def test_internal_lookups_do_not_count(self, service):
        await service.get_post_by_slug(SLUG)
        await service.get_post_by_id("1")

        assert (await service.get_post_by_id("1")).view_count == 1250

    @pytest.mark.asyncio
    async def test_increment_leaves_updated_at_alone(self, seeded_store):
        repo = PostRepository()
        async with StoreManager.session(seeded_store):
            before = await repo.find_by_id("1")
            after = await repo.increment_view_count("1")

            assert after.view_count == before.view_count + 1
            assert after.updated_at == before.updated_at
            assert await repo.increment_view_count("missing") is None
