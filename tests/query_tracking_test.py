"""Tests for query tracking functionality"""

import pytest

from blogstore import BlogService, PostQueryParams
from blogstore.post_repository import PostRepository
from blogstore.repository import Repository
from blogstore.store_context import StoreManager

NEW_POST = {
    "title": "Test Post",
    "content": "Test Content",
    "excerpt": "Test Excerpt",
    "author_id": "1",
    "category_id": "1",
}


@pytest.mark.asyncio
async def test_basic_query_tracking(store):
    """Test basic query tracking functionality"""
    post_repo = PostRepository()

    async with (
        StoreManager.session(store),
        StoreManager.track_queries() as tracker,
    ):
        post = await post_repo.create(NEW_POST)
        await post_repo.find_by_id(post.id)

        queries = tracker.get_queries()
        assert len(queries) == 2

        # Verify first query is INSERT
        assert "INSERT INTO posts" in queries[0].query
        assert post.id in queries[0].params

        # Verify second query is the id lookup
        assert queries[1].query == "SELECT * FROM posts WHERE id = $1"
        assert queries[1].params == [post.id]


@pytest.mark.asyncio
async def test_query_tracking_with_fluent_interface(store):
    """Test query tracking with fluent query builder"""
    post_repo = PostRepository()

    async with (
        StoreManager.session(store),
        StoreManager.track_queries() as tracker,
    ):
        await (
            post_repo.where("title", "icontains", "test")
            .order_by_desc("view_count")
            .limit(10)
            .get()
        )

        queries = tracker.get_queries()
        assert len(queries) == 1
        assert queries[0].query == (
            "SELECT * FROM posts WHERE title ICONTAINS $1 "
            "ORDER BY view_count DESC LIMIT 10"
        )
        assert queries[0].params == ["test"]


@pytest.mark.asyncio
async def test_query_tracking_count(store):
    """Test query tracking with count operations"""
    post_repo = PostRepository()

    async with (
        StoreManager.session(store),
        StoreManager.track_queries() as tracker,
    ):
        await post_repo.published().count()

        queries = tracker.get_queries()
        assert len(queries) == 1
        assert queries[0].query == "SELECT COUNT(*) FROM posts WHERE published = $1"


@pytest.mark.asyncio
async def test_unique_lookup_is_a_point_query(seeded_store):
    """Slug lookups go through the index instead of a filtered scan"""
    post_repo = PostRepository()

    async with (
        StoreManager.session(seeded_store),
        StoreManager.track_queries() as tracker,
    ):
        post = await post_repo.find_by_slug("nextjs-15-new-features")

        assert post is not None
        assert tracker.get_queries()[0].query == "SELECT * FROM posts WHERE slug = $1"


@pytest.mark.asyncio
async def test_session_with_track_queries_flag(store):
    """session(track_queries=True) installs a tracker for the session"""
    async with StoreManager.session(store, track_queries=True):
        tracker = Repository.get_query_tracker()
        assert tracker is not None

        await PostRepository().count()
        assert tracker.count() == 1

    assert Repository.get_query_tracker() is None


@pytest.mark.asyncio
async def test_no_tracker_without_tracking(store):
    """Without tracking no tracker is available"""
    async with StoreManager.session(store):
        await PostRepository().count()
        assert Repository.get_query_tracker() is None


@pytest.mark.asyncio
async def test_tracker_entries_and_clear(store):
    """Entries carry the store name and a timestamp; clear empties the tracker"""
    async with (
        StoreManager.session(store),
        StoreManager.track_queries() as tracker,
    ):
        await PostRepository().find_by_id("1")
        entry = tracker.get_queries()[0]

        assert entry.query == "SELECT * FROM posts WHERE id = $1"
        assert entry.params == ["1"]
        assert entry.store == "test"
        assert entry.timestamp is not None
        assert entry.is_write is False

        tracker.clear()
        assert tracker.count() == 0


@pytest.mark.asyncio
async def test_stack_trace_points_at_caller(store):
    """Logged queries carry the stack of the code that issued them"""
    async with (
        StoreManager.session(store),
        StoreManager.track_queries() as tracker,
    ):
        await PostRepository().find_by_id("1")
        stack_trace = tracker.get_queries()[0].stack_trace

        assert stack_trace is not None
        assert "test_stack_trace_points_at_caller" in stack_trace


@pytest.mark.asyncio
async def test_track_queries_reuses_bound_tracker(store):
    """A nested track_queries block shares the outer tracker"""
    async with StoreManager.session(store, track_queries=True):
        outer = StoreManager.get_query_tracker()
        async with StoreManager.track_queries() as inner:
            assert inner is outer
            await PostRepository().count()

        assert outer.count() == 1

    assert StoreManager.get_query_tracker() is None


@pytest.mark.asyncio
async def test_listing_never_writes_but_display_does(seeded_store):
    """Listings only read; a display fetch writes exactly the view increment"""
    service = BlogService(seeded_store)

    async with (
        StoreManager.session(seeded_store),
        StoreManager.track_queries() as tracker,
    ):
        await service.query_posts(PostQueryParams(tag="React"))
        await service.search_posts("css")
        assert tracker.count() > 0
        assert tracker.writes() == []

        await service.get_post_for_display("nextjs-15-new-features")
        writes = tracker.writes()

        assert len(writes) == 1
        assert writes[0].query.startswith("UPDATE posts SET")
        assert writes[0].params[0] == "1"
