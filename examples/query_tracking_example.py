"""
Query Tracking Example

This example demonstrates how to use the query tracking feature to monitor
every store operation executed within a session.
"""

import asyncio

from blogstore import ContentStore, StoreManager, seed_store
from blogstore.entities import PostSchema
from blogstore.post_repository import PostRepository
from blogstore.relationship_resolver import RelationshipResolver


async def basic_query_tracking(store: ContentStore):
    """Basic example: Track operations in a session"""
    print("\n=== Basic Query Tracking ===")

    post_repo = PostRepository()

    async with (
        StoreManager.session(store),
        StoreManager.track_queries() as tracker,
    ):
        post = await post_repo.find_by_slug("react-server-components-guide")
        if post:
            await post_repo.increment_view_count(post.id)

        print(f"\nTotal operations executed: {tracker.count()}")
        for i, query_log in enumerate(tracker.get_queries(), 1):
            print(f"\nOperation {i}:")
            print(f"  Query: {query_log.query}")
            print(f"  Params: {query_log.params}")
            print(f"  Timestamp: {query_log.timestamp}")


async def tracking_with_fluent_queries(store: ContentStore):
    """Track queries using fluent interface"""
    print("\n=== Tracking Fluent Queries ===")

    post_repo = PostRepository()

    async with (
        StoreManager.session(store),
        StoreManager.track_queries() as tracker,
    ):
        posts = await (
            post_repo.published()
            .where(PostSchema.tags, "contains", "React")
            .order_by_desc(PostSchema.view_count)
            .limit(3)
            .get()
        )

        print(f"\nFound {len(posts)} posts")
        for query_log in tracker.get_queries():
            print(f"\nQuery: {query_log.query}")
            print(f"Params: {query_log.params}")


async def tracking_relationship_lookups(store: ContentStore):
    """Resolving several posts looks up each author and category once"""
    print("\n=== Tracking Relationship Lookups ===")

    post_repo = PostRepository()
    resolver = RelationshipResolver()

    async with StoreManager.session(store, track_queries=True):
        posts = await post_repo.published().get()
        tracker = StoreManager.get_query_tracker()
        before = tracker.count() if tracker else 0

        resolved = await resolver.resolve_many(posts)
        after = tracker.count() if tracker else 0

        print(f"Resolved {len(resolved)} posts with {after - before} lookups")
        for post in resolved:
            author = post.author.name if post.author else "(unknown)"
            print(f"  {post.title} by {author}")


async def main():
    """Run all examples"""
    store = await seed_store(ContentStore("example"))

    await basic_query_tracking(store)
    await tracking_with_fluent_queries(store)
    await tracking_relationship_lookups(store)


if __name__ == "__main__":
    asyncio.run(main())
