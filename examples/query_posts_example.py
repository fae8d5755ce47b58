"""
Example showing the blog query engine: listings, filters, sorting, pagination and stats
"""

import asyncio

from blogstore import (
    BlogConfig,
    BlogService,
    ContentStore,
    PostQueryParams,
    PostSortField,
    SortOrder,
    seed_store,
)
from blogstore.entities import CreateComment, PostUpdate
from blogstore.utils import configure_logging
from blogstore.utils.text import calculate_reading_time, format_number, truncate_text


async def listing_examples(service: BlogService):
    """Examples of different listing patterns"""

    # Example 1: Default listing, newest first
    result = await service.query_posts(PostQueryParams())
    print(f"\n{result.message}")
    for post in result.data:
        print(f"  {post.published_at:%Y-%m-%d}  {post.title}")

    # Example 2: Tag filter with pagination
    result = await service.query_posts(PostQueryParams(tag="React", page=2, limit=2))
    print(f"\nReact posts, page {result.pagination.page}/{result.pagination.total_pages}")
    for post in result.data:
        print(f"  {post.title}")

    # Example 3: Free text search sorted by views
    result = await service.query_posts(
        PostQueryParams(
            query="css", sort_by=PostSortField.VIEW_COUNT, sort_order=SortOrder.DESC
        )
    )
    print("\nSearch 'css':")
    for post in result.data:
        print(f"  {post.title} ({format_number(post.view_count)} views)")

    # Example 4: Parameters as they arrive from a query string
    params = PostQueryParams.model_validate(
        {"category": "nextjs", "sortBy": "title", "sortOrder": "ASC"}
    )
    result = await service.query_posts(params)
    print("\nNext.js category by title:")
    for post in result.data:
        print(f"  {post.title}")

    print(f"\nAll tags: {', '.join(result.filters.tags)}")


async def display_examples(service: BlogService):
    """Single post pages count views"""
    post = await service.get_post_for_display("nextjs-15-new-features")
    if post is None:
        return

    print(f"\n{post.title}")
    print(f"  by {post.author.name if post.author else 'unknown'}")
    print(f"  {calculate_reading_time(post.content)} min read")
    print(f"  {truncate_text(post.excerpt, 60)}")
    print(f"  views: {post.view_count}")

    await service.add_comment(
        CreateComment(
            content="Thanks for the write-up!",
            author_name="Reader",
            author_email="reader@example.com",
            post_id=post.id,
        )
    )
    comments = await service.list_comments(post.id)
    print(f"  comments: {len(comments)}")


async def publishing_examples(service: BlogService):
    """Publishing a draft stamps its publication date"""
    draft = await service.get_post_by_slug("modern-css-techniques")
    if draft is None:
        return

    published = await service.update_post(draft.id, PostUpdate(published=True))
    if published:
        print(f"\nPublished '{published.title}' at {published.published_at}")


async def main():
    configure_logging()
    store = await seed_store(ContentStore("example"))
    service = BlogService(store, BlogConfig(default_page_size=5))

    await listing_examples(service)
    await display_examples(service)
    await publishing_examples(service)

    stats = await service.get_stats()
    print("\nStats:")
    print(stats.model_dump_json(by_alias=True, indent=2, exclude={"popular_posts", "recent_posts"}))


if __name__ == "__main__":
    asyncio.run(main())
