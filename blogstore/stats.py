from blogstore.author_repository import AuthorRepository
from blogstore.category_repository import CategoryRepository
from blogstore.entities import BlogStats, PostSortField, ResolvedPost, SortOrder
from blogstore.post_repository import PostRepository
from blogstore.relationship_resolver import RelationshipResolver
from blogstore.search_condition_builder import SearchConditionBuilder


class StatsAggregator:
    """Summary counters recomputed from the store on every call.

    total_posts counts published posts only while total_views sums the views
    of every post, drafts included.
    """

    def __init__(
        self,
        post_repo: PostRepository,
        author_repo: AuthorRepository,
        category_repo: CategoryRepository,
        resolver: RelationshipResolver,
    ):
        self.post_repo = post_repo
        self.author_repo = author_repo
        self.category_repo = category_repo
        self.resolver = resolver

    async def top_posts(self, sort_by: PostSortField, limit: int) -> list[ResolvedPost]:
        """The first `limit` published posts under a descending sort"""
        if limit <= 0:
            return []
        builder = SearchConditionBuilder.apply_sort(
            self.post_repo.published().query(), sort_by, SortOrder.DESC
        )
        posts = await self.post_repo.with_query(builder.limit(limit)).get()
        return await self.resolver.resolve_many(posts)

    async def collect(self, popular_limit: int = 3, recent_limit: int = 3) -> BlogStats:
        all_posts = await self.post_repo.get()
        return BlogStats(
            total_posts=sum(1 for post in all_posts if post.published),
            total_users=await self.author_repo.count(),
            total_categories=await self.category_repo.count(),
            total_views=sum(post.view_count for post in all_posts),
            popular_posts=await self.top_posts(PostSortField.VIEW_COUNT, popular_limit),
            recent_posts=await self.top_posts(PostSortField.PUBLISHED_AT, recent_limit),
        )
