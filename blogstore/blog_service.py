"""Query engine and public read/write surface of the content repository"""

from blogstore.author_repository import AuthorRepository
from blogstore.category_repository import CategoryRepository
from blogstore.comment_repository import CommentRepository
from blogstore.config import BlogConfig
from blogstore.entities import (
    BlogStats,
    Category,
    Comment,
    CreateCategory,
    CreateComment,
    CreatePost,
    CreateUser,
    PostFilters,
    PostListResult,
    PostQueryParams,
    PostSearch,
    PostSortField,
    PostUpdate,
    ResolvedPost,
    SortOrder,
    User,
    UserUpdate,
)
from blogstore.pagination import paginate
from blogstore.post_repository import PostRepository
from blogstore.relationship_resolver import RelationshipResolver
from blogstore.search_condition_builder import SearchConditionBuilder
from blogstore.stats import StatsAggregator
from blogstore.store import ContentStore
from blogstore.store_context import in_session
from blogstore.utils.logging import get_logger

logger = get_logger("service")


class BlogService:
    """Facade over the content store used by the endpoint layer.

    Every public method runs in a session on ``store``, so calls are
    serialized against each other. Missing entities are reported as None
    (or an empty list / False), never as exceptions.

    Usage:
        store = ContentStore()
        await seed_store(store)
        service = BlogService(store)
        result = await service.query_posts(PostQueryParams(tag="React", page=1))
    """

    def __init__(self, store: ContentStore, config: BlogConfig | None = None):
        self.store = store
        self.config = config or BlogConfig()
        self.posts = PostRepository()
        self.authors = AuthorRepository()
        self.categories = CategoryRepository()
        self.comments = CommentRepository()
        self.resolver = RelationshipResolver(self.authors, self.categories)
        self.stats = StatsAggregator(
            self.posts, self.authors, self.categories, self.resolver
        )

    async def _find_published(
        self,
        search: PostSearch | None = None,
        sort_by: PostSortField | None = None,
        sort_order: SortOrder = SortOrder.DESC,
    ) -> list[ResolvedPost]:
        builder = SearchConditionBuilder.apply_search_conditions(
            self.posts.query(), search or PostSearch()
        )
        if sort_by is not None:
            builder = SearchConditionBuilder.apply_sort(builder, sort_by, sort_order)
        posts = await self.posts.with_query(builder).get()
        return await self.resolver.resolve_many(posts)

    # Posts

    @in_session()
    async def get_all_posts(self) -> list[ResolvedPost]:
        """Every post, drafts included, in creation order"""
        return await self.resolver.resolve_many(await self.posts.get())

    @in_session()
    async def get_published_posts(self) -> list[ResolvedPost]:
        """Published posts, newest first"""
        return await self._find_published(sort_by=PostSortField.PUBLISHED_AT)

    @in_session()
    async def get_post_by_id(self, post_id: str) -> ResolvedPost | None:
        post = await self.posts.find_by_id(post_id)
        return await self.resolver.resolve(post) if post else None

    @in_session()
    async def get_post_by_slug(self, slug: str) -> ResolvedPost | None:
        """Internal lookup: any publication state, no view counted"""
        post = await self.posts.find_by_slug(slug)
        return await self.resolver.resolve(post) if post else None

    @in_session()
    async def get_post_for_display(self, slug: str) -> ResolvedPost | None:
        """Public single-post fetch; counts one view for any existing post.

        Missing and unpublished posts both return None. An unpublished
        post is still counted before it is hidden.
        """
        post = await self.posts.find_by_slug(slug)
        if post is None:
            logger.info("Post %r not found for display", slug)
            return None
        post = await self.posts.increment_view_count(post.id)
        if post is None or not post.published:
            logger.info("Post %r is not published", slug)
            return None
        return await self.resolver.resolve(post)

    @in_session()
    async def get_posts_by_category(self, category_id: str) -> list[ResolvedPost]:
        return await self._find_published(PostSearch(category_id=category_id))

    @in_session()
    async def get_posts_by_tag(self, tag: str) -> list[ResolvedPost]:
        return await self._find_published(PostSearch(tag=tag))

    @in_session()
    async def get_posts_by_author(self, author_id: str) -> list[ResolvedPost]:
        return await self._find_published(PostSearch(author_id=author_id))

    @in_session()
    async def search_posts(self, query: str) -> list[ResolvedPost]:
        """Published posts whose title, content, excerpt or a tag contains query (any case)"""
        return await self._find_published(PostSearch(query=query))

    @in_session()
    async def get_popular_posts(self, limit: int = 5) -> list[ResolvedPost]:
        return await self.stats.top_posts(PostSortField.VIEW_COUNT, limit)

    @in_session()
    async def get_recent_posts(self, limit: int = 5) -> list[ResolvedPost]:
        return await self.stats.top_posts(PostSortField.PUBLISHED_AT, limit)

    @in_session()
    async def create_post(self, data: CreatePost) -> ResolvedPost:
        post = await self.posts.create(data)
        logger.info("Created post %s (%s)", post.id, post.slug)
        return await self.resolver.resolve(post)

    @in_session()
    async def update_post(self, post_id: str, data: PostUpdate) -> ResolvedPost | None:
        post = await self.posts.update(post_id, data)
        if post is None:
            return None
        logger.info("Updated post %s", post_id)
        return await self.resolver.resolve(post)

    @in_session()
    async def delete_post(self, post_id: str) -> bool:
        deleted = await self.posts.delete(post_id)
        if deleted:
            logger.info("Deleted post %s", post_id)
        return deleted

    # Query engine

    @in_session()
    async def query_posts(self, params: PostQueryParams) -> PostListResult:
        """Filter, sort and paginate published posts.

        The facets in ``filters`` always describe every published post,
        whatever filters are applied to the listing itself.
        """
        category_id = None
        unknown_category = False
        if params.category:
            category = await self.categories.find_by_slug(params.category)
            if category is not None:
                category_id = category.id
            elif self.config.strict_category_filter:
                unknown_category = True
            else:
                logger.warning(
                    "Unknown category slug %r, category filter not applied",
                    params.category,
                )

        if unknown_category:
            posts: list[ResolvedPost] = []
        else:
            search = PostSearch(
                category_id=category_id,
                tag=params.tag or None,
                author_id=params.author or None,
                query=params.query or None,
            )
            posts = await self._find_published(
                search, params.sort_by, params.sort_order
            )

        limit = (
            params.limit if params.limit is not None else self.config.default_page_size
        )
        page = paginate(posts, params.page, limit)
        return PostListResult(
            data=page.data,
            pagination=page.pagination,
            filters=await self.get_filters(),
            message=f"Retrieved {page.pagination.total} posts",
        )

    # Facets

    @in_session()
    async def get_filters(self) -> PostFilters:
        return PostFilters(
            categories=await self.list_categories(),
            tags=await self.get_all_tags(),
            authors=await self.get_active_authors(),
        )

    @in_session()
    async def get_all_tags(self) -> list[str]:
        """Distinct tags of published posts, sorted"""
        posts = await self.posts.published().get()
        return sorted({tag for post in posts for tag in post.tags})

    @in_session()
    async def get_active_authors(self) -> list[User]:
        """Distinct authors with at least one published post, newest post first"""
        authors: dict[str, User] = {}
        for post in await self._find_published(sort_by=PostSortField.PUBLISHED_AT):
            if post.author is not None and post.author.id not in authors:
                authors[post.author.id] = post.author
        return list(authors.values())

    # Categories

    @in_session()
    async def list_categories(self) -> list[Category]:
        return await self.categories.get()

    @in_session()
    async def get_category_by_id(self, category_id: str) -> Category | None:
        return await self.categories.find_by_id(category_id)

    @in_session()
    async def get_category_by_slug(self, slug: str) -> Category | None:
        return await self.categories.find_by_slug(slug)

    @in_session()
    async def create_category(self, data: CreateCategory) -> Category:
        category = await self.categories.create(data)
        logger.info("Created category %s (%s)", category.id, category.slug)
        return category

    # Users

    @in_session()
    async def list_users(self) -> list[User]:
        return await self.authors.get()

    @in_session()
    async def get_user(self, user_id: str) -> User | None:
        return await self.authors.find_by_id(user_id)

    @in_session()
    async def create_user(self, data: CreateUser) -> User:
        user = await self.authors.create(data)
        logger.info("Created user %s", user.id)
        return user

    @in_session()
    async def update_user(self, user_id: str, data: UserUpdate) -> User | None:
        return await self.authors.update(user_id, data)

    @in_session()
    async def delete_user(self, user_id: str) -> bool:
        return await self.authors.delete(user_id)

    # Comments

    @in_session()
    async def list_comments(self, post_id: str) -> list[Comment]:
        """Comments of a post, oldest first"""
        return await self.comments.find_by_post(post_id)

    @in_session()
    async def add_comment(self, data: CreateComment) -> Comment:
        comment = await self.comments.create(data)
        logger.info("Added comment %s to post %s", comment.id, comment.post_id)
        return comment

    # Stats

    @in_session()
    async def get_stats(self) -> BlogStats:
        return await self.stats.collect(
            popular_limit=self.config.popular_posts_limit,
            recent_limit=self.config.recent_posts_limit,
        )
