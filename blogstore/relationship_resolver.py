from blogstore.author_repository import AuthorRepository
from blogstore.category_repository import CategoryRepository
from blogstore.entities import Category, Post, ResolvedPost, User


class RelationshipResolver:
    """Joins posts to their author and category at read time.

    Resolution is best-effort: a dangling author_id or category_id leaves
    the corresponding field as None instead of failing the read. Nothing
    resolved here is ever written back to the store.
    """

    def __init__(
        self,
        author_repo: AuthorRepository | None = None,
        category_repo: CategoryRepository | None = None,
    ):
        self.author_repo = author_repo or AuthorRepository()
        self.category_repo = category_repo or CategoryRepository()

    async def resolve(self, post: Post) -> ResolvedPost:
        return (await self.resolve_many([post]))[0]

    async def resolve_many(self, posts: list[Post]) -> list[ResolvedPost]:
        """Resolve posts in order, looking up each author/category once per call"""
        authors: dict[str, User | None] = {}
        categories: dict[str, Category | None] = {}
        resolved = []
        for post in posts:
            if post.author_id not in authors:
                authors[post.author_id] = await self.author_repo.find_by_id(
                    post.author_id
                )
            if post.category_id not in categories:
                categories[post.category_id] = await self.category_repo.find_by_id(
                    post.category_id
                )
            resolved.append(
                ResolvedPost(
                    **post.model_dump(),
                    author=authors[post.author_id],
                    category=categories[post.category_id],
                )
            )
        return resolved
