from blogstore.entities import Post, PostSchema, PostUpdate
from blogstore.features import PublicationFeature, SlugFeature
from blogstore.repository import Repository, RepositoryConfig


class PostRepository(Repository[Post, Post, PostUpdate]):
    def __init__(self):
        super().__init__(
            entity_schema_class=Post,
            entity_domain_class=Post,
            update_class=PostUpdate,
            table_name="posts",
            config=RepositoryConfig(
                unique_fields=("slug",),
                features=[SlugFeature("title", fallback="post"), PublicationFeature()],
            ),
        )

    def published(self) -> "PostRepository":
        """Restrict the query to published posts"""
        return self.where(PostSchema.published, True)

    async def find_by_slug(self, slug: str) -> Post | None:
        """Index-backed slug lookup without side effects"""
        return await self.find_by(PostSchema.slug, slug)

    async def increment_view_count(self, post_id: str) -> Post | None:
        """Add one view to a post.

        This is the only write path for view_count; it does not touch updated_at.
        """
        row = self.db_ops.fetch_by_id(self.table_name, post_id)
        if row is None:
            return None
        row["view_count"] += 1
        updated = self.db_ops.replace(self.table_name, post_id, row)
        return self._map_row(updated) if updated else None
