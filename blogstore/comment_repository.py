from pydantic import BaseModel

from blogstore.entities import Comment, CommentSchema
from blogstore.repository import Repository


class CommentUpdate(BaseModel):
    content: str | None = None


class CommentRepository(Repository[Comment, Comment, CommentUpdate]):
    def __init__(self):
        super().__init__(
            entity_schema_class=Comment,
            entity_domain_class=Comment,
            update_class=CommentUpdate,
            table_name="comments",
        )

    async def find_by_post(self, post_id: str) -> list[Comment]:
        """Comments of a post, oldest first"""
        return await (
            self.where(CommentSchema.post_id, post_id)
            .order_by_asc(CommentSchema.created_at)
            .get()
        )
