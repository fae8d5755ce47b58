from pydantic import BaseModel

from blogstore.entities import Category
from blogstore.features import SlugFeature
from blogstore.repository import Repository, RepositoryConfig


class CategoryUpdate(BaseModel):
    """Categories are not edited after creation; the update model is empty"""


class CategoryRepository(Repository[Category, Category, CategoryUpdate]):
    def __init__(self):
        super().__init__(
            entity_schema_class=Category,
            entity_domain_class=Category,
            update_class=CategoryUpdate,
            table_name="categories",
            config=RepositoryConfig(
                unique_fields=("slug",),
                features=[SlugFeature("name", fallback="category")],
            ),
        )

    async def find_by_slug(self, slug: str) -> Category | None:
        return await self.find_by("slug", slug)
