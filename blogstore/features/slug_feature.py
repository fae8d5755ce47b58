"""Slug feature for automatic URL-safe identifiers"""

from typing import TYPE_CHECKING, Any

from blogstore.features.base_feature import RepositoryFeature
from blogstore.utils.text import slugify

if TYPE_CHECKING:
    from blogstore.store import Table


class SlugFeature(RepositoryFeature):
    """
    Feature that derives a unique ``slug`` from another field on create.

    An explicitly provided slug is kept as-is, so a clash with an existing
    slug is reported by the table's unique index. A derived slug gets a
    numeric suffix (``-2``, ``-3``, ...) until it is free.

    Usage:
        config = RepositoryConfig(unique_fields=("slug",), features=[SlugFeature("title")])
    """

    def __init__(self, source_field: str = "title", fallback: str = "item"):
        self.source_field = source_field
        self.fallback = fallback

    def before_create(self, data: dict[str, Any], table: "Table") -> dict[str, Any]:
        if data.get("slug"):
            return data

        base_slug = slugify(str(data.get(self.source_field) or "")) or self.fallback
        slug = base_slug
        counter = 2
        while table.lookup("slug", slug) is not None:
            slug = f"{base_slug}-{counter}"
            counter += 1
        data["slug"] = slug
        return data
