from datetime import datetime
from enum import Enum
from typing import Annotated, ClassVar, Generic, TypeVar

from pydantic import (
    BaseModel,
    NonNegativeInt,
    PositiveInt,
    StringConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from blogstore.utils.text import is_valid_email

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]


T = TypeVar("T")


class Field(Generic[T]):
    """Type-safe field definition for schema classes.

    Usage:
        class PostSchema(SchemaBase):
            published = Field[bool]("published")
            title = Field[str]("title")

    This allows for:
        repo.where(PostSchema.published, True)
        repo.where_in(PostSchema.title, ["Title 1", "Title 2"])
    """

    def __init__(self, column_name: str):
        """
        Args:
            column_name: The stored row key
        """
        self._column_name = column_name

    @property
    def column(self) -> str:
        """Return the underlying row key."""
        return self._column_name

    def __str__(self) -> str:
        """Return the row key when used in queries"""
        return self._column_name

    def __repr__(self) -> str:
        return f"Field({self._column_name})"


class SchemaBase:
    """Base class for schema definitions with type-safe fields."""

    pass


class BaseEntity(BaseModel):
    """Base entity class for all stored models.

    Fields are snake_case in Python and camelCase on the wire
    (``model_dump(by_alias=True)``); both spellings are accepted on input.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        use_enum_values=True, alias_generator=to_camel, populate_by_name=True
    )
    id: str


class ApiModel(BaseModel):
    """Base for request/response models exchanged with the endpoint layer."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel, populate_by_name=True
    )


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def _missing_(cls, value: object) -> "SortOrder | None":
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


class PostSortField(str, Enum):
    CREATED_AT = "createdAt"
    PUBLISHED_AT = "publishedAt"
    VIEW_COUNT = "viewCount"
    TITLE = "title"


# Stored entities


class User(BaseEntity):
    name: str
    email: str
    avatar: str | None = None
    bio: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Category(BaseEntity):
    name: str
    slug: str
    description: str | None = None
    color: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Post(BaseEntity):
    title: str
    slug: str
    content: str
    excerpt: str
    cover_image: str | None = None
    author_id: str
    category_id: str
    tags: list[str] = []
    published: bool = False
    # Set exactly once, when the post becomes published
    published_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    view_count: NonNegativeInt = 0


class ResolvedPost(Post):
    """Read-only post snapshot with its author and category attached.

    ``author``/``category`` are None when the referenced record does not exist.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    author: User | None = None
    category: Category | None = None


class Comment(BaseEntity):
    content: str
    author_name: str
    author_email: str
    post_id: str
    parent_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Write models - validated before any store mutation


class CreateUser(ApiModel):
    name: NonEmptyStr
    email: NonEmptyStr
    avatar: str | None = None
    bio: str | None = None


class UserUpdate(ApiModel):
    name: NonEmptyStr | None = None
    email: NonEmptyStr | None = None
    avatar: str | None = None
    bio: str | None = None


class CreateCategory(ApiModel):
    name: NonEmptyStr
    color: NonEmptyStr
    description: str | None = None
    # Derived from name when omitted
    slug: str | None = None


class CreatePost(ApiModel):
    title: NonEmptyStr
    content: NonEmptyStr
    excerpt: NonEmptyStr
    author_id: NonEmptyStr
    category_id: NonEmptyStr
    tags: list[str] = []
    cover_image: str | None = None
    published: bool = False
    # Derived from title when omitted
    slug: str | None = None


class PostUpdate(ApiModel):
    """Fields of a post that may be changed after creation."""

    title: NonEmptyStr | None = None
    content: NonEmptyStr | None = None
    excerpt: NonEmptyStr | None = None
    cover_image: str | None = None
    category_id: NonEmptyStr | None = None
    tags: list[str] | None = None
    published: bool | None = None


class CreateComment(ApiModel):
    content: NonEmptyStr
    author_name: NonEmptyStr
    author_email: NonEmptyStr
    post_id: NonEmptyStr
    parent_id: str | None = None

    @field_validator("author_email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not is_valid_email(value):
            raise ValueError("a valid email address is required")
        return value


# Type-safe field sets


class PostSchema(SchemaBase):
    id = Field[str]("id")
    title = Field[str]("title")
    slug = Field[str]("slug")
    content = Field[str]("content")
    excerpt = Field[str]("excerpt")
    author_id = Field[str]("author_id")
    category_id = Field[str]("category_id")
    tags = Field[list[str]]("tags")
    published = Field[bool]("published")
    published_at = Field[datetime | None]("published_at")
    created_at = Field[datetime]("created_at")
    view_count = Field[int]("view_count")


class CommentSchema(SchemaBase):
    post_id = Field[str]("post_id")
    created_at = Field[datetime]("created_at")


# Query and response models


class PostSearch(BaseModel):
    """Post filters; None means the filter is not applied"""

    category_id: str | None = None
    author_id: str | None = None
    tag: str | None = None
    query: str | None = None


class PostQueryParams(ApiModel):
    """Already-parsed listing parameters; empty strings count as absent."""

    query: str | None = None
    category: str | None = None
    tag: str | None = None
    author: str | None = None
    page: int = 1
    # Falls back to BlogConfig.default_page_size
    limit: PositiveInt | None = None
    sort_by: PostSortField = PostSortField.PUBLISHED_AT
    sort_order: SortOrder = SortOrder.DESC


class PaginationInfo(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class PostFilters(ApiModel):
    """Facet universe, independent of the filters applied to a listing."""

    categories: list[Category]
    tags: list[str]
    authors: list[User]


class PostListResult(ApiModel):
    success: bool = True
    data: list[ResolvedPost]
    pagination: PaginationInfo
    filters: PostFilters
    message: str


class BlogStats(ApiModel):
    total_posts: int
    total_users: int
    total_categories: int
    total_views: int
    popular_posts: list[ResolvedPost]
    recent_posts: list[ResolvedPost]
