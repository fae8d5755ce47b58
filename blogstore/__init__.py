"""In-memory blog content repository and query engine"""

from blogstore.blog_service import BlogService
from blogstore.config import BlogConfig
from blogstore.entities import (
    BlogStats,
    Category,
    Comment,
    CreateCategory,
    CreateComment,
    CreatePost,
    CreateUser,
    Post,
    PostListResult,
    PostQueryParams,
    PostSortField,
    PostUpdate,
    ResolvedPost,
    SortOrder,
    User,
    UserUpdate,
)
from blogstore.pagination import Page, paginate
from blogstore.repository import Repository, RepositoryConfig
from blogstore.seed import seed_store
from blogstore.store import ContentStore, UniqueConstraintError
from blogstore.store_context import StoreManager, in_session

__all__ = [
    "BlogService",
    "BlogConfig",
    "BlogStats",
    "Category",
    "Comment",
    "ContentStore",
    "CreateCategory",
    "CreateComment",
    "CreatePost",
    "CreateUser",
    "Page",
    "Post",
    "PostListResult",
    "PostQueryParams",
    "PostSortField",
    "PostUpdate",
    "Repository",
    "RepositoryConfig",
    "ResolvedPost",
    "SortOrder",
    "StoreManager",
    "UniqueConstraintError",
    "User",
    "UserUpdate",
    "in_session",
    "paginate",
    "seed_store",
]
