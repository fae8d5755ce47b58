from pydantic import BaseModel, Field


class BlogConfig(BaseModel):
    """Configuration options for BlogService"""

    default_page_size: int = Field(
        default=10, ge=1, description="Page size used when a listing gives no limit"
    )
    popular_posts_limit: int = Field(
        default=3, ge=0, description="Number of popular posts in the stats block"
    )
    recent_posts_limit: int = Field(
        default=3, ge=0, description="Number of recent posts in the stats block"
    )
    strict_category_filter: bool = Field(
        default=False,
        description=(
            "When true, an unknown category slug matches no posts. When false, "
            "the category filter is skipped and the listing is unfiltered."
        ),
    )
