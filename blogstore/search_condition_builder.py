from blogstore.entities import PostSchema, PostSearch, PostSortField, SortOrder
from blogstore.query_builder import QueryBuilder

# Sort key -> (field, fallback used when the field is empty)
SORT_FIELDS: dict[PostSortField, tuple[str, str | None]] = {
    PostSortField.CREATED_AT: (PostSchema.created_at.column, None),
    PostSortField.PUBLISHED_AT: (
        PostSchema.published_at.column,
        PostSchema.created_at.column,
    ),
    PostSortField.VIEW_COUNT: (PostSchema.view_count.column, None),
    PostSortField.TITLE: (PostSchema.title.column, None),
}

TEXT_SEARCH_FIELDS = (
    PostSchema.title,
    PostSchema.content,
    PostSchema.excerpt,
    PostSchema.tags,
)


class SearchConditionBuilder:
    """Composition class for building post search conditions"""

    @staticmethod
    def apply_text_search(builder: QueryBuilder, text: str) -> QueryBuilder:
        """Case-insensitive substring match on title OR content OR excerpt OR any tag"""
        first, *rest = TEXT_SEARCH_FIELDS

        def group(qb: QueryBuilder) -> QueryBuilder:
            qb = qb.where(first, "icontains", text)
            for field in rest:
                qb = qb.or_where(field, "icontains", text)
            return qb

        return builder.where(group)

    @staticmethod
    def apply_search_conditions(
        builder: QueryBuilder, search: PostSearch
    ) -> QueryBuilder:
        """Apply search conditions to the query builder.

        Always restricted to published posts; every other non-empty filter is ANDed.
        """
        builder = builder.where(PostSchema.published, True)
        if search.category_id:
            builder = builder.where(PostSchema.category_id, search.category_id)
        if search.tag:
            # Exact, case-sensitive tag match
            builder = builder.where(PostSchema.tags, "contains", search.tag)
        if search.author_id:
            builder = builder.where(PostSchema.author_id, search.author_id)
        if search.query:
            builder = SearchConditionBuilder.apply_text_search(builder, search.query)
        return builder

    @staticmethod
    def apply_sort(
        builder: QueryBuilder,
        sort_by: PostSortField = PostSortField.PUBLISHED_AT,
        sort_order: SortOrder = SortOrder.DESC,
    ) -> QueryBuilder:
        """Apply sorting to the builder using order_by_asc and order_by_desc."""
        field, fallback = SORT_FIELDS[PostSortField(sort_by)]
        if SortOrder(sort_order) == SortOrder.DESC:
            return builder.order_by_desc(field, fallback)
        return builder.order_by_asc(field, fallback)
