"""
Tests for grouped WHERE conditions using functions.
"""

from blogstore.query_builder import QueryBuilder

ROWS = [
    {"id": "1", "published": True, "title": "Next.js 15", "tags": ["Next.js"]},
    {"id": "2", "published": True, "title": "Server Components", "tags": ["React"]},
    {"id": "3", "published": False, "title": "Modern CSS", "tags": ["CSS"]},
    {"id": "4", "published": True, "title": "CSS Modules", "tags": ["Styling"]},
]


def ids(rows):
    return [row["id"] for row in rows]


class TestGroupedConditions:
    """Test cases for grouped WHERE clause functionality"""

    def test_where_group_basic(self):
        """Test basic where_group functionality"""

        def group_conditions(query):
            return query.where("title", "icontains", "css").or_where(
                "tags", "icontains", "react"
            )

        builder = QueryBuilder("posts").where("published", True).where_group(
            group_conditions
        )

        expected = (
            "SELECT * FROM posts WHERE published = $1 AND "
            "(title ICONTAINS $2 OR tags ICONTAINS $3)"
        )
        assert builder.to_sql() == expected
        assert ids(builder.apply(ROWS)) == ["2", "4"]

    def test_where_with_callable(self):
        """where(lambda q: ...) is a grouped condition"""
        builder = QueryBuilder("posts").where("published", True).where(
            lambda q: q.where("id", "1").or_where("id", "3")
        )
        query, params = builder.build()

        assert query == "SELECT * FROM posts WHERE published = $1 AND (id = $2 OR id = $3)"
        assert params == [True, "1", "3"]
        # Row 3 matches the group but not the published filter
        assert ids(builder.apply(ROWS)) == ["1"]

    def test_or_where_group(self):
        """Test grouped OR WHERE"""
        builder = QueryBuilder("posts").where("id", "1").or_where_group(
            lambda q: q.where("published", False).where("tags", "contains", "CSS")
        )

        assert builder.to_sql() == (
            "SELECT * FROM posts WHERE id = $1 OR (published = $2 AND tags CONTAINS $3)"
        )
        assert ids(builder.apply(ROWS)) == ["1", "3"]

    def test_nested_groups(self):
        """Groups can contain groups"""
        builder = QueryBuilder("posts").where(
            lambda q: q.where("published", True).where(
                lambda inner: inner.where("id", "2").or_where("id", "4")
            )
        )

        assert builder.to_sql() == (
            "SELECT * FROM posts WHERE (published = $1 AND (id = $2 OR id = $3))"
        )
        assert ids(builder.apply(ROWS)) == ["2", "4"]

    def test_empty_group_is_ignored(self):
        """A group that adds no conditions leaves the builder unchanged"""
        builder = QueryBuilder("posts").where("published", True)
        grouped = builder.where_group(lambda q: q)

        assert grouped.to_sql() == builder.to_sql()
