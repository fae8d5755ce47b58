"""
Tests for OR WHERE conditions.
"""

from blogstore.query_builder import QueryBuilder

ROWS = [
    {"id": "1", "author_id": "1", "category_id": "1", "published": True},
    {"id": "2", "author_id": "2", "category_id": "2", "published": True},
    {"id": "3", "author_id": "3", "category_id": "3", "published": False},
]


def ids(rows):
    return [row["id"] for row in rows]


class TestOrWhereConditions:
    """Test cases for OR WHERE clause functionality"""

    def test_or_where_only(self):
        """Test query built only from OR WHERE conditions"""
        builder = QueryBuilder("posts").or_where("author_id", "1").or_where(
            "author_id", "3"
        )
        query, params = builder.build()

        assert query == "SELECT * FROM posts WHERE author_id = $1 OR author_id = $2"
        assert params == ["1", "3"]
        assert ids(builder.apply(ROWS)) == ["1", "3"]

    def test_where_and_or_where(self):
        """A single AND condition combined with an OR condition"""
        builder = QueryBuilder("posts").where("author_id", "2").or_where(
            "category_id", "3"
        )

        assert builder.to_sql() == (
            "SELECT * FROM posts WHERE author_id = $1 OR category_id = $2"
        )
        assert ids(builder.apply(ROWS)) == ["2", "3"]

    def test_multiple_where_with_or_where(self):
        """AND conditions are grouped before being ORed"""
        builder = (
            QueryBuilder("posts")
            .where("published", True)
            .where("author_id", "1")
            .or_where("category_id", "3")
        )
        query, params = builder.build()

        assert query == (
            "SELECT * FROM posts WHERE (published = $1 AND author_id = $2) "
            "OR category_id = $3"
        )
        assert params == [True, "1", "3"]
        assert ids(builder.apply(ROWS)) == ["1", "3"]

    def test_or_where_with_operator(self):
        """or_where accepts an explicit operator"""
        builder = QueryBuilder("posts").where("author_id", "1").or_where(
            "author_id", ">", "2"
        )
        assert ids(builder.apply(ROWS)) == ["1", "3"]
