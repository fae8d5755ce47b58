"""
Tests for WHERE conditions, operators, and parameter indexing.
"""

import pytest

from blogstore.query_builder import QueryBuilder

ROWS = [
    {"id": "1", "title": "Next.js 15", "view_count": 1250, "tags": ["Next.js", "React"]},
    {"id": "2", "title": "Server Components", "view_count": 890, "tags": ["React"]},
    {"id": "3", "title": "TypeScript", "view_count": 675, "tags": ["TypeScript"]},
    {"id": "4", "title": "Draft", "view_count": 0, "tags": [], "published_at": None},
]


def ids(rows):
    return [row["id"] for row in rows]


class TestWhereConditions:
    """Test cases for WHERE clause functionality"""

    def test_single_where_condition(self):
        """Test SELECT with single WHERE condition"""
        builder = QueryBuilder("posts")
        query, params = builder.where("id", "3").build()

        assert query == "SELECT * FROM posts WHERE id = $1"
        assert params == ["3"]
        assert ids(builder.where("id", "3").apply(ROWS)) == ["3"]

    def test_multiple_where_conditions(self):
        """Test SELECT with multiple WHERE conditions"""
        builder = QueryBuilder("posts").where("view_count", ">", 700).where(
            "tags", "contains", "React"
        )
        query, params = builder.build()

        assert query == "SELECT * FROM posts WHERE view_count > $1 AND tags CONTAINS $2"
        assert params == [700, "React"]
        assert ids(builder.apply(ROWS)) == ["1", "2"]

    def test_where_with_different_operators(self):
        """Test WHERE conditions with different operators"""
        builder = QueryBuilder("posts")
        query, params = (
            builder.where("view_count", ">", 18)
            .where("title", "!=", "Draft")
            .where("view_count", "<=", 1000)
            .build()
        )

        assert (
            query
            == "SELECT * FROM posts WHERE view_count > $1 AND title != $2 AND view_count <= $3"
        )
        assert params == [18, "Draft", 1000]

    @pytest.mark.parametrize(
        "operator,value,expected",
        [
            ("=", 890, ["2"]),
            ("!=", 890, ["1", "3", "4"]),
            ("<>", 890, ["1", "3", "4"]),
            ("<", 675, ["4"]),
            ("<=", 675, ["3", "4"]),
            (">", 890, ["1"]),
            (">=", 890, ["1", "2"]),
        ],
    )
    def test_comparison_operators_filter_rows(self, operator, value, expected):
        """Each comparison operator filters rows the way it reads"""
        builder = QueryBuilder("posts").where("view_count", operator, value)
        assert ids(builder.apply(ROWS)) == expected

    def test_contains_is_exact_list_membership(self):
        """contains matches a whole list element, case-sensitively"""
        builder = QueryBuilder("posts")
        assert ids(builder.where("tags", "contains", "TypeScript").apply(ROWS)) == ["3"]
        assert builder.where("tags", "contains", "typescript").apply(ROWS) == []
        assert builder.where("tags", "contains", "Type").apply(ROWS) == []

    def test_icontains_matches_substrings_of_strings_and_list_items(self):
        """icontains is a case-insensitive substring test"""
        builder = QueryBuilder("posts")
        assert ids(builder.where("title", "icontains", "SERVER").apply(ROWS)) == ["2"]
        assert ids(builder.where("tags", "icontains", "script").apply(ROWS)) == ["3"]
        assert ids(builder.where("tags", "icontains", "react").apply(ROWS)) == ["1", "2"]

    def test_operator_is_case_insensitive(self):
        """Operators are normalized to lower case"""
        query, _ = QueryBuilder("posts").where("title", "ICONTAINS", "next").build()
        assert query == "SELECT * FROM posts WHERE title ICONTAINS $1"

    def test_where_null(self):
        """where(field, None) renders and evaluates as IS NULL"""
        builder = QueryBuilder("posts").where("published_at", None)
        query, params = builder.build()

        assert query == "SELECT * FROM posts WHERE published_at IS NULL"
        assert params == []
        # Missing keys count as NULL too
        assert ids(builder.apply(ROWS)) == ["1", "2", "3", "4"]

    def test_where_not_null(self):
        """where(field, '!=', None) renders as IS NOT NULL"""
        builder = QueryBuilder("posts").where("published_at", "!=", None)
        assert builder.to_sql() == "SELECT * FROM posts WHERE published_at IS NOT NULL"
        assert builder.apply(ROWS) == []

    def test_ordering_comparison_against_null_never_matches(self):
        """< / > against a missing value do not match"""
        builder = QueryBuilder("posts").where("published_at", ">", 0)
        assert builder.apply(ROWS) == []

    def test_incomparable_values_do_not_match(self):
        """Comparing values of incompatible types is a non-match, not an error"""
        builder = QueryBuilder("posts").where("view_count", ">", "many")
        assert builder.apply(ROWS) == []

    def test_parameter_indexing(self):
        """Test that parameters are correctly indexed"""
        builder = QueryBuilder("posts")
        query, params = (
            builder.where("author_id", "user123")
            .where("created_at", ">", "2023-01-01")
            .where("slug", "!=", "draft")
            .build()
        )

        expected_query = (
            "SELECT * FROM posts WHERE "
            "author_id = $1 AND created_at > $2 AND slug != $3"
        )
        assert query == expected_query
        assert params == ["user123", "2023-01-01", "draft"]

    def test_unsupported_operator_raises(self):
        """Operators outside the supported set are rejected"""
        with pytest.raises(ValueError, match="Unsupported operator"):
            QueryBuilder("posts").where("title", "LIKE", "%next%")

    def test_where_with_wrong_argument_count_raises(self):
        """where() takes a value, or an operator and a value"""
        with pytest.raises(TypeError):
            QueryBuilder("posts").where("title")
