"""
In-memory QueryBuilder for filtering, ordering and slicing table rows.
Builders are immutable: every method returns a new builder. ``apply`` runs the
query over rows; ``build`` renders a SQL-like description for query logs.
"""

import operator as op
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

_COMPARISONS: dict[str, Callable[[Any, Any], bool]] = {
    "=": op.eq,
    "!=": op.ne,
    "<>": op.ne,
    "<": op.lt,
    "<=": op.le,
    ">": op.gt,
    ">=": op.ge,
}


def _contains(field_value: Any, value: Any) -> bool:
    """Exact membership in a list field"""
    return isinstance(field_value, list | tuple | set) and value in field_value


def _icontains(field_value: Any, value: Any) -> bool:
    """Case-insensitive substring match on a string, or on any element of a list"""
    needle = str(value).lower()
    if isinstance(field_value, str):
        return needle in field_value.lower()
    if isinstance(field_value, list | tuple | set):
        return any(
            isinstance(item, str) and needle in item.lower() for item in field_value
        )
    return False


_MATCHERS: dict[str, Callable[[Any, Any], bool]] = {
    "contains": _contains,
    "icontains": _icontains,
}

OPERATORS = frozenset(_COMPARISONS) | frozenset(_MATCHERS)


@dataclass(frozen=True)
class Condition:
    """A single ``field <operator> value`` test against a row"""

    field: str
    operator: str
    value: Any

    def matches(self, row: dict[str, Any]) -> bool:
        field_value = row.get(self.field)
        if self.operator in _MATCHERS:
            return _MATCHERS[self.operator](field_value, self.value)
        if self.value is None or field_value is None:
            # IS NULL / IS NOT NULL semantics; ordering against NULL never matches
            if self.operator == "=":
                return field_value is None and self.value is None
            if self.operator in ("!=", "<>"):
                return (field_value is None) != (self.value is None)
            return False
        try:
            return _COMPARISONS[self.operator](field_value, self.value)
        except TypeError:
            return False


@dataclass(frozen=True)
class InCondition:
    field: str
    values: tuple[Any, ...]
    negate: bool = False

    def matches(self, row: dict[str, Any]) -> bool:
        found = row.get(self.field) in self.values
        return not found if self.negate else found


@dataclass(frozen=True)
class GroupCondition:
    """Conditions collected by a nested builder, evaluated as one unit"""

    builder: "QueryBuilder"

    def matches(self, row: dict[str, Any]) -> bool:
        return self.builder.matches(row)


@dataclass(frozen=True)
class OrderPart:
    field: str
    descending: bool = False
    # Used when the primary field is None (COALESCE)
    fallback: str | None = None

    def key(self, row: dict[str, Any]) -> Any:
        value = row.get(self.field)
        if value is None and self.fallback is not None:
            value = row.get(self.fallback)
        if isinstance(value, datetime):
            # Compare dates by their numeric timestamp
            return value.timestamp()
        return value

    def render(self) -> str:
        column = (
            f"COALESCE({self.field}, {self.fallback})" if self.fallback else self.field
        )
        return f"{column} DESC" if self.descending else column


Predicate = Condition | InCondition | GroupCondition


class QueryBuilder:
    """
    Simple query builder over in-memory rows.

    Usage:
        builder = QueryBuilder("posts")
        rows = builder.where("published", True).order_by_desc("view_count").limit(5).apply(rows)
    """

    def __init__(self, table_name: str):
        self.table_name = table_name
        self.where_conditions: list[Predicate] = []
        self.or_where_conditions: list[Predicate] = []
        self.order_by_parts: list[OrderPart] = []
        self.limit_count: int | None = None
        self.offset_count: int | None = None

    def _clone(self) -> "QueryBuilder":
        """Create a copy of the current QueryBuilder instance"""
        new_builder = QueryBuilder(self.table_name)
        new_builder.where_conditions = self.where_conditions.copy()
        new_builder.or_where_conditions = self.or_where_conditions.copy()
        new_builder.order_by_parts = self.order_by_parts.copy()
        new_builder.limit_count = self.limit_count
        new_builder.offset_count = self.offset_count
        return new_builder

    def _add_predicate(self, predicate: Predicate, is_or: bool) -> "QueryBuilder":
        new_builder = self._clone()
        if is_or:
            new_builder.or_where_conditions.append(predicate)
        else:
            new_builder.where_conditions.append(predicate)
        return new_builder

    def _add_condition(
        self, field: Any, value: Any, operator: str, is_or: bool = False
    ) -> "QueryBuilder":
        """Add a condition to either WHERE or OR WHERE clauses"""
        operator = operator.lower()
        if operator not in OPERATORS:
            raise ValueError(f"Unsupported operator: {operator!r}")
        return self._add_predicate(Condition(str(field), operator, value), is_or)

    def _add_in_condition(
        self,
        field: Any,
        values: Any | list[Any],
        is_not: bool = False,
        is_or: bool = False,
    ) -> "QueryBuilder":
        """Add IN or NOT IN conditions"""
        # Convert single value to list for consistent handling
        if not isinstance(values, list | tuple | set):
            values = [values]
        return self._add_predicate(
            InCondition(str(field), tuple(values), negate=is_not), is_or
        )

    def _add_group_condition(
        self,
        group_function: Callable[["QueryBuilder"], "QueryBuilder"],
        is_or: bool = False,
    ) -> "QueryBuilder":
        """Add a grouped condition to either WHERE or OR WHERE clauses"""
        group_builder = QueryBuilder("")
        result = group_function(group_builder)
        if result is not None:
            group_builder = result

        if not group_builder.where_conditions and not group_builder.or_where_conditions:
            return self

        return self._add_predicate(GroupCondition(group_builder), is_or)

    def where(
        self,
        field_or_function: Any | Callable[["QueryBuilder"], "QueryBuilder"],
        *args: Any,
    ) -> "QueryBuilder":
        """Add a WHERE condition or grouped WHERE clause.

        Supports both of the following call styles:
        - where(field, value) -> operator defaults to '='
        - where(field, operator, value) -> explicit operator in the second place

        Grouped conditions via function: where(lambda qb: ...)
        """
        if callable(field_or_function):
            return self.where_group(field_or_function)

        if len(args) == 2:
            operator, value = args
            return self._add_condition(field_or_function, value, operator, is_or=False)
        if len(args) == 1:
            return self._add_condition(field_or_function, args[0], "=", is_or=False)
        raise TypeError("where() expects (field, value) or (field, operator, value)")

    def or_where(
        self,
        field_or_function: Any | Callable[["QueryBuilder"], "QueryBuilder"],
        *args: Any,
    ) -> "QueryBuilder":
        """Add an OR WHERE condition or grouped OR WHERE clause.

        Supports both of the following call styles:
        - or_where(field, value) -> operator defaults to '='
        - or_where(field, operator, value) -> explicit operator in the second place
        """
        if callable(field_or_function):
            return self.or_where_group(field_or_function)

        if len(args) == 2:
            operator, value = args
            return self._add_condition(field_or_function, value, operator, is_or=True)
        if len(args) == 1:
            return self._add_condition(field_or_function, args[0], "=", is_or=True)
        raise TypeError("or_where() expects (field, value) or (field, operator, value)")

    def where_in(self, field: Any, values: Any | list[Any]) -> "QueryBuilder":
        """Add a WHERE IN condition"""
        return self._add_in_condition(field, values, is_not=False, is_or=False)

    def where_not_in(self, field: Any, values: Any | list[Any]) -> "QueryBuilder":
        """Add a WHERE NOT IN condition"""
        return self._add_in_condition(field, values, is_not=True, is_or=False)

    def or_where_in(self, field: Any, values: Any | list[Any]) -> "QueryBuilder":
        """Add an OR WHERE IN condition"""
        return self._add_in_condition(field, values, is_not=False, is_or=True)

    def where_group(
        self, group_function: Callable[["QueryBuilder"], "QueryBuilder"]
    ) -> "QueryBuilder":
        """Add a grouped WHERE clause using a function"""
        return self._add_group_condition(group_function, is_or=False)

    def or_where_group(
        self, group_function: Callable[["QueryBuilder"], "QueryBuilder"]
    ) -> "QueryBuilder":
        """Add a grouped OR WHERE clause using a function"""
        return self._add_group_condition(group_function, is_or=True)

    def order_by(self, field: Any, fallback: Any | None = None) -> "QueryBuilder":
        """Add ORDER BY ascending for a field (default). Chain to add multiple fields."""
        return self.order_by_asc(field, fallback)

    def order_by_asc(self, field: Any, fallback: Any | None = None) -> "QueryBuilder":
        """Add an ORDER BY ... ASC on the given field. Can be chained to add multiple fields."""
        new_builder = self._clone()
        new_builder.order_by_parts.append(
            OrderPart(str(field), False, str(fallback) if fallback else None)
        )
        return new_builder

    def order_by_desc(self, field: Any, fallback: Any | None = None) -> "QueryBuilder":
        """Add an ORDER BY ... DESC on the given field. Can be chained to add multiple fields."""
        new_builder = self._clone()
        new_builder.order_by_parts.append(
            OrderPart(str(field), True, str(fallback) if fallback else None)
        )
        return new_builder

    def limit(self, count: int) -> "QueryBuilder":
        """Set the LIMIT clause"""
        new_builder = self._clone()
        new_builder.limit_count = count
        return new_builder

    def offset(self, count: int) -> "QueryBuilder":
        """Set the OFFSET clause"""
        new_builder = self._clone()
        new_builder.offset_count = count
        return new_builder

    def paginate(self, page: int, per_page: int = 10) -> "QueryBuilder":
        """
        Set pagination parameters using a page-based interface

        Args:
            page: Page number (1-based)
            per_page: Number of records per page (default: 10)

        Returns:
            QueryBuilder with LIMIT and OFFSET set for the specified page
        """
        if page < 1:
            raise ValueError("Page number must be 1 or greater")
        if per_page < 1:
            raise ValueError("Per page count must be 1 or greater")

        offset = (page - 1) * per_page
        return self.limit(per_page).offset(offset)

    def without_window(self) -> "QueryBuilder":
        """Drop LIMIT/OFFSET, e.g. to count every match of a paginated query"""
        new_builder = self._clone()
        new_builder.limit_count = None
        new_builder.offset_count = None
        return new_builder

    def has_conditions(self) -> bool:
        return bool(self.where_conditions or self.or_where_conditions)

    def matches(self, row: dict[str, Any]) -> bool:
        """Evaluate the WHERE clause the way build() renders it: (AND ...) OR (OR ...)"""
        if not self.has_conditions():
            return True
        if self.where_conditions and all(
            condition.matches(row) for condition in self.where_conditions
        ):
            return True
        return any(condition.matches(row) for condition in self.or_where_conditions)

    def sort(self, rows: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
        """Stable multi-key sort; rows whose key is None go last in either direction"""
        ordered = list(rows)
        # Sort by the least significant key first; each pass is stable
        for part in reversed(self.order_by_parts):
            present = [row for row in ordered if part.key(row) is not None]
            missing = [row for row in ordered if part.key(row) is None]
            present.sort(key=part.key, reverse=part.descending)
            ordered = present + missing
        return ordered

    def apply(self, rows: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
        """Filter, order and slice rows"""
        result = self.sort(row for row in rows if self.matches(row))
        start = self.offset_count or 0
        if self.limit_count is not None:
            return result[start : start + self.limit_count]
        return result[start:]

    def _render_predicate(self, predicate: Predicate, params: list[Any]) -> str:
        if isinstance(predicate, GroupCondition):
            return f"({predicate.builder._render_where(params)})"
        if isinstance(predicate, InCondition):
            start_index = len(params) + 1
            placeholders = ", ".join(
                f"${i + start_index}" for i in range(len(predicate.values))
            )
            params.extend(predicate.values)
            not_keyword = "NOT " if predicate.negate else ""
            return f"{predicate.field} {not_keyword}IN ({placeholders})"
        if predicate.value is None and predicate.operator == "=":
            return f"{predicate.field} IS NULL"
        if predicate.value is None and predicate.operator in ("!=", "<>"):
            return f"{predicate.field} IS NOT NULL"
        params.append(predicate.value)
        return f"{predicate.field} {predicate.operator.upper()} ${len(params)}"

    def _render_where(self, params: list[Any]) -> str:
        and_parts = [self._render_predicate(p, params) for p in self.where_conditions]
        or_parts = [self._render_predicate(p, params) for p in self.or_where_conditions]
        and_clause = " AND ".join(and_parts)
        or_clause = " OR ".join(or_parts)
        if and_parts and or_parts:
            if len(and_parts) > 1:
                and_clause = f"({and_clause})"
            if len(or_parts) > 1:
                or_clause = f"({or_clause})"
            return f"{and_clause} OR {or_clause}"
        return and_clause or or_clause

    def build(self) -> tuple[str, list[Any]]:
        """Build a SQL-like description of the query and its parameters"""
        params: list[Any] = []
        query_parts = [f"SELECT * FROM {self.table_name}"]

        if self.has_conditions():
            query_parts.append(f"WHERE {self._render_where(params)}")

        if self.order_by_parts:
            query_parts.append(
                f"ORDER BY {', '.join(part.render() for part in self.order_by_parts)}"
            )

        if self.limit_count is not None:
            query_parts.append(f"LIMIT {self.limit_count}")

        if self.offset_count is not None:
            query_parts.append(f"OFFSET {self.offset_count}")

        return " ".join(query_parts), params

    def to_sql(self) -> str:
        """Return only the query string without parameters"""
        query, _ = self.build()
        return query

    def __str__(self) -> str:
        """String representation showing the built query"""
        query, params = self.build()
        return f"Query: {query}\nParams: {params}"
