"""
In-memory tables and the content store that owns them.
Rows are plain dicts; entities are mapped from copies of them on read.
"""

import asyncio
import copy
from collections.abc import Iterable
from itertools import count
from typing import Any


class UniqueConstraintError(ValueError):
    """Raised when a write would duplicate an id or a unique field value."""

    def __init__(self, table_name: str, field: str, value: Any):
        self.table_name = table_name
        self.field = field
        self.value = value
        super().__init__(f"{table_name}.{field} must be unique, {value!r} already exists")


class Table:
    """
    A collection of rows keyed by id, kept in insertion order.

    Unique fields are indexed so point lookups on them never scan the table.

    Usage:
        table = Table("posts", unique_fields=("slug",))
        row = table.insert({"title": "Hello", "slug": "hello"})
        table.lookup("slug", "hello")
    """

    def __init__(self, name: str, unique_fields: Iterable[str] = ()):
        self.name = name
        self._rows: dict[str, dict[str, Any]] = {}
        self._indexes: dict[str, dict[Any, str]] = {}
        self._id_sequence = count(1)
        for field in unique_fields:
            self.ensure_index(field)

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, row_id: str) -> bool:
        return row_id in self._rows

    @property
    def unique_fields(self) -> tuple[str, ...]:
        return tuple(self._indexes)

    def ensure_index(self, field: str) -> None:
        """Create a unique index on field, indexing rows already present"""
        if field in self._indexes:
            return
        index: dict[Any, str] = {}
        for row_id, row in self._rows.items():
            value = row.get(field)
            if value is None:
                continue
            if value in index:
                raise UniqueConstraintError(self.name, field, value)
            index[value] = row_id
        self._indexes[field] = index

    def next_id(self) -> str:
        """Return the next free sequential id; ids are never reused"""
        while True:
            candidate = str(next(self._id_sequence))
            if candidate not in self._rows:
                return candidate

    def _check_unique(self, row: dict[str, Any], row_id: str) -> None:
        for field, index in self._indexes.items():
            value = row.get(field)
            if value is None:
                continue
            owner = index.get(value)
            if owner is not None and owner != row_id:
                raise UniqueConstraintError(self.name, field, value)

    def _index_row(self, row: dict[str, Any], row_id: str) -> None:
        for field, index in self._indexes.items():
            value = row.get(field)
            if value is not None:
                index[value] = row_id

    def _unindex_row(self, row: dict[str, Any]) -> None:
        for field, index in self._indexes.items():
            value = row.get(field)
            if value is not None:
                index.pop(value, None)

    def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        """Store a copy of row, assigning an id when it has none"""
        row = copy.deepcopy(row)
        if row.get("id") is None:
            row["id"] = self.next_id()
        row_id = row["id"]
        if row_id in self._rows:
            raise UniqueConstraintError(self.name, "id", row_id)
        self._check_unique(row, row_id)
        self._rows[row_id] = row
        self._index_row(row, row_id)
        return copy.deepcopy(row)

    def replace(self, row_id: str, row: dict[str, Any]) -> dict[str, Any] | None:
        """Replace the stored row; the id of the stored row always wins"""
        current = self._rows.get(row_id)
        if current is None:
            return None
        row = {**copy.deepcopy(row), "id": row_id}
        self._check_unique(row, row_id)
        self._unindex_row(current)
        self._rows[row_id] = row
        self._index_row(row, row_id)
        return copy.deepcopy(row)

    def remove(self, row_id: str) -> bool:
        row = self._rows.pop(row_id, None)
        if row is None:
            return False
        self._unindex_row(row)
        return True

    def get(self, row_id: str) -> dict[str, Any] | None:
        row = self._rows.get(row_id)
        return copy.deepcopy(row) if row is not None else None

    def lookup(self, field: str, value: Any) -> dict[str, Any] | None:
        """O(1) lookup through a unique index"""
        if field not in self._indexes:
            raise ValueError(f"No unique index on {self.name}.{field}")
        row_id = self._indexes[field].get(value)
        return self.get(row_id) if row_id is not None else None

    def scan(self) -> list[dict[str, Any]]:
        """Return copies of all rows in insertion order"""
        return [copy.deepcopy(row) for row in self._rows.values()]


class ContentStore:
    """
    Owns every table of one content repository and the lock that serializes
    access to them.

    A store is constructed explicitly and handed to the code that needs it;
    nothing is shared through module globals.
    """

    def __init__(self, name: str = "default"):
        self.name = name
        self._tables: dict[str, Table] = {}
        self.lock = asyncio.Lock()

    def table(self, name: str, unique_fields: Iterable[str] = ()) -> Table:
        """Get a table by name, creating it (and any requested indexes) on first use"""
        table = self._tables.get(name)
        if table is None:
            table = Table(name)
            self._tables[name] = table
        for field in unique_fields:
            table.ensure_index(field)
        return table

    def table_names(self) -> list[str]:
        return list(self._tables)

    def __repr__(self) -> str:
        return f"ContentStore(name={self.name!r}, tables={self.table_names()!r})"
