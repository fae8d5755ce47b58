from typing import Any

from blogstore.query_builder import QueryBuilder
from blogstore.store import ContentStore, Table
from blogstore.store_context import StoreManager


class DataOperations:
    """Composition class for store operations"""

    def __init__(self, unique_fields: tuple[str, ...] = ()):
        self.unique_fields = unique_fields

    @staticmethod
    def get_store() -> ContentStore:
        """Get the store of the current session from context"""
        store = StoreManager.get_current_store()
        if not store:
            raise ValueError(
                "No active session found. Repository methods must be called within a session context."
            )
        return store

    def get_table(self, table_name: str) -> Table:
        return self.get_store().table(table_name, self.unique_fields)

    def fetch_all(self, builder: QueryBuilder) -> list[dict[str, Any]]:
        """Run a query and fetch all matching rows"""
        table = self.get_table(builder.table_name)
        StoreManager.log_query(*builder.build())
        return builder.apply(table.scan())

    def fetch_one(self, builder: QueryBuilder) -> dict[str, Any] | None:
        """Run a query and fetch the first matching row"""
        rows = self.fetch_all(builder.limit(1))
        return rows[0] if rows else None

    def fetch_value(self, builder: QueryBuilder) -> int:
        """Count the rows matching a query"""
        table = self.get_table(builder.table_name)
        query, params = builder.build()
        StoreManager.log_query(query.replace("SELECT *", "SELECT COUNT(*)", 1), params)
        return len(builder.apply(table.scan()))

    def fetch_by_id(self, table_name: str, row_id: str) -> dict[str, Any] | None:
        table = self.get_table(table_name)
        StoreManager.log_query(f"SELECT * FROM {table_name} WHERE id = $1", [row_id])
        return table.get(row_id)

    def fetch_by_unique(
        self, table_name: str, field: str, value: Any
    ) -> dict[str, Any] | None:
        """Point lookup through the unique index on field"""
        table = self.get_table(table_name)
        StoreManager.log_query(f"SELECT * FROM {table_name} WHERE {field} = $1", [value])
        return table.lookup(field, value)

    def insert(self, table_name: str, row: dict[str, Any]) -> dict[str, Any]:
        table = self.get_table(table_name)
        StoreManager.log_query(
            f"INSERT INTO {table_name} ({', '.join(row)})", list(row.values())
        )
        return table.insert(row)

    def replace(
        self, table_name: str, row_id: str, row: dict[str, Any]
    ) -> dict[str, Any] | None:
        table = self.get_table(table_name)
        StoreManager.log_query(
            f"UPDATE {table_name} SET {', '.join(row)} WHERE id = $1",
            [row_id, *row.values()],
        )
        return table.replace(row_id, row)

    def delete(self, table_name: str, row_id: str) -> bool:
        table = self.get_table(table_name)
        StoreManager.log_query(f"DELETE FROM {table_name} WHERE id = $1", [row_id])
        return table.remove(row_id)
