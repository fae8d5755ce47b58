"""Repository class"""

import copy
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from blogstore.data_operations import DataOperations
from blogstore.entity_mapper import EntityMapper
from blogstore.features.base_feature import RepositoryFeature
from blogstore.query_builder import QueryBuilder
from blogstore.store_context import QueryTracker, StoreManager

T_schema = TypeVar(
    "T_schema", bound=BaseModel
)  # Stored entity (includes timestamps, etc.)
T_domain = TypeVar("T_domain", bound=BaseModel)  # Domain/business entity
U = TypeVar("U", bound=BaseModel)  # Update model type


class RepositoryConfig(BaseModel):
    """Configuration options for Repository"""

    model_config = {"arbitrary_types_allowed": True}

    unique_fields: tuple[str, ...] = Field(
        default=(), description="Fields backed by a unique index"
    )
    features: list[RepositoryFeature] = Field(
        default_factory=list, description="Lifecycle hooks run on create and update"
    )


class Repository(Generic[T_schema, T_domain, U]):
    """Repository class using composition.

    Supports separation between stored entities (T_schema) and domain entities (T_domain).

    Where schema == domain, use: Repository[T, T, U]

    Type Parameters:
        T_schema: Stored entity (includes timestamps and bookkeeping fields)
        T_domain: Domain/business entity (what callers work with)
        U: Update model type
    """

    def __init__(
        self,
        entity_schema_class: type[T_schema],
        entity_domain_class: type[T_domain] | None = None,
        update_class: type[U] | None = None,
        table_name: str | None = None,
        config: RepositoryConfig | None = None,
    ):
        if entity_schema_class is None:
            raise ValueError("entity_schema_class is required")
        if table_name is None:
            raise ValueError("table_name is required")
        if update_class is None:
            raise ValueError("update_class is required")

        # If domain class not provided, use schema as domain
        if entity_domain_class is None:
            entity_domain_class = entity_schema_class  # type: ignore[assignment]

        self.entity_schema_class = entity_schema_class
        self.entity_domain_class = entity_domain_class
        self.update_class = update_class
        self.table_name = table_name
        self.config = config or RepositoryConfig()
        self._query_builder: QueryBuilder | None = None

        # Detect automatic field handling based on schema fields
        schema_fields = entity_schema_class.model_fields
        self._has_created_at = "created_at" in schema_fields
        self._has_updated_at = "updated_at" in schema_fields

        # Composition: Inject dependencies
        self.db_ops = DataOperations(self.config.unique_fields)
        self.entity_mapper = EntityMapper(entity_schema_class)

    def to_domain_entity(self, schema_entity: T_schema) -> T_domain:
        """Convert stored entity to domain entity.

        Override this method in subclasses to customize mapping from storage to domain.
        By default, creates a domain entity from the stored entity's dict.
        """
        if self.entity_schema_class == self.entity_domain_class:
            return schema_entity  # type: ignore[return-value]

        schema_dict = schema_entity.model_dump()
        return self.entity_domain_class.model_validate(schema_dict)  # type: ignore[return-value]

    def _map_row(self, row: dict[str, Any]) -> T_domain:
        return self.to_domain_entity(self.entity_mapper.map_row_to_entity(row))

    def _get_or_create_query_builder(self) -> QueryBuilder:
        """Get an existing query builder or create a new one"""
        if self._query_builder is None:
            return QueryBuilder(self.table_name)
        return self._query_builder

    def _clone_with_query_builder(self, query_builder: QueryBuilder):
        """Create a new repository instance (of the same class) with the given query builder"""
        new_repo = copy.copy(self)
        new_repo._query_builder = query_builder
        return new_repo

    def _apply_automatic_fields(
        self, data: dict[str, Any], is_create: bool = True
    ) -> dict[str, Any]:
        """Automatically handle created_at and updated_at fields"""
        current_time = datetime.now(UTC)

        if is_create:
            # On create, set created_at and updated_at if not provided
            if self._has_created_at and data.get("created_at") is None:
                data["created_at"] = current_time
            if self._has_updated_at and data.get("updated_at") is None:
                data["updated_at"] = current_time
        else:
            # On update, always refresh updated_at; created_at never changes
            data.pop("created_at", None)
            if self._has_updated_at:
                data["updated_at"] = current_time

        return data

    # Fluent query methods that return a new repository instance
    def where(self, field: Any, *args: Any):
        """Add a WHERE condition.

        Supports where(field, value), where(field, operator, value) and where(lambda qb: ...)
        """
        current_builder = self._get_or_create_query_builder()
        return self._clone_with_query_builder(current_builder.where(field, *args))

    def or_where(self, field: Any, *args: Any):
        """Add an OR WHERE condition.

        Supports or_where(field, value), or_where(field, operator, value) and or_where(lambda qb: ...)
        """
        current_builder = self._get_or_create_query_builder()
        return self._clone_with_query_builder(current_builder.or_where(field, *args))

    def where_in(self, field: Any, values: list):
        """Add a WHERE IN condition"""
        current_builder = self._get_or_create_query_builder()
        return self._clone_with_query_builder(current_builder.where_in(field, values))

    def where_not_in(self, field: Any, values: list):
        """Add a WHERE NOT IN condition"""
        current_builder = self._get_or_create_query_builder()
        return self._clone_with_query_builder(
            current_builder.where_not_in(field, values)
        )

    def order_by(self, field: Any, fallback: Any | None = None):
        """Add ORDER BY ascending for a field (default)."""
        current_builder = self._get_or_create_query_builder()
        return self._clone_with_query_builder(
            current_builder.order_by(field, fallback)
        )

    def order_by_asc(self, field: Any, fallback: Any | None = None):
        """Add ORDER BY ... ASC for a field. Can be chained for multiple fields."""
        current_builder = self._get_or_create_query_builder()
        return self._clone_with_query_builder(
            current_builder.order_by_asc(field, fallback)
        )

    def order_by_desc(self, field: Any, fallback: Any | None = None):
        """Add ORDER BY ... DESC for a field. Can be chained for multiple fields."""
        current_builder = self._get_or_create_query_builder()
        return self._clone_with_query_builder(
            current_builder.order_by_desc(field, fallback)
        )

    def limit(self, count: int):
        """Set the LIMIT clause"""
        current_builder = self._get_or_create_query_builder()
        return self._clone_with_query_builder(current_builder.limit(count))

    def offset(self, count: int):
        """Set the OFFSET clause"""
        current_builder = self._get_or_create_query_builder()
        return self._clone_with_query_builder(current_builder.offset(count))

    def paginate(self, page: int, per_page: int = 10):
        """Set pagination parameters"""
        current_builder = self._get_or_create_query_builder()
        return self._clone_with_query_builder(current_builder.paginate(page, per_page))

    def with_query(self, builder: QueryBuilder):
        """Run a prepared query builder through this repository"""
        return self._clone_with_query_builder(builder)

    def query(self) -> QueryBuilder:
        """Return the query builder this repository would run"""
        return self._get_or_create_query_builder()

    # Execution methods for fluent queries
    async def get(self) -> list[T_domain]:
        """Execute the query and return all matching entities as domain entities"""
        rows = self.db_ops.fetch_all(self._get_or_create_query_builder())
        return [self._map_row(row) for row in rows]

    async def first(self) -> T_domain | None:
        """Execute the query and return the first matching domain entity"""
        row = self.db_ops.fetch_one(self._get_or_create_query_builder())
        return self._map_row(row) if row else None

    async def count(self) -> int:
        """Execute the query and return the count of matching records"""
        return self.db_ops.fetch_value(self._get_or_create_query_builder())

    async def exists(self) -> bool:
        """Check if any records match the query"""
        count = await self.count()
        return count > 0

    def to_sql(self) -> str:
        """Return the query description for debugging"""
        return self._get_or_create_query_builder().to_sql()

    def build(self) -> tuple[str, list[Any]]:
        """Build the query description and parameters"""
        return self._get_or_create_query_builder().build()

    @staticmethod
    def get_query_tracker() -> QueryTracker | None:
        """Get the current query tracker if query tracking is enabled.

        Example:
            async with StoreManager.session(store), StoreManager.track_queries():
                user = await user_repo.find_by_id(user_id)
                tracker = Repository.get_query_tracker()
                queries = tracker.get_queries() if tracker else []
        """
        return StoreManager.get_query_tracker()

    # CRUD operations
    async def find_by_id(self, entity_id: str) -> T_domain | None:
        """Find entity by ID"""
        row = self.db_ops.fetch_by_id(self.table_name, entity_id)
        return self._map_row(row) if row else None

    async def find_by(self, field: Any, value: Any) -> T_domain | None:
        """Find the first entity with field == value, through the unique index when there is one"""
        field = str(field)
        if field in self.config.unique_fields:
            row = self.db_ops.fetch_by_unique(self.table_name, field, value)
            return self._map_row(row) if row else None
        return await self.where(field, value).first()

    async def create(self, entity: BaseModel | dict[str, Any]) -> T_domain:
        """Create a new entity, assigning an id and timestamps.

        Accepts a full entity (an explicit id is kept) or a write model / dict
        holding the entity's fields.
        """
        table = self.db_ops.get_table(self.table_name)
        fields = self.entity_mapper.map_entity_to_row(entity)
        for feature in self.config.features:
            fields = feature.before_create(fields, table)
        fields = self._apply_automatic_fields(fields, is_create=True)
        if fields.get("id") is None:
            fields["id"] = table.next_id()

        # Validate the complete record; only schema fields are persisted
        schema_entity = self.entity_schema_class.model_validate(fields)
        row = self.db_ops.insert(self.table_name, schema_entity.model_dump())
        return self._map_row(row)

    async def create_many(
        self, entities: list[BaseModel | dict[str, Any]]
    ) -> list[T_domain]:
        """Create multiple entities"""
        return [await self.create(entity) for entity in entities]

    async def update(
        self, entity_id: str, update_data: U | dict[str, Any]
    ) -> T_domain | None:
        """Merge changes into an entity and return the updated version.

        id and created_at are never changed; updated_at is always refreshed.
        Returns None when the entity does not exist.
        """
        current = self.db_ops.fetch_by_id(self.table_name, entity_id)
        if current is None:
            return None

        # Use exclude_unset to only include fields that were explicitly set.
        if isinstance(update_data, BaseModel):
            update_dict = update_data.model_dump(exclude_unset=True)
        else:
            update_dict = dict(update_data)
        update_dict.pop("id", None)

        for feature in self.config.features:
            update_dict = feature.before_update(update_dict, current)
        update_dict = self._apply_automatic_fields(update_dict, is_create=False)

        if not update_dict:
            return self._map_row(current)

        schema_entity = self.entity_schema_class.model_validate(
            {**current, **update_dict}
        )
        row = self.db_ops.replace(
            self.table_name, entity_id, schema_entity.model_dump()
        )
        return self._map_row(row) if row else None

    async def delete(self, entity_id: str) -> bool:
        """Delete entity by ID; deleting a missing entity returns False"""
        return self.db_ops.delete(self.table_name, entity_id)

    async def delete_many(self, ids: list[str]) -> int:
        """Delete multiple entities by their IDs, returning how many existed"""
        return sum([await self.delete(entity_id) for entity_id in ids])
