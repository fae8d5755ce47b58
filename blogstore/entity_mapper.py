from typing import Any, Generic, TypeVar

from pydantic import BaseModel


T = TypeVar("T", bound=BaseModel)


class EntityMapper(Generic[T]):
    """Composition class for entity mapping operations"""

    def __init__(self, entity_class: type[T]):
        self.entity_class = entity_class

    def map_row_to_entity(self, row: dict[str, Any]) -> T:
        """Map a stored row to an entity"""
        return self.entity_class.model_validate(row)

    def map_entity_to_row(self, entity: BaseModel | dict[str, Any]) -> dict[str, Any]:
        """Map an entity (or write model) to a row keyed by field name"""
        if isinstance(entity, BaseModel):
            return entity.model_dump()
        return dict(entity)
