from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class EntityMapper(Generic[T]):
    """Composition class for mapping between rows and entities"""

    def __init__(self, entity_class: type[T]):
        self.entity_class = entity_class
        self.columns = list(entity_class.model_fields)

    def map_row_to_entity(self, row: Any) -> T:
        """Map a database row to an entity, re-running field validation"""
        return self.entity_class.model_validate(dict(row))

    def map_rows_to_entities(self, rows: list[Any]) -> list[T]:
        return [self.map_row_to_entity(row) for row in rows]

    def map_entity_to_values(self, entity: T) -> list[Any]:
        """Column values of ``entity`` in ``self.columns`` order"""
        fields = entity.model_dump()
        return [fields[column] for column in self.columns]
