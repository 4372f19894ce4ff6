"""Repository class"""

import logging
from typing import Any, Generic, TypeVar

import asyncpg
from pydantic import BaseModel, Field

from blog_entities.database_operations import DatabaseOperations
from blog_entities.entities import BaseEntity, Column
from blog_entities.entity_mapper import EntityMapper
from blog_entities.identifiers import to_identifier
from blog_entities.query_builder import QueryBuilder
from blog_entities.schema import qualify

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseEntity)


class RepositoryConfig(BaseModel):
    """Configuration options for Repository"""

    db_schema: str | None = Field(default=None, description="Database schema name")


class Repository(Generic[T]):
    """Single-row persistence for one entity class.

    Every operation accepts an optional ``conn``; without one it runs on the
    connection bound by ``DatabaseManager.transaction``. Lookups can be
    composed fluently and end with ``get()`` or ``first()``:

        await repo.where(AuthorSchema.email, email).first()
    """

    def __init__(
        self,
        entity_class: type[T],
        table_name: str,
        config: RepositoryConfig | None = None,
    ):
        if entity_class is None:
            raise ValueError("entity_class is required")
        if not table_name:
            raise ValueError("table_name is required")

        self.entity_class = entity_class
        self.table_name = table_name
        self.config = config or RepositoryConfig()
        self._qualified_table_name = qualify(table_name, self.config.db_schema)
        self._query_builder: QueryBuilder | None = None

        # Composition: Inject dependencies
        self.db_ops = DatabaseOperations()
        self.entity_mapper = EntityMapper(entity_class)

    def _get_or_create_query_builder(self) -> QueryBuilder:
        if self._query_builder is None:
            return QueryBuilder(self._qualified_table_name)
        return self._query_builder

    def _clone_with_query_builder(self, query_builder: QueryBuilder) -> "Repository[T]":
        new_repo = Repository(self.entity_class, self.table_name, self.config)
        new_repo._query_builder = query_builder
        return new_repo

    # Fluent query methods that return a new repository instance
    def where(self, field: str | Column, value: Any) -> "Repository[T]":
        """Add an equality condition on ``field``"""
        return self._clone_with_query_builder(
            self._get_or_create_query_builder().where(field, value)
        )

    def where_contains(self, field: str | Column, term: str) -> "Repository[T]":
        """Add a literal substring match on ``field``"""
        return self._clone_with_query_builder(
            self._get_or_create_query_builder().where_contains(field, term)
        )

    def order_by(self, field: str | Column) -> "Repository[T]":
        return self._clone_with_query_builder(
            self._get_or_create_query_builder().order_by(field)
        )

    # Execution methods for fluent queries
    async def get(self, *, conn: asyncpg.Connection | None = None) -> list[T]:
        """Execute the query and return all matching entities"""
        query, params = self._get_or_create_query_builder().build()
        rows = await self.db_ops.fetch_all(query, params, conn)
        return self.entity_mapper.map_rows_to_entities(rows)

    async def first(self, *, conn: asyncpg.Connection | None = None) -> T | None:
        """Execute the query and return the first matching entity"""
        query, params = self._get_or_create_query_builder().limit(1).build()
        row = await self.db_ops.fetch_one(query, params, conn)
        if row:
            return self.entity_mapper.map_row_to_entity(row)
        return None

    # CRUD operations
    async def find_by_id(
        self, entity_id: Any, *, conn: asyncpg.Connection | None = None
    ) -> T | None:
        """Find entity by identifier (UUID, text or raw bytes)"""
        return await self.where("id", to_identifier(entity_id)).first(conn=conn)

    async def insert(self, entity: T, *, conn: asyncpg.Connection | None = None) -> T:
        """Write every field of ``entity`` as a new row"""
        columns = self.entity_mapper.columns
        values = self.entity_mapper.map_entity_to_values(entity)
        placeholders = ", ".join(f"${i + 1}" for i in range(len(values)))

        await self.db_ops.execute_query(
            f"INSERT INTO {self._qualified_table_name} ({', '.join(columns)}) "
            f"VALUES ({placeholders})",
            values,
            conn,
        )
        logger.info("Inserted %s %s", self.entity_class.__name__, entity.id)
        return entity

    async def update(self, entity: T, *, conn: asyncpg.Connection | None = None) -> T | None:
        """Rewrite every field of the row matching ``entity.id``.

        Returns None without changing anything when no such row exists.
        """
        fields = entity.model_dump(exclude={"id"})
        set_clause = ", ".join(f"{column} = ${i + 2}" for i, column in enumerate(fields))
        values = [entity.id, *fields.values()]

        result = await self.db_ops.execute_query(
            f"UPDATE {self._qualified_table_name} SET {set_clause} WHERE id = $1",
            values,
            conn,
        )
        if result == "UPDATE 0":
            logger.warning(
                "Update skipped, no %s with id %s", self.entity_class.__name__, entity.id
            )
            return None
        return entity

    async def delete(self, entity_id: Any, *, conn: asyncpg.Connection | None = None) -> bool:
        """Delete the row with the given identifier; True when a row was removed"""
        entity_id = to_identifier(entity_id)
        result = await self.db_ops.execute_query(
            f"DELETE FROM {self._qualified_table_name} WHERE id = $1",
            [entity_id],
            conn,
        )
        deleted = result != "DELETE 0"
        if deleted:
            logger.info("Deleted %s %s", self.entity_class.__name__, entity_id)
        return deleted
