"""
Minimal QueryBuilder for the SELECT statements the repositories issue.
The goal is to produce SQL queries without execution.
"""

from typing import Any

from blog_entities.entities import Column

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so ``term`` only matches itself."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


class QueryBuilder:
    """
    Immutable builder for SELECT statements with ``$n`` placeholders.

    Usage:
        builder = QueryBuilder("authors")
        query, params = builder.where("id", author_id).limit(1).build()
    """

    def __init__(self, table_name: str):
        self.table_name = table_name
        self.where_conditions: list[str] = []
        self.params: list[Any] = []
        self.order_by_parts: list[str] = []
        self.limit_count: int | None = None

    def _clone(self) -> "QueryBuilder":
        new_builder = QueryBuilder(self.table_name)
        new_builder.where_conditions = self.where_conditions.copy()
        new_builder.params = self.params.copy()
        new_builder.order_by_parts = self.order_by_parts.copy()
        new_builder.limit_count = self.limit_count
        return new_builder

    def _add_condition(
        self, field: str | Column, operator: str, value: Any, suffix: str = ""
    ) -> "QueryBuilder":
        new_builder = self._clone()
        param_index = len(new_builder.params) + 1
        new_builder.where_conditions.append(f"{field} {operator} ${param_index}{suffix}")
        new_builder.params.append(value)
        return new_builder

    def where(self, field: str | Column, value: Any) -> "QueryBuilder":
        """Add an equality condition joined with AND; None becomes IS NULL."""
        if value is None:
            new_builder = self._clone()
            new_builder.where_conditions.append(f"{field} IS NULL")
            return new_builder
        return self._add_condition(field, "=", value)

    def where_contains(self, field: str | Column, term: str) -> "QueryBuilder":
        """Add a substring match; wildcards inside ``term`` are matched literally."""
        return self._add_condition(
            field, "LIKE", f"%{escape_like(term)}%", suffix=f" ESCAPE '{LIKE_ESCAPE}'"
        )

    def order_by(self, field: str | Column) -> "QueryBuilder":
        """Add ORDER BY ascending for a field. Chain to add multiple fields."""
        new_builder = self._clone()
        new_builder.order_by_parts.append(str(field))
        return new_builder

    def limit(self, count: int) -> "QueryBuilder":
        new_builder = self._clone()
        new_builder.limit_count = count
        return new_builder

    def build(self) -> tuple[str, list[Any]]:
        """Build the final SQL query and parameters"""
        query_parts = [f"SELECT * FROM {self.table_name}"]

        if self.where_conditions:
            query_parts.append(f"WHERE {' AND '.join(self.where_conditions)}")

        if self.order_by_parts:
            query_parts.append(f"ORDER BY {', '.join(self.order_by_parts)}")

        if self.limit_count is not None:
            query_parts.append(f"LIMIT {self.limit_count}")

        return " ".join(query_parts), self.params
