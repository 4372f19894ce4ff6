"""DDL for the entity tables"""

import asyncpg

from blog_entities.entities import PostStatusState

AUTHORS_TABLE = "authors"
USERS_TABLE = "users"
POST_STATUSES_TABLE = "post_statuses"
_STATES = ", ".join(f"'{state.value}'" for state in PostStatusState)

_TABLE_DDL = {
    AUTHORS_TABLE: """
        CREATE TABLE IF NOT EXISTS {table} (
            id UUID PRIMARY KEY,
            avatar_url VARCHAR(255),
            activation_token VARCHAR(32),
            email VARCHAR(128) NOT NULL UNIQUE,
            password_hash CHAR(97) NOT NULL,
            username VARCHAR(32) NOT NULL UNIQUE
        );
    """,
    USERS_TABLE: """
        CREATE TABLE IF NOT EXISTS {table} (
            id UUID PRIMARY KEY,
            password_hash CHAR(97) NOT NULL,
            location VARCHAR(20),
            email VARCHAR(128) NOT NULL UNIQUE,
            phone_number VARCHAR(32)
        );
    """,
    POST_STATUSES_TABLE: """
        CREATE TABLE IF NOT EXISTS {table} (
            id UUID PRIMARY KEY,
            state VARCHAR(16) NOT NULL CHECK (state IN ({states}))
        );
    """,
}


def qualify(table_name: str, db_schema: str | None = None) -> str:
    return f"{db_schema}.{table_name}" if db_schema else table_name


async def create_schema(conn: asyncpg.Connection, db_schema: str | None = None):
    """Create the entity tables (and the schema, when one is named) if missing"""
    if db_schema:
        await conn.execute(f"CREATE SCHEMA IF NOT EXISTS {db_schema};")
    for table_name, ddl in _TABLE_DDL.items():
        await conn.execute(
            ddl.format(table=qualify(table_name, db_schema), states=_STATES)
        )


async def truncate_all(conn: asyncpg.Connection, db_schema: str | None = None):
    tables = ", ".join(qualify(table_name, db_schema) for table_name in _TABLE_DDL)
    await conn.execute(f"TRUNCATE TABLE {tables};")
