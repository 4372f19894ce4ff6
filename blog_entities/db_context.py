import logging
from contextlib import asynccontextmanager
from contextvars import ContextVar
from functools import wraps

import asyncpg

from blog_entities.settings import DatabaseSettings

logger = logging.getLogger(__name__)

# Context variable to store the current database connection (only one per context)
_current_connection: ContextVar[asyncpg.Connection | None] = ContextVar(
    "current_connection", default=None
)
_db_pools: dict[str, asyncpg.Pool] = {}


class DatabaseManager:
    """Manages database pools and the connection bound to the current context"""

    @classmethod
    async def connect(
        cls, settings: DatabaseSettings | None = None, name: str = "default"
    ) -> asyncpg.Pool:
        """Create a pool from settings and register it under ``name``"""
        settings = settings or DatabaseSettings()
        pool = await asyncpg.create_pool(
            settings.dsn,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )
        await cls.add_pool(name, pool)
        logger.info(
            "Connected pool '%s' to %s:%s/%s",
            name,
            settings.host,
            settings.port,
            settings.name,
        )
        return pool

    @classmethod
    async def add_pool(cls, name: str, pool: asyncpg.Pool):
        """Add a database pool with a name"""
        _db_pools[name] = pool

    @classmethod
    async def get_pool(cls, name: str = "default") -> asyncpg.Pool:
        """Get a database pool by name"""
        if name not in _db_pools:
            raise ValueError(f"Database pool '{name}' not found")
        return _db_pools[name]

    @classmethod
    async def close(cls, name: str = "default"):
        """Close and forget the pool registered under ``name``"""
        pool = _db_pools.pop(name, None)
        if pool is not None:
            await pool.close()
            logger.info("Closed pool '%s'", name)

    @classmethod
    def get_current_connection(cls) -> asyncpg.Connection | None:
        """Get the current active connection from context"""
        return _current_connection.get()

    @classmethod
    @asynccontextmanager
    async def transaction(cls, db_name: str = "default"):
        """Context manager that binds a pooled connection to the current context.

        Nested calls reuse the bound connection inside a savepoint. The
        connection goes back to the pool when the outermost context exits.
        """
        current_conn = _current_connection.get()

        if current_conn:
            async with current_conn.transaction():
                yield current_conn
        else:
            pool = await cls.get_pool(db_name)
            async with pool.acquire() as conn, conn.transaction():
                token = _current_connection.set(conn)
                try:
                    yield conn
                finally:
                    _current_connection.reset(token)


def transactional(db_name: str = "default"):
    """Decorator to run a coroutine within a database transaction.

    Example:
        @transactional()
        async def register(author):
            return await author_repo.insert(author)
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            async with DatabaseManager.transaction(db_name):
                return await func(*args, **kwargs)

        return wrapper

    return decorator
