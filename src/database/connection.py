"""
Database connection and pool management
"""

import asyncpg
import logging
from typing import Any, List, Optional
from fastapi import Request

logger = logging.getLogger(__name__)

# Driver-level failures surfaced to callers as DatabaseError
DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


class DatabaseError(Exception):
    """Opaque failure raised for any error coming from the store"""


class Database:
    """Process-wide handle over an asyncpg pool, shared by every request"""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    @classmethod
    async def connect(cls, dsn: str) -> "Database":
        """Open a connection pool for the given DSN"""
        try:
            pool = await asyncpg.create_pool(
                dsn,
                min_size=2,
                max_size=10,
                command_timeout=60,
                statement_cache_size=0  # Fix for pgbouncer compatibility
            )
        except DRIVER_ERRORS as e:
            raise DatabaseError(f"Could not connect to database: {e}") from e
        return cls(pool)

    async def query(self, sql: str, *args: Any) -> List[asyncpg.Record]:
        """Run a statement and return every row"""
        try:
            async with self.pool.acquire() as conn:
                return await conn.fetch(sql, *args)
        except DRIVER_ERRORS as e:
            raise DatabaseError(str(e)) from e

    async def query_row(self, sql: str, *args: Any) -> Optional[asyncpg.Record]:
        """Run a statement and return the first row, or None when there is none"""
        try:
            async with self.pool.acquire() as conn:
                return await conn.fetchrow(sql, *args)
        except DRIVER_ERRORS as e:
            raise DatabaseError(str(e)) from e

    async def execute(self, sql: str, *args: Any) -> int:
        """Run a statement and return the number of affected rows"""
        try:
            async with self.pool.acquire() as conn:
                status = await conn.execute(sql, *args)
        except DRIVER_ERRORS as e:
            raise DatabaseError(str(e)) from e
        return parse_affected_rows(status)

    async def ping(self) -> None:
        """Check connectivity"""
        await self.query_row("SELECT 1")

    async def close(self) -> None:
        await self.pool.close()


def parse_affected_rows(status: str) -> int:
    """
    Extract the row count from a command status tag

    "UPDATE 3" -> 3, "INSERT 0 1" -> 1, "CREATE TABLE" -> 0
    """
    last = status.rsplit(" ", 1)[-1] if status else ""
    return int(last) if last.isdigit() else 0


async def init_database(dsn: str) -> Database:
    """Initialize database connection pool"""
    db = await Database.connect(dsn)

    # Test connection
    await db.ping()

    logger.info("Database initialized successfully")
    return db


async def close_database(db: Optional[Database]) -> None:
    """Close database connection pool"""
    if db:
        await db.close()
    logger.info("Database connections closed")


def get_database(request: Request) -> Database:
    """Get the database handle bound to the running application"""
    return request.app.state.db
