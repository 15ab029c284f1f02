"""
Async SQLite connection pool with aiosqlite.

Provides pooled connections, transactional scopes and the mapping of
SQLite failures onto the storage exceptions: constraint failures become
ConstraintViolationError, anything else DatabaseError.
"""

import asyncio
import uuid
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from datetime import UTC, datetime
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings
from src.core.exceptions import ConstraintViolationError, DatabaseError

logger = get_logger(__name__)


class ConnectionPool:
    """
    Async SQLite connection pool.

    Connections run in autocommit mode; multi-statement writes go through
    ``transaction()``, which takes the write lock up front with
    BEGIN IMMEDIATE so a check-then-write sequence inside it cannot
    interleave with another writer.
    """

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._pool: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._connections: list[aiosqlite.Connection] = []
        self._initialized = False
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Initialize the connection pool."""
        async with self._lock:
            if self._initialized:
                return

            # Ensure database directory exists
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            # Create connections
            for _ in range(self.pool_size):
                conn = await self._create_connection()
                self._connections.append(conn)
                await self._pool.put(conn)

            self._initialized = True
            logger.info(
                "connection_pool_initialized",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )

    async def _create_connection(self) -> aiosqlite.Connection:
        """Open a connection with WAL, foreign keys and dict-like rows."""
        conn = await aiosqlite.connect(self.db_path, isolation_level=None)

        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")

        # Off by default in SQLite, and per connection
        await conn.execute("PRAGMA foreign_keys=ON")
        conn.row_factory = aiosqlite.Row

        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Acquire a connection from the pool.

        Usage:
            async with pool.acquire() as conn:
                await conn.execute(...)
        """
        if not self._initialized:
            await self.initialize()

        conn = await self._pool.get()
        try:
            yield conn
        finally:
            await self._pool.put(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Acquire a connection inside BEGIN IMMEDIATE ... COMMIT.

        Any exception rolls the whole unit back and propagates.
        """
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                await conn.execute("ROLLBACK")
                raise
            await conn.execute("COMMIT")

    async def close(self) -> None:
        """Close all connections in the pool."""
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._initialized = False
            logger.info("connection_pool_closed")


# Global connection pool
_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Get or create the global connection pool."""
    global _pool
    if _pool is None:
        settings = get_settings()
        _pool = ConnectionPool(
            db_path=settings.storage.db_path,
            pool_size=settings.storage.pool_size,
            busy_timeout=settings.storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    """Close the global connection pool."""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@contextmanager
def database_errors(operation: str) -> Iterator[None]:
    """Re-raise non-constraint SQLite failures as DatabaseError.

    IntegrityError passes through untouched for ``constraint_errors``.
    """
    try:
        yield
    except aiosqlite.IntegrityError:
        raise
    except aiosqlite.Error as e:
        logger.error("sqlite_error", operation=operation, error=str(e))
        raise DatabaseError(operation, str(e)) from e


@asynccontextmanager
async def get_connection(operation: str = "query") -> AsyncIterator[aiosqlite.Connection]:
    """
    Get a connection from the global pool.

    Convenience wrapper for common usage.
    """
    with database_errors(operation):
        pool = await get_pool()
        async with pool.acquire() as conn:
            yield conn


@asynccontextmanager
async def get_transaction(operation: str = "transaction") -> AsyncIterator[aiosqlite.Connection]:
    """
    Get a connection with transaction context.

    Convenience wrapper for transactional operations.
    """
    with database_errors(operation):
        pool = await get_pool()
        async with pool.transaction() as conn:
            yield conn


@contextmanager
def constraint_errors(table: str, operation: str) -> Iterator[None]:
    """Re-raise SQLite integrity failures as ConstraintViolationError.

    The raw SQLite message is kept so callers can tell UNIQUE from
    FOREIGN KEY failures.
    """
    try:
        yield
    except aiosqlite.IntegrityError as e:
        logger.warning(
            "sqlite_constraint_violation",
            table=table,
            operation=operation,
            error=str(e),
        )
        raise ConstraintViolationError(str(e), table=table, operation=operation) from e


def new_id() -> str:
    """Generate a primary key for a new row."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(UTC)
