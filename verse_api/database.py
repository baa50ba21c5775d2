"""
Verse API: Data Source Pool
============================

What:  Opens, health-checks and owns one read-only async SQLAlchemy engine
       per translation, and exposes them through a concurrency-safe lookup.
How:   `initialize()` walks the translation registry once at startup,
       builds a private dict of handles and publishes it as an immutable
       snapshot. `lookup()` reads the snapshot under a lightweight guard.
       `shutdown()` swaps the snapshot for an empty one and disposes the
       engines it took out.
Who:   Constructed by the app factory, initialized/shut down by the lifespan,
       borrowed by VerseService for the duration of a single request.

Connection Pooling Strategy (per translation):
    pool_size=5:      Idle connections kept open between requests
    max_overflow=20:  Extra connections under load (ceiling = 25)
    pool_timeout=30:  Seconds a request blocks once the ceiling is reached
    pool_pre_ping:    Validates connections on checkout

Read-only guarantees:
    1. SQLite URI `mode=ro`: the file is opened read-only by the driver
    2. `PRAGMA query_only = ON` on every new DBAPI connection

Guard discipline:
    The guard protects only publishing/swapping the snapshot reference.
    It is never held across I/O (engine creation, liveness checks, dispose).
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional
from urllib.parse import quote

from sqlalchemy import event, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from verse_api.config import settings
from verse_api.exceptions import InitializationError
from verse_api.registry import TranslationRegistry

logger = logging.getLogger(__name__)

# Touches the schema page, so a file that is not a SQLite database fails here
LIVENESS_QUERY = text("SELECT 1 FROM sqlite_master LIMIT 1")


class Base(DeclarativeBase):
    """Base class for the ORM mapping of translation modules (books, verses)."""
    pass


def build_readonly_url(path: Path) -> URL:
    """
    Build an aiosqlite URL that opens `path` through a read-only SQLite URI.

    The path is percent-quoted so characters that are meaningful inside a
    SQLite URI (`?`, `#`, `%`) cannot truncate the file name.
    """
    return URL.create(
        "sqlite+aiosqlite",
        database=f"file:{quote(str(path.resolve()))}",
        query={"mode": "ro", "uri": "true"},
    )


def _enforce_query_only(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA query_only = ON")
    cursor.close()


@dataclass(frozen=True)
class DataSourceHandle:
    """
    One translation's read-only engine and session factory.

    Owned by DataSourcePool; callers only borrow it for a single request.
    """

    translation: str
    path: Path
    engine: AsyncEngine
    session_factory: async_sessionmaker

    def session(self) -> AsyncSession:
        """New session; use as `async with handle.session() as session:`."""
        return self.session_factory()

    async def dispose(self) -> None:
        await self.engine.dispose()


class DataSourcePool:
    """
    Process-wide lifecycle manager for per-translation data sources.

    Lifecycle:
        pool = DataSourcePool(registry)
        await pool.initialize()      # startup, before serving
        pool.lookup("KJV")           # any number of concurrent requests
        await pool.shutdown()        # after the listener stops

    A translation that fails to initialize stays absent for the lifetime
    of the process; handles are never recreated mid-run.
    """

    def __init__(
        self,
        registry: TranslationRegistry,
        *,
        pool_size: Optional[int] = None,
        max_overflow: Optional[int] = None,
        pool_timeout: Optional[float] = None,
        pool_pre_ping: Optional[bool] = None,
    ):
        self.registry = registry
        self.pool_size = settings.db_pool_size if pool_size is None else pool_size
        self.max_overflow = settings.db_max_overflow if max_overflow is None else max_overflow
        self.pool_timeout = settings.db_pool_timeout if pool_timeout is None else pool_timeout
        self.pool_pre_ping = settings.db_pool_pre_ping if pool_pre_ping is None else pool_pre_ping

        self._guard = threading.Lock()
        self._active: Mapping[str, DataSourceHandle] = MappingProxyType({})
        self._initialized = False

    # ── Startup ───────────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """
        Open and liveness-check every registered translation.

        Missing files and failed liveness checks are logged at WARNING and
        skipped. If nothing could be opened, raises InitializationError.
        Every engine opened by this call is disposed on any failure path,
        including cancellation.

        Raises:
            InitializationError: zero translations were pooled.
            RuntimeError: the pool was already initialized.
        """
        with self._guard:
            if self._initialized:
                raise RuntimeError("DataSourcePool is already initialized")
            self._initialized = True

        opened: Dict[str, DataSourceHandle] = {}
        try:
            for name, path in self.registry.items():
                handle = await self._open(name, path)
                if handle is not None:
                    opened[name] = handle
        except BaseException:
            await self._dispose_all(opened)
            raise

        if not opened:
            raise InitializationError(
                context={"registered": self.registry.names},
            )

        with self._guard:
            self._active = MappingProxyType(opened)

    async def _open(self, name: str, path: Path) -> Optional[DataSourceHandle]:
        if not path.is_file():
            logger.warning("Database file not found for %s: %s", name, path)
            return None

        engine = create_async_engine(
            build_readonly_url(path),
            pool_size=self.pool_size,
            max_overflow=self.max_overflow,
            pool_timeout=self.pool_timeout,
            pool_pre_ping=self.pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )
        event.listen(engine.sync_engine, "connect", _enforce_query_only)

        try:
            async with engine.connect() as conn:
                await conn.execute(LIVENESS_QUERY)
        except (SQLAlchemyError, OSError) as e:
            await engine.dispose()
            logger.warning("Failed to ping database %s: %s", name, e)
            return None
        except BaseException:
            await engine.dispose()
            raise

        logger.info("Successfully connected to %s database", name)
        return DataSourceHandle(
            translation=name,
            path=path,
            engine=engine,
            session_factory=async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            ),
        )

    # ── Request-time access ───────────────────────────────────────────────

    def lookup(self, name: str) -> Optional[DataSourceHandle]:
        """Return the live handle for `name`, or None. Never performs I/O."""
        with self._guard:
            active = self._active
        return active.get(name)

    def available(self) -> List[str]:
        """Translation codes that currently have a live data source."""
        with self._guard:
            active = self._active
        return list(active)

    # ── Shutdown ──────────────────────────────────────────────────────────

    async def shutdown(self) -> None:
        """
        Dispose every handle exactly once. Safe to call more than once.
        """
        with self._guard:
            released = dict(self._active)
            self._active = MappingProxyType({})
        await self._dispose_all(released)

    @staticmethod
    async def _dispose_all(handles: Mapping[str, DataSourceHandle]) -> None:
        for name, handle in handles.items():
            logger.info("Closing database connection for %s", name)
            try:
                await handle.dispose()
            except SQLAlchemyError as e:
                logger.error("Error closing database %s: %s", name, e)
