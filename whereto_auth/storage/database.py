"""Async database connection with PostgreSQL/SQLite support.

Uses asyncpg for PostgreSQL or aiosqlite for SQLite.
SQLModel provides the ORM layer on top of SQLAlchemy.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from whereto_auth import config

logger = logging.getLogger(__name__)


def normalize_database_url(url: str) -> str:
    """Point postgres URLs at the asyncpg driver."""
    # Hosting platforms use postgres:// but SQLAlchemy needs postgresql://
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Database:
    """Owns the engine and session factory.

    Created by the process entry point and passed to whatever needs it.
    ``connect`` and ``close`` bracket its lifetime.
    """

    def __init__(self, url: str = config.DATABASE_URL, echo: bool = False):
        self.url = normalize_database_url(url)
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> None:
        if self._engine is not None:
            return

        engine_kwargs = {"echo": self.echo}
        # SQLite needs special handling for async
        if "sqlite" in self.url:
            engine_kwargs["connect_args"] = {"check_same_thread": False}

        self._engine = create_async_engine(self.url, **engine_kwargs)
        url = self._engine.url
        if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Connected to database %s", self._engine.url.render_as_string(hide_password=True))

    async def init_schema(self) -> None:
        """Create all tables. Safe to call multiple times."""
        # Import models to ensure they're registered with SQLModel.metadata
        from whereto_auth.storage import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connection closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Transactional session: commits on success, rolls back on error."""
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
