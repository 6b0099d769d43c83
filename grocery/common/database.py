"""
Async SQLAlchemy engine/session handling for the grocery tables

Only initialized when DATABASE_URL is set. Repositories receive
`sessionmanager.session` as their session factory, so every repository call
runs in its own short transaction (request handlers and background
enrichment tasks never share a session).
"""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

logger = structlog.get_logger()


def to_async_url(database_url: str) -> str:
    """postgresql:// → postgresql+asyncpg:// (other URLs pass through)"""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return database_url


class DatabaseSessionManager:
    """Owns the engine and hands out commit-on-success sessions"""

    def __init__(self) -> None:
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None
        self._init_lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._sessionmaker is not None

    async def init(self, database_url: str, **engine_kwargs) -> None:
        """
        Create the engine once; later calls are no-ops.

        Args:
            database_url: Sync or async Postgres URL
            **engine_kwargs: Overrides for create_async_engine
        """
        async with self._init_lock:
            if self.initialized:
                return

            options = {
                "pool_size": 5,
                "max_overflow": 5,
                "pool_pre_ping": True,
                "pool_recycle": 1800,
                **engine_kwargs,
            }
            self._engine = create_async_engine(to_async_url(database_url), **options)
            self._sessionmaker = async_sessionmaker(
                bind=self._engine,
                expire_on_commit=False,
                autoflush=False,
            )

        logger.info("database_initialized", pool_size=options["pool_size"])

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("database_closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        One transaction: commit when the block exits cleanly, roll back otherwise.

        Raises:
            RuntimeError: init() has not been called
        """
        if self._sessionmaker is None:
            raise RuntimeError("Database not initialized (DATABASE_URL unset?)")

        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> None:
        """Round-trip a trivial query (raises on connection failure)"""
        async with self.session() as session:
            await session.execute(text("SELECT 1"))


sessionmanager = DatabaseSessionManager()
