"""
PrayerSpot Backend — Store Session Management
==============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all store connection logic in one place.
How:   A `Database` object owns one engine (connection pool) and one session
       factory. The application factory builds exactly one per process and
       keeps it on `app.state`; route handlers receive a per-request session
       through `Depends(get_db_session)`.
Who:   Built by `create_app()`, consumed by route handlers and the health probe.

Connection behaviour:
    The engine connects lazily. At startup `Database.ping()` probes the store
    with tenacity retries; a failed probe is logged by the caller and is not
    fatal. Requests issued while the store is unreachable fail at query time.
"""

import logging
from typing import Any, AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    stop_after_attempt,
    wait_exponential,
)

from prayerspot.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object between the models, `Database.create_all()`
    and Alembic autogeneration.
    """
    pass


class Database:
    """
    One store handle per process: engine, pool and session factory.

    Args:
        url: Async SQLAlchemy URL (postgresql+asyncpg://..., sqlite+aiosqlite://...)
        engine_kwargs: Passed straight to `create_async_engine`.
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        # expire_on_commit=False: handlers read attributes after the commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "Database":
        """Build the process-wide store handle from application settings."""
        config = config or default_settings
        engine_kwargs: dict = {"echo": config.log_level == "DEBUG"}
        if not config.is_sqlite:
            engine_kwargs.update(
                pool_size=config.db_pool_size,
                max_overflow=config.db_max_overflow,
                pool_pre_ping=config.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return cls(config.database_url, **engine_kwargs)

    async def ping(self) -> None:
        """Run `SELECT 1`; raises whatever the driver raises."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def ping_with_retry(
        self,
        attempts: int = 3,
        min_wait: float = 1,
        max_wait: float = 5,
    ) -> None:
        """
        Probe the store, retrying with exponential backoff.

        Raises the last error once every attempt has failed.
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                await self.ping()

    async def create_all(self) -> None:
        """Create every mapped table that does not exist yet (dev bootstrap, tests)."""
        # Models register themselves on Base.metadata when imported
        import prayerspot.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close every pooled connection (application shutdown)."""
        await self.engine.dispose()


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a store session per request.

    The `Database` is read from `request.app.state.database`, so each app
    instance carries its own injected store handle.

    Example usage in a route:
        @router.get("/api/servicedetails")
        async def list_services(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            # Roll back partial writes, then let the global handlers respond
            await session.rollback()
            raise
        finally:
            await session.close()
