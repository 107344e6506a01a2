# findata/core/database.py
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from fastapi import Request
from .config import Settings
import logging
from typing import AsyncGenerator

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this pragma is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> AsyncEngine:
    engine_kwargs = {
        "echo": False,
        "future": True,
    }

    if settings.is_sqlite:
        engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        logger.info("Configured engine for SQLite (foreign keys enabled)")
        return engine

    engine_kwargs.update({
        "pool_size": 5,
        "max_overflow": 5,
        "pool_timeout": 30,       # Seconds to wait for a free connection
        "pool_pre_ping": True,    # Check connection before using
        "pool_recycle": 300,      # Recycle connections after 5 minutes
    })
    return create_async_engine(settings.DATABASE_URL, **engine_kwargs)


class Database:
    """Engine plus session factory, built once per application instance."""

    def __init__(self, settings: Settings):
        self.engine = build_engine(settings)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            class_=AsyncSession,
        )

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


# Dependency to get DB session with proper exception handling
async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.db
    session = database.session_factory()
    try:
        yield session
    except Exception as e:
        # Store errors are logged where they are translated; this only cleans up
        logger.debug(f"Rolling back session after {type(e).__name__}")
        await session.rollback()
        raise
    finally:
        await session.close()
        logger.debug("Database session closed")
