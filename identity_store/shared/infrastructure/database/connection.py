# 📄 File: identity_store/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to the SQL database used when user records must survive restarts,
# and creates the storage tables the first time it is used.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine and session factory construction from settings, declarative Base
# shared by ORM models, and table creation; driver failures surface as StoreUnavailableError.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine and sessions)
# - shared.config.settings (database configuration)
# - aiosqlite / asyncpg (async drivers selected by DATABASE_URL)
#
# 🔄 Connected Modules / Calls From:
# - user_management infrastructure models and SqlAlchemyDocumentRepository
# - user_management factory (STORE_BACKEND=sql)

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from identity_store.shared.config.settings import Settings, get_settings
from identity_store.shared.core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_engine(settings: Optional[Settings] = None, url: Optional[str] = None) -> AsyncEngine:
    """
    Build the async engine.

    Args:
        settings: Settings to read DATABASE_URL / DB_ECHO from
        url: Explicit URL overriding settings.DATABASE_URL

    Returns:
        AsyncEngine
    """
    settings = settings or get_settings()
    database_url = url or settings.DATABASE_URL
    logger.info(f"Creating database engine for {database_url.split('://', 1)[0]}")
    return create_async_engine(
        database_url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory with objects kept accessible after commit."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=True,
    )


async def init_models(engine: AsyncEngine) -> None:
    """
    Create every table registered on Base.

    Raises:
        StoreUnavailableError: If the database cannot be reached
    """
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")
    except SQLAlchemyError as e:
        logger.error(f"Failed to create database tables: {e}")
        raise StoreUnavailableError(f"Table creation failed: {e}", operation="create_all") from e


async def dispose_engine(engine: AsyncEngine) -> None:
    await engine.dispose()
    logger.info("Database engine disposed")
