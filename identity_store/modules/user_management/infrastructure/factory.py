# 📄 File: identity_store/modules/user_management/infrastructure/factory.py
# 🧭 Purpose (Layman Explanation):
# Puts the identity store together from its settings: picks memory or SQL storage,
# tells it which values must stay unique, and hands back a ready-to-use store or manager.
# 🧪 Purpose (Technical Summary):
# Wiring functions building UserStore and UserManager from Settings; the SQL backend gets its
# engine, session factory and (optionally) tables created here.
# 🔗 Dependencies:
# shared.config.settings, shared.infrastructure.database.connection, repository backends
# 🔄 Connected Modules / Calls From:
# Application startup, integration tests

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from identity_store.modules.user_management.domain.repositories.document_repository import DocumentRepository
from identity_store.modules.user_management.domain.services.user_manager import UserManager
from identity_store.modules.user_management.infrastructure.database.memory_repository import (
    InMemoryDocumentRepository,
)
from identity_store.modules.user_management.infrastructure.database.sqlalchemy_repository import (
    SqlAlchemyDocumentRepository,
)
from identity_store.modules.user_management.infrastructure.database.user_store import UserStore
from identity_store.shared.config.settings import Settings, get_settings
from identity_store.shared.infrastructure.database.connection import (
    create_engine,
    create_session_factory,
    init_models,
)

logger = logging.getLogger(__name__)


async def build_user_store(
    settings: Optional[Settings] = None,
    session_factory: Optional[async_sessionmaker] = None
) -> UserStore:
    """
    Build a UserStore for the configured backend.

    Args:
        settings: Settings to use (defaults to get_settings())
        session_factory: Existing SQL session factory; when omitted for the
            sql backend an engine is created from DATABASE_URL

    Returns:
        UserStore
    """
    settings = settings or get_settings()

    if settings.STORE_BACKEND == "memory":
        users: DocumentRepository = InMemoryDocumentRepository(
            settings.USER_COLLECTION, settings.user_unique_fields
        )
        logins: DocumentRepository = InMemoryDocumentRepository(settings.LOGIN_COLLECTION)
    else:
        if session_factory is None:
            engine = create_engine(settings)
            if settings.DB_AUTO_CREATE:
                await init_models(engine)
            session_factory = create_session_factory(engine)
        users = SqlAlchemyDocumentRepository(
            session_factory, settings.USER_COLLECTION, settings.user_unique_fields
        )
        # unique fields depend on settings; existing rows need keys for the current set
        await users.rebuild_keys()
        logins = SqlAlchemyDocumentRepository(session_factory, settings.LOGIN_COLLECTION)

    logger.info(
        f"User store built on {settings.STORE_BACKEND} backend "
        f"(unique fields: {', '.join(settings.user_unique_fields)})"
    )
    return UserStore(users, logins)


async def build_user_manager(
    settings: Optional[Settings] = None,
    session_factory: Optional[async_sessionmaker] = None
) -> UserManager:
    """Build a UserManager with a SmartUserValidator over a freshly built store."""
    settings = settings or get_settings()
    store = await build_user_store(settings, session_factory)
    return UserManager(store, settings=settings)
