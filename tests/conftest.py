"""
Pytest configuration and shared fixtures for identity store tests.
"""

import pytest

from identity_store.modules.user_management.domain.services.user_manager import UserManager
from identity_store.modules.user_management.domain.services.user_validator import SmartUserValidator
from identity_store.modules.user_management.infrastructure.database.memory_repository import (
    InMemoryDocumentRepository,
)
from identity_store.modules.user_management.infrastructure.database.user_store import UserStore
from identity_store.shared.config.settings import Settings, reset_settings_cache


@pytest.fixture(autouse=True)
def clean_settings_cache():
    """Keep cached settings from leaking between tests."""
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def settings() -> Settings:
    """Test settings with email uniqueness enforced."""
    return Settings(
        ENVIRONMENT="test",
        STORE_BACKEND="memory",
        REQUIRE_UNIQUE_EMAIL=True,
        ALLOW_ONLY_ALPHANUMERIC_USER_NAMES=True,
    )


@pytest.fixture
def store(settings: Settings) -> UserStore:
    """UserStore over in-memory repositories with the configured unique fields."""
    return UserStore(
        InMemoryDocumentRepository(settings.USER_COLLECTION, settings.user_unique_fields),
        InMemoryDocumentRepository(settings.LOGIN_COLLECTION),
    )


@pytest.fixture
def validator(store: UserStore, settings: Settings) -> SmartUserValidator:
    return SmartUserValidator(store, settings=settings)


@pytest.fixture
def manager(store: UserStore, settings: Settings) -> UserManager:
    return UserManager(store, settings=settings)
