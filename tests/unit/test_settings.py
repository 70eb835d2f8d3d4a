"""Settings and message template tests."""

import pytest
from pydantic import ValidationError

from identity_store.shared.config.messages import Messages
from identity_store.shared.config.settings import Settings, get_settings

SETTINGS_ENV = [
    "ENVIRONMENT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "REQUIRE_UNIQUE_EMAIL",
    "ALLOW_ONLY_ALPHANUMERIC_USER_NAMES",
    "MESSAGES",
    "STORE_BACKEND",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings(_env_file=None)

    assert settings.REQUIRE_UNIQUE_EMAIL is False
    assert settings.ALLOW_ONLY_ALPHANUMERIC_USER_NAMES is True
    assert settings.STORE_BACKEND == "memory"
    assert settings.MESSAGES == Messages()
    assert settings.user_unique_fields == ("user_name",)


def test_environment_overrides(clean_env):
    clean_env.setenv("REQUIRE_UNIQUE_EMAIL", "true")
    clean_env.setenv("ALLOW_ONLY_ALPHANUMERIC_USER_NAMES", "false")
    clean_env.setenv("STORE_BACKEND", "SQL")
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("ENVIRONMENT", "Test")

    settings = Settings(_env_file=None)

    assert settings.REQUIRE_UNIQUE_EMAIL is True
    assert settings.ALLOW_ONLY_ALPHANUMERIC_USER_NAMES is False
    assert settings.STORE_BACKEND == "sql"
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.is_testing
    assert settings.user_unique_fields == ("user_name", "normalized_email")


def test_message_overrides_from_json(clean_env):
    clean_env.setenv("MESSAGES", '{"DuplicateName": "{0} is taken", "email_too_short": "Need an email"}')

    messages = Settings(_env_file=None).MESSAGES

    assert messages.duplicate_name == "{0} is taken"
    assert messages.email_too_short == "Need an email"
    assert messages.invalid_email == Messages().invalid_email


@pytest.mark.parametrize("name, value", [
    ("STORE_BACKEND", "mongo"),
    ("LOG_LEVEL", "LOUD"),
    ("LOG_FORMAT", "xml"),
    ("ENVIRONMENT", "qa"),
])
def test_invalid_values_rejected(clean_env, name, value):
    clean_env.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached(clean_env):
    assert get_settings() is get_settings()


def test_templates_take_one_positional_value():
    messages = Messages()

    assert "bob smith" in messages.invalid_user_name.format("bob smith")
    assert messages.duplicate_email.format("a@b.com") == "Email 'a@b.com' is already taken."
