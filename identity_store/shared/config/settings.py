# 📄 File: identity_store/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The configuration center that reads the identity store's switches (which storage to use,
# whether emails must be unique, how strict usernames are) from environment variables.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-settings based configuration with environment variable loading,
# validation, and type safety for validator flags, message overrides and storage backend.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - shared.config.messages for message templates
#
# 🔄 Connected Modules / Calls From:
# - shared.utils.logging (log level and format)
# - shared.infrastructure.database.connection (engine parameters)
# - user_management factory, UserManager, SmartUserValidator

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from identity_store.shared.config.messages import Messages


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="identity-store", description="Service name stamped on log records")
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log output format (json/text)")

    # =========================================================================
    # USER VALIDATION
    # =========================================================================

    REQUIRE_UNIQUE_EMAIL: bool = Field(
        default=False,
        description="Validate email format and uniqueness before commit",
    )
    ALLOW_ONLY_ALPHANUMERIC_USER_NAMES: bool = Field(
        default=True,
        description="Restrict user names to letters, digits, @, _ and .",
    )
    MESSAGES: Messages = Field(
        default_factory=Messages,
        description="Validation message overrides (JSON object)",
    )

    # =========================================================================
    # STORAGE CONFIGURATION
    # =========================================================================

    STORE_BACKEND: str = Field(default="memory", description="Document repository backend (memory/sql)")
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./identity.db",
        description="SQLAlchemy async database URL",
    )
    DB_ECHO: bool = Field(default=False, description="Echo SQL statements")
    DB_AUTO_CREATE: bool = Field(default=True, description="Create tables on startup")
    USER_COLLECTION: str = Field(default="users", description="Collection holding user documents")
    LOGIN_COLLECTION: str = Field(default="user_logins", description="Collection holding the login index")

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed_formats = ["json", "text"]
        if v.lower() not in allowed_formats:
            raise ValueError(f"Log format must be one of {allowed_formats}")
        return v.lower()

    @field_validator("STORE_BACKEND")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        """Validate storage backend name."""
        allowed_backends = ["memory", "sql"]
        if v.lower() not in allowed_backends:
            raise ValueError(f"Store backend must be one of {allowed_backends}")
        return v.lower()

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.ENVIRONMENT == "test"

    @property
    def user_unique_fields(self) -> tuple:
        """Document fields the backing store must keep unique."""
        fields = ("user_name",)
        if self.REQUIRE_UNIQUE_EMAIL:
            fields += ("normalized_email",)
        return fields


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()


def reset_settings_cache() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
