"""Application settings and configuration.

This module defines all configuration options for the book club API.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Book Club", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./bookclub.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Session cookie settings
    session_cookie_name: str = Field(default="session_token", alias="SESSION_COOKIE_NAME")
    session_ttl_days: int = Field(default=30, alias="SESSION_TTL_DAYS")
    session_cookie_secure: bool = Field(default=True, alias="SESSION_COOKIE_SECURE")

    # Password policy
    password_min_length: int = Field(default=8, alias="PASSWORD_MIN_LENGTH")

    # Suggestions
    reject_duplicate_work_keys: bool = Field(default=False, alias="REJECT_DUPLICATE_WORK_KEYS")

    # Open Library metadata lookup
    open_library_base_url: str = Field(
        default="https://openlibrary.org",
        alias="OPEN_LIBRARY_BASE_URL",
    )
    open_library_covers_url: str = Field(
        default="https://covers.openlibrary.org",
        alias="OPEN_LIBRARY_COVERS_URL",
    )
    open_library_timeout_seconds: float = Field(
        default=10.0,
        alias="OPEN_LIBRARY_TIMEOUT_SECONDS",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def session_max_age_seconds(self) -> int:
        """Return the session lifetime in seconds for cookie Max-Age."""
        return self.session_ttl_days * 24 * 60 * 60


settings = Settings()
