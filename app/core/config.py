from typing import List, Optional
from urllib.parse import quote_plus

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


"""Configuration settings using pydantic-settings BaseSettings. - config"""


class DatabaseConfig(BaseSettings):
    """Relational store connection parameters, read from DB_* variables. - database_config"""
    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: SecretStr = Field(default=SecretStr("postgres"))
    name: str = "schools"

    # Bounded pool: at most pool_size connections, no overflow
    pool_size: int = Field(default=10, ge=1)
    # Seconds to wait for a free pooled connection
    pool_timeout: float = 10.0
    # Seconds to wait when opening a new connection to the server
    connect_timeout: float = 10.0

    ssl: bool = False

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def url(self) -> str:
        """Build an asyncpg connection URL from the individual fields. - url"""
        user = quote_plus(self.user)
        password = quote_plus(self.password.get_secret_value())
        return f"postgresql+asyncpg://{user}:{password}@{self.host}:{self.port}/{self.name}"


class Settings(BaseSettings):
    """Application settings.

    - Reads configuration from environment variables and a local .env file
    - Fields: app_name, app_version, host, port, debug, log_level, log_file,
      strict_startup, cors_origins, database_url plus the nested DB_* database block
    """
    app_name: str = "School Management API"
    app_version: str = "1.0.0"

    host: str = "0.0.0.0"
    port: int = 3001
    debug: bool = False

    log_level: str = "INFO"
    # When set, logs are also written to this file (rotated)
    log_file: Optional[str] = None

    # If true, a failure to create the schools table at startup aborts the process.
    # If false, the failure is logged and the API keeps serving (store calls will fail with 500).
    strict_startup: bool = True

    cors_origins: List[str] = ["*"]

    # Full SQLAlchemy async URL. Overrides the DB_* fields when provided.
    database_url: Optional[str] = None

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        """Return database_url if set, otherwise the URL built from DB_* fields. - resolved_database_url"""
        return self.database_url or self.database.url


def get_settings() -> Settings:
    """Return a Settings instance for dependency injection. - get_settings"""
    return Settings()
