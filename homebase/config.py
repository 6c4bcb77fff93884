"""
Application configuration using pydantic-settings.
Loads values from .env file in project root.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database settings
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "homebase"
    db_user: str = "homebase"
    db_password: str = ""

    # Full SQLAlchemy URL, takes precedence over the db_* parts when set
    # (e.g. sqlite:///./homebase.db for local development)
    database_url_override: str = ""

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    # Default look-ahead for availability listings when no end is given
    availability_window_days: int = 30

    @property
    def database_url(self) -> str:
        """Generate SQLAlchemy database URL."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
