"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

import logging
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB (empty URI selects the SQLite fallback)
    mongodb_uri: str = ""
    mongodb_db: str = "nexusai"
    mongodb_timeout_ms: int = 5000

    # SQLite fallback
    sqlite_path: str = "nexusai.db"

    # Frontend build served as a SPA when present
    frontend_dir: str = "dist"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # App
    debug: bool = False
    log_level: str = "INFO"

    @property
    def sqlite_url(self) -> str:
        """Construct SQLite connection URL"""
        return f"sqlite:///{self.sqlite_path}"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the whole process."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
