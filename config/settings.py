"""
Application Settings - Centralized configuration using pydantic-settings.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Logger configuration file
    LOGGER_PROPERTIES_NAME: str = "tag-logger.properties"
    LOGGER_CONFIG_DIR: Optional[str] = None

    # Platform sink (stdlib logging)
    LOG_LEVEL: str = "VERBOSE"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()


# Convenience export
settings = get_settings()
