"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Knowledge base shipped with the package
BUNDLED_KNOWLEDGE_BASE = Path(__file__).resolve().parent.parent.parent / "services" / "knowledge" / "data"


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class KnowledgeSettings(BaseSettings):
    """Knowledge base and cache configuration."""

    model_config = SettingsConfigDict(env_prefix="KNOWLEDGE_")

    base_path: Path = BUNDLED_KNOWLEDGE_BASE
    regulations_dir: str = "regulations"
    config_filename: str = "ai-config.json"

    # Applied uniformly to the AI config and every regulation entry
    cache_ttl_seconds: float = Field(default=300.0, gt=0)

    @property
    def regulations_path(self) -> Path:
        """Directory holding one JSON document per regulation."""
        return self.base_path / self.regulations_dir

    @property
    def config_path(self) -> Path:
        """Path of the AI configuration document."""
        return self.base_path / self.config_filename


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables with sensible defaults.
    Use the global `settings` singleton or call `get_settings()`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: LogLevel = LogLevel.INFO
    json_logs: bool = False
    service_name: str = "rabit-knowledge"

    # Knowledge base
    knowledge: KnowledgeSettings = Field(default_factory=KnowledgeSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()
