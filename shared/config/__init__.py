"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables with type validation and defaults.

Usage:
    from shared.config import settings

    print(settings.environment)
    print(settings.knowledge.cache_ttl_seconds)
"""

from shared.config.settings import (
    BUNDLED_KNOWLEDGE_BASE,
    Environment,
    KnowledgeSettings,
    LogLevel,
    Settings,
    get_settings,
)


# Global settings instance (singleton)
settings = get_settings()

__all__ = [
    "Settings",
    "KnowledgeSettings",
    "get_settings",
    "settings",
    "Environment",
    "LogLevel",
    "BUNDLED_KNOWLEDGE_BASE",
]
