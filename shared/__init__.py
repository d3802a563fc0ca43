"""
Rabit Shared Library
====================

Common configuration, logging, errors and models shared by the knowledge
services and the calculators.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - exceptions: Error taxonomy (not found, malformed, unavailable, ...)
    - models: Shared Pydantic models

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "Rabit Team"

from shared.config import settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
