"""
Logging Module
==============

Structured logging using structlog with JSON output for production
and colored console output for development.

Usage:
    from shared.logging import get_logger, setup_logging_from_settings

    # Setup at application start
    setup_logging_from_settings(settings)

    # Get logger for a module
    logger = get_logger(__name__)

    # Log with context
    logger.info("regulation_loaded", regulation_id="gosi")
    logger.warning("regulation_skipped", regulation_id="broken", error_code="REGULATION_MALFORMED")
"""

from shared.logging.logger import get_logger, setup_logging, setup_logging_from_settings


__all__ = [
    "get_logger",
    "setup_logging",
    "setup_logging_from_settings",
]
