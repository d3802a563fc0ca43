"""
Logger Implementation
=====================

structlog configuration for the knowledge services and calculators.

Every record carries the service name, version and deployment environment.
Production renders one JSON object per line with Arabic text left readable;
development renders colored console lines with rich tracebacks.

Version: 0.1.0
"""

import logging
import sys
from typing import IO, TYPE_CHECKING

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from shared.config.settings import Settings


SERVICE_VERSION = "0.1.0"


def _service_context(service_name: str, environment: str | None) -> Processor:
    """Processor stamping the service identity on records that lack it."""
    context = {"service": service_name, "version": SERVICE_VERSION}
    if environment:
        context["environment"] = environment

    def add_service_context(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_service_context


def _output_processors(json_logs: bool) -> tuple[Processor, Processor]:
    """Exception handling and final renderer for the output format."""
    if json_logs:
        return (
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        )
    return (
        structlog.dev.set_exc_info,
        structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.RichTracebackFormatter(max_frames=10),
        ),
    )


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    service_name: str = "rabit-knowledge",
    environment: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """
    Configure structlog and the root stdlib logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render JSON lines instead of console output
        service_name: Service name stamped on every record
        environment: Deployment environment stamped on every record
        stream: Output stream (default: stdout)
    """
    exc_processor, renderer = _output_processors(json_logs)

    shared_processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        _service_context(service_name, environment),
        structlog.processors.StackInfoRenderer(),
        exc_processor,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Records from stdlib loggers go through the same chain
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())


def setup_logging_from_settings(settings: "Settings", stream: IO[str] | None = None) -> None:
    """
    Configure logging for a deployment.

    Production always logs JSON; elsewhere `json_logs` decides.
    """
    setup_logging(
        log_level=settings.log_level.value,
        json_logs=settings.json_logs or settings.is_production,
        service_name=settings.service_name,
        environment=settings.environment.value,
        stream=stream,
    )


def get_logger(name: str | None = None) -> "BoundLogger":
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        BoundLogger

    Example:
        logger = get_logger(__name__)
        logger.info("regulation_loaded", regulation_id="gosi", version="2025.1")
    """
    return structlog.stdlib.get_logger(name)
