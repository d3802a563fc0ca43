"""
Knowledge Runtime
=================

Process-level wiring: one cache manager shared by search, category
resolution and context assembly. Construct once at process start and pass
it to request handlers.

Usage:
    runtime = create_runtime()
    hits = runtime.search.search("gosi")
    context = runtime.context.build_context(["labor-law"], "ar")

Version: 0.1.0
"""

from collections.abc import Callable
from dataclasses import dataclass

from services.knowledge.cache import KnowledgeCacheManager
from services.knowledge.categories import CategoryResolver
from services.knowledge.context import ContextBuilder
from services.knowledge.search import RegulationSearchEngine
from services.knowledge.store import FileRegulationStore, RegulationStore
from shared.config import settings
from shared.logging import get_logger, setup_logging_from_settings


logger = get_logger(__name__)


@dataclass
class KnowledgeRuntime:
    """Components sharing one cache manager."""

    cache: KnowledgeCacheManager
    search: RegulationSearchEngine
    categories: CategoryResolver
    context: ContextBuilder

    def shutdown(self) -> None:
        """Drop cached knowledge at process stop."""
        self.cache.invalidate()
        logger.info("knowledge_runtime_stopped")


def create_runtime(
    store: RegulationStore | None = None,
    ttl_seconds: float | None = None,
    configure_logging: bool = True,
    clock: Callable[[], float] | None = None,
) -> KnowledgeRuntime:
    """
    Build the knowledge runtime.

    Args:
        store: Regulation store (default: file store from settings)
        ttl_seconds: Cache entry lifetime (default from settings)
        configure_logging: Configure structlog from settings first
        clock: Monotonic clock override

    Returns:
        KnowledgeRuntime
    """
    if configure_logging:
        setup_logging_from_settings(settings)

    store = store if store is not None else FileRegulationStore()
    if clock is None:
        cache = KnowledgeCacheManager(store, ttl_seconds=ttl_seconds)
    else:
        cache = KnowledgeCacheManager(store, ttl_seconds=ttl_seconds, clock=clock)

    logger.info(
        "knowledge_runtime_started",
        environment=settings.environment.value,
        store=type(store).__name__,
        ttl_seconds=cache.ttl_seconds,
    )

    return KnowledgeRuntime(
        cache=cache,
        search=RegulationSearchEngine(cache),
        categories=CategoryResolver(cache),
        context=ContextBuilder(cache),
    )
