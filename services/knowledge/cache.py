"""
Knowledge Cache Manager
=======================

Time-bounded in-memory cache over the regulation store.

Features:
- Per-entry TTL (config, the id list and every regulation share one duration)
- Explicit invalidation and eager refresh
- Partial-failure bulk enumeration
- Serialized load-and-store; entries are swapped in whole

One long-lived instance is constructed at process start and passed to
every component that needs regulations.

Version: 0.1.0
"""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Generic, TypeVar

from pydantic import ValidationError

from services.knowledge.store import FileRegulationStore, RegulationStore
from shared.config import settings
from shared.exceptions import ConfigUnavailable, KnowledgeError
from shared.logging import get_logger
from shared.models import AIConfig, PartialResult, Regulation, parse_regulation


logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value and the clock reading when it was loaded."""

    value: T
    loaded_at: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return now - self.loaded_at < ttl_seconds


class KnowledgeCacheManager:
    """
    Owns every live Regulation and AIConfig instance.

    Cached records are frozen models; callers receive them read-only and
    must not hold them past a single request.
    """

    def __init__(
        self,
        store: RegulationStore | None = None,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the cache manager.

        Args:
            store: Regulation store (default: bundled JSON knowledge base)
            ttl_seconds: Entry lifetime (default from settings, 5 minutes)
            clock: Monotonic clock, injectable for tests
        """
        self.store = store if store is not None else FileRegulationStore()
        self.ttl_seconds = (
            ttl_seconds if ttl_seconds is not None else settings.knowledge.cache_ttl_seconds
        )
        self._clock = clock
        self._lock = threading.RLock()

        self._config_entry: CacheEntry[AIConfig] | None = None
        self._ids_entry: CacheEntry[tuple[str, ...]] | None = None
        self._regulation_entries: dict[str, CacheEntry[Regulation]] = {}
        self.last_refreshed_at: datetime | None = None

    # =========================================================================
    # Configuration
    # =========================================================================

    def load_config(self) -> AIConfig:
        """
        Get the AI configuration.

        Returns:
            Cached AIConfig while fresh, otherwise a fresh read

        Raises:
            ConfigUnavailable: If the store cannot produce a valid config
        """
        entry = self._config_entry
        if entry is not None and entry.is_fresh(self._clock(), self.ttl_seconds):
            return entry.value

        with self._lock:
            entry = self._config_entry
            if entry is not None and entry.is_fresh(self._clock(), self.ttl_seconds):
                return entry.value

            raw = self.store.read_config()
            try:
                config = AIConfig.model_validate(raw)
            except ValidationError as e:
                logger.error("ai_config_invalid", error_count=e.error_count())
                raise ConfigUnavailable(f"invalid configuration ({e.error_count()} errors)") from e

            self._config_entry = CacheEntry(value=config, loaded_at=self._clock())
            logger.debug("ai_config_loaded")
            return config

    # =========================================================================
    # Regulations
    # =========================================================================

    def load_regulation(self, regulation_id: str) -> Regulation:
        """
        Get one regulation.

        Args:
            regulation_id: Regulation identifier

        Returns:
            Cached Regulation while fresh, otherwise a fresh read

        Raises:
            RegulationNotFound: If the store has no record
            RegulationMalformed: If the record fails validation
        """
        entry = self._regulation_entries.get(regulation_id)
        if entry is not None and entry.is_fresh(self._clock(), self.ttl_seconds):
            return entry.value

        with self._lock:
            # Another caller may have loaded it while we waited
            entry = self._regulation_entries.get(regulation_id)
            if entry is not None and entry.is_fresh(self._clock(), self.ttl_seconds):
                return entry.value

            raw = self.store.read_regulation(regulation_id)
            regulation = parse_regulation(regulation_id, raw)

            self._regulation_entries[regulation_id] = CacheEntry(
                value=regulation,
                loaded_at=self._clock(),
            )
            logger.debug(
                "regulation_loaded",
                regulation_id=regulation_id,
                version=regulation.version,
                variant=type(regulation).__name__,
            )
            return regulation

    def load_all_regulations(self) -> PartialResult[Regulation]:
        """
        Load every regulation the store knows.

        A record that fails to load is skipped and reported in the result's
        failures; it never blocks the rest of the corpus.

        Returns:
            PartialResult keyed by regulation id, in store enumeration order

        Raises:
            StoreUnavailable: If the store cannot enumerate identifiers
        """
        result: PartialResult[Regulation] = PartialResult()

        for regulation_id in self._list_ids():
            try:
                result.add_success(regulation_id, self.load_regulation(regulation_id))
            except KnowledgeError as e:
                result.add_failure(regulation_id, e)
                logger.warning(
                    "regulation_skipped",
                    regulation_id=regulation_id,
                    error_code=e.error_code,
                    error=e.message,
                )

        return result

    def regulations_by_id(self) -> dict[str, Regulation]:
        """Mapping view of `load_all_regulations` successes."""
        return dict(self.load_all_regulations().successes)

    def available_ids(self) -> list[str]:
        """Identifiers known to the store, as of the last enumeration."""
        return list(self._list_ids())

    def _list_ids(self) -> tuple[str, ...]:
        entry = self._ids_entry
        if entry is not None and entry.is_fresh(self._clock(), self.ttl_seconds):
            return entry.value

        with self._lock:
            entry = self._ids_entry
            if entry is not None and entry.is_fresh(self._clock(), self.ttl_seconds):
                return entry.value

            ids = tuple(self.store.list_ids())
            self._ids_entry = CacheEntry(value=ids, loaded_at=self._clock())
            logger.debug("regulation_ids_listed", count=len(ids))
            return ids

    @property
    def cached_ids(self) -> list[str]:
        """Identifiers currently held in memory, fresh or stale."""
        return list(self._regulation_entries)

    # =========================================================================
    # Invalidation
    # =========================================================================

    def invalidate(self) -> None:
        """Drop every entry; the next access reads from the store."""
        with self._lock:
            dropped = len(self._regulation_entries)
            self._config_entry = None
            self._ids_entry = None
            self._regulation_entries = {}
        logger.info("knowledge_cache_invalidated", dropped_regulations=dropped)

    def refresh(self, strict: bool = True) -> PartialResult[Regulation]:
        """
        Invalidate, then eagerly reload config and all regulations.

        Args:
            strict: Raise PartialFailure when any regulation failed to load
                (valid records stay cached either way)

        Returns:
            PartialResult of the reload

        Raises:
            ConfigUnavailable: If the config cannot be loaded
            PartialFailure: If strict and any regulation failed
        """
        self.invalidate()
        self.load_config()
        result = self.load_all_regulations()
        self.last_refreshed_at = datetime.now(UTC)

        logger.info(
            "knowledge_cache_refreshed",
            loaded=len(result),
            failed=len(result.failures),
        )

        if strict:
            result.raise_for_failures()
        return result
