"""
Knowledge Base Statistics
=========================

Corpus summaries: counts by category and status, versions, and a
per-language listing.

Version: 0.1.0
"""

from dataclasses import dataclass, field
from datetime import datetime

from services.knowledge.cache import KnowledgeCacheManager
from shared.models import Language, RegulationStatus


UNCATEGORIZED = "general"


@dataclass
class RegulationVersion:
    """Version information of one regulation."""

    id: str
    version: str
    last_amendment: str


@dataclass
class RegulationSummary:
    """Listing row resolved to one language."""

    id: str
    name: str
    version: str
    last_update: str


@dataclass
class KnowledgeBaseStats:
    """Corpus statistics."""

    total_regulations: int
    categories: dict[str, int] = field(default_factory=dict)
    status: dict[str, int] = field(default_factory=dict)
    versions: list[RegulationVersion] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    # Time of the last explicit refresh; None until one has run
    last_update: datetime | None = None


def knowledge_base_stats(cache: KnowledgeCacheManager) -> KnowledgeBaseStats:
    """
    Summarize the loadable corpus.

    Uncategorized regulations count under "general"; records that failed
    to load are listed in `skipped`.
    """
    result = cache.load_all_regulations()

    categories: dict[str, int] = {}
    status = {s.value: 0 for s in RegulationStatus}
    versions: list[RegulationVersion] = []

    for regulation in result:
        category = regulation.category or UNCATEGORIZED
        categories[category] = categories.get(category, 0) + 1
        status[regulation.status.value] += 1
        versions.append(
            RegulationVersion(
                id=regulation.id,
                version=regulation.version,
                last_amendment=regulation.last_amendment,
            )
        )

    return KnowledgeBaseStats(
        total_regulations=len(result),
        categories=categories,
        status=status,
        versions=versions,
        skipped=result.failed_keys,
        last_update=cache.last_refreshed_at,
    )


def knowledge_base_versions(cache: KnowledgeCacheManager) -> list[RegulationVersion]:
    """Version and amendment date of every loadable regulation."""
    return knowledge_base_stats(cache).versions


def regulations_summary(
    cache: KnowledgeCacheManager,
    language: Language | str,
) -> list[RegulationSummary]:
    """One row per regulation, names resolved to `language`."""
    return [
        RegulationSummary(
            id=regulation.id,
            name=regulation.name.get(language),
            version=regulation.version,
            last_update=regulation.last_amendment,
        )
        for regulation in cache.load_all_regulations()
    ]
