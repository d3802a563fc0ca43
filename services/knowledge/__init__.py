"""
Regulatory Knowledge Service
============================

Versioned bilingual regulation records behind a time-bounded cache,
with relevance search, category resolution and context assembly for
the text-generation service.

Components:
- RegulationStore: Read contract (file and in-memory implementations)
- KnowledgeCacheManager: TTL cache, invalidation, refresh
- RegulationSearchEngine: Weighted keyword relevance
- CategoryResolver: Curated mapping with full-scan fallback
- ContextBuilder: Localized context blocks, templates, greetings
- ComplianceChecker: Rule checks of employer facts per regulation
- KnowledgeRuntime: Process-level wiring around one cache manager

Version: 0.1.0
"""

from services.knowledge.cache import CacheEntry, KnowledgeCacheManager
from services.knowledge.categories import CATEGORY_MAP, CategoryResolver
from services.knowledge.compliance import (
    ComplianceChecker,
    ComplianceFacts,
    ComplianceReport,
    ComplianceThresholds,
)
from services.knowledge.context import ContextBuilder, topic_regulation_ids
from services.knowledge.runtime import KnowledgeRuntime, create_runtime
from services.knowledge.search import (
    MatchedField,
    RegulationSearchEngine,
    SearchHit,
    SearchOptions,
)
from services.knowledge.stats import (
    KnowledgeBaseStats,
    knowledge_base_stats,
    knowledge_base_versions,
    regulations_summary,
)
from services.knowledge.store import (
    FileRegulationStore,
    InMemoryRegulationStore,
    RegulationStore,
)


__all__ = [
    # Store
    "RegulationStore",
    "FileRegulationStore",
    "InMemoryRegulationStore",
    # Cache
    "KnowledgeCacheManager",
    "CacheEntry",
    # Search
    "RegulationSearchEngine",
    "SearchOptions",
    "SearchHit",
    "MatchedField",
    # Categories
    "CategoryResolver",
    "CATEGORY_MAP",
    # Context
    "ContextBuilder",
    "topic_regulation_ids",
    # Compliance
    "ComplianceChecker",
    "ComplianceFacts",
    "ComplianceReport",
    "ComplianceThresholds",
    # Runtime
    "KnowledgeRuntime",
    "create_runtime",
    # Stats
    "KnowledgeBaseStats",
    "knowledge_base_stats",
    "knowledge_base_versions",
    "regulations_summary",
]
