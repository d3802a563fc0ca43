"""
Knowledge Base Statistics Tests
===============================

Version: 0.1.0
"""

from services.knowledge import (
    InMemoryRegulationStore,
    KnowledgeCacheManager,
    knowledge_base_stats,
    knowledge_base_versions,
    regulations_summary,
)


class TestKnowledgeBaseStats:
    """Tests for corpus summaries."""

    def test_counts(self, cache_manager: KnowledgeCacheManager) -> None:
        stats = knowledge_base_stats(cache_manager)

        assert stats.total_regulations == 5
        assert stats.categories == {
            "social_insurance": 1,
            "labor": 1,
            "saudization": 1,
            "general": 1,
            "unemployment": 1,
        }
        assert stats.status == {"active": 5, "draft": 0, "deprecated": 0}
        assert stats.skipped == []
        assert stats.last_update is None

    def test_last_update_is_refresh_time(self, cache_manager: KnowledgeCacheManager) -> None:
        cache_manager.refresh()

        stats = knowledge_base_stats(cache_manager)

        assert stats.last_update == cache_manager.last_refreshed_at
        assert stats.last_update is not None

    def test_skipped_records_reported(
        self,
        cache_manager: KnowledgeCacheManager,
        memory_store: InMemoryRegulationStore,
    ) -> None:
        memory_store.regulations["broken"] = {"id": "broken"}
        memory_store.regulations["gosi"]["status"] = "deprecated"

        stats = knowledge_base_stats(cache_manager)

        assert stats.total_regulations == 5
        assert stats.skipped == ["broken"]
        assert stats.status["deprecated"] == 1

    def test_versions(self, cache_manager: KnowledgeCacheManager) -> None:
        versions = {v.id: v.version for v in knowledge_base_versions(cache_manager)}

        assert versions["gosi"] == "2024.2"
        assert versions["labor-law"] == "1.0"

    def test_summary_in_language(self, cache_manager: KnowledgeCacheManager) -> None:
        rows = {row.id: row for row in regulations_summary(cache_manager, "ar")}

        assert rows["labor-law"].name == "نظام العمل"
        assert rows["labor-law"].last_update == "2024-01-01"
