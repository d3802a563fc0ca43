"""
Knowledge Runtime Tests
=======================

Version: 0.1.0
"""

from services.knowledge import InMemoryRegulationStore, KnowledgeRuntime, create_runtime
from tests.conftest import FakeClock


class TestCreateRuntime:
    """Tests for process-level wiring."""

    def test_components_share_cache(
        self,
        memory_store: InMemoryRegulationStore,
        fake_clock: FakeClock,
    ) -> None:
        runtime = create_runtime(memory_store, ttl_seconds=30, configure_logging=False, clock=fake_clock)

        assert isinstance(runtime, KnowledgeRuntime)
        assert runtime.search.cache is runtime.cache
        assert runtime.categories.cache is runtime.cache
        assert runtime.context.cache is runtime.cache
        assert runtime.cache.ttl_seconds == 30

    def test_end_to_end(self, memory_store: InMemoryRegulationStore, fake_clock: FakeClock) -> None:
        """Search, resolve and build context through one runtime."""
        runtime = create_runtime(memory_store, configure_logging=False, clock=fake_clock)

        ids = [hit.regulation.id for hit in runtime.search.search("gosi")]
        ids += [r.id for r in runtime.categories.resolve_category("labor")]
        context = runtime.context.build_context(ids, "en")

        assert ids == ["gosi", "labor-law"]
        assert context.index("Social Insurance Law") < context.index("Labor Law")

    def test_shutdown_drops_cache(self, memory_store: InMemoryRegulationStore) -> None:
        runtime = create_runtime(memory_store, configure_logging=False)
        runtime.cache.load_regulation("gosi")

        runtime.shutdown()

        assert runtime.cache.cached_ids == []

    def test_default_ttl_from_settings(self, memory_store: InMemoryRegulationStore) -> None:
        runtime = create_runtime(memory_store, configure_logging=False)

        assert runtime.cache.ttl_seconds == 300
