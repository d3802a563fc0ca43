"""
Regulation Store Tests
======================

Tests for the file-backed and in-memory regulation stores, including the
bundled knowledge base.

Version: 0.1.0
"""

import json
from pathlib import Path
from typing import Any

import pytest

from services.knowledge import (
    FileRegulationStore,
    InMemoryRegulationStore,
    KnowledgeCacheManager,
    RegulationStore,
)
from shared.config import BUNDLED_KNOWLEDGE_BASE
from shared.exceptions import (
    ConfigUnavailable,
    RegulationMalformed,
    RegulationNotFound,
    StoreUnavailable,
)
from shared.models import Gender
from tests.conftest import make_regulation


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def knowledge_dir(tmp_path: Path, ai_config_data: dict[str, Any]) -> Path:
    """Knowledge base directory with two regulations and a config."""
    regulations = tmp_path / "regulations"
    regulations.mkdir()
    for regulation_id in ("saned", "gosi"):
        (regulations / f"{regulation_id}.json").write_text(
            json.dumps(make_regulation(regulation_id), ensure_ascii=False),
            encoding="utf-8",
        )
    (tmp_path / "ai-config.json").write_text(
        json.dumps(ai_config_data, ensure_ascii=False),
        encoding="utf-8",
    )
    return tmp_path


# =============================================================================
# File store
# =============================================================================


class TestFileRegulationStore:
    """Tests for JSON documents on disk."""

    def test_satisfies_protocol(self, knowledge_dir: Path) -> None:
        """Both stores honor the read contract."""
        assert isinstance(FileRegulationStore(knowledge_dir), RegulationStore)
        assert isinstance(InMemoryRegulationStore(), RegulationStore)

    def test_list_ids_sorted(self, knowledge_dir: Path) -> None:
        """Ids are file stems in sorted order."""
        (knowledge_dir / "regulations" / "notes.txt").write_text("ignored")

        assert FileRegulationStore(knowledge_dir).list_ids() == ["gosi", "saned"]

    def test_list_ids_missing_directory(self, tmp_path: Path) -> None:
        """A misconfigured base path is unavailable, not an empty corpus."""
        with pytest.raises(StoreUnavailable) as exc_info:
            FileRegulationStore(tmp_path / "absent").list_ids()

        assert exc_info.value.retryable

    def test_empty_directory_lists_nothing(self, tmp_path: Path) -> None:
        (tmp_path / "regulations").mkdir()

        assert FileRegulationStore(tmp_path).list_ids() == []

    def test_read_regulation(self, knowledge_dir: Path) -> None:
        """Documents are returned decoded."""
        data = FileRegulationStore(knowledge_dir).read_regulation("gosi")

        assert data["id"] == "gosi"
        assert data["name"]["en"] == "gosi law"

    def test_read_unknown_regulation(self, knowledge_dir: Path) -> None:
        """Unknown ids raise RegulationNotFound."""
        with pytest.raises(RegulationNotFound):
            FileRegulationStore(knowledge_dir).read_regulation("pdpl")

    @pytest.mark.parametrize("regulation_id", ["../ai-config", "a/b", ""])
    def test_path_like_ids_not_found(self, knowledge_dir: Path, regulation_id: str) -> None:
        """Ids never escape the regulations directory."""
        with pytest.raises(RegulationNotFound):
            FileRegulationStore(knowledge_dir).read_regulation(regulation_id)

    def test_invalid_json_is_malformed(self, knowledge_dir: Path) -> None:
        """Undecodable documents are malformed records."""
        (knowledge_dir / "regulations" / "ohs.json").write_text("{not json")

        with pytest.raises(RegulationMalformed):
            FileRegulationStore(knowledge_dir).read_regulation("ohs")

    def test_read_config(self, knowledge_dir: Path) -> None:
        """The config document is returned decoded."""
        data = FileRegulationStore(knowledge_dir).read_config()

        assert data["responses"]["errors"]["general"]["en"] == "Something went wrong"

    def test_missing_config(self, tmp_path: Path) -> None:
        """A missing config is unavailable."""
        with pytest.raises(ConfigUnavailable):
            FileRegulationStore(tmp_path).read_config()

    def test_config_must_be_object(self, knowledge_dir: Path) -> None:
        """A non-object config is unavailable."""
        (knowledge_dir / "ai-config.json").write_text("[]")

        with pytest.raises(ConfigUnavailable):
            FileRegulationStore(knowledge_dir).read_config()


# =============================================================================
# In-memory store
# =============================================================================


class TestInMemoryRegulationStore:
    """Tests for the dictionary-backed store."""

    def test_returns_copies(self) -> None:
        """Callers cannot mutate stored documents."""
        store = InMemoryRegulationStore({"gosi": make_regulation("gosi")})

        store.read_regulation("gosi")["version"] = "changed"

        assert store.read_regulation("gosi")["version"] == "1.0"

    def test_unknown_regulation(self) -> None:
        """Unknown ids raise RegulationNotFound."""
        with pytest.raises(RegulationNotFound):
            InMemoryRegulationStore().read_regulation("gosi")

    def test_no_config(self) -> None:
        """A store without a config reports it unavailable."""
        with pytest.raises(ConfigUnavailable):
            InMemoryRegulationStore().read_config()


# =============================================================================
# Bundled knowledge base
# =============================================================================


class TestBundledKnowledgeBase:
    """The shipped documents all load cleanly."""

    @pytest.fixture
    def bundled_cache(self) -> KnowledgeCacheManager:
        return KnowledgeCacheManager(FileRegulationStore(BUNDLED_KNOWLEDGE_BASE), ttl_seconds=60)

    def test_all_regulations_load(self, bundled_cache: KnowledgeCacheManager) -> None:
        """No bundled record is malformed."""
        result = bundled_cache.load_all_regulations()

        assert result.ok
        assert set(bundled_cache.available_ids()) == {
            "gosi",
            "labor-law",
            "nitaqat",
            "ohs",
            "pdpl",
            "qiwa",
            "remote-work",
            "saned",
            "violations",
            "women-employment",
            "wps-mudad",
        }

    def test_config_loads(self, bundled_cache: KnowledgeCacheManager) -> None:
        """The bundled config is valid."""
        config = bundled_cache.load_config()

        assert config.assistant.name.en == "Rabit"
        assert "general" in config.responses.errors

    def test_nitaqat_sector_table(self, bundled_cache: KnowledgeCacheManager) -> None:
        """Sector requirements come from the record."""
        regulation = bundled_cache.load_regulation("nitaqat")

        sectors = regulation.localization.sectors
        assert sectors["technology"].requirements["50-499"] == 30
        assert sectors["education"].requirements["500+"] == 70

    def test_labor_law_leave_and_working_time(self, bundled_cache: KnowledgeCacheManager) -> None:
        regulation = bundled_cache.load_regulation("labor-law")

        assert regulation.leave.extended_annual_days == 30
        assert regulation.leave.sick_leave_days == 120
        assert regulation.working_time.probation_max_extended_days == 180
        assert regulation.working_time.ramadan_daily_hours == 6

    def test_gosi_retirement_schedules(self, bundled_cache: KnowledgeCacheManager) -> None:
        regulation = bundled_cache.load_regulation("gosi")

        schedules = regulation.retirement.schedules
        assert schedules[Gender.MALE].normal_age == 60
        assert schedules[Gender.FEMALE].early_age == 50
        assert regulation.retirement.pension_factor == 0.025

    def test_nitaqat_remote_weight(self, bundled_cache: KnowledgeCacheManager) -> None:
        regulation = bundled_cache.load_regulation("nitaqat")

        assert regulation.localization.counting_rules.remote_female_weight == 2
