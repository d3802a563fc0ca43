"""
Test Configuration
==================

Pytest fixtures for the knowledge service and calculator tests.
"""

import os
from typing import Any

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "testing"

from services.knowledge import InMemoryRegulationStore, KnowledgeCacheManager  # noqa: E402


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_regulation(
    regulation_id: str,
    name_en: str | None = None,
    name_ar: str | None = None,
    overview_en: str = "General provisions.",
    overview_ar: str = "أحكام عامة.",
    **fields: Any,
) -> dict[str, Any]:
    """Raw regulation document as the store returns it."""
    return {
        "id": regulation_id,
        "name": {"ar": name_ar or f"نظام {regulation_id}", "en": name_en or f"{regulation_id} law"},
        "authority": {"ar": "الوزارة", "en": "The Ministry"},
        "overview": {"ar": overview_ar, "en": overview_en},
        "version": fields.pop("version", "1.0"),
        "lastAmendment": fields.pop("lastAmendment", "2024-01-01"),
        **fields,
    }


@pytest.fixture
def ai_config_data() -> dict[str, Any]:
    """Raw AI configuration document."""
    return {
        "assistant": {
            "name": {"ar": "رابط", "en": "Rabit"},
            "personality": {"ar": "مستشار", "en": "Advisor"},
            "tone": ["professional"],
            "capabilities": [],
        },
        "language": {"supported": ["ar", "en"]},
        "responses": {
            "templates": {
                "eosb_result": {"ar": "المكافأة: {amount}", "en": "Award: {amount}"},
            },
            "greetings": [
                {"ar": "مرحباً", "en": "Hello"},
                {"ar": "أهلاً", "en": "Welcome"},
            ],
            "errors": {
                "general": {"ar": "حدث خطأ", "en": "Something went wrong"},
                "not_found": {"ar": "غير موجود", "en": "Not found"},
            },
        },
        "context": {
            "systemPrompt": {"ar": "أنت مستشار.", "en": "You are an advisor."},
            "legalDisclaimer": {"ar": "للاسترشاد فقط.", "en": "Guidance only."},
        },
    }


@pytest.fixture
def regulation_records() -> dict[str, dict[str, Any]]:
    """A small corpus covering typed variants and plain records."""
    return {
        "labor-law": make_regulation(
            "labor-law",
            name_en="Labor Law",
            name_ar="نظام العمل",
            overview_en="Contracts, wages, leave and the end-of-service award.",
            overview_ar="العقود والأجور والإجازات ومكافأة نهاية الخدمة.",
            category="labor",
            tags=["contract", "wages", "leave"],
        ),
        "gosi": make_regulation(
            "gosi",
            name_en="Social Insurance Law",
            name_ar="نظام التأمينات الاجتماعية",
            overview_en="Annuity, SANED and occupational hazards contributions managed by GOSI.",
            overview_ar="اشتراكات المعاشات وساند والأخطار المهنية.",
            category="social_insurance",
            tags=["gosi", "contributions"],
            version="2024.2",
        ),
        "saned": make_regulation(
            "saned",
            name_en="Unemployment Insurance (SANED)",
            overview_en="Monthly compensation for contributors who lose their job.",
            category="unemployment",
            tags=["saned", "unemployment"],
        ),
        "nitaqat": make_regulation(
            "nitaqat",
            name_en="Nitaqat Program",
            overview_en="Localization bands by sector and size.",
            category="saudization",
            tags=["saudization", "bands"],
        ),
        "remote-work": make_regulation(
            "remote-work",
            name_en="Remote Work Regulation",
            overview_en="Remote and flexible work arrangements.",
            tags=["remote"],
        ),
    }


@pytest.fixture
def memory_store(
    regulation_records: dict[str, dict[str, Any]],
    ai_config_data: dict[str, Any],
) -> InMemoryRegulationStore:
    """In-memory store seeded with the test corpus."""
    return InMemoryRegulationStore(regulation_records, ai_config_data)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Hand-driven clock."""
    return FakeClock()


@pytest.fixture
def cache_manager(
    memory_store: InMemoryRegulationStore,
    fake_clock: FakeClock,
) -> KnowledgeCacheManager:
    """Cache manager over the in-memory store with a 300s TTL."""
    return KnowledgeCacheManager(memory_store, ttl_seconds=300, clock=fake_clock)
