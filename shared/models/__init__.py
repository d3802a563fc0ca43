"""
Shared Models
=============

Pydantic models shared across the knowledge services and calculators.

Models:
- Common models (Language, LocalizedText, PartialResult)
- Regulation models (Regulation and its typed variants)
- Rule tables read by the calculators
- AI configuration (AIConfig)
"""

from shared.models.ai_config import (
    AIConfig,
    AssistantProfile,
    ContextTexts,
    LanguageSettings,
    ResponseCatalog,
)
from shared.models.common import (
    EntryFailure,
    KnowledgeModel,
    Language,
    LocalizedText,
    PartialResult,
)
from shared.models.regulation import (
    REGULATION_VARIANTS,
    LaborLawRegulation,
    LocalizationRegulation,
    Regulation,
    RegulationStatus,
    SocialInsuranceRegulation,
    UnemploymentRegulation,
    parse_regulation,
)
from shared.models.rules import (
    SIZE_RANGES,
    BandThreshold,
    ComponentRate,
    ContributionComponent,
    ContributionRates,
    CountingRules,
    EmploymentCategory,
    EndOfServiceRules,
    Gender,
    LeaveRules,
    LocalizationRules,
    Nationality,
    ReplacementTier,
    ResignationTier,
    RetirementRules,
    RetirementSchedule,
    SectorRequirement,
    SickLeaveTier,
    UnemploymentRules,
    WageLimits,
    WorkingTimeRules,
)

__all__ = [
    # Common
    "KnowledgeModel",
    "Language",
    "LocalizedText",
    "PartialResult",
    "EntryFailure",
    # Regulation
    "Regulation",
    "RegulationStatus",
    "LaborLawRegulation",
    "SocialInsuranceRegulation",
    "UnemploymentRegulation",
    "LocalizationRegulation",
    "REGULATION_VARIANTS",
    "parse_regulation",
    # Rules
    "EndOfServiceRules",
    "ResignationTier",
    "LeaveRules",
    "SickLeaveTier",
    "WorkingTimeRules",
    "ContributionRates",
    "ComponentRate",
    "ContributionComponent",
    "Nationality",
    "EmploymentCategory",
    "WageLimits",
    "RetirementRules",
    "RetirementSchedule",
    "Gender",
    "UnemploymentRules",
    "ReplacementTier",
    "LocalizationRules",
    "BandThreshold",
    "SectorRequirement",
    "CountingRules",
    "SIZE_RANGES",
    # AI config
    "AIConfig",
    "AssistantProfile",
    "LanguageSettings",
    "ResponseCatalog",
    "ContextTexts",
]
