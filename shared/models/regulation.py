"""
Regulation Models
=================

Versioned bilingual regulation records and their typed variants.

A record is parsed into the variant registered for its id; fields a
variant does not declare stay available as an opaque key/value bag.

Version: 0.1.0
"""

from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, ValidationError, model_validator

from shared.exceptions import RegulationMalformed
from shared.models.common import KnowledgeModel, LocalizedText, freeze
from shared.models.rules import (
    ContributionRates,
    EndOfServiceRules,
    LeaveRules,
    LocalizationRules,
    RetirementRules,
    UnemploymentRules,
    WorkingTimeRules,
)


class RegulationStatus(str, Enum):
    """Publication status of a regulation."""

    ACTIVE = "active"
    DRAFT = "draft"
    DEPRECATED = "deprecated"


class Regulation(KnowledgeModel):
    """A versioned regulatory knowledge record."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1, description="Stable identifier (e.g., labor-law)")
    name: LocalizedText
    authority: LocalizedText
    overview: LocalizedText

    # Compared lexicographically by callers, never by the engine
    version: str = Field(..., min_length=1)
    last_amendment: str = Field(..., description="Informational date string")
    status: RegulationStatus = RegulationStatus.ACTIVE

    category: str | None = None
    tags: tuple[str, ...] = ()

    @model_validator(mode="after")
    def freeze_extra_fields(self) -> "Regulation":
        extra = self.__pydantic_extra__
        if extra:
            for key in list(extra):
                extra[key] = freeze(extra[key])
        return self

    @property
    def extra_fields(self) -> dict[str, Any]:
        """Fields no variant declares, with read-only containers."""
        return dict(self.model_extra or {})


class LaborLawRegulation(Regulation):
    """Labor law record carrying award, leave and working-time rules."""

    end_of_service: EndOfServiceRules = Field(default_factory=EndOfServiceRules)
    leave: LeaveRules = Field(default_factory=LeaveRules)
    working_time: WorkingTimeRules = Field(default_factory=WorkingTimeRules)


class SocialInsuranceRegulation(Regulation):
    """GOSI record carrying the contribution rate table and retirement rules."""

    contributions: ContributionRates = Field(default_factory=ContributionRates)
    retirement: RetirementRules = Field(default_factory=RetirementRules)


class UnemploymentRegulation(Regulation):
    """SANED record carrying the compensation schedule."""

    compensation: UnemploymentRules = Field(default_factory=UnemploymentRules)


class LocalizationRegulation(Regulation):
    """Nitaqat record carrying band thresholds and sector requirements."""

    localization: LocalizationRules = Field(default_factory=LocalizationRules)


# Regulation id -> variant
REGULATION_VARIANTS: dict[str, type[Regulation]] = {
    "labor-law": LaborLawRegulation,
    "gosi": SocialInsuranceRegulation,
    "saned": UnemploymentRegulation,
    "nitaqat": LocalizationRegulation,
}


def _field_errors(error: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "__root__"
        errors[location] = item["msg"]
    return errors


def parse_regulation(regulation_id: str, data: Any) -> Regulation:
    """
    Validate a raw record into its typed variant.

    Args:
        regulation_id: Identifier the record was requested under
        data: Decoded document

    Returns:
        Regulation (or registered variant)

    Raises:
        RegulationMalformed: If the record fails structural validation or
            its `id` does not match the requested identifier
    """
    if not isinstance(data, dict):
        raise RegulationMalformed(regulation_id, reason="record is not an object")

    model = REGULATION_VARIANTS.get(regulation_id, Regulation)
    try:
        regulation = model.model_validate(data)
    except ValidationError as e:
        raise RegulationMalformed(regulation_id, field_errors=_field_errors(e)) from e

    if regulation.id != regulation_id:
        raise RegulationMalformed(
            regulation_id,
            reason=f"record id '{regulation.id}' does not match",
        )
    return regulation
