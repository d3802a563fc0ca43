"""
Localization Band Classifier
============================

Nitaqat band classification of an employer.

Policy:
- The required percentage comes from the sector table for the company's
  size range; an unknown sector falls back to the default table and the
  result is flagged.
- Band = highest band whose `min_difference` the gap (actual minus
  required, in percentage points) reaches. The lowest band has no bound.
- The distance to the next band is reported in percentage points and as
  the number of additional protected employees needed at the current
  headcount.

Version: 0.1.0
"""

import math
from dataclasses import dataclass

from services.calculators.validation import require_non_negative, require_positive
from shared.exceptions import InvalidInput
from shared.logging import get_logger
from shared.models import (
    BandThreshold,
    LocalizationRegulation,
    LocalizationRules,
    LocalizedText,
    Regulation,
)


logger = get_logger(__name__)

# Float noise guard for threshold comparisons.
_PRECISION = 9


@dataclass
class BandClassification:
    """Band with the gap to the next one."""

    band: str
    band_name: LocalizedText
    sector: str
    size_range: str
    ratio: float
    percentage: float
    required_percentage: float
    meets_requirement: bool
    next_band: str | None
    delta_to_next_band: float | None
    additional_employees_for_next_band: int | None
    used_default_thresholds: bool
    summary: LocalizedText


def localization_rules(regulation: Regulation | None) -> LocalizationRules:
    """Band ladder and sector table carried by a record, or the defaults."""
    if isinstance(regulation, LocalizationRegulation):
        return regulation.localization
    return LocalizationRules()


def company_size_range(total_headcount: int) -> str:
    """Size range label for a headcount."""
    total = require_positive("total_headcount", total_headcount)
    if total < 10:
        return "1-9"
    if total < 50:
        return "10-49"
    if total < 500:
        return "50-499"
    return "500+"


def weighted_protected_count(
    protected_headcount: float,
    part_time: float = 0,
    students: float = 0,
    disabled: float = 0,
    remote_women: float = 0,
    rules: LocalizationRules | None = None,
) -> float:
    """
    Protected headcount after counting weights.

    `part_time` and `students` are part of `protected_headcount` and count
    at their reduced weight. `disabled` employees are also part of it; each
    counts as `disabled_weight` employees instead of one. `remote_women`
    (women working remotely, also part of it) count as `remote_female_weight`
    each.
    """
    counting = (rules or LocalizationRules()).counting_rules

    protected = require_non_negative("protected_headcount", protected_headcount)
    part_time = require_non_negative("part_time", part_time)
    students = require_non_negative("students", students)
    disabled = require_non_negative("disabled", disabled)
    remote_women = require_non_negative("remote_women", remote_women)

    full_time = protected - part_time - students
    if full_time < 0:
        raise InvalidInput("part_time", part_time, "part-time and students exceed protected headcount")
    if disabled > protected:
        raise InvalidInput("disabled", disabled, "exceeds protected headcount")
    if remote_women > protected:
        raise InvalidInput("remote_women", remote_women, "exceeds protected headcount")

    return (
        full_time
        + part_time * counting.part_time_weight
        + students * counting.student_weight
        + disabled * (counting.disabled_weight - 1)
        + remote_women * (counting.remote_female_weight - 1)
    )


def required_percentage(
    sector: str,
    size_range: str,
    rules: LocalizationRules,
) -> tuple[float, bool]:
    """Required percentage and whether the default table supplied it."""
    requirement = rules.sectors.get(sector)
    if requirement is not None:
        return requirement.requirements[size_range], False
    return rules.default_requirements[size_range], True


def classify_localization(
    total_headcount: int,
    protected_headcount: float,
    sector: str,
    rules: LocalizationRules | None = None,
) -> BandClassification:
    """
    Classify an employer into a localization band.

    Args:
        total_headcount: All employees, must be positive
        protected_headcount: Protected-nationality employees (raw or weighted)
        sector: Sector identifier
        rules: Band ladder and sector table (defaults if not provided)

    Returns:
        BandClassification

    Raises:
        InvalidInput: If the headcount is not positive or the protected
            headcount is negative
    """
    rules = rules or LocalizationRules()

    total = require_positive("total_headcount", total_headcount)
    protected = require_non_negative("protected_headcount", protected_headcount)

    size_range = company_size_range(total)
    required, used_default = required_percentage(sector, size_range, rules)

    ratio = protected / total
    percentage = protected * 100 / total
    difference = round(percentage - required, _PRECISION)

    index = _band_index(difference, rules.bands)
    band = rules.bands[index]

    next_band: BandThreshold | None = None
    delta: float | None = None
    additional: int | None = None
    if index + 1 < len(rules.bands):
        next_band = rules.bands[index + 1]
        target = required + next_band.min_difference  # type: ignore[operator]
        delta = round(max(0.0, target - percentage), 2)
        if target <= 100:
            needed = round(target * total / 100 - protected, _PRECISION)
            additional = max(0, math.ceil(needed))

    classification = BandClassification(
        band=band.key,
        band_name=band.name,
        sector=sector,
        size_range=size_range,
        ratio=ratio,
        percentage=round(percentage, 2),
        required_percentage=required,
        meets_requirement=difference >= 0,
        next_band=next_band.key if next_band else None,
        delta_to_next_band=delta,
        additional_employees_for_next_band=additional,
        used_default_thresholds=used_default,
        summary=_summary(band, next_band, percentage, required, additional),
    )

    if used_default:
        logger.warning("localization_default_requirements", sector=sector, size_range=size_range)
    logger.info(
        "localization_classified",
        sector=sector,
        size_range=size_range,
        band=band.key,
        percentage=classification.percentage,
    )
    return classification


def _band_index(difference: float, bands: tuple[BandThreshold, ...]) -> int:
    index = 0
    for i, band in enumerate(bands[1:], start=1):
        if difference >= band.min_difference:  # type: ignore[operator]
            index = i
    return index


def _summary(
    band: BandThreshold,
    next_band: BandThreshold | None,
    percentage: float,
    required: float,
    additional: int | None,
) -> LocalizedText:
    ar_lines = [
        f"النطاق: {band.name.ar}",
        f"نسبة التوطين الحالية: {percentage:.2f}%",
        f"النسبة المطلوبة: {required:g}%",
    ]
    en_lines = [
        f"Band: {band.name.en}",
        f"Current localization: {percentage:.2f}%",
        f"Required: {required:g}%",
    ]
    if next_band is not None and additional:
        ar_lines.append(f"مطلوب توظيف {additional} موظف سعودي إضافي للوصول إلى {next_band.name.ar}")
        en_lines.append(f"Hire {additional} additional Saudi employees to reach {next_band.name.en}")
    return LocalizedText(ar="\n".join(ar_lines), en="\n".join(en_lines))
