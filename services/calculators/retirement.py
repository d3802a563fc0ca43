"""
Retirement Projection
=====================

Annuity-branch retirement estimate for a Saudi contributor.

Policy:
- Ages and subscription minimums come from the gender's schedule.
- Monthly pension = average wage x subscription years x `pension_factor`,
  never more than the average wage.
- Early retirement needs both the early age and the early subscription
  minimum; the pension is reduced `early_reduction_per_year` points per
  year before the normal age, up to `max_early_reduction`.
- Subscription months count calendar months between the start date and
  the reference date.

Version: 0.1.0
"""

from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel

from services.calculators.validation import require_non_negative, round_money
from shared.exceptions import InvalidInput
from shared.logging import get_logger
from shared.models import (
    Gender,
    LocalizedText,
    Regulation,
    RetirementRules,
    SocialInsuranceRegulation,
)


logger = get_logger(__name__)


class RetirementInput(BaseModel):
    """Retirement projection request."""

    gender: Gender
    birth_date: date
    average_wage: float
    subscription_start: date | None = None
    as_of: date | None = None  # defaults to today


@dataclass
class EarlyRetirementOption:
    """Whether early retirement is open and what it costs."""

    eligible: bool
    early_age: int
    pension_reduction: float | None = None  # percentage points


@dataclass
class RetirementProjection:
    """Retirement ages, subscription and pension estimate."""

    current_age: int
    normal_age: int
    years_to_retirement: int
    subscription_months: int | None = None
    meets_minimum_subscription: bool | None = None
    estimated_monthly_pension: float | None = None
    early_retirement: EarlyRetirementOption | None = None
    summary: LocalizedText | None = None


def retirement_rules(regulation: Regulation | None) -> RetirementRules:
    """Retirement rules carried by a GOSI record, or the statutory defaults."""
    if isinstance(regulation, SocialInsuranceRegulation):
        return regulation.retirement
    return RetirementRules()


def age_on(birth_date: date, as_of: date) -> int:
    """Completed years of age on a date."""
    age = as_of.year - birth_date.year
    if (as_of.month, as_of.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def subscription_months(start: date, as_of: date) -> int:
    """Calendar months from the start date, never negative."""
    return max(0, (as_of.year - start.year) * 12 + (as_of.month - start.month))


def estimate_pension(average_wage: float, months: int, rules: RetirementRules) -> float:
    """Monthly pension for a subscription length, capped at the average wage."""
    pension = average_wage * (months / 12) * rules.pension_factor
    return round_money(min(pension, average_wage))


def project_retirement(
    request: RetirementInput,
    rules: RetirementRules | None = None,
) -> RetirementProjection:
    """
    Project retirement for one contributor.

    Args:
        request: Gender, birth date, average wage and optional subscription start
        rules: Retirement rules (statutory defaults if not provided)

    Returns:
        RetirementProjection; subscription-dependent fields stay None
        without a subscription start

    Raises:
        InvalidInput: If the wage is negative, the birth date is after the
            reference date, or the gender has no schedule
    """
    rules = rules or RetirementRules()
    as_of = request.as_of or date.today()

    wage = require_non_negative("average_wage", request.average_wage)
    if request.birth_date > as_of:
        raise InvalidInput("birth_date", request.birth_date.isoformat(), "is in the future")

    schedule = rules.schedules.get(request.gender)
    if schedule is None:
        raise InvalidInput("gender", request.gender.value, "has no retirement schedule")

    current_age = age_on(request.birth_date, as_of)
    projection = RetirementProjection(
        current_age=current_age,
        normal_age=schedule.normal_age,
        years_to_retirement=max(0, schedule.normal_age - current_age),
    )

    if request.subscription_start is not None:
        months = subscription_months(request.subscription_start, as_of)
        projection.subscription_months = months
        projection.meets_minimum_subscription = months >= schedule.minimum_subscription_months
        projection.estimated_monthly_pension = estimate_pension(wage, months, rules)

        eligible = (
            months >= schedule.early_minimum_subscription_months
            and current_age >= schedule.early_age
        )
        reduction = None
        if eligible:
            years_early = max(0, schedule.normal_age - current_age)
            reduction = min(years_early * rules.early_reduction_per_year, rules.max_early_reduction)
        projection.early_retirement = EarlyRetirementOption(
            eligible=eligible,
            early_age=schedule.early_age,
            pension_reduction=reduction,
        )

    projection.summary = _summary(projection)

    logger.info(
        "retirement_projected",
        gender=request.gender.value,
        current_age=current_age,
        subscription_months=projection.subscription_months,
    )
    return projection


def _summary(projection: RetirementProjection) -> LocalizedText:
    ar_lines = [
        f"العمر الحالي: {projection.current_age} سنة",
        f"سن التقاعد النظامي: {projection.normal_age} سنة",
        f"السنوات المتبقية للتقاعد: {projection.years_to_retirement}",
    ]
    en_lines = [
        f"Current age: {projection.current_age}",
        f"Normal retirement age: {projection.normal_age}",
        f"Years to retirement: {projection.years_to_retirement}",
    ]
    if projection.estimated_monthly_pension is not None:
        ar_lines.append(f"المعاش الشهري التقديري: {projection.estimated_monthly_pension:.2f} ريال")
        en_lines.append(f"Estimated monthly pension: {projection.estimated_monthly_pension:.2f} SAR")
    early = projection.early_retirement
    if early is not None and early.eligible:
        ar_lines.append(f"التقاعد المبكر متاح بتخفيض {early.pension_reduction:g}%")
        en_lines.append(f"Early retirement available with a {early.pension_reduction:g}% reduction")
    return LocalizedText(ar="\n".join(ar_lines), en="\n".join(en_lines))
