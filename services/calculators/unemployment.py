"""
Unemployment Compensation Calculator
====================================

SANED compensation for the current benefit month and the whole schedule.

Policy:
- At least `minimum_contribution_months` of prior contributions.
- Reasons listed in `ineligible_reasons` (contract end) pay nothing.
- The prior wage is capped at `wage_cap`; each month pays the tier rate of
  that wage, capped at `max_monthly_compensation`.
- Benefit month = months since job loss + 1. Past `max_duration_months`
  the compensation is 0.

Version: 0.1.0
"""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel

from services.calculators.validation import require_non_negative, round_money
from shared.exceptions import InvalidInput
from shared.logging import get_logger
from shared.models import LocalizedText, Regulation, UnemploymentRegulation, UnemploymentRules


logger = get_logger(__name__)


CONDITIONS = [
    LocalizedText(
        ar="التسجيل في طاقات والبحث النشط عن عمل",
        en="Register with Taqat and actively seek work",
    ),
    LocalizedText(ar="حضور برامج التدريب المعتمدة", en="Attend approved training programs"),
    LocalizedText(ar="عدم رفض عروض العمل المناسبة", en="Do not refuse suitable job offers"),
    LocalizedText(
        ar="عدم مغادرة المملكة لأكثر من 60 يوماً",
        en="Do not leave the Kingdom for more than 60 days",
    ),
]


class UnemploymentReason(str, Enum):
    """Why the employment ended."""

    LAYOFF = "layoff"
    COMPANY_CLOSURE = "company_closure"
    CONTRACT_END = "contract_end"


class CompensationStatus(str, Enum):
    """Outcome of an eligibility check."""

    ELIGIBLE = "eligible"
    INSUFFICIENT_CONTRIBUTIONS = "insufficient_contributions"
    INELIGIBLE_REASON = "ineligible_reason"
    DURATION_EXHAUSTED = "duration_exhausted"


class UnemploymentInput(BaseModel):
    """Compensation request."""

    prior_wage: float
    contribution_months: int
    months_since_job_loss: int = 0
    reason: UnemploymentReason = UnemploymentReason.LAYOFF


@dataclass
class UnemploymentResult:
    """Compensation for the current month plus schedule totals."""

    eligible: bool
    status: CompensationStatus
    reason: UnemploymentReason
    benefit_month: int
    monthly_compensation: float = 0.0
    replacement_rate: float = 0.0
    total_entitlement: float = 0.0
    remaining_months: int = 0
    remaining_entitlement: float = 0.0
    conditions: list[LocalizedText] = field(default_factory=list)
    summary: LocalizedText | None = None


def unemployment_rules(regulation: Regulation | None) -> UnemploymentRules:
    """SANED schedule carried by a record, or the statutory defaults."""
    if isinstance(regulation, UnemploymentRegulation):
        return regulation.compensation
    return UnemploymentRules()


def monthly_compensation(wage: float, benefit_month: int, rules: UnemploymentRules) -> float:
    """Unrounded compensation for one benefit month."""
    capped = min(wage, rules.wage_cap)
    return min(capped * rules.replacement_rate(benefit_month), rules.max_monthly_compensation)


def calculate_unemployment_compensation(
    request: UnemploymentInput,
    rules: UnemploymentRules | None = None,
) -> UnemploymentResult:
    """
    Calculate SANED compensation.

    Args:
        request: Prior wage, contribution months, months since job loss, reason
        rules: SANED schedule (statutory defaults if not provided)

    Returns:
        UnemploymentResult; ineligible and exhausted requests return zero
        amounts with the status explaining why

    Raises:
        InvalidInput: If any numeric input is negative
    """
    rules = rules or UnemploymentRules()

    wage = require_non_negative("prior_wage", request.prior_wage)
    contribution_months = require_non_negative("contribution_months", request.contribution_months)
    since = require_non_negative("months_since_job_loss", request.months_since_job_loss)
    if since != int(since):
        raise InvalidInput("months_since_job_loss", since, "must be a whole number of months")

    benefit_month = int(since) + 1

    if contribution_months < rules.minimum_contribution_months:
        status = CompensationStatus.INSUFFICIENT_CONTRIBUTIONS
    elif request.reason.value in rules.ineligible_reasons:
        status = CompensationStatus.INELIGIBLE_REASON
    elif benefit_month > rules.max_duration_months:
        status = CompensationStatus.DURATION_EXHAUSTED
    else:
        status = CompensationStatus.ELIGIBLE

    result = UnemploymentResult(
        eligible=status == CompensationStatus.ELIGIBLE,
        status=status,
        reason=request.reason,
        benefit_month=benefit_month,
    )

    if status in (CompensationStatus.ELIGIBLE, CompensationStatus.DURATION_EXHAUSTED):
        schedule = [
            monthly_compensation(wage, month, rules)
            for month in range(1, rules.max_duration_months + 1)
        ]
        result.total_entitlement = round_money(sum(schedule))
        result.conditions = list(CONDITIONS)

    if status == CompensationStatus.ELIGIBLE:
        result.replacement_rate = rules.replacement_rate(benefit_month)
        result.monthly_compensation = round_money(monthly_compensation(wage, benefit_month, rules))
        result.remaining_months = rules.max_duration_months - benefit_month + 1
        result.remaining_entitlement = round_money(sum(schedule[benefit_month - 1 :]))

    result.summary = _summary(result, rules)

    logger.info(
        "unemployment_compensation_calculated",
        status=status.value,
        benefit_month=benefit_month,
        reason=request.reason.value,
    )
    return result


def _summary(result: UnemploymentResult, rules: UnemploymentRules) -> LocalizedText:
    if result.status == CompensationStatus.INSUFFICIENT_CONTRIBUTIONS:
        months = rules.minimum_contribution_months
        return LocalizedText(
            ar=f"غير مستحق: يجب ألا تقل مدة الاشتراك في ساند عن {months} شهراً",
            en=f"Not eligible: at least {months} months of SANED contributions are required",
        )
    if result.status == CompensationStatus.INELIGIBLE_REASON:
        return LocalizedText(
            ar="غير مستحق: سبب انتهاء العلاقة التعاقدية لا يعد سبباً للاستحقاق",
            en="Not eligible: the reason for unemployment does not qualify",
        )
    if result.status == CompensationStatus.DURATION_EXHAUSTED:
        months = rules.max_duration_months
        return LocalizedText(
            ar=f"انتهت مدة الاستحقاق ({months} شهراً)",
            en=f"Entitlement period of {months} months has ended",
        )

    rate = round(result.replacement_rate * 100)
    return LocalizedText(
        ar="\n".join(
            [
                f"شهر الاستحقاق: {result.benefit_month}",
                f"التعويض الشهري: {result.monthly_compensation:.2f} ريال ({rate}%)",
                f"الأشهر المتبقية: {result.remaining_months}",
                f"إجمالي الاستحقاق: {result.total_entitlement:.2f} ريال",
            ]
        ),
        en="\n".join(
            [
                f"Benefit month: {result.benefit_month}",
                f"Monthly compensation: {result.monthly_compensation:.2f} SAR ({rate}%)",
                f"Remaining months: {result.remaining_months}",
                f"Total entitlement: {result.total_entitlement:.2f} SAR",
            ]
        ),
    )
