"""
End-of-Service Benefit Calculator
=================================

Statutory end-of-service award (labor law articles 84-85).

Policy:
- Base award: `first_years_rate` of a month's wage per year for the first
  `first_years_cutoff` years, `later_years_rate` per year beyond. A partial
  final year is pro-rated by completed months; the part past the cutoff
  always accrues at the later rate.
- Resignation: the base award is scaled by the tier reached by total
  tenure (0 below 2 years, 1/3 from 2, 2/3 from 5, full from 10).
  Tier bounds are inclusive lower bounds.
- Employer-initiated and other terminations: full award.
- Disqualifying cause (article 80): zeroes the final award for every
  termination reason. Whether it should apply only to employer-initiated
  terminations is pending clarification with the domain owners.

Version: 0.1.0
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from services.calculators.validation import (
    require_non_negative,
    round_money,
)
from shared.exceptions import InvalidInput
from shared.logging import get_logger
from shared.models import EndOfServiceRules, LaborLawRegulation, LocalizedText, Regulation


logger = get_logger(__name__)


class TerminationReason(str, Enum):
    """How the employment ended."""

    EMPLOYER_INITIATED = "employer-initiated"
    RESIGNATION = "resignation"
    OTHER = "other"


class EndOfServiceInput(BaseModel):
    """Award calculation request."""

    monthly_wage: float  # total comprehensive wage
    tenure_years: float
    tenure_months: float = 0
    reason: TerminationReason
    disqualified: bool = False


@dataclass
class EndOfServiceResult:
    """Award amount with its audit breakdown."""

    amount: float
    first_years_component: float
    later_years_component: float
    base_entitlement: float
    multiplier: float
    tenure_years: float
    reason: TerminationReason
    disqualified: bool
    summary: LocalizedText


def end_of_service_rules(regulation: Regulation | None) -> EndOfServiceRules:
    """Award rules carried by a labor law record, or the statutory defaults."""
    if isinstance(regulation, LaborLawRegulation):
        return regulation.end_of_service
    return EndOfServiceRules()


def calculate_end_of_service(
    request: EndOfServiceInput,
    rules: EndOfServiceRules | None = None,
) -> EndOfServiceResult:
    """
    Calculate the end-of-service award.

    Args:
        request: Wage, tenure, termination reason and disqualification flag
        rules: Award rules (statutory defaults if not provided)

    Returns:
        EndOfServiceResult

    Raises:
        InvalidInput: If wage or tenure is negative, or months are not a
            remainder below 12
    """
    rules = rules or EndOfServiceRules()

    wage = require_non_negative("monthly_wage", request.monthly_wage)
    years = require_non_negative("tenure_years", request.tenure_years)
    months = require_non_negative("tenure_months", request.tenure_months)
    if months >= 12:
        raise InvalidInput("tenure_months", months, "must be a remainder below 12")

    tenure = years + months / 12

    first_years = min(tenure, rules.first_years_cutoff)
    later_years = max(0.0, tenure - rules.first_years_cutoff)

    first_component = first_years * wage * rules.first_years_rate
    later_component = later_years * wage * rules.later_years_rate
    base = first_component + later_component

    if request.reason == TerminationReason.RESIGNATION:
        multiplier = rules.resignation_multiplier(tenure)
    else:
        multiplier = 1.0

    amount = 0.0 if request.disqualified else base * multiplier

    result = EndOfServiceResult(
        amount=round_money(amount),
        first_years_component=round_money(first_component),
        later_years_component=round_money(later_component),
        base_entitlement=round_money(base),
        multiplier=multiplier,
        tenure_years=tenure,
        reason=request.reason,
        disqualified=request.disqualified,
        summary=_summary(
            tenure=tenure,
            first_component=round_money(first_component),
            later_component=round_money(later_component),
            multiplier=multiplier,
            amount=round_money(amount),
            disqualified=request.disqualified,
        ),
    )

    logger.info(
        "end_of_service_calculated",
        reason=request.reason.value,
        tenure_years=round(tenure, 4),
        multiplier=round(multiplier, 4),
        disqualified=request.disqualified,
    )
    return result


def _summary(
    tenure: float,
    first_component: float,
    later_component: float,
    multiplier: float,
    amount: float,
    disqualified: bool,
) -> LocalizedText:
    percentage = 0 if disqualified else round(multiplier * 100)
    ar_lines = [
        f"مدة الخدمة: {tenure:.2f} سنة",
        f"مكافأة السنوات الأولى: {first_component:.2f} ريال",
        f"مكافأة ما بعدها: {later_component:.2f} ريال",
        f"النسبة المستحقة: {percentage}%",
        f"المبلغ النهائي: {amount:.2f} ريال",
    ]
    en_lines = [
        f"Tenure: {tenure:.2f} years",
        f"First years award: {first_component:.2f} SAR",
        f"Later years award: {later_component:.2f} SAR",
        f"Entitlement: {percentage}%",
        f"Final amount: {amount:.2f} SAR",
    ]
    if disqualified:
        ar_lines.append("لا يستحق مكافأة بموجب المادة 80")
        en_lines.append("No award: disqualifying cause (article 80)")
    return LocalizedText(ar="\n".join(ar_lines), en="\n".join(en_lines))
