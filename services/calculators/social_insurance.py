"""
Social-Insurance Contribution Calculator
========================================

GOSI contributions for one employee or a payroll batch.

Policy:
- The contributory wage is clamped to the configured wage limits.
- Components applied are those allowed by both the nationality schedule
  (non-Saudis: occupational hazards only) and the employment category.
- The SANED component is computed on the wage capped at `saned_maximum`.
- Each percentage comes from the rate table, never from code.
- Amounts are rounded to 2 decimals; totals are rounded from the
  unrounded component amounts.

Bulk evaluation processes entries independently and in input order; an
invalid entry is reported as a failure next to the successes and never
aborts the batch.

Version: 0.1.0
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from services.calculators.validation import require_non_negative, round_money
from shared.exceptions import InvalidInput, KnowledgeError
from shared.logging import get_logger
from shared.models import (
    ContributionComponent,
    ContributionRates,
    EmploymentCategory,
    LocalizedText,
    Nationality,
    PartialResult,
    Regulation,
    SocialInsuranceRegulation,
)


logger = get_logger(__name__)


COMPONENT_NAMES: dict[ContributionComponent, LocalizedText] = {
    ContributionComponent.ANNUITY: LocalizedText(ar="المعاشات", en="Annuity"),
    ContributionComponent.SANED: LocalizedText(ar="ساند", en="SANED"),
    ContributionComponent.OCCUPATIONAL_HAZARDS: LocalizedText(
        ar="الأخطار المهنية", en="Occupational Hazards"
    ),
}


class ContributionInput(BaseModel):
    """Contribution request for one employee."""

    monthly_wage: float
    nationality: Nationality
    category: EmploymentCategory = EmploymentCategory.REGULAR
    employee_id: str | None = None


@dataclass
class ComponentContribution:
    """Employer and employee amounts of one component."""

    component: ContributionComponent
    base_wage: float
    employer_rate: float
    employee_rate: float
    employer_amount: float
    employee_amount: float

    @property
    def total(self) -> float:
        return round_money(self.employer_amount + self.employee_amount)


@dataclass
class ContributionResult:
    """Contributions of one employee."""

    contributory_wage: float
    nationality: Nationality
    category: EmploymentCategory
    components: list[ComponentContribution]
    total_employer: float
    total_employee: float
    grand_total: float
    summary: LocalizedText
    employee_id: str | None = None

    def component(self, component: ContributionComponent) -> ComponentContribution | None:
        return next((c for c in self.components if c.component == component), None)


@dataclass
class ContributionTotals:
    """Batch totals over successful entries."""

    total_employer: float = 0.0
    total_employee: float = 0.0
    grand_total: float = 0.0
    saudi_count: int = 0
    non_saudi_count: int = 0


@dataclass
class BulkContributionResult:
    """Per-entry results (keyed by input index) plus batch totals."""

    results: PartialResult[ContributionResult] = field(default_factory=PartialResult)
    totals: ContributionTotals = field(default_factory=ContributionTotals)


def contribution_rates(regulation: Regulation | None) -> ContributionRates:
    """Rate table carried by a GOSI record, or the statutory defaults."""
    if isinstance(regulation, SocialInsuranceRegulation):
        return regulation.contributions
    return ContributionRates()


def subscribable_wage(
    basic: float,
    housing: float | None = None,
    commission: float = 0,
    rates: ContributionRates | None = None,
) -> float:
    """
    Contributory wage from its parts.

    Basic wage plus housing allowance (a share of basic when not given)
    plus commissions. Transport allowance never counts.
    """
    rates = rates or ContributionRates()
    basic = require_non_negative("basic", basic)
    commission = require_non_negative("commission", commission)
    if housing is None:
        housing = basic * rates.default_housing_ratio
    else:
        housing = require_non_negative("housing", housing)
    return basic + housing + commission


def calculate_contribution(
    request: ContributionInput,
    rates: ContributionRates | None = None,
) -> ContributionResult:
    """
    Calculate contributions for one employee.

    Args:
        request: Wage, nationality class and employment category
        rates: Rate table (statutory defaults if not provided)

    Returns:
        ContributionResult

    Raises:
        InvalidInput: If the wage is negative or not finite
    """
    rates = rates or ContributionRates()
    wage = require_non_negative("monthly_wage", request.monthly_wage)

    limits = rates.wage_limits
    contributory = min(max(wage, limits.minimum), limits.maximum)

    components: list[ComponentContribution] = []
    employer_total = 0.0
    employee_total = 0.0

    for component in rates.applicable_components(request.nationality, request.category):
        rate = rates.components[component]
        base = contributory
        if component == ContributionComponent.SANED:
            base = min(contributory, limits.saned_maximum)

        employer = base * rate.employer / 100
        employee = base * rate.employee / 100
        employer_total += employer
        employee_total += employee

        components.append(
            ComponentContribution(
                component=component,
                base_wage=base,
                employer_rate=rate.employer,
                employee_rate=rate.employee,
                employer_amount=round_money(employer),
                employee_amount=round_money(employee),
            )
        )

    total_employer = round_money(employer_total)
    total_employee = round_money(employee_total)
    grand_total = round_money(total_employer + total_employee)

    return ContributionResult(
        contributory_wage=contributory,
        nationality=request.nationality,
        category=request.category,
        components=components,
        total_employer=total_employer,
        total_employee=total_employee,
        grand_total=grand_total,
        summary=_summary(contributory, components, total_employer, total_employee, grand_total),
        employee_id=request.employee_id,
    )


def calculate_bulk_contributions(
    entries: Sequence[ContributionInput | Mapping[str, Any]],
    rates: ContributionRates | None = None,
) -> BulkContributionResult:
    """
    Calculate contributions for a batch of employees.

    Args:
        entries: Requests or raw mappings; raw mappings are validated per entry
        rates: Rate table shared by the batch

    Returns:
        BulkContributionResult; results keyed by input index as a string,
        in input order
    """
    rates = rates or ContributionRates()
    bulk = BulkContributionResult()

    for index, entry in enumerate(entries):
        key = str(index)
        try:
            request = _coerce(entry)
            result = calculate_contribution(request, rates)
        except KnowledgeError as e:
            bulk.results.add_failure(key, e)
            continue

        bulk.results.add_success(key, result)
        _accumulate(bulk.totals, result)

    totals = bulk.totals
    totals.total_employer = round_money(totals.total_employer)
    totals.total_employee = round_money(totals.total_employee)
    totals.grand_total = round_money(totals.grand_total)

    if bulk.results.failures:
        logger.warning(
            "bulk_contribution_partial_failure",
            succeeded=len(bulk.results),
            failed=len(bulk.results.failures),
            failed_entries=bulk.results.failed_keys,
        )
    else:
        logger.info("bulk_contribution_calculated", succeeded=len(bulk.results))

    return bulk


def _coerce(entry: ContributionInput | Mapping[str, Any]) -> ContributionInput:
    if isinstance(entry, ContributionInput):
        return entry
    if not isinstance(entry, Mapping):
        raise InvalidInput("entry", type(entry).__name__, "must be a contribution request")
    try:
        return ContributionInput.model_validate(dict(entry))
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "entry"
        raise InvalidInput(location, first.get("input"), first["msg"]) from e


def _accumulate(totals: ContributionTotals, result: ContributionResult) -> None:
    totals.total_employer += result.total_employer
    totals.total_employee += result.total_employee
    totals.grand_total += result.grand_total
    if result.nationality == Nationality.SAUDI:
        totals.saudi_count += 1
    else:
        totals.non_saudi_count += 1


def _summary(
    contributory: float,
    components: list[ComponentContribution],
    total_employer: float,
    total_employee: float,
    grand_total: float,
) -> LocalizedText:
    ar_lines = [f"الراتب الخاضع للاشتراك: {contributory:.2f} ريال"]
    en_lines = [f"Contributory wage: {contributory:.2f} SAR"]

    for c in components:
        name = COMPONENT_NAMES[c.component]
        ar_lines.append(
            f"{name.ar}: {c.total:.2f} ريال (صاحب العمل: {c.employer_amount:.2f}، الموظف: {c.employee_amount:.2f})"
        )
        en_lines.append(
            f"{name.en}: {c.total:.2f} SAR (Employer: {c.employer_amount:.2f}, Employee: {c.employee_amount:.2f})"
        )

    ar_lines += [
        f"إجمالي حصة صاحب العمل: {total_employer:.2f} ريال",
        f"إجمالي حصة الموظف: {total_employee:.2f} ريال",
        f"الإجمالي الكلي: {grand_total:.2f} ريال",
    ]
    en_lines += [
        f"Total employer contribution: {total_employer:.2f} SAR",
        f"Total employee contribution: {total_employee:.2f} SAR",
        f"Grand total: {grand_total:.2f} SAR",
    ]
    return LocalizedText(ar="\n".join(ar_lines), en="\n".join(en_lines))
