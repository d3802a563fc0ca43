"""
Leave Calculator
================

Annual leave entitlement and sick-leave balances (labor law articles 109
and 117).

Policy:
- Annual leave: `annual_days` per year, `extended_annual_days` once tenure
  reaches `extended_after_years`. A partial year accrues pro rata over 365
  days.
- Sick leave: consecutive pay tiers within one year of service (full pay,
  then three quarters, then unpaid by default). Days used are consumed from
  the first tier onward.

Version: 0.1.0
"""

from dataclasses import dataclass, field

from services.calculators.validation import require_non_negative
from shared.exceptions import InvalidInput
from shared.logging import get_logger
from shared.models import LaborLawRegulation, LeaveRules, LocalizedText, Regulation


logger = get_logger(__name__)

DAYS_PER_YEAR = 365


@dataclass
class AnnualLeaveResult:
    """Annual leave entitlement for one year."""

    entitled_days: int
    accrued_days: float
    extended: bool
    summary: LocalizedText


@dataclass
class SickLeaveBalance:
    """Remaining days of one pay tier."""

    pay_rate: float
    days: int
    remaining_days: int


@dataclass
class SickLeaveResult:
    """Sick-leave balances after `days_used` days."""

    days_used: int
    current_pay_rate: float
    balances: list[SickLeaveBalance] = field(default_factory=list)
    total_remaining: int = 0
    summary: LocalizedText | None = None

    @property
    def exhausted(self) -> bool:
        return self.total_remaining == 0

    def remaining_at(self, pay_rate: float) -> int:
        """Remaining days across tiers paying `pay_rate`."""
        return sum(b.remaining_days for b in self.balances if b.pay_rate == pay_rate)


def leave_rules(regulation: Regulation | None) -> LeaveRules:
    """Leave rules carried by a labor law record, or the statutory defaults."""
    if isinstance(regulation, LaborLawRegulation):
        return regulation.leave
    return LeaveRules()


def calculate_annual_leave(
    years_of_service: float,
    days_worked: float = DAYS_PER_YEAR,
    rules: LeaveRules | None = None,
) -> AnnualLeaveResult:
    """
    Calculate the annual leave entitlement.

    Args:
        years_of_service: Completed tenure in years
        days_worked: Days worked in the leave year (365 for a full year)
        rules: Leave rules (statutory defaults if not provided)

    Returns:
        AnnualLeaveResult

    Raises:
        InvalidInput: If tenure is negative or days worked is outside 0-365
    """
    rules = rules or LeaveRules()

    years = require_non_negative("years_of_service", years_of_service)
    days = require_non_negative("days_worked", days_worked)
    if days > DAYS_PER_YEAR:
        raise InvalidInput("days_worked", days, f"must not exceed {DAYS_PER_YEAR}")

    extended = years >= rules.extended_after_years
    entitled = rules.extended_annual_days if extended else rules.annual_days
    accrued = round(entitled * days / DAYS_PER_YEAR, 2)

    return AnnualLeaveResult(
        entitled_days=entitled,
        accrued_days=accrued,
        extended=extended,
        summary=LocalizedText(
            ar=f"الإجازة السنوية المستحقة: {entitled} يوماً، المستحق حتى الآن: {accrued:g} يوماً",
            en=f"Annual leave: {entitled} days, accrued so far: {accrued:g} days",
        ),
    )


def calculate_sick_leave(days_used: int, rules: LeaveRules | None = None) -> SickLeaveResult:
    """
    Calculate remaining sick leave per pay tier.

    Args:
        days_used: Sick days already taken in the current year
        rules: Leave rules (statutory defaults if not provided)

    Returns:
        SickLeaveResult; `current_pay_rate` is the rate of the tier the
        last used day fell in (the first tier when none are used), and 0
        once every tier is consumed

    Raises:
        InvalidInput: If days used is negative or fractional
    """
    rules = rules or LeaveRules()

    used = require_non_negative("days_used", days_used)
    if used != int(used):
        raise InvalidInput("days_used", used, "must be a whole number of days")
    used = int(used)

    balances: list[SickLeaveBalance] = []
    current_rate: float | None = None
    start = 0
    for tier in rules.sick_leave_tiers:
        consumed = min(max(0, used - start), tier.days)
        balances.append(
            SickLeaveBalance(
                pay_rate=tier.pay_rate,
                days=tier.days,
                remaining_days=tier.days - consumed,
            )
        )
        if current_rate is None and used <= start + tier.days:
            current_rate = tier.pay_rate
        start += tier.days

    result = SickLeaveResult(
        days_used=used,
        current_pay_rate=current_rate if current_rate is not None else 0.0,
        balances=balances,
        total_remaining=sum(b.remaining_days for b in balances),
    )
    result.summary = _sick_leave_summary(result)

    logger.info(
        "sick_leave_calculated",
        days_used=used,
        current_pay_rate=result.current_pay_rate,
        total_remaining=result.total_remaining,
    )
    return result


def _sick_leave_summary(result: SickLeaveResult) -> LocalizedText:
    ar_lines = [f"أيام الإجازة المرضية المستخدمة: {result.days_used}"]
    en_lines = [f"Sick days used: {result.days_used}"]
    for balance in result.balances:
        rate = round(balance.pay_rate * 100)
        ar_lines.append(f"المتبقي بأجر {rate}%: {balance.remaining_days} يوماً")
        en_lines.append(f"Remaining at {rate}% pay: {balance.remaining_days} days")
    ar_lines.append(f"إجمالي المتبقي: {result.total_remaining} يوماً")
    en_lines.append(f"Total remaining: {result.total_remaining} days")
    return LocalizedText(ar="\n".join(ar_lines), en="\n".join(en_lines))
