"""
Working Time Checks
===================

Probation period and working-hour validation (labor law articles 53 and
98).

Version: 0.1.0
"""

from dataclasses import dataclass, field
from datetime import date, timedelta

from services.calculators.validation import require_non_negative
from shared.exceptions import InvalidInput
from shared.logging import get_logger
from shared.models import LaborLawRegulation, LocalizedText, Regulation, WorkingTimeRules


logger = get_logger(__name__)


@dataclass
class ProbationCheck:
    """Probation period against the statutory limit."""

    valid: bool
    probation_days: int
    max_days: int
    end_date: date
    message: LocalizedText


@dataclass
class WorkingHoursCheck:
    """Scheduled hours against the daily and weekly caps."""

    valid: bool
    max_daily_hours: float
    max_weekly_hours: float
    issues: list[LocalizedText] = field(default_factory=list)


def working_time_rules(regulation: Regulation | None) -> WorkingTimeRules:
    """Working-time rules carried by a labor law record, or the statutory defaults."""
    if isinstance(regulation, LaborLawRegulation):
        return regulation.working_time
    return WorkingTimeRules()


def validate_probation_period(
    start_date: date,
    probation_days: int,
    extended: bool = False,
    rules: WorkingTimeRules | None = None,
) -> ProbationCheck:
    """
    Check a probation period against the limit.

    Args:
        start_date: First day of employment
        probation_days: Agreed probation length in days
        extended: Whether the written extension applies
        rules: Working-time rules (statutory defaults if not provided)

    Returns:
        ProbationCheck; an over-long period ends at the limit

    Raises:
        InvalidInput: If the period is negative or fractional
    """
    rules = rules or WorkingTimeRules()

    days = require_non_negative("probation_days", probation_days)
    if days != int(days):
        raise InvalidInput("probation_days", days, "must be a whole number of days")
    days = int(days)

    max_days = rules.probation_max_extended_days if extended else rules.probation_max_days
    valid = days <= max_days
    end_date = start_date + timedelta(days=min(days, max_days))

    if valid:
        message = LocalizedText(
            ar=f"فترة التجربة صالحة ({days} يوماً)",
            en=f"Probation period is valid ({days} days)",
        )
    else:
        message = LocalizedText(
            ar=f"فترة التجربة تتجاوز الحد المسموح ({max_days} يوماً)",
            en=f"Probation period exceeds the {max_days}-day limit",
        )
        logger.info("probation_limit_exceeded", probation_days=days, max_days=max_days)

    return ProbationCheck(
        valid=valid,
        probation_days=days,
        max_days=max_days,
        end_date=end_date,
        message=message,
    )


def validate_working_hours(
    daily_hours: float,
    weekly_hours: float,
    ramadan: bool = False,
    muslim: bool = True,
    rules: WorkingTimeRules | None = None,
) -> WorkingHoursCheck:
    """
    Check scheduled hours against the caps.

    The reduced Ramadan caps apply to Muslim employees only.

    Raises:
        InvalidInput: If either figure is negative
    """
    rules = rules or WorkingTimeRules()

    daily = require_non_negative("daily_hours", daily_hours)
    weekly = require_non_negative("weekly_hours", weekly_hours)

    if ramadan and muslim:
        max_daily, max_weekly = rules.ramadan_daily_hours, rules.ramadan_weekly_hours
    else:
        max_daily, max_weekly = rules.max_daily_hours, rules.max_weekly_hours

    issues: list[LocalizedText] = []
    if daily > max_daily:
        issues.append(
            LocalizedText(
                ar=f"ساعات العمل اليومية ({daily:g}) تتجاوز الحد الأقصى ({max_daily:g})",
                en=f"Daily hours ({daily:g}) exceed the maximum ({max_daily:g})",
            )
        )
    if weekly > max_weekly:
        issues.append(
            LocalizedText(
                ar=f"ساعات العمل الأسبوعية ({weekly:g}) تتجاوز الحد الأقصى ({max_weekly:g})",
                en=f"Weekly hours ({weekly:g}) exceed the maximum ({max_weekly:g})",
            )
        )

    return WorkingHoursCheck(
        valid=not issues,
        max_daily_hours=max_daily,
        max_weekly_hours=max_weekly,
        issues=issues,
    )
