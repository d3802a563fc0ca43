"""
Retirement Projection Tests
===========================

Tests for retirement ages, subscription length, pension estimate and
early retirement.

Version: 0.1.0
"""

from datetime import date

import pytest

from services.calculators import (
    RetirementInput,
    RetirementProjection,
    project_retirement,
    retirement_rules,
)
from services.calculators.retirement import age_on, subscription_months
from shared.exceptions import InvalidInput
from shared.models import Gender, RetirementRules, parse_regulation
from tests.conftest import make_regulation


AS_OF = date(2025, 1, 1)


def projection(
    gender: Gender = Gender.MALE,
    birth: date = date(1968, 1, 1),
    wage: float = 10_000,
    start: date | None = date(2000, 1, 1),
    rules: RetirementRules | None = None,
) -> RetirementProjection:
    request = RetirementInput(
        gender=gender,
        birth_date=birth,
        average_wage=wage,
        subscription_start=start,
        as_of=AS_OF,
    )
    return project_retirement(request, rules)


class TestDates:
    """Tests for age and subscription arithmetic."""

    def test_age_before_birthday(self) -> None:
        assert age_on(date(1970, 6, 15), date(2025, 6, 14)) == 54

    def test_age_on_birthday(self) -> None:
        assert age_on(date(1970, 6, 15), date(2025, 6, 15)) == 55

    def test_subscription_months(self) -> None:
        assert subscription_months(date(2015, 3, 20), date(2025, 1, 5)) == 118

    def test_future_start_counts_nothing(self) -> None:
        assert subscription_months(date(2026, 1, 1), AS_OF) == 0


class TestProjection:
    """Tests for the full projection."""

    def test_male_with_full_subscription(self) -> None:
        """25 years x 2.5% of 10,000 = 6,250 a month."""
        result = projection()

        assert result.current_age == 57
        assert result.normal_age == 60
        assert result.years_to_retirement == 3
        assert result.subscription_months == 300
        assert result.meets_minimum_subscription
        assert result.estimated_monthly_pension == pytest.approx(6_250)

    def test_early_retirement_reduction(self) -> None:
        early = projection().early_retirement

        assert early.eligible
        assert early.early_age == 55
        assert early.pension_reduction == pytest.approx(9)

    def test_female_schedule(self) -> None:
        result = projection(Gender.FEMALE, birth=date(1972, 3, 10), wage=8_000, start=date(2015, 1, 1))

        assert result.current_age == 52
        assert result.normal_age == 55
        assert result.subscription_months == 120
        assert not result.meets_minimum_subscription
        assert result.estimated_monthly_pension == pytest.approx(2_000)
        assert result.early_retirement.eligible
        assert result.early_retirement.pension_reduction == pytest.approx(9)

    def test_pension_capped_at_average_wage(self) -> None:
        result = projection(birth=date(1960, 1, 1), start=date(1980, 1, 1))

        assert result.estimated_monthly_pension == pytest.approx(10_000)
        assert result.years_to_retirement == 0
        assert result.early_retirement.pension_reduction == 0

    def test_too_young_for_early_retirement(self) -> None:
        early = projection(birth=date(1975, 1, 1), start=date(1995, 1, 1)).early_retirement

        assert not early.eligible
        assert early.pension_reduction is None

    def test_short_subscription_blocks_early_retirement(self) -> None:
        result = projection(start=date(2020, 1, 1))

        assert result.subscription_months == 60
        assert not result.early_retirement.eligible

    def test_without_subscription_start(self) -> None:
        result = projection(start=None)

        assert result.subscription_months is None
        assert result.estimated_monthly_pension is None
        assert result.early_retirement is None
        assert result.years_to_retirement == 3

    def test_reduction_capped(self) -> None:
        rules = RetirementRules(early_reduction_per_year=10, max_early_reduction=25)

        early = projection(rules=rules).early_retirement

        assert early.pension_reduction == pytest.approx(25)

    def test_summary_is_bilingual(self) -> None:
        summary = projection().summary

        assert "6250.00 SAR" in summary.en
        assert "6250.00" in summary.ar
        assert "9% reduction" in summary.en


class TestValidation:
    """Tests for out-of-domain input."""

    def test_birth_date_in_future(self) -> None:
        with pytest.raises(InvalidInput) as exc_info:
            projection(birth=date(2030, 1, 1))

        assert exc_info.value.field == "birth_date"

    def test_negative_wage(self) -> None:
        with pytest.raises(InvalidInput) as exc_info:
            projection(wage=-1)

        assert exc_info.value.field == "average_wage"

    def test_early_age_after_normal_age_rejected(self) -> None:
        with pytest.raises(ValueError):
            RetirementRules(schedules={"male": {"normalAge": 60, "earlyAge": 62}})


class TestRulesFromRegulation:
    """Tests for retirement rules read from a GOSI record."""

    def test_record_rules_apply(self) -> None:
        regulation = parse_regulation(
            "gosi",
            make_regulation(
                "gosi",
                retirement={"schedules": {"male": {"normalAge": 62, "earlyAge": 57}}},
            ),
        )
        rules = retirement_rules(regulation)

        assert projection(rules=rules).normal_age == 62

    def test_gender_without_schedule(self) -> None:
        rules = RetirementRules(schedules={"male": {"normalAge": 60, "earlyAge": 55}})

        with pytest.raises(InvalidInput) as exc_info:
            projection(Gender.FEMALE, birth=date(1972, 3, 10), rules=rules)

        assert exc_info.value.field == "gender"

    def test_defaults_without_record(self) -> None:
        assert retirement_rules(None) == RetirementRules()
