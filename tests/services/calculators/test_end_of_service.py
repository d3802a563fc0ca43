"""
End-of-Service Calculator Tests
===============================

Tests for award accrual, resignation tiers and disqualification.

Version: 0.1.0
"""

from typing import Any

import pytest

from services.calculators import (
    EndOfServiceInput,
    EndOfServiceResult,
    TerminationReason,
    calculate_end_of_service,
    end_of_service_rules,
)
from shared.exceptions import InvalidInput
from shared.models import EndOfServiceRules, parse_regulation
from tests.conftest import make_regulation


def award(
    wage: float = 10_000,
    years: float = 0,
    months: int = 0,
    reason: TerminationReason = TerminationReason.EMPLOYER_INITIATED,
    **kwargs: Any,
) -> EndOfServiceResult:
    request = EndOfServiceInput(
        monthly_wage=wage,
        tenure_years=years,
        tenure_months=months,
        reason=reason,
        **kwargs,
    )
    return calculate_end_of_service(request)


class TestAccrual:
    """Tests for the base award."""

    def test_employer_initiated_seven_years(self) -> None:
        """(5 x 0.5 x 10,000) + (2 x 1.0 x 10,000) = 45,000."""
        result = award(years=7)

        assert result.amount == pytest.approx(45_000)
        assert result.first_years_component == pytest.approx(25_000)
        assert result.later_years_component == pytest.approx(20_000)
        assert result.multiplier == 1.0

    def test_exactly_five_years(self) -> None:
        """Nothing accrues past the cutoff at exactly five years."""
        result = award(years=5)

        assert result.later_years_component == 0
        assert result.first_years_component == pytest.approx(25_000)

    def test_remainder_past_cutoff(self) -> None:
        """The half year past five accrues at the later rate."""
        result = award(years=5, months=6)

        assert result.tenure_years == pytest.approx(5.5)
        assert result.first_years_component == pytest.approx(25_000)
        assert result.later_years_component == pytest.approx(5_000)
        assert result.amount == pytest.approx(30_000)

    def test_partial_year_pro_rated(self) -> None:
        result = award(years=1, months=6)

        assert result.amount == pytest.approx(7_500)

    def test_zero_tenure(self) -> None:
        assert award(years=0).amount == 0


class TestResignation:
    """Tests for the resignation multiplier."""

    def test_three_years(self) -> None:
        """Base 15,000 scaled by 1/3."""
        result = award(years=3, reason=TerminationReason.RESIGNATION)

        assert result.base_entitlement == pytest.approx(15_000)
        assert result.multiplier == pytest.approx(1 / 3)
        assert result.amount == pytest.approx(5_000)

    @pytest.mark.parametrize(
        "years,multiplier",
        [(1.999, 0.0), (2.0, 1 / 3), (5.0, 2 / 3), (10.0, 1.0)],
    )
    def test_tier_boundaries(self, years: float, multiplier: float) -> None:
        result = award(years=years, reason=TerminationReason.RESIGNATION)

        assert result.multiplier == pytest.approx(multiplier)

    def test_other_reason_gets_full_award(self) -> None:
        assert award(years=3, reason=TerminationReason.OTHER).amount == pytest.approx(15_000)


class TestDisqualification:
    """Tests for the disqualifying-cause flag."""

    @pytest.mark.parametrize("reason", list(TerminationReason))
    def test_zeroes_award_for_every_reason(self, reason: TerminationReason) -> None:
        result = award(years=12, reason=reason, disqualified=True)

        assert result.amount == 0
        assert result.base_entitlement > 0
        assert "80" in result.summary.en


class TestValidation:
    """Tests for out-of-domain input."""

    @pytest.mark.parametrize(
        "kwargs,field",
        [
            ({"wage": -1, "years": 3}, "monthly_wage"),
            ({"years": -0.5}, "tenure_years"),
            ({"years": 3, "months": 12}, "tenure_months"),
            ({"wage": float("inf"), "years": 3}, "monthly_wage"),
        ],
    )
    def test_invalid_input(self, kwargs: dict[str, Any], field: str) -> None:
        with pytest.raises(InvalidInput) as exc_info:
            award(**kwargs)

        assert exc_info.value.field == field


class TestRulesFromRegulation:
    """Tests for rule tables read from a labor law record."""

    def test_record_rules_apply(self) -> None:
        regulation = parse_regulation(
            "labor-law",
            make_regulation(
                "labor-law",
                endOfService={"firstYearsCutoff": 3, "firstYearsRate": 0.5, "laterYearsRate": 1.0},
            ),
        )
        rules = end_of_service_rules(regulation)

        result = calculate_end_of_service(
            EndOfServiceInput(monthly_wage=1_000, tenure_years=4, reason="employer-initiated"),
            rules,
        )

        assert result.amount == pytest.approx(2_500)

    def test_defaults_without_record(self) -> None:
        assert end_of_service_rules(None) == EndOfServiceRules()

    def test_summary_is_bilingual(self) -> None:
        result = award(years=7)

        assert "45000.00" in result.summary.en
        assert "45000.00" in result.summary.ar
