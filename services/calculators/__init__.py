"""
Compliance Calculators
======================

Pure statutory calculators. Each takes a request model and a rule table
read from the matching regulation record (statutory defaults when none is
given), and returns a result with a bilingual summary.

Calculators:
- End-of-service award (labor law)
- Social-insurance contributions, single and bulk (GOSI)
- Unemployment compensation (SANED)
- Localization band classification (Nitaqat)
- Annual and sick leave (labor law)
- Probation and working-hour checks (labor law)
- Retirement projection (GOSI annuities)

Version: 0.1.0
"""

from services.calculators.end_of_service import (
    EndOfServiceInput,
    EndOfServiceResult,
    TerminationReason,
    calculate_end_of_service,
    end_of_service_rules,
)
from services.calculators.leave import (
    AnnualLeaveResult,
    SickLeaveBalance,
    SickLeaveResult,
    calculate_annual_leave,
    calculate_sick_leave,
    leave_rules,
)
from services.calculators.localization import (
    BandClassification,
    classify_localization,
    company_size_range,
    localization_rules,
    weighted_protected_count,
)
from services.calculators.retirement import (
    EarlyRetirementOption,
    RetirementInput,
    RetirementProjection,
    project_retirement,
    retirement_rules,
)
from services.calculators.social_insurance import (
    BulkContributionResult,
    ComponentContribution,
    ContributionInput,
    ContributionResult,
    ContributionTotals,
    calculate_bulk_contributions,
    calculate_contribution,
    contribution_rates,
    subscribable_wage,
)
from services.calculators.unemployment import (
    CompensationStatus,
    UnemploymentInput,
    UnemploymentReason,
    UnemploymentResult,
    calculate_unemployment_compensation,
    unemployment_rules,
)
from services.calculators.working_time import (
    ProbationCheck,
    WorkingHoursCheck,
    validate_probation_period,
    validate_working_hours,
    working_time_rules,
)


__all__ = [
    # End of service
    "TerminationReason",
    "EndOfServiceInput",
    "EndOfServiceResult",
    "calculate_end_of_service",
    "end_of_service_rules",
    # Social insurance
    "ContributionInput",
    "ComponentContribution",
    "ContributionResult",
    "ContributionTotals",
    "BulkContributionResult",
    "calculate_contribution",
    "calculate_bulk_contributions",
    "contribution_rates",
    "subscribable_wage",
    # Unemployment
    "UnemploymentReason",
    "UnemploymentInput",
    "UnemploymentResult",
    "CompensationStatus",
    "calculate_unemployment_compensation",
    "unemployment_rules",
    # Localization
    "BandClassification",
    "classify_localization",
    "company_size_range",
    "weighted_protected_count",
    "localization_rules",
    # Leave
    "AnnualLeaveResult",
    "SickLeaveBalance",
    "SickLeaveResult",
    "calculate_annual_leave",
    "calculate_sick_leave",
    "leave_rules",
    # Working time
    "ProbationCheck",
    "WorkingHoursCheck",
    "validate_probation_period",
    "validate_working_hours",
    "working_time_rules",
    # Retirement
    "RetirementInput",
    "RetirementProjection",
    "EarlyRetirementOption",
    "project_retirement",
    "retirement_rules",
]
