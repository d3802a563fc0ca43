"""
Calculation Rule Tables
=======================

Typed numeric tables the compliance calculators read from regulation
records. Every table ships statutory defaults so a calculator still runs
when a record omits a table, and a content update to the record changes
behavior without a code change.

Tables:
- EndOfServiceRules: half/full month accrual and resignation tiers
- LeaveRules: annual leave entitlement and sick-leave pay tiers
- WorkingTimeRules: probation limits and working-hour caps
- ContributionRates: social-insurance components, schedules and wage limits
- RetirementRules: retirement ages, subscription minimums and pension factor
- UnemploymentRules: SANED eligibility and replacement-rate tiers
- LocalizationRules: Nitaqat bands and sector requirements

Version: 0.1.0
"""

from collections.abc import Mapping
from enum import Enum

from pydantic import Field, field_validator, model_validator

from shared.models.common import FrozenMap, KnowledgeModel, LocalizedText


# =============================================================================
# End of Service
# =============================================================================


class ResignationTier(KnowledgeModel):
    """Multiplier applied to the base award from `min_years` of tenure upward."""

    min_years: float = Field(..., ge=0)
    multiplier: float = Field(..., ge=0, le=1)


class EndOfServiceRules(KnowledgeModel):
    """Award accrual rules (labor law articles 84-85)."""

    first_years_cutoff: float = Field(default=5.0, gt=0)
    first_years_rate: float = Field(default=0.5, ge=0)
    later_years_rate: float = Field(default=1.0, ge=0)
    resignation_tiers: tuple[ResignationTier, ...] = Field(
        default_factory=lambda: (
            ResignationTier(min_years=0, multiplier=0),
            ResignationTier(min_years=2, multiplier=1 / 3),
            ResignationTier(min_years=5, multiplier=2 / 3),
            ResignationTier(min_years=10, multiplier=1),
        )
    )

    @field_validator("resignation_tiers")
    @classmethod
    def tiers_start_at_zero(cls, v: tuple[ResignationTier, ...]) -> tuple[ResignationTier, ...]:
        """Tiers must be ascending and cover tenure from zero."""
        if not v or v[0].min_years != 0:
            raise ValueError("resignation tiers must start at 0 years")
        bounds = [t.min_years for t in v]
        if bounds != sorted(bounds) or len(set(bounds)) != len(bounds):
            raise ValueError("resignation tiers must be strictly ascending")
        return v

    def resignation_multiplier(self, tenure_years: float) -> float:
        """Multiplier of the highest tier whose lower bound the tenure reaches."""
        multiplier = 0.0
        for tier in self.resignation_tiers:
            if tenure_years >= tier.min_years:
                multiplier = tier.multiplier
        return multiplier


# =============================================================================
# Leave and Working Time
# =============================================================================


class SickLeaveTier(KnowledgeModel):
    """A block of sick-leave days paid at `pay_rate` of the wage."""

    days: int = Field(..., gt=0)
    pay_rate: float = Field(..., ge=0, le=1)


class LeaveRules(KnowledgeModel):
    """Annual leave (article 109) and sick leave (article 117) entitlements."""

    annual_days: int = Field(default=21, gt=0)
    extended_annual_days: int = Field(default=30, gt=0)
    extended_after_years: float = Field(default=5.0, ge=0)
    sick_leave_tiers: tuple[SickLeaveTier, ...] = Field(
        default_factory=lambda: (
            SickLeaveTier(days=30, pay_rate=1.0),
            SickLeaveTier(days=60, pay_rate=0.75),
            SickLeaveTier(days=30, pay_rate=0.0),
        ),
        min_length=1,
    )

    @property
    def sick_leave_days(self) -> int:
        return sum(tier.days for tier in self.sick_leave_tiers)


class WorkingTimeRules(KnowledgeModel):
    """Probation limits (article 53) and working-hour caps (article 98)."""

    probation_max_days: int = Field(default=90, gt=0)
    probation_max_extended_days: int = Field(default=180, gt=0)
    max_daily_hours: float = Field(default=8, gt=0)
    max_weekly_hours: float = Field(default=48, gt=0)
    # Muslim employees during Ramadan
    ramadan_daily_hours: float = Field(default=6, gt=0)
    ramadan_weekly_hours: float = Field(default=36, gt=0)

    @model_validator(mode="after")
    def extension_not_shorter(self) -> "WorkingTimeRules":
        if self.probation_max_extended_days < self.probation_max_days:
            raise ValueError("extended probation is shorter than the standard limit")
        return self


# =============================================================================
# Social Insurance
# =============================================================================


class Nationality(str, Enum):
    """Nationality class selecting the contribution schedule."""

    SAUDI = "saudi"
    NON_SAUDI = "non_saudi"


class EmploymentCategory(str, Enum):
    """Employment category selecting which components apply."""

    REGULAR = "regular"
    PENSIONER = "pensioner"  # re-employed retiree
    SANED_EXEMPT = "saned_exempt"


class ContributionComponent(str, Enum):
    """Social-insurance contribution branches."""

    ANNUITY = "annuity"
    SANED = "saned"
    OCCUPATIONAL_HAZARDS = "occupational_hazards"


ALL_COMPONENTS = (
    ContributionComponent.ANNUITY,
    ContributionComponent.SANED,
    ContributionComponent.OCCUPATIONAL_HAZARDS,
)


class ComponentRate(KnowledgeModel):
    """Employer and employee share of a component, in percent of wage."""

    employer: float = Field(..., ge=0, le=100)
    employee: float = Field(..., ge=0, le=100)

    @property
    def total(self) -> float:
        return self.employer + self.employee


class WageLimits(KnowledgeModel):
    """Bounds on the contributory wage."""

    minimum: float = Field(default=1500.0, ge=0)
    maximum: float = Field(default=45000.0, gt=0)
    saned_maximum: float = Field(default=45000.0, gt=0)

    @model_validator(mode="after")
    def minimum_below_maximum(self) -> "WageLimits":
        if self.minimum > self.maximum:
            raise ValueError("minimum wage limit exceeds maximum")
        return self


class ContributionRates(KnowledgeModel):
    """Rate table and applicability schedules for GOSI contributions."""

    components: FrozenMap[ContributionComponent, ComponentRate] = Field(
        default_factory=lambda: {
            ContributionComponent.ANNUITY: ComponentRate(employer=9, employee=9),
            ContributionComponent.SANED: ComponentRate(employer=0.75, employee=0.75),
            ContributionComponent.OCCUPATIONAL_HAZARDS: ComponentRate(employer=2, employee=0),
        }
    )
    nationality_components: FrozenMap[Nationality, tuple[ContributionComponent, ...]] = Field(
        default_factory=lambda: {
            Nationality.SAUDI: ALL_COMPONENTS,
            Nationality.NON_SAUDI: (ContributionComponent.OCCUPATIONAL_HAZARDS,),
        }
    )
    category_components: FrozenMap[EmploymentCategory, tuple[ContributionComponent, ...]] = Field(
        default_factory=lambda: {
            EmploymentCategory.REGULAR: ALL_COMPONENTS,
            EmploymentCategory.PENSIONER: (ContributionComponent.OCCUPATIONAL_HAZARDS,),
            EmploymentCategory.SANED_EXEMPT: (
                ContributionComponent.ANNUITY,
                ContributionComponent.OCCUPATIONAL_HAZARDS,
            ),
        }
    )
    wage_limits: WageLimits = Field(default_factory=WageLimits)
    default_housing_ratio: float = Field(default=0.25, ge=0)

    def applicable_components(
        self,
        nationality: Nationality,
        category: EmploymentCategory,
    ) -> list[ContributionComponent]:
        """Components both the nationality schedule and the category allow, in schedule order."""
        by_nationality = self.nationality_components.get(nationality, ())
        by_category = set(self.category_components.get(category, ()))
        return [c for c in by_nationality if c in by_category and c in self.components]


class Gender(str, Enum):
    """Gender selecting the retirement schedule."""

    MALE = "male"
    FEMALE = "female"


class RetirementSchedule(KnowledgeModel):
    """Retirement ages and subscription minimums for one gender."""

    normal_age: int = Field(..., gt=0)
    early_age: int = Field(..., gt=0)
    minimum_subscription_months: int = Field(default=300, ge=0)
    early_minimum_subscription_months: int = Field(default=120, ge=0)

    @model_validator(mode="after")
    def early_before_normal(self) -> "RetirementSchedule":
        if self.early_age > self.normal_age:
            raise ValueError("early retirement age exceeds normal age")
        return self


class RetirementRules(KnowledgeModel):
    """Annuity-branch retirement schedules and the pension formula."""

    schedules: FrozenMap[Gender, RetirementSchedule] = Field(
        default_factory=lambda: {
            Gender.MALE: RetirementSchedule(normal_age=60, early_age=55),
            Gender.FEMALE: RetirementSchedule(normal_age=55, early_age=50),
        }
    )
    # Monthly pension = average wage x subscription years x factor
    pension_factor: float = Field(default=0.025, gt=0)
    early_reduction_per_year: float = Field(default=3.0, ge=0)
    max_early_reduction: float = Field(default=30.0, ge=0, le=100)


# =============================================================================
# Unemployment (SANED)
# =============================================================================


class ReplacementTier(KnowledgeModel):
    """Replacement rate paid from benefit month `from_month` onward."""

    from_month: int = Field(..., ge=1)
    rate: float = Field(..., ge=0, le=1)


class UnemploymentRules(KnowledgeModel):
    """SANED compensation schedule."""

    minimum_contribution_months: int = Field(default=12, ge=0)
    max_duration_months: int = Field(default=12, ge=1)
    replacement_tiers: tuple[ReplacementTier, ...] = Field(
        default_factory=lambda: (
            ReplacementTier(from_month=1, rate=0.60),
            ReplacementTier(from_month=4, rate=0.50),
        )
    )
    max_monthly_compensation: float = Field(default=9000.0, gt=0)
    wage_cap: float = Field(default=45000.0, gt=0)
    ineligible_reasons: tuple[str, ...] = ("contract_end",)

    @field_validator("replacement_tiers")
    @classmethod
    def tiers_start_at_first_month(cls, v: tuple[ReplacementTier, ...]) -> tuple[ReplacementTier, ...]:
        if not v or v[0].from_month != 1:
            raise ValueError("replacement tiers must start at month 1")
        months = [t.from_month for t in v]
        if months != sorted(months) or len(set(months)) != len(months):
            raise ValueError("replacement tiers must be strictly ascending")
        return v

    def replacement_rate(self, benefit_month: int) -> float:
        """Rate for a 1-based benefit month; 0 past the duration cap."""
        if benefit_month < 1 or benefit_month > self.max_duration_months:
            return 0.0
        rate = 0.0
        for tier in self.replacement_tiers:
            if benefit_month >= tier.from_month:
                rate = tier.rate
        return rate


# =============================================================================
# Localization (Nitaqat)
# =============================================================================


SIZE_RANGES = ("1-9", "10-49", "50-499", "500+")


class BandThreshold(KnowledgeModel):
    """
    A localization band.

    `min_difference` is the minimum gap, in percentage points, between the
    actual and the required localization percentage. The lowest band has no
    lower bound.
    """

    key: str
    name: LocalizedText
    min_difference: float | None = None


class SectorRequirement(KnowledgeModel):
    """Required localization percentage per company size range."""

    name: LocalizedText
    requirements: FrozenMap[str, float]

    @field_validator("requirements")
    @classmethod
    def covers_size_ranges(cls, v: Mapping[str, float]) -> Mapping[str, float]:
        missing = [r for r in SIZE_RANGES if r not in v]
        if missing:
            raise ValueError(f"missing size ranges: {', '.join(missing)}")
        return v


class CountingRules(KnowledgeModel):
    """Weights applied when counting protected-nationality employees."""

    part_time_weight: float = Field(default=0.5, ge=0)
    student_weight: float = Field(default=0.5, ge=0)
    disabled_weight: float = Field(default=4.0, ge=0)
    remote_female_weight: float = Field(default=2.0, ge=0)


def _default_bands() -> tuple[BandThreshold, ...]:
    return (
        BandThreshold(key="red", name=LocalizedText(ar="الأحمر", en="Red")),
        BandThreshold(key="yellow", name=LocalizedText(ar="الأصفر", en="Yellow"), min_difference=-10),
        BandThreshold(key="green_low", name=LocalizedText(ar="الأخضر المنخفض", en="Low Green"), min_difference=0),
        BandThreshold(key="green_medium", name=LocalizedText(ar="الأخضر المتوسط", en="Medium Green"), min_difference=10),
        BandThreshold(key="green_high", name=LocalizedText(ar="الأخضر المرتفع", en="High Green"), min_difference=20),
        BandThreshold(key="platinum", name=LocalizedText(ar="البلاتيني", en="Platinum"), min_difference=30),
    )


class LocalizationRules(KnowledgeModel):
    """Band ladder (lowest to highest) and per-sector requirements."""

    bands: tuple[BandThreshold, ...] = Field(default_factory=_default_bands)
    sectors: FrozenMap[str, SectorRequirement] = Field(default_factory=dict)
    default_requirements: FrozenMap[str, float] = Field(
        default_factory=lambda: {size_range: 10.0 for size_range in SIZE_RANGES}
    )
    counting_rules: CountingRules = Field(default_factory=CountingRules)

    @field_validator("bands")
    @classmethod
    def bands_ascending(cls, v: tuple[BandThreshold, ...]) -> tuple[BandThreshold, ...]:
        """Only the lowest band may be unbounded; the rest must ascend."""
        if len(v) < 2:
            raise ValueError("at least two bands are required")
        if v[0].min_difference is not None:
            raise ValueError("lowest band must not have a lower bound")
        bounds = [b.min_difference for b in v[1:]]
        if any(b is None for b in bounds):
            raise ValueError("only the lowest band may omit min_difference")
        if bounds != sorted(bounds) or len(set(bounds)) != len(bounds):  # type: ignore[type-var]
            raise ValueError("band thresholds must be strictly ascending")
        return v
