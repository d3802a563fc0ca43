"""
Compliance Checker
==================

Rule checks of employer facts against one regulation.

Checks by regulation:
- labor-law: written contract, probation length
- wps-mudad: wage payment delay
- nitaqat: localization percentage floor
- gosi: registration of paid employees

Other regulations have no checks and report compliant. An unknown
regulation id is reported as an issue, not raised.

Version: 0.1.0
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from services.calculators.working_time import working_time_rules
from services.knowledge.cache import KnowledgeCacheManager
from shared.exceptions import NotFoundError
from shared.logging import get_logger
from shared.models import KnowledgeModel, LocalizedText, Regulation


logger = get_logger(__name__)


class ComplianceFacts(KnowledgeModel):
    """Employer facts; every field is optional and unset facts are not checked."""

    contract_type: str | None = None
    written_contract: bool | None = None
    probation_days: int | None = None
    payment_delay_days: int | None = None
    localization_percentage: float | None = None
    monthly_wage: float | None = None
    gosi_registered: bool | None = None


@dataclass
class ComplianceThresholds:
    """Day and percentage limits not carried by the regulation records."""

    # Wage payment delay (days)
    wps_inspection_after_days: int = 20
    wps_suspension_after_days: int = 60

    # Localization floor below which the employer is in the red band
    localization_floor: float = 10.0


@dataclass
class ComplianceReport:
    """Outcome of one compliance check."""

    regulation_id: str
    issues: list[LocalizedText] = field(default_factory=list)
    recommendations: list[LocalizedText] = field(default_factory=list)

    @property
    def compliant(self) -> bool:
        return not self.issues

    def add(self, issue: LocalizedText, recommendation: LocalizedText) -> None:
        self.issues.append(issue)
        self.recommendations.append(recommendation)


Check = Callable[[Regulation, ComplianceFacts, ComplianceReport], None]


class ComplianceChecker:
    """Runs the checks registered for a regulation id."""

    def __init__(
        self,
        cache: KnowledgeCacheManager,
        thresholds: ComplianceThresholds | None = None,
    ) -> None:
        self.cache = cache
        self.thresholds = thresholds or ComplianceThresholds()
        self._checks: dict[str, Check] = {
            "labor-law": self._check_labor_law,
            "wps-mudad": self._check_wage_protection,
            "nitaqat": self._check_localization,
            "gosi": self._check_social_insurance,
        }

    def check(
        self,
        regulation_id: str,
        facts: ComplianceFacts | Mapping[str, Any],
    ) -> ComplianceReport:
        """
        Check employer facts against a regulation.

        Args:
            regulation_id: Regulation identifier (e.g., "labor-law")
            facts: Facts model or a mapping with camelCase or snake_case keys

        Returns:
            ComplianceReport

        Raises:
            RegulationMalformed: If the record fails validation
            StoreUnavailable: If the store cannot be read
        """
        if not isinstance(facts, ComplianceFacts):
            facts = ComplianceFacts.model_validate(dict(facts))

        report = ComplianceReport(regulation_id=regulation_id)

        try:
            regulation = self.cache.load_regulation(regulation_id)
        except NotFoundError:
            report.add(
                LocalizedText(
                    ar=f"النظام غير موجود: {regulation_id}",
                    en=f"Regulation not found: {regulation_id}",
                ),
                LocalizedText(
                    ar="تحقق من معرف النظام الصحيح",
                    en="Check the regulation identifier",
                ),
            )
            logger.warning("compliance_unknown_regulation", regulation_id=regulation_id)
            return report

        check = self._checks.get(regulation_id)
        if check is not None:
            check(regulation, facts, report)

        logger.info(
            "compliance_checked",
            regulation_id=regulation_id,
            compliant=report.compliant,
            issues=len(report.issues),
        )
        return report

    def _check_labor_law(
        self,
        regulation: Regulation,
        facts: ComplianceFacts,
        report: ComplianceReport,
    ) -> None:
        if facts.contract_type and not facts.written_contract:
            report.add(
                LocalizedText(ar="العقد يجب أن يكون مكتوباً", en="The contract must be in writing"),
                LocalizedText(
                    ar="وثّق العقد كتابياً من نسختين",
                    en="Put the contract in writing in two copies",
                ),
            )

        max_days = working_time_rules(regulation).probation_max_extended_days
        if facts.probation_days is not None and facts.probation_days > max_days:
            report.add(
                LocalizedText(
                    ar=f"فترة التجربة تتجاوز الحد المسموح ({max_days} يوماً)",
                    en=f"Probation exceeds the {max_days}-day limit",
                ),
                LocalizedText(
                    ar=f"خفّض فترة التجربة إلى {max_days} يوماً أو أقل",
                    en=f"Reduce the probation period to {max_days} days or less",
                ),
            )

    def _check_wage_protection(
        self,
        regulation: Regulation,
        facts: ComplianceFacts,
        report: ComplianceReport,
    ) -> None:
        delay = facts.payment_delay_days
        if delay is None:
            return

        recommendation = LocalizedText(
            ar="صرف الأجور المتأخرة وتحديث ملف حماية الأجور",
            en="Pay the outstanding wages and upload the wage file",
        )
        if delay > self.thresholds.wps_suspension_after_days:
            report.add(
                LocalizedText(
                    ar=f"تأخر صرف الأجور يتجاوز {self.thresholds.wps_suspension_after_days} يوماً - إيقاف خدمات",
                    en=(
                        f"Wage payment over {self.thresholds.wps_suspension_after_days} days late: "
                        "services suspended"
                    ),
                ),
                recommendation,
            )
        elif delay > self.thresholds.wps_inspection_after_days:
            report.add(
                LocalizedText(
                    ar=f"تأخر صرف الأجور يتجاوز {self.thresholds.wps_inspection_after_days} يوماً - طلب تفتيش",
                    en=(
                        f"Wage payment over {self.thresholds.wps_inspection_after_days} days late: "
                        "inspection requested"
                    ),
                ),
                recommendation,
            )

    def _check_localization(
        self,
        regulation: Regulation,
        facts: ComplianceFacts,
        report: ComplianceReport,
    ) -> None:
        percentage = facts.localization_percentage
        if percentage is not None and percentage < self.thresholds.localization_floor:
            report.add(
                LocalizedText(
                    ar="نسبة التوطين منخفضة جداً - نطاق أحمر",
                    en="Localization is too low: red band",
                ),
                LocalizedText(
                    ar="وظّف موظفين سعوديين لرفع نسبة التوطين",
                    en="Hire Saudi employees to raise the localization rate",
                ),
            )

    def _check_social_insurance(
        self,
        regulation: Regulation,
        facts: ComplianceFacts,
        report: ComplianceReport,
    ) -> None:
        if facts.monthly_wage and not facts.gosi_registered:
            report.add(
                LocalizedText(
                    ar="الموظف غير مسجل في التأمينات الاجتماعية",
                    en="The employee is not registered with GOSI",
                ),
                LocalizedText(
                    ar="سجّل الموظف في التأمينات الاجتماعية",
                    en="Register the employee with GOSI",
                ),
            )
