"""
Knowledge Engine Errors
=======================

Error taxonomy shared by the knowledge cache and the calculators.

Taxonomy:
- NotFoundError: identifier or category unknown
- MalformedError: record fails structural validation
- UnavailableError: backing read failed entirely (retryable)
- InvalidInput: calculator received out-of-domain input
- PartialFailure: bulk operation with some failed entries

Version: 0.1.0
"""

from typing import Any


class KnowledgeError(Exception):
    """Base exception for all knowledge engine errors."""

    error_code: str = "KNOWLEDGE_ERROR"
    retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
        }

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


# =============================================================================
# Not Found
# =============================================================================


class NotFoundError(KnowledgeError):
    """Requested identifier or category is unknown."""

    error_code = "NOT_FOUND"


class RegulationNotFound(NotFoundError):
    """The store has no record for a regulation id."""

    error_code = "REGULATION_NOT_FOUND"

    def __init__(self, regulation_id: str) -> None:
        super().__init__(
            f"Regulation not found: {regulation_id}",
            details={"regulation_id": regulation_id},
        )
        self.regulation_id = regulation_id


class CategoryNotFound(NotFoundError):
    """A category label resolved to no regulations."""

    error_code = "CATEGORY_NOT_FOUND"

    def __init__(self, label: str) -> None:
        super().__init__(f"Unknown category: {label}", details={"category": label})
        self.label = label


# =============================================================================
# Malformed
# =============================================================================


class MalformedError(KnowledgeError):
    """Record failed structural validation."""

    error_code = "MALFORMED"


class RegulationMalformed(MalformedError):
    """A regulation record is missing required fields or has bad shapes."""

    error_code = "REGULATION_MALFORMED"

    def __init__(
        self,
        regulation_id: str,
        field_errors: dict[str, str] | None = None,
        reason: str | None = None,
    ) -> None:
        details: dict[str, Any] = {"regulation_id": regulation_id}
        if field_errors:
            details["field_errors"] = field_errors
        if reason:
            details["reason"] = reason
        super().__init__(f"Regulation malformed: {regulation_id}", details=details)
        self.regulation_id = regulation_id
        self.field_errors = field_errors or {}


# =============================================================================
# Unavailable
# =============================================================================


class UnavailableError(KnowledgeError):
    """A backing read failed entirely. Callers may retry."""

    error_code = "UNAVAILABLE"
    retryable = True


class ConfigUnavailable(UnavailableError):
    """The AI configuration document is missing or invalid."""

    error_code = "CONFIG_UNAVAILABLE"

    def __init__(self, reason: str) -> None:
        super().__init__(f"AI configuration unavailable: {reason}", details={"reason": reason})


class StoreUnavailable(UnavailableError):
    """The regulation store cannot enumerate or read records."""

    error_code = "STORE_UNAVAILABLE"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Regulation store unavailable: {reason}", details={"reason": reason})


# =============================================================================
# Calculator input
# =============================================================================


class InvalidInput(KnowledgeError):
    """Calculator received an out-of-domain value."""

    error_code = "INVALID_INPUT"

    def __init__(self, field: str, value: Any, reason: str) -> None:
        super().__init__(
            f"Invalid {field}: {reason}",
            details={"field": field, "value": value, "reason": reason},
        )
        self.field = field
        self.value = value


# =============================================================================
# Bulk
# =============================================================================


class PartialFailure(KnowledgeError):
    """Bulk operation where some entries failed. Carries the full result."""

    error_code = "PARTIAL_FAILURE"

    def __init__(self, result: Any) -> None:
        failures = list(getattr(result, "failures", []))
        successes = list(getattr(result, "successes", []))
        super().__init__(
            f"{len(failures)} of {len(failures) + len(successes)} entries failed",
            details={"failed_keys": [f.key for f in failures]},
        )
        self.result = result
