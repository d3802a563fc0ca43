"""
Exceptions Module
=================

Error taxonomy for the knowledge cache and compliance calculators.
"""

from shared.exceptions.errors import (
    CategoryNotFound,
    ConfigUnavailable,
    InvalidInput,
    KnowledgeError,
    MalformedError,
    NotFoundError,
    PartialFailure,
    RegulationMalformed,
    RegulationNotFound,
    StoreUnavailable,
    UnavailableError,
)


__all__ = [
    "KnowledgeError",
    "NotFoundError",
    "RegulationNotFound",
    "CategoryNotFound",
    "MalformedError",
    "RegulationMalformed",
    "UnavailableError",
    "ConfigUnavailable",
    "StoreUnavailable",
    "InvalidInput",
    "PartialFailure",
]
