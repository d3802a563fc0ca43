"""
Error Taxonomy Tests
====================

Version: 0.1.0
"""

import pytest

from shared.exceptions import (
    CategoryNotFound,
    ConfigUnavailable,
    InvalidInput,
    KnowledgeError,
    MalformedError,
    NotFoundError,
    RegulationMalformed,
    RegulationNotFound,
    StoreUnavailable,
    UnavailableError,
)


class TestErrorTaxonomy:
    """Tests for error classes and their serialization."""

    @pytest.mark.parametrize(
        "error,parent",
        [
            (RegulationNotFound("gosi"), NotFoundError),
            (CategoryNotFound("aviation"), NotFoundError),
            (RegulationMalformed("gosi"), MalformedError),
            (ConfigUnavailable("missing"), UnavailableError),
            (StoreUnavailable("disk"), UnavailableError),
            (InvalidInput("wage", -1, "must not be negative"), KnowledgeError),
        ],
    )
    def test_hierarchy(self, error: KnowledgeError, parent: type[KnowledgeError]) -> None:
        assert isinstance(error, parent)
        assert isinstance(error, KnowledgeError)

    def test_only_unavailable_is_retryable(self) -> None:
        assert StoreUnavailable("disk").retryable
        assert not RegulationNotFound("gosi").retryable
        assert not InvalidInput("wage", -1, "bad").retryable

    def test_to_dict(self) -> None:
        error = RegulationMalformed("gosi", field_errors={"name.ar": "Field required"})

        assert error.to_dict() == {
            "error_code": "REGULATION_MALFORMED",
            "message": "Regulation malformed: gosi",
            "details": {"regulation_id": "gosi", "field_errors": {"name.ar": "Field required"}},
            "retryable": False,
        }

    def test_str(self) -> None:
        assert str(InvalidInput("wage", -1, "must not be negative")) == (
            "INVALID_INPUT: Invalid wage: must not be negative"
        )
