"""
Common Models
=============

Bilingual text, languages and partial-result containers.

Version: 0.1.0
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from shared.exceptions import KnowledgeError, PartialFailure

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


class Language(str, Enum):
    """Languages every bilingual field must carry."""

    AR = "ar"
    EN = "en"


class KnowledgeModel(BaseModel):
    """Base for knowledge base documents (camelCase on the wire, immutable)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        # Defaults pass through the read-only wrappers too
        validate_default=True,
    )


def _read_only(value: dict[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(value)


def _as_dict(value: Mapping[Any, Any]) -> dict[Any, Any]:
    return dict(value)


# Validated as a dict, held as a read-only view
FrozenMap = Annotated[dict[K, V], AfterValidator(_read_only), PlainSerializer(_as_dict)]


def freeze(value: Any) -> Any:
    """Recursively turn decoded JSON containers into read-only ones."""
    if isinstance(value, dict):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(freeze(v) for v in value)
    return value


class LocalizedText(KnowledgeModel):
    """Text pair with a required Arabic and English variant."""

    ar: str = Field(..., min_length=1)
    en: str = Field(..., min_length=1)

    def get(self, language: Language | str) -> str:
        """Resolve the variant for an explicit language."""
        return getattr(self, Language(language).value)


@dataclass(frozen=True)
class EntryFailure:
    """One failed entry of a bulk operation."""

    key: str
    error_code: str
    message: str

    @classmethod
    def from_error(cls, key: str, error: Exception) -> "EntryFailure":
        """Build a failure record from a caught exception."""
        if isinstance(error, KnowledgeError):
            return cls(key=key, error_code=error.error_code, message=error.message)
        return cls(key=key, error_code=type(error).__name__.upper(), message=str(error))


@dataclass
class PartialResult(Generic[T]):
    """
    Result of a bulk operation.

    Successes are keyed and kept in enumeration order; failures are reported
    per entry and never dropped.
    """

    successes: dict[str, T] = field(default_factory=dict)
    failures: list[EntryFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no entry failed."""
        return not self.failures

    @property
    def failed_keys(self) -> list[str]:
        return [f.key for f in self.failures]

    def add_success(self, key: str, value: T) -> None:
        self.successes[key] = value

    def add_failure(self, key: str, error: Exception) -> EntryFailure:
        failure = EntryFailure.from_error(key, error)
        self.failures.append(failure)
        return failure

    def values(self) -> list[T]:
        return list(self.successes.values())

    def raise_for_failures(self) -> None:
        """Raise PartialFailure if any entry failed."""
        if self.failures:
            raise PartialFailure(self)

    def __iter__(self) -> Iterator[T]:
        return iter(self.successes.values())

    def __len__(self) -> int:
        return len(self.successes)
