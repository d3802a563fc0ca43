"""
AI Configuration Model
======================

Assistant persona, response templates, greetings, error messages and the
system-prompt/disclaimer pair handed to the text-generation service.

Version: 0.1.0
"""

from collections.abc import Mapping

from pydantic import Field, field_validator

from shared.models.common import FrozenMap, KnowledgeModel, Language, LocalizedText


class AssistantProfile(KnowledgeModel):
    """Assistant persona."""

    name: LocalizedText
    personality: LocalizedText
    tone: tuple[str, ...] = ()
    capabilities: tuple[LocalizedText, ...] = ()


class LanguageSettings(KnowledgeModel):
    """Languages the assistant answers in."""

    supported: tuple[Language, ...] = (Language.AR, Language.EN)


class ResponseCatalog(KnowledgeModel):
    """Templates, greetings and error messages."""

    templates: FrozenMap[str, LocalizedText] = Field(default_factory=dict)
    greetings: tuple[LocalizedText, ...] = Field(..., min_length=1)
    errors: FrozenMap[str, LocalizedText]

    @field_validator("errors")
    @classmethod
    def has_general_error(cls, v: Mapping[str, LocalizedText]) -> Mapping[str, LocalizedText]:
        """A `general` message is the fallback for unknown error ids."""
        if "general" not in v:
            raise ValueError("errors table must define 'general'")
        return v


class ContextTexts(KnowledgeModel):
    """Texts framing every generated context block."""

    system_prompt: LocalizedText
    legal_disclaimer: LocalizedText
    update_notice: LocalizedText | None = None


class AIConfig(KnowledgeModel):
    """Process-wide assistant configuration."""

    assistant: AssistantProfile
    language: LanguageSettings = Field(default_factory=LanguageSettings)
    responses: ResponseCatalog
    context: ContextTexts
