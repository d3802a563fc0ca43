"""
Context Builder
===============

Assembles the localized context block consumed by the external
text-generation service, plus access to the configured response
templates, greetings and error messages.

Block layout (consumers parse it positionally):

    <system prompt>

    ### <heading>:

    ## <name> (<version>)
    <overview>
    <last-updated label>: <last amendment>

    ...one block per loaded regulation, in request order...

    <legal disclaimer>

Version: 0.1.0
"""

import random
from collections.abc import Callable, Iterable, Sequence

from services.knowledge.cache import KnowledgeCacheManager
from shared.exceptions import KnowledgeError
from shared.logging import get_logger
from shared.models import Language, LocalizedText, Regulation


logger = get_logger(__name__)


CONTEXT_HEADING = LocalizedText(
    ar="الأنظمة واللوائح ذات الصلة",
    en="Relevant Laws and Regulations",
)
LAST_UPDATED_LABEL = LocalizedText(ar="آخر تحديث", en="Last updated")

# Every topic context includes the labor law
DEFAULT_TOPIC_REGULATIONS = ["labor-law"]

# Keyword (Arabic or English) -> related regulation ids
TOPIC_REGULATION_MAP: dict[str, list[str]] = {
    "contract": ["labor-law", "qiwa"],
    "عقد": ["labor-law", "qiwa"],
    "salary": ["labor-law", "wps-mudad", "gosi"],
    "wage": ["labor-law", "wps-mudad", "gosi"],
    "راتب": ["labor-law", "wps-mudad", "gosi"],
    "أجر": ["labor-law", "wps-mudad", "gosi"],
    "gosi": ["gosi", "labor-law"],
    "insurance": ["gosi", "labor-law"],
    "تأمينات": ["gosi", "labor-law"],
    "saned": ["saned", "gosi"],
    "unemployment": ["saned", "gosi"],
    "ساند": ["saned", "gosi"],
    "تعطل": ["saned", "gosi"],
    "saudization": ["nitaqat", "labor-law"],
    "nitaqat": ["nitaqat", "labor-law"],
    "سعودة": ["nitaqat", "labor-law"],
    "توطين": ["nitaqat", "labor-law"],
    "نطاقات": ["nitaqat", "labor-law"],
    "transfer": ["qiwa", "labor-law"],
    "نقل": ["qiwa", "labor-law"],
    "remote": ["remote-work", "labor-law"],
    "flexible": ["remote-work", "labor-law"],
    "عن بعد": ["remote-work", "labor-law"],
    "مرن": ["remote-work", "labor-law"],
    "safety": ["ohs", "labor-law"],
    "سلامة": ["ohs", "labor-law"],
    "health": ["ohs", "labor-law", "women-employment"],
    "صحة": ["ohs", "labor-law", "women-employment"],
    "women": ["women-employment", "labor-law"],
    "maternity": ["women-employment", "gosi", "labor-law"],
    "مرأة": ["women-employment", "labor-law"],
    "أمومة": ["women-employment", "gosi", "labor-law"],
    "violation": ["violations", "labor-law"],
    "penalty": ["violations", "labor-law"],
    "مخالفة": ["violations", "labor-law"],
    "غرامة": ["violations", "labor-law"],
    "data": ["pdpl"],
    "privacy": ["pdpl"],
    "بيانات": ["pdpl"],
    "leave": ["labor-law"],
    "إجازة": ["labor-law"],
    "end of service": ["labor-law", "gosi"],
    "نهاية الخدمة": ["labor-law", "gosi"],
    "مكافأة": ["labor-law", "gosi"],
    "termination": ["labor-law", "qiwa"],
    "إنهاء": ["labor-law", "qiwa"],
}


def topic_regulation_ids(topic: str) -> list[str]:
    """Regulation ids related to a topic, deduplicated in first-seen order."""
    topic_lower = topic.lower()
    ids = list(DEFAULT_TOPIC_REGULATIONS)
    for keyword, regulation_ids in TOPIC_REGULATION_MAP.items():
        if keyword.lower() in topic_lower:
            ids.extend(regulation_ids)
    return list(dict.fromkeys(ids))


def _regulation_block(regulation: Regulation, language: Language) -> str:
    return (
        f"## {regulation.name.get(language)} ({regulation.version})\n"
        f"{regulation.overview.get(language)}\n"
        f"{LAST_UPDATED_LABEL.get(language)}: {regulation.last_amendment}\n\n"
    )


class ContextBuilder:
    """Builds text-generation context from cached knowledge."""

    def __init__(self, cache: KnowledgeCacheManager) -> None:
        self.cache = cache

    def build_context(self, regulation_ids: Sequence[str], language: Language | str) -> str:
        """
        Assemble the context block for a set of regulations.

        Args:
            regulation_ids: Regulations to include, in output order
            language: Output language; required

        Returns:
            Context text. Ids that fail to load are skipped.

        Raises:
            ConfigUnavailable: If the AI configuration cannot be loaded
        """
        language = Language(language)
        config = self.cache.load_config()

        parts = [
            config.context.system_prompt.get(language) + "\n\n",
            f"### {CONTEXT_HEADING.get(language)}:\n\n",
        ]

        included = 0
        for regulation in self._load_each(regulation_ids):
            parts.append(_regulation_block(regulation, language))
            included += 1

        parts.append("\n" + config.context.legal_disclaimer.get(language))

        logger.debug(
            "context_built",
            language=language.value,
            requested=len(regulation_ids),
            included=included,
        )
        return "".join(parts)

    def build_topic_context(self, topic: str, language: Language | str) -> str:
        """Context for the regulations a free-text topic refers to."""
        return self.build_context(topic_regulation_ids(topic), language)

    def response_template(self, template_id: str, language: Language | str) -> str:
        """Configured template text, or an empty string if unknown."""
        template = self.cache.load_config().responses.templates.get(template_id)
        return template.get(language) if template else ""

    def error_message(self, error_id: str, language: Language | str) -> str:
        """Configured error message, falling back to the general one."""
        errors = self.cache.load_config().responses.errors
        message = errors.get(error_id) or errors["general"]
        return message.get(language)

    def greeting(
        self,
        language: Language | str,
        chooser: Callable[[list[LocalizedText]], LocalizedText] = random.choice,
    ) -> str:
        """One of the configured greeting variants."""
        return chooser(self.cache.load_config().responses.greetings).get(language)

    def _load_each(self, regulation_ids: Iterable[str]) -> Iterable[Regulation]:
        for regulation_id in regulation_ids:
            try:
                yield self.cache.load_regulation(regulation_id)
            except KnowledgeError as e:
                logger.info(
                    "context_regulation_skipped",
                    regulation_id=regulation_id,
                    error_code=e.error_code,
                )
