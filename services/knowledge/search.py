"""
Relevance Search Engine
=======================

Keyword relevance scoring of cached regulations.

Scoring (per regulation, both languages concatenated and lowercased):
- name:     +10 if the full query is contained, +2 per contained query word
- overview: +5 if the full query is contained, +1 per contained query word
- tags:     +3 per tag containing the full query

Words are whitespace-separated tokens longer than one character.
Regulations scoring 0 are never returned. Ties keep store enumeration
order (ascending id).

Version: 0.1.0
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from services.knowledge.cache import KnowledgeCacheManager
from shared.logging import get_logger
from shared.models import LocalizedText, Regulation


logger = get_logger(__name__)


class MatchedField(str, Enum):
    """Regulation fields that can contribute to a score."""

    NAME = "name"
    OVERVIEW = "overview"
    TAGS = "tags"


@dataclass
class ScoreWeights:
    """Weights of each scoring rule."""

    name_exact: int = 10
    name_word: int = 2
    overview_exact: int = 5
    overview_word: int = 1
    tag_exact: int = 3


@dataclass
class SearchOptions:
    """Search filters."""

    # A regulation without a category is never filtered out
    categories: list[str] | None = None
    limit: int = 10


@dataclass
class SearchHit:
    """A scored regulation."""

    regulation: Regulation
    score: int
    matched_fields: list[MatchedField] = field(default_factory=list)


def tokenize(query: str) -> list[str]:
    """Lowercase and split into words longer than one character."""
    return [w for w in query.lower().split() if len(w) > 1]


def _bilingual(text: LocalizedText) -> str:
    return f"{text.ar} {text.en}".lower()


class RegulationSearchEngine:
    """Scores cached regulations against free-text queries."""

    def __init__(
        self,
        cache: KnowledgeCacheManager,
        weights: ScoreWeights | None = None,
    ) -> None:
        """
        Initialize the search engine.

        Args:
            cache: Knowledge cache manager
            weights: Custom scoring weights
        """
        self.cache = cache
        self.weights = weights or ScoreWeights()

    def search(self, query: str, options: SearchOptions | None = None) -> list[SearchHit]:
        """
        Rank regulations by relevance to a query.

        Args:
            query: Free-text query (Arabic or English)
            options: Category filter and result limit

        Returns:
            Hits in descending score order, at most `options.limit`
        """
        options = options or SearchOptions()
        if not query.strip():
            return []

        query_lower = query.lower()
        words = tokenize(query)

        hits: list[SearchHit] = []
        for regulation in self.cache.load_all_regulations():
            if not self._passes_filter(regulation, options.categories):
                continue
            hit = self.score(regulation, query_lower, words)
            if hit.score > 0:
                hits.append(hit)

        # sorted() is stable: equal scores keep enumeration order
        ranked = sorted(hits, key=lambda h: h.score, reverse=True)[: max(options.limit, 0)]

        logger.debug(
            "regulation_search",
            query=query,
            candidates=len(hits),
            returned=len(ranked),
        )
        return ranked

    def search_keywords(self, keywords: Iterable[str]) -> list[Regulation]:
        """Search with keywords joined into one query; regulations only."""
        return [hit.regulation for hit in self.search(" ".join(keywords))]

    def score(self, regulation: Regulation, query_lower: str, words: list[str]) -> SearchHit:
        """Score a single regulation."""
        w = self.weights
        matched: list[MatchedField] = []

        name_score = self._text_score(_bilingual(regulation.name), query_lower, words, w.name_exact, w.name_word)
        if name_score:
            matched.append(MatchedField.NAME)

        overview_score = self._text_score(
            _bilingual(regulation.overview), query_lower, words, w.overview_exact, w.overview_word
        )
        if overview_score:
            matched.append(MatchedField.OVERVIEW)

        tags_score = sum(w.tag_exact for tag in regulation.tags if query_lower in tag.lower())
        if tags_score:
            matched.append(MatchedField.TAGS)

        return SearchHit(
            regulation=regulation,
            score=name_score + overview_score + tags_score,
            matched_fields=matched,
        )

    @staticmethod
    def _text_score(
        text: str,
        query_lower: str,
        words: list[str],
        exact_weight: int,
        word_weight: int,
    ) -> int:
        score = exact_weight if query_lower in text else 0
        score += sum(word_weight for word in words if word in text)
        return score

    @staticmethod
    def _passes_filter(regulation: Regulation, categories: list[str] | None) -> bool:
        if not categories:
            return True
        return regulation.category is None or regulation.category in categories
