"""
Category Resolver
=================

Maps a semantic category label to its regulations.

Resolution:
1. Curated groupings in CATEGORY_MAP, loaded in mapping order; ids the
   store no longer has are skipped.
2. If the label is unknown or yields nothing, a full scan returning every
   regulation whose own `category` equals the label.

Version: 0.1.0
"""

from services.knowledge.cache import KnowledgeCacheManager
from shared.exceptions import CategoryNotFound, KnowledgeError
from shared.logging import get_logger
from shared.models import Regulation


logger = get_logger(__name__)


# Curated groupings; they need not match a regulation's own category tag
CATEGORY_MAP: dict[str, list[str]] = {
    "labor": ["labor-law"],
    "social_insurance": ["gosi"],
    "unemployment": ["saned"],
    "saudization": ["nitaqat", "qiwa"],
    "data_protection": ["pdpl"],
    "health_safety": ["ohs"],
    "wages": ["wps-mudad"],
    "women_employment": ["women-employment"],
    "general": ["violations", "remote-work"],
}


class CategoryResolver:
    """Resolves category labels against the cached corpus."""

    def __init__(
        self,
        cache: KnowledgeCacheManager,
        category_map: dict[str, list[str]] | None = None,
    ) -> None:
        self.cache = cache
        self.category_map = category_map if category_map is not None else CATEGORY_MAP

    def resolve_category(self, label: str, strict: bool = False) -> list[Regulation]:
        """
        Get the regulations belonging to a category.

        Args:
            label: Category label (e.g., "social_insurance")
            strict: Raise CategoryNotFound instead of returning an empty list

        Returns:
            Regulations in mapping order, or full-scan matches

        Raises:
            CategoryNotFound: If strict and nothing matched
        """
        regulations: list[Regulation] = []

        for regulation_id in self.category_map.get(label, []):
            try:
                regulations.append(self.cache.load_regulation(regulation_id))
            except KnowledgeError as e:
                logger.info(
                    "category_member_skipped",
                    category=label,
                    regulation_id=regulation_id,
                    error_code=e.error_code,
                )

        if regulations:
            return regulations

        matches = [
            regulation
            for regulation in self.cache.load_all_regulations()
            if regulation.category == label
        ]
        logger.debug("category_full_scan", category=label, matches=len(matches))

        if strict and not matches:
            raise CategoryNotFound(label)
        return matches

    def known_categories(self) -> list[str]:
        """Curated labels plus every category tag present in the corpus."""
        labels = list(self.category_map)
        for regulation in self.cache.load_all_regulations():
            if regulation.category and regulation.category not in labels:
                labels.append(regulation.category)
        return labels
