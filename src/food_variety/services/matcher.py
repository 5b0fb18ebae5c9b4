"""Recognition of catalog aliases in free text."""

from dataclasses import dataclass

from food_variety.domain.foods import CompareEntry
from food_variety.services.catalog import FoodCatalog
from food_variety.text import normalize_for_comparison

STOP_WORDS = ("stop", "done", "finish")


@dataclass
class UtteranceMatcher:
    """Greedy longest-alias-first scanner over the catalog's match index."""

    catalog: FoodCatalog

    def process_text(self, text: str) -> list[CompareEntry]:
        """Return the aliases found in text, in scan order.

        Each hit removes every occurrence of the alias from the working text,
        so shorter aliases cannot reuse consumed characters and an alias is
        reported at most once.
        """
        remaining = normalize_for_comparison(text)
        matches: list[CompareEntry] = []
        if not remaining:
            return matches
        for entry in self.catalog.index.by_length:
            if entry.normalized and entry.normalized in remaining:
                matches.append(entry)
                remaining = remaining.replace(entry.normalized, "")
        return matches


def contains_stop_command(text: str) -> bool:
    """Return True when a spoken stop word appears in the text."""
    normalized = normalize_for_comparison(text)
    return any(word in normalized for word in STOP_WORDS)
