"""Alias index used for matching and alphabetical listing."""

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass

from food_variety.domain.foods import CompareEntry, FoodEntry


@dataclass(frozen=True)
class MatchIndex:
    """All aliases of a catalog in two orderings.

    `by_length` puts the longest comparison key first so that a short alias
    like "pea" cannot claim text that belongs to "peanut". Sorting is stable,
    so equal lengths keep catalog order. `by_original` lists aliases
    alphabetically for pickers, with accented letters next to their base letter.
    """

    by_length: tuple[CompareEntry, ...]
    by_original: tuple[CompareEntry, ...]

    @classmethod
    def empty(cls) -> "MatchIndex":
        return cls(by_length=(), by_original=())

    @classmethod
    def build(cls, foods: Iterable[FoodEntry]) -> "MatchIndex":
        """Build the index with one alias per food name and per synonym."""
        entries: list[CompareEntry] = []
        for food in foods:
            entries.append(CompareEntry.create(food.name, food))
            entries.extend(CompareEntry.create(synonym, food) for synonym in food.synonyms)
        by_length = sorted(entries, key=lambda entry: len(entry.normalized), reverse=True)
        by_original = sorted(entries, key=lambda entry: _collation_key(entry.original))
        return cls(by_length=tuple(by_length), by_original=tuple(by_original))

    def __len__(self) -> int:
        return len(self.by_length)


def _collation_key(text: str) -> tuple[str, str]:
    """Order by base letters ignoring accents and case, then by the text itself."""
    base = "".join(
        char for char in unicodedata.normalize("NFD", text) if unicodedata.category(char) != "Mn"
    )
    return base.casefold(), text
