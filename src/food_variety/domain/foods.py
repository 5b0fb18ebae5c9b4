"""Domain models for the food catalog."""

import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass

from food_variety.text import normalize_for_comparison, normalize_name


def _split_synonyms(text: str) -> list[str]:
    """Split on every run of characters that is neither a letter nor a space."""
    cleaned = "".join(
        char if char == " " or unicodedata.category(char).startswith("L") else "\n"
        for char in text
    )
    return cleaned.split("\n")


@dataclass(frozen=True)
class FoodEntry:
    """Canonical food item imported from one catalog row."""

    name: str
    category: str
    synonyms: tuple[str, ...] = ()

    @classmethod
    def from_row(cls, row: Sequence[str]) -> "FoodEntry":
        """Build a food from a row of at least two cells."""
        raw_synonyms = row[2] if len(row) > 2 else ""
        synonyms = tuple(
            synonym
            for synonym in (
                normalize_name(piece) for piece in _split_synonyms(raw_synonyms)
            )
            if synonym
        )
        return cls(
            name=normalize_name(row[0]),
            category=normalize_name(row[1]),
            synonyms=synonyms,
        )


@dataclass(frozen=True)
class CompareEntry:
    """An alias (food name or synonym) that can be found in free text."""

    original: str
    normalized: str
    food: FoodEntry

    @classmethod
    def create(cls, text: str, food: FoodEntry) -> "CompareEntry":
        """Create an alias record, deriving both normalized forms from text."""
        return cls(
            original=normalize_name(text),
            normalized=normalize_for_comparison(text),
            food=food,
        )
