"""Food catalog built from imported tabular rows."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from food_variety.domain.foods import CompareEntry, FoodEntry
from food_variety.services.match_index import MatchIndex
from food_variety.text import normalize_for_comparison, normalize_name

MIN_ROW_CELLS = 2

logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    """Provider of raw catalog rows."""

    async def fetch_rows(self) -> list[list[str]]:
        """Return all catalog rows as lists of string cells."""


@dataclass
class FoodCatalog:
    """Holds canonical foods and the alias index derived from them."""

    _foods: list[FoodEntry] = field(default_factory=list)
    _index: MatchIndex = field(default_factory=MatchIndex.empty)

    @property
    def foods(self) -> list[FoodEntry]:
        return list(self._foods)

    @property
    def index(self) -> MatchIndex:
        return self._index

    def import_rows(self, rows: Sequence[Sequence[str]]) -> None:
        """Replace the catalog with foods built from rows.

        Rows with fewer than two cells are skipped. A row repeating an
        existing name is skipped as well, so the first occurrence stays
        authoritative.
        """
        foods: list[FoodEntry] = []
        seen: set[str] = set()
        for row in rows:
            if len(row) < MIN_ROW_CELLS:
                logger.warning("Skipping row with insufficient columns: %s", list(row))
                continue
            name = normalize_name(row[0])
            if name in seen:
                logger.warning("Duplicate food name %r found, skipping row: %s", name, list(row))
                continue
            seen.add(name)
            foods.append(FoodEntry.from_row(row))
        self._foods = foods
        self._index = MatchIndex.build(foods)
        logger.debug("Processed %d foods from %d rows", len(foods), len(rows))

    def find_for_name(self, name: str) -> FoodEntry | None:
        """Return the food with exactly this normalized name, if any."""
        return next((food for food in self._foods if food.name == name), None)

    def get_list(self) -> list[CompareEntry]:
        """Return every alias sorted alphabetically."""
        return list(self._index.by_original)

    def filter_list(self, query: str | None) -> list[CompareEntry]:
        """Return aliases whose alias or food name contains the query."""
        needle = normalize_for_comparison(query or "")
        if not needle:
            return self.get_list()
        return [
            entry
            for entry in self._index.by_original
            if needle in normalize_for_comparison(f"{entry.original}{entry.food.name}")
        ]

    def find_alias(self, alias: str, food_name: str) -> CompareEntry | None:
        """Return the alias record for an alias text belonging to a food."""
        original = normalize_name(alias)
        name = normalize_name(food_name)
        return next(
            (
                entry
                for entry in self._index.by_original
                if entry.original == original and entry.food.name == name
            ),
            None,
        )
