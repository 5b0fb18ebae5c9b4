"""Domain models for consumption history and weekly counts."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from food_variety.domain.foods import CompareEntry, FoodEntry


@dataclass(frozen=True)
class HistoryEntry:
    """A confirmed consumption of a food."""

    food: FoodEntry
    consumed_name: str
    date: datetime

    @classmethod
    def from_match(cls, match: CompareEntry, now: datetime) -> "HistoryEntry":
        """Create an entry for a confirmed match, keeping the alias the user said."""
        return cls(food=match.food, consumed_name=match.original, date=now)


@dataclass(frozen=True)
class WeekEntry:
    """Distinct foods eaten within one week window."""

    start_date: datetime
    end_date: datetime
    foods: tuple[FoodEntry, ...]

    @classmethod
    def create(
        cls, start_date: datetime, end_date: datetime, foods: Iterable[FoodEntry]
    ) -> "WeekEntry":
        """Create a week entry with foods sorted by name."""
        return cls(
            start_date=start_date,
            end_date=end_date,
            foods=tuple(sorted(foods, key=lambda food: food.name)),
        )

    @property
    def count(self) -> int:
        return len(self.foods)

    def goal_reached(self, goal: int) -> bool:
        """Return True when at least `goal` distinct foods were eaten."""
        return self.count >= goal


class StoredHistoryEntry(BaseModel):
    """Persisted shape of a history entry."""

    model_config = ConfigDict(populate_by_name=True)

    food_name: str = Field(alias="foodName")
    consumed_name: str = Field(alias="consumedName")
    date: datetime

    @field_serializer("date")
    def _serialize_date(self, value: datetime) -> str:
        stamp = value.astimezone(UTC).isoformat(timespec="milliseconds")
        return stamp.replace("+00:00", "Z")
