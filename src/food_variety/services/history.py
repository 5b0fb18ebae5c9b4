"""Consumption history and weekly distinct-food counts."""

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from pydantic import TypeAdapter, ValidationError

from food_variety.domain.foods import CompareEntry, FoodEntry
from food_variety.domain.history import HistoryEntry, StoredHistoryEntry, WeekEntry
from food_variety.services.catalog import FoodCatalog
from food_variety.services.storage import KeyValueStore
from food_variety.services.user_settings import UserSettingsService

HISTORY_KEY = "historyData"
DAYS_PER_WEEK = 7

_STORED_TEXTS = TypeAdapter(list[str])

logger = logging.getLogger(__name__)


class UnknownFoodError(LookupError):
    """A stored entry refers to a food missing from the current catalog."""


class HistoryDecodeError(ValueError):
    """Stored history data could not be parsed."""


def serialize_entry(entry: HistoryEntry) -> str:
    """Return the JSON text stored for a history entry."""
    stored = StoredHistoryEntry(
        food_name=entry.food.name,
        consumed_name=entry.consumed_name,
        date=entry.date,
    )
    return stored.model_dump_json(by_alias=True)


def deserialize_entry(text: str, catalog: FoodCatalog, tz: tzinfo = UTC) -> HistoryEntry:
    """Parse a stored history entry and resolve its food against the catalog.

    Timestamps stored without an offset are read as wall-clock time in `tz`.
    """
    try:
        stored = StoredHistoryEntry.model_validate_json(text)
    except ValidationError as exc:
        raise HistoryDecodeError(f"Invalid history entry: {text!r}") from exc
    food = catalog.find_for_name(stored.food_name)
    if food is None:
        raise UnknownFoodError(
            f'Food with name "{stored.food_name}" not found in food data.'
        )
    date = stored.date if stored.date.tzinfo is not None else stored.date.replace(tzinfo=tz)
    return HistoryEntry(food=food, consumed_name=stored.consumed_name, date=date)


@dataclass
class HistoryService:
    """Event log of eaten foods, aggregated into week windows.

    Entries are kept most recent first. Week boundaries follow the stored
    start-of-week setting and are computed in the configured timezone, so
    changing the setting shifts past weeks as well.
    """

    catalog: FoodCatalog
    store: KeyValueStore
    user_settings: UserSettingsService
    timezone_name: str = "UTC"
    clock: Callable[[], datetime] | None = None
    _entries: list[HistoryEntry] = field(default_factory=list, init=False)

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def initialize(self) -> None:
        """Load stored entries. The catalog must be imported first."""
        self._entries = self._load()
        self._sort()
        logger.info("Loaded %d history entries", len(self._entries))

    def add(self, matches: Iterable[CompareEntry]) -> list[HistoryEntry]:
        """Record confirmed matches as eaten now and persist the history."""
        now = _truncate_to_milliseconds(self.now())
        added = [HistoryEntry.from_match(match, now) for match in matches]
        self._entries.extend(added)
        self._sort()
        self._save()
        return added

    def clear(self) -> None:
        """Remove all entries and persist the empty history."""
        self._entries = []
        self._save()

    def now(self) -> datetime:
        if self.clock is not None:
            return self.localize(self.clock())
        return datetime.now(tz=ZoneInfo(self.timezone_name))

    def start_of_week(self, value: datetime) -> datetime:
        """Return midnight of the first day of the week containing value."""
        local = self.localize(value)
        first_day = self.user_settings.get_start_day_of_week()
        # isoweekday() % 7 counts from Sunday = 0.
        offset = (local.isoweekday() % DAYS_PER_WEEK - first_day + DAYS_PER_WEEK) % DAYS_PER_WEEK
        return (local - timedelta(days=offset)).replace(
            hour=0, minute=0, second=0, microsecond=0
        )

    def end_of_week(self, value: datetime) -> datetime:
        """Return the last millisecond of the week containing value."""
        start = self.start_of_week(value)
        return (start + timedelta(days=DAYS_PER_WEEK - 1)).replace(
            hour=23, minute=59, second=59, microsecond=999000
        )

    def get_week_entry_for_date(self, value: datetime) -> WeekEntry:
        """Return the distinct foods eaten in the week containing value."""
        start = self.start_of_week(value)
        end = self.end_of_week(start)
        foods: dict[str, FoodEntry] = {}
        for entry in self._entries:
            if start <= entry.date <= end:
                foods.setdefault(entry.food.name, entry.food)
        return WeekEntry.create(start, end, foods.values())

    def get_count_for_today(self) -> WeekEntry:
        """Return the week entry for the current week."""
        return self.get_week_entry_for_date(self.now())

    def get_counts_per_week(self) -> list[WeekEntry]:
        """Return one entry per week, from the current week back to the oldest entry."""
        if not self._entries:
            return []
        oldest = self._entries[-1].date
        weeks: list[WeekEntry] = []
        end = self.end_of_week(self.now())
        while end >= oldest:
            weeks.append(self.get_week_entry_for_date(end))
            end -= timedelta(days=DAYS_PER_WEEK)
        return weeks

    def get_list_for_week(self, week: WeekEntry) -> list[HistoryEntry]:
        """Return the entries that fall inside a week window."""
        return [
            entry
            for entry in self._entries
            if week.start_date <= entry.date <= week.end_date
        ]

    def days_remaining(self, week: WeekEntry, now: datetime | None = None) -> int:
        """Return how many days of the week are left, today included."""
        today = self.localize(now) if now is not None else self.now()
        elapsed = abs((today.date() - self.localize(week.start_date).date()).days)
        return DAYS_PER_WEEK - elapsed

    def localize(self, value: datetime) -> datetime:
        """Return value in the configured timezone; naive values are taken as local."""
        tz = ZoneInfo(self.timezone_name)
        if value.tzinfo is None:
            return value.replace(tzinfo=tz)
        return value.astimezone(tz)

    def _sort(self) -> None:
        self._entries.sort(key=lambda entry: entry.date, reverse=True)

    def _load(self) -> list[HistoryEntry]:
        raw = self.store.get(HISTORY_KEY)
        if not raw:
            return []
        try:
            texts = _STORED_TEXTS.validate_json(raw)
        except ValidationError as exc:
            raise HistoryDecodeError("Stored history is not a list of entries") from exc
        tz = ZoneInfo(self.timezone_name)
        return [deserialize_entry(text, self.catalog, tz) for text in texts]

    def _save(self) -> None:
        texts = [serialize_entry(entry) for entry in self._entries]
        self.store.set(HISTORY_KEY, json.dumps(texts))


def entries_for_food(food: FoodEntry, entries: Iterable[HistoryEntry]) -> list[HistoryEntry]:
    """Return the entries for one food, oldest first."""
    return sorted(
        (entry for entry in entries if entry.food.name == food.name),
        key=lambda entry: entry.date,
    )


def _truncate_to_milliseconds(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)
