"""User settings service."""

from dataclasses import dataclass

from food_variety.config import DEFAULT_START_DAY, LAST_WEEKDAY, parse_start_day
from food_variety.services.storage import KeyValueStore

START_DAY_OF_WEEK_KEY = "startDayOfWeek"


@dataclass
class UserSettingsService:
    """Service for the persisted start-of-week preference."""

    store: KeyValueStore

    def get_start_day_of_week(self) -> int:
        """Return the first day of the week, 0 for Sunday through 6 for Saturday."""
        return parse_start_day(self.store.get(START_DAY_OF_WEEK_KEY))

    def set_start_day_of_week(self, value: int) -> None:
        """Persist the first day of the week."""
        if not DEFAULT_START_DAY <= value <= LAST_WEEKDAY:
            raise ValueError(f"Start day of week must be between 0 and 6, got {value}")
        self.store.set(START_DAY_OF_WEEK_KEY, str(value))
