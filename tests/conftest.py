"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from food_variety.config import Settings
from food_variety.containers import AppContainer
from food_variety.services.catalog import CatalogSource, FoodCatalog
from food_variety.services.history import HistoryService
from food_variety.services.matcher import UtteranceMatcher
from food_variety.services.storage import InMemoryKeyValueStore
from food_variety.services.user_settings import UserSettingsService

SAMPLE_ROWS = [
    ["Apple", "Fruit", "green apple, red apple"],
    ["Banana", "Fruit", ""],
    ["Pea", "Vegetable"],
    ["Peanut Butter", "Spread", "peanut"],
    ["Broccoli", "Vegetable", "brocoli"],
]


@dataclass
class FakeCatalogSource(CatalogSource):
    """Catalog source returning fixed rows."""

    rows: list[list[str]] = field(default_factory=lambda: [list(row) for row in SAMPLE_ROWS])
    fetch_count: int = 0

    async def fetch_rows(self) -> list[list[str]]:
        self.fetch_count += 1
        return self.rows


@dataclass
class FakeClock:
    """Settable clock for deterministic week computations."""

    current: datetime = field(default_factory=lambda: datetime(2024, 1, 10, 12, 0, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.current


@pytest.fixture(autouse=True)
def _propagate_package_logs() -> Iterator[None]:
    logger = logging.getLogger("food_variety")
    previous = logger.propagate
    logger.propagate = True
    yield
    logger.propagate = previous


@pytest.fixture
def settings() -> Settings:
    return Settings(catalog_csv_url="https://example.com/foods.csv")


@pytest.fixture
def catalog() -> FoodCatalog:
    catalog = FoodCatalog()
    catalog.import_rows(SAMPLE_ROWS)
    return catalog


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def user_settings_service(store: InMemoryKeyValueStore) -> UserSettingsService:
    return UserSettingsService(store)


@pytest.fixture
def history_service(
    catalog: FoodCatalog,
    store: InMemoryKeyValueStore,
    user_settings_service: UserSettingsService,
    clock: FakeClock,
) -> HistoryService:
    return HistoryService(
        catalog=catalog,
        store=store,
        user_settings=user_settings_service,
        clock=clock,
    )


@pytest.fixture
def container(settings: Settings, store: InMemoryKeyValueStore, clock: FakeClock) -> AppContainer:
    catalog = FoodCatalog()
    user_settings_service = UserSettingsService(store)
    history_service = HistoryService(
        catalog=catalog,
        store=store,
        user_settings=user_settings_service,
        timezone_name=settings.timezone,
        clock=clock,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        catalog_source=FakeCatalogSource(),
        store=store,
        catalog=catalog,
        matcher=UtteranceMatcher(catalog),
        user_settings_service=user_settings_service,
        history_service=history_service,
        close_resources=close_resources,
    )
