"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_variety.adapters.catalog_csv_client import HttpxCatalogCsvClient
from food_variety.adapters.supabase_kv_store import SupabaseKeyValueStore
from food_variety.config import Settings
from food_variety.services.catalog import CatalogSource, FoodCatalog
from food_variety.services.history import HistoryService
from food_variety.services.matcher import UtteranceMatcher
from food_variety.services.storage import InMemoryKeyValueStore, KeyValueStore
from food_variety.services.user_settings import UserSettingsService

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_source: CatalogSource
    store: KeyValueStore
    catalog: FoodCatalog
    matcher: UtteranceMatcher
    user_settings_service: UserSettingsService
    history_service: HistoryService
    close_resources: Callable[[], Awaitable[None]]


def build_store(settings: Settings) -> KeyValueStore:
    """Create the configured key-value store."""
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires SUPABASE_URL and SUPABASE_SERVICE_KEY")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = build_store(resolved_settings)
    catalog_client = HttpxCatalogCsvClient.create(resolved_settings.catalog_csv_url)
    catalog = FoodCatalog()
    user_settings_service = UserSettingsService(store)
    history_service = HistoryService(
        catalog=catalog,
        store=store,
        user_settings=user_settings_service,
        timezone_name=resolved_settings.timezone,
    )

    async def close_resources() -> None:
        await catalog_client.close()

    return AppContainer(
        settings=resolved_settings,
        catalog_source=catalog_client,
        store=store,
        catalog=catalog,
        matcher=UtteranceMatcher(catalog),
        user_settings_service=user_settings_service,
        history_service=history_service,
        close_resources=close_resources,
    )


async def initialize_container(container: AppContainer) -> None:
    """Load the catalog, then the history that refers to it."""
    rows = await container.catalog_source.fetch_rows()
    container.catalog.import_rows(rows)
    logger.info("Imported %d foods", len(container.catalog.foods))
    container.history_service.initialize()
