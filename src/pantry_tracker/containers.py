"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from supabase import create_client

from pantry_tracker.adapters.json_inventory_repository import (
    JsonFileInventoryRepository,
)
from pantry_tracker.adapters.openfoodfacts_client import (
    OpenFoodFactsClient,
    ProductClient,
)
from pantry_tracker.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from pantry_tracker.config import Settings, parse_relative_to
from pantry_tracker.services.editing import EditSessionRegistry
from pantry_tracker.services.inventory import InventoryRepository, InventoryService
from pantry_tracker.services.lifecycle import Clock
from pantry_tracker.services.products import ProductLookupService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    product_client: ProductClient
    inventory_service: InventoryService
    product_lookup_service: ProductLookupService
    edit_sessions: EditSessionRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_clock(timezone_name: str) -> Clock:
    """Return a clock reporting the current time in the given timezone."""
    tz = ZoneInfo(timezone_name)

    def clock() -> datetime:
        return datetime.now(tz=tz)

    return clock


def build_repository(settings: Settings) -> InventoryRepository:
    """Create the ingredient repository for the configured backend."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires a URL and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseInventoryRepository(client, table=settings.supabase_table)
    return JsonFileInventoryRepository(Path(settings.inventory_path))


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    clock = build_clock(resolved_settings.timezone)
    inventory_service = InventoryService(
        repository=build_repository(resolved_settings),
        clock=clock,
        relative_to=parse_relative_to(resolved_settings.relative_to),
    )
    product_client = OpenFoodFactsClient.create(
        resolved_settings.openfoodfacts_base_url
    )
    product_lookup_service = ProductLookupService(
        client=product_client,
        retry_attempts=resolved_settings.lookup_retry_attempts,
    )

    async def close_resources() -> None:
        await product_client.close()

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        product_client=product_client,
        inventory_service=inventory_service,
        product_lookup_service=product_lookup_service,
        edit_sessions=EditSessionRegistry(
            clock=clock, ttl_seconds=resolved_settings.edit_session_ttl_seconds
        ),
        close_resources=close_resources,
    )
