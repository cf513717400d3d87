"""Shared test fixtures."""

import copy
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from pantry_tracker.adapters.openfoodfacts_client import ProductClient
from pantry_tracker.config import Settings
from pantry_tracker.containers import AppContainer
from pantry_tracker.domain.errors import PersistenceError
from pantry_tracker.services.editing import EditSessionRegistry
from pantry_tracker.services.inventory import InventoryRepository, InventoryService
from pantry_tracker.services.products import ProductLookupService

NOW = datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
TODAY = NOW.date()


@dataclass
class FixedClock:
    """Clock returning a settable instant."""

    now: datetime = NOW

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int) -> None:
        self.now = self.now + timedelta(days=days)


@dataclass
class InMemoryInventoryRepository(InventoryRepository):
    """In-memory ingredient store for tests."""

    records: list[dict[str, object]] = field(default_factory=list)
    saves: int = 0

    def load_all(self) -> list[dict[str, object]]:
        return copy.deepcopy(self.records)

    def save_all(self, records: list[dict[str, object]]) -> None:
        self.records = copy.deepcopy(records)
        self.saves += 1


@dataclass
class FailingInventoryRepository(InMemoryInventoryRepository):
    """Store that reads normally but refuses writes."""

    def save_all(self, records: list[dict[str, object]]) -> None:
        raise PersistenceError("Failed to save ingredients")


@dataclass
class FakeProductClient(ProductClient):
    """Fake product client with a canned payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "status": 1,
            "product": {"product_name": "Greek Yogurt"},
        }
    )
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def get_product(self, code: str) -> dict[str, object]:
        self.calls.append(code)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        storage_backend="json",
        inventory_path=str(tmp_path / "ingredients.json"),
    )


@pytest.fixture
def inventory_repository() -> InMemoryInventoryRepository:
    return InMemoryInventoryRepository()


@pytest.fixture
def product_client() -> FakeProductClient:
    return FakeProductClient()


@pytest.fixture
def container(
    settings: Settings,
    clock: FixedClock,
    inventory_repository: InMemoryInventoryRepository,
    product_client: FakeProductClient,
) -> AppContainer:
    inventory_service = InventoryService(repository=inventory_repository, clock=clock)
    product_lookup_service = ProductLookupService(
        client=product_client, retry_delay_seconds=0
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        clock=clock,
        product_client=product_client,
        inventory_service=inventory_service,
        product_lookup_service=product_lookup_service,
        edit_sessions=EditSessionRegistry(clock=clock),
        close_resources=close_resources,
    )
