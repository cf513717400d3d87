"""Supabase key-value storage for the ingredient collection."""

from dataclasses import dataclass

from supabase import Client

from pantry_tracker.domain.errors import PersistenceError
from pantry_tracker.services.inventory import InventoryRepository

INGREDIENTS_KEY = "ingredients"


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase-backed repository storing the collection under one key."""

    client: Client
    table: str = "app_storage"

    def load_all(self) -> list[dict[str, object]]:
        """Return stored records, or an empty list when the key is absent."""
        try:
            response = (
                self.client.table(self.table)
                .select("value")
                .eq("key", INGREDIENTS_KEY)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise PersistenceError("Failed to load ingredients") from exc
        if not response.data:
            return []
        records = response.data[0].get("value")
        if records is None:
            return []
        if not isinstance(records, list):
            raise PersistenceError("Malformed ingredient data in storage")
        return records

    def save_all(self, records: list[dict[str, object]]) -> None:
        """Replace the stored collection."""
        try:
            self.client.table(self.table).upsert(
                {"key": INGREDIENTS_KEY, "value": records},
                on_conflict="key",
            ).execute()
        except Exception as exc:
            raise PersistenceError("Failed to save ingredients") from exc
