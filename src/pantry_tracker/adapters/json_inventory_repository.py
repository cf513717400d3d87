"""Local JSON file storage for the ingredient collection."""

import json
from dataclasses import dataclass
from pathlib import Path

from pantry_tracker.domain.errors import PersistenceError
from pantry_tracker.services.inventory import InventoryRepository

INGREDIENTS_KEY = "ingredients"


@dataclass
class JsonFileInventoryRepository(InventoryRepository):
    """Key-value JSON file holding the full ingredient collection."""

    path: Path

    def load_all(self) -> list[dict[str, object]]:
        """Return stored records, or an empty list when nothing is stored."""
        data = self._read()
        records = data.get(INGREDIENTS_KEY)
        if records is None:
            return []
        if not isinstance(records, list) or not all(
            isinstance(row, dict) for row in records
        ):
            raise PersistenceError(f"Malformed ingredient data in {self.path}")
        return records

    def save_all(self, records: list[dict[str, object]]) -> None:
        """Write the whole collection, replacing the file in one step."""
        data = self._read()
        data[INGREDIENTS_KEY] = records
        temp_path = self.path.with_suffix(f"{self.path.suffix}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            temp_path.replace(self.path)
        except OSError as exc:
            raise PersistenceError(f"Failed to write {self.path}") from exc

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Failed to read {self.path}") from exc
        if not isinstance(data, dict):
            raise PersistenceError(f"Malformed storage file {self.path}")
        return data
