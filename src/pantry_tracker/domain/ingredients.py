"""Domain models for the ingredient inventory."""

from dataclasses import dataclass
from datetime import date, datetime

CATEGORIES = (
    "fruit",
    "vegetable",
    "bread",
    "pasta",
    "dairy",
    "fish",
    "meat",
    "beverage",
)
LOCATIONS = ("fridge", "pantry", "freezer")
CONFECTION_TYPES = ("fresh", "canned", "frozen", "cured")
RIPENESS_STATUSES = ("unripe", "ripe", "overripe", "rotten")
ESTIMATE_LABELS = ("2 days", "1 week", "10 days", "1 month")

FRESH = "fresh"
FROZEN = "frozen"
UNRIPE = "unripe"
RIPE = "ripe"


@dataclass(frozen=True)
class Ingredient:
    """Represents one ingredient in the household inventory."""

    name: str
    expiration_date: date | None = None
    brand: str | None = None
    category: str | None = None
    location: str | None = None
    confection_type: str | None = None
    status: str | None = None
    is_opened: bool | None = None
    last_checked_at: datetime | None = None

    @property
    def is_fresh(self) -> bool:
        """Return True when the ingredient's confection type is fresh."""
        return self.confection_type == FRESH
