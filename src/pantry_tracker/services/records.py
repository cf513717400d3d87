"""Validation and JSON conversion for persisted ingredient records."""

from pantry_tracker.domain.errors import ValidationError
from pantry_tracker.domain.ingredients import (
    CATEGORIES,
    CONFECTION_TYPES,
    FRESH,
    LOCATIONS,
    RIPENESS_STATUSES,
    Ingredient,
)
from pantry_tracker.services.dates import format_date, parse_date, parse_timestamp

_OPTIONAL_KEYS = (
    "brand",
    "category",
    "location",
    "type",
    "status",
    "isOpened",
    "expirationDate",
    "lastCheckedAt",
)
_LEGACY_KEYS = ("estimateDate", "ripenessChangedAt")


def validate_ingredient(
    ingredient: Ingredient, *, require_expiration: bool = False
) -> None:
    """Raise ValidationError when an ingredient cannot be stored."""
    if not ingredient.name or not ingredient.name.strip():
        raise ValidationError("Please enter an item name.")
    _check_option("category", ingredient.category, CATEGORIES)
    _check_option("location", ingredient.location, LOCATIONS)
    _check_option("type", ingredient.confection_type, CONFECTION_TYPES)
    _check_option("status", ingredient.status, RIPENESS_STATUSES)
    if ingredient.status and not ingredient.is_fresh:
        raise ValidationError("Ripeness status only applies to fresh ingredients.")
    if require_expiration and ingredient.expiration_date is None:
        raise ValidationError("Please choose an expiration date or estimate.")


def _check_option(label: str, value: str | None, allowed: tuple[str, ...]) -> None:
    if value and value not in allowed:
        choices = ", ".join(allowed)
        raise ValidationError(f"Unknown {label} '{value}'. Choose one of: {choices}.")


def migrate_record(row: dict[str, object]) -> dict[str, object]:
    """Convert an older record shape to the current schema.

    Empty-string placeholders become absent fields, the legacy
    ``ripenessChangedAt`` timestamp moves to ``lastCheckedAt`` and ripeness
    data is dropped from ingredients that are not fresh.
    """
    migrated = {key: value for key, value in row.items() if key not in _LEGACY_KEYS}
    legacy_checked = row.get("ripenessChangedAt")
    if legacy_checked and not migrated.get("lastCheckedAt"):
        migrated["lastCheckedAt"] = legacy_checked
    for key in _OPTIONAL_KEYS:
        if migrated.get(key) in ("", None):
            migrated.pop(key, None)
    if migrated.get("type") != FRESH:
        migrated.pop("status", None)
        migrated.pop("lastCheckedAt", None)
    return migrated


def parse_ingredient(row: dict[str, object]) -> Ingredient:
    """Parse a stored record into an Ingredient."""
    data = migrate_record(row)
    is_opened = data.get("isOpened")
    return Ingredient(
        name=str(data.get("name", "")),
        expiration_date=parse_date(_as_text(data.get("expirationDate"))),
        brand=_as_text(data.get("brand")),
        category=_as_text(data.get("category")),
        location=_as_text(data.get("location")),
        confection_type=_as_text(data.get("type")),
        status=_as_text(data.get("status")),
        is_opened=is_opened if isinstance(is_opened, bool) else None,
        last_checked_at=parse_timestamp(_as_text(data.get("lastCheckedAt"))),
    )


def serialize_ingredient(ingredient: Ingredient) -> dict[str, object]:
    """Serialize an Ingredient to its JSON record, omitting absent fields."""
    row: dict[str, object] = {
        "name": ingredient.name,
        "brand": ingredient.brand,
        "category": ingredient.category,
        "location": ingredient.location,
        "type": ingredient.confection_type,
        "status": ingredient.status,
        "isOpened": ingredient.is_opened,
        "expirationDate": format_date(ingredient.expiration_date) or None,
        "lastCheckedAt": (
            ingredient.last_checked_at.isoformat()
            if ingredient.last_checked_at
            else None
        ),
    }
    return {key: value for key, value in row.items() if value is not None}


def _as_text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)
