"""Tests for record validation, serialization and migration."""

from datetime import UTC, date, datetime

import pytest

from pantry_tracker.domain.errors import ValidationError
from pantry_tracker.domain.ingredients import Ingredient
from pantry_tracker.services.records import (
    migrate_record,
    parse_ingredient,
    serialize_ingredient,
    validate_ingredient,
)


def test_parse_full_record() -> None:
    row = {
        "name": "Banana",
        "brand": "Chiquita",
        "category": "fruit",
        "location": "pantry",
        "type": "fresh",
        "status": "ripe",
        "isOpened": False,
        "expirationDate": "2024-01-08",
        "lastCheckedAt": "2024-01-01T10:00:00.000Z",
    }

    ingredient = parse_ingredient(row)

    assert ingredient == Ingredient(
        name="Banana",
        brand="Chiquita",
        category="fruit",
        location="pantry",
        confection_type="fresh",
        status="ripe",
        is_opened=False,
        expiration_date=date(2024, 1, 8),
        last_checked_at=datetime(2024, 1, 1, 10, 0, tzinfo=UTC),
    )


def test_empty_strings_read_as_absent() -> None:
    row = {
        "name": "Crackers",
        "category": "",
        "location": "",
        "type": "",
        "expirationDate": "",
        "estimateDate": "",
    }

    ingredient = parse_ingredient(row)

    assert ingredient == Ingredient(name="Crackers")


def test_serialize_omits_absent_fields() -> None:
    ingredient = Ingredient(
        name="Milk",
        expiration_date=date(2024, 1, 5),
        location="fridge",
        is_opened=True,
    )

    assert serialize_ingredient(ingredient) == {
        "name": "Milk",
        "location": "fridge",
        "isOpened": True,
        "expirationDate": "2024-01-05",
    }


def test_migrate_legacy_shape() -> None:
    row = {
        "name": "Avocado",
        "category": "fruit",
        "location": "",
        "type": "fresh",
        "status": "unripe",
        "expirationDate": "2024-01-10",
        "estimateDate": "1 week",
        "ripenessChangedAt": "2023-12-30T09:00:00Z",
    }

    assert migrate_record(row) == {
        "name": "Avocado",
        "category": "fruit",
        "type": "fresh",
        "status": "unripe",
        "expirationDate": "2024-01-10",
        "lastCheckedAt": "2023-12-30T09:00:00Z",
    }


def test_migrate_drops_ripeness_from_non_fresh() -> None:
    row = {
        "name": "Peas",
        "type": "frozen",
        "status": "ripe",
        "lastCheckedAt": "2024-01-01T00:00:00Z",
        "expirationDate": "2024-06-01",
    }

    migrated = migrate_record(row)

    assert "status" not in migrated
    assert "lastCheckedAt" not in migrated
    assert row["status"] == "ripe"


def test_validate_rejects_blank_name() -> None:
    with pytest.raises(ValidationError):
        validate_ingredient(Ingredient(name="   ", expiration_date=date(2024, 1, 1)))


def test_validate_rejects_unknown_option() -> None:
    with pytest.raises(ValidationError, match="location"):
        validate_ingredient(Ingredient(name="Milk", location="garage"))


def test_validate_rejects_status_on_non_fresh() -> None:
    with pytest.raises(ValidationError):
        validate_ingredient(
            Ingredient(name="Corn", confection_type="canned", status="ripe")
        )


def test_validate_requires_expiration_when_asked() -> None:
    validate_ingredient(Ingredient(name="Crackers"))

    with pytest.raises(ValidationError):
        validate_ingredient(Ingredient(name="Crackers"), require_expiration=True)


@pytest.mark.parametrize("raw", ["false", "true", 0, 1])
def test_parse_ignores_non_boolean_opened_flag(raw) -> None:
    ingredient = parse_ingredient({"name": "Milk", "isOpened": raw})

    assert ingredient.is_opened is None


def test_parse_keeps_boolean_opened_flag() -> None:
    assert parse_ingredient({"name": "Milk", "isOpened": False}).is_opened is False
