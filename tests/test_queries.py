"""Tests for ingredient queries."""

from datetime import timedelta

from pantry_tracker.domain.ingredients import Ingredient
from pantry_tracker.services.queries import (
    apply_list_filters,
    by_category_or_type,
    by_location,
    expiring_soon,
    missing_data,
    needs_checking,
    recently_added,
    sort_by_expiration,
)
from tests.conftest import NOW, TODAY


def _item(name: str, days: int | None = None, **fields: object) -> Ingredient:
    expiration = TODAY + timedelta(days=days) if days is not None else None
    return Ingredient(name=name, expiration_date=expiration, **fields)


def test_expiring_soon_includes_expired_and_near_items() -> None:
    soon = _item("Milk", 5)
    later = _item("Rice", 10)
    expired = _item("Yogurt", -2)
    undated = _item("Mystery")

    result = expiring_soon([soon, later, expired, undated], 7, today=TODAY)

    assert result == [soon, expired]


def test_expiring_soon_boundary_is_inclusive() -> None:
    edge = _item("Cheese", 3)

    assert expiring_soon([edge], 3, today=TODAY) == [edge]
    assert expiring_soon([edge], 2, today=TODAY) == []


def test_missing_data() -> None:
    complete = _item("Milk", 5, category="dairy", location="fridge")
    no_category = Ingredient(
        name="Apple",
        expiration_date=TODAY,
        category="",
        location="fridge",
    )
    scanned = Ingredient(name="Crackers")

    result = missing_data([complete, no_category, scanned])

    assert result == [no_category, scanned]


def test_recently_added_most_recent_first() -> None:
    items = [_item(str(index)) for index in range(7)]

    result = recently_added(items, 5)

    assert [item.name for item in result] == ["6", "5", "4", "3", "2"]
    assert recently_added(items[:2], 5) == [items[1], items[0]]
    assert recently_added(items, 0) == []


def test_by_location_exact_match() -> None:
    fridge = _item("Milk", location="fridge")
    pantry = _item("Rice", location="pantry")

    assert by_location([fridge, pantry], "fridge") == [fridge]


def test_by_category_or_type_is_logical_or() -> None:
    apple = _item("Apple", category="fruit", confection_type="fresh")
    peaches = _item("Peaches", category="fruit", confection_type="canned")
    beans = _item("Beans", category="vegetable", confection_type="canned")
    bread = _item("Bread", category="bread", confection_type="fresh")
    items = [apple, peaches, beans, bread]

    assert by_category_or_type(items, category="fruit", confection_type="canned") == [
        apple,
        peaches,
        beans,
    ]
    assert by_category_or_type(items, confection_type="fresh") == [apple, bread]
    assert by_category_or_type(items) == []


def test_list_filters_chain_each_criterion() -> None:
    apple = _item(
        "Apple", 3, category="fruit", location="fridge", confection_type="fresh"
    )
    peaches = _item(
        "Peaches", 90, category="fruit", location="pantry", confection_type="canned"
    )
    beans = _item(
        "Beans", category="vegetable", location="pantry", confection_type="canned"
    )
    items = [apple, peaches, beans]

    assert apply_list_filters(items, category="fruit", confection_type="canned") == [
        peaches
    ]
    assert apply_list_filters(items, location="pantry") == [peaches, beans]
    assert apply_list_filters(items, view="missing") == [beans]
    assert apply_list_filters(items, view="recent", recent_limit=2) == [beans, peaches]
    assert apply_list_filters(items) == items


def test_sort_by_expiration_puts_undated_last() -> None:
    late = _item("Rice", 30)
    early = _item("Milk", 2)
    undated = _item("Crackers")

    assert sort_by_expiration([late, undated, early]) == [early, late, undated]


def test_needs_checking() -> None:
    never = _item("Pear", confection_type="fresh")
    recent = _item(
        "Kiwi", confection_type="fresh", last_checked_at=NOW - timedelta(days=2)
    )
    stale = _item(
        "Plum", confection_type="fresh", last_checked_at=NOW - timedelta(days=4)
    )
    canned = _item("Corn", confection_type="canned")

    assert needs_checking(never, NOW)
    assert not needs_checking(recent, NOW)
    assert needs_checking(stale, NOW)
    assert not needs_checking(canned, NOW)
