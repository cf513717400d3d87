"""Query and filter functions over ingredient collections."""

from collections.abc import Sequence
from datetime import UTC, date, datetime, timedelta

from pantry_tracker.domain.ingredients import Ingredient
from pantry_tracker.services.dates import days_until

VIEW_ALL = "all"
VIEW_MISSING = "missing"
VIEW_RECENT = "recent"
LIST_VIEWS = (VIEW_ALL, VIEW_MISSING, VIEW_RECENT)


def expiring_soon(
    records: Sequence[Ingredient], threshold_days: int = 3, today: date | None = None
) -> list[Ingredient]:
    """Return ingredients expiring within threshold_days, including expired."""
    reference = today or date.today()
    return [
        record
        for record in records
        if record.expiration_date
        and days_until(record.expiration_date, reference) <= threshold_days
    ]


def missing_data(records: Sequence[Ingredient]) -> list[Ingredient]:
    """Return ingredients without a category, location or expiration date."""
    return [
        record
        for record in records
        if not record.category or not record.location or not record.expiration_date
    ]


def recently_added(records: Sequence[Ingredient], limit: int = 5) -> list[Ingredient]:
    """Return the last added ingredients, most recent first."""
    if limit <= 0:
        return []
    return list(reversed(records[-limit:]))


def by_location(records: Sequence[Ingredient], location: str) -> list[Ingredient]:
    """Return ingredients stored at the given location."""
    return [record for record in records if record.location == location]


def by_category_or_type(
    records: Sequence[Ingredient],
    category: str | None = None,
    confection_type: str | None = None,
) -> list[Ingredient]:
    """Return ingredients matching the category OR the confection type."""
    return [
        record
        for record in records
        if (category and record.category == category)
        or (confection_type and record.confection_type == confection_type)
    ]


def sort_by_expiration(records: Sequence[Ingredient]) -> list[Ingredient]:
    """Sort ingredients by expiration date, undated ones last."""
    return sorted(
        records,
        key=lambda record: (record.expiration_date is None, record.expiration_date),
    )


def needs_checking(
    record: Ingredient, now: datetime | None = None, threshold_days: int = 3
) -> bool:
    """Return True when a fresh ingredient's ripeness should be re-checked."""
    if not record.is_fresh:
        return False
    if record.last_checked_at is None:
        return True
    reference = now or datetime.now(tz=UTC)
    return reference - record.last_checked_at > timedelta(days=threshold_days)


def apply_list_filters(
    records: Sequence[Ingredient],
    view: str = VIEW_ALL,
    category: str | None = None,
    location: str | None = None,
    confection_type: str | None = None,
    recent_limit: int = 5,
) -> list[Ingredient]:
    """Apply the inventory list filters one after another.

    The view narrows the list first, then category, location and confection
    type are applied in turn as separate single-criterion filters.
    """
    if view == VIEW_MISSING:
        results = missing_data(records)
    elif view == VIEW_RECENT:
        results = recently_added(records, recent_limit)
    else:
        results = list(records)

    if category:
        results = by_category_or_type(results, category=category)
    if location:
        results = by_location(results, location)
    if confection_type:
        results = by_category_or_type(results, confection_type=confection_type)
    return results
