"""Date helpers and relative expiration estimates."""

import calendar
from datetime import UTC, date, datetime, timedelta

from pantry_tracker.domain.ingredients import ESTIMATE_LABELS

ESTIMATE_DAYS = dict(zip(ESTIMATE_LABELS, (2, 7, 10, 30), strict=True))
DECEMBER = 12


def resolve_estimate(label: str, from_date: date | None = None) -> str:
    """Resolve an estimate label like "1 week" to a YYYY-MM-DD string.

    Returns an empty string when the label is empty or not a known estimate.
    """
    offset = ESTIMATE_DAYS.get(label)
    if offset is None:
        return ""
    base = from_date or date.today()
    return format_date(base + timedelta(days=offset))


def add_months(value: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // DECEMBER
    month = month_index % DECEMBER + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def days_until(value: date, today: date) -> int:
    """Return the signed number of days from today until value."""
    return (value - today).days


def days_remaining(value: date | None, today: date) -> int:
    """Return whole days left before value, never negative."""
    if value is None:
        return 0
    return max(0, days_until(value, today))


def format_date(value: date | None) -> str:
    """Format a date as YYYY-MM-DD, or an empty string when absent."""
    return value.isoformat() if value else ""


def parse_date(text: str | None) -> date | None:
    """Parse a YYYY-MM-DD date (or ISO datetime prefix), None when invalid."""
    if not text:
        return None
    raw = str(text).strip()[:10]
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


def parse_timestamp(text: str | None) -> datetime | None:
    """Parse an ISO timestamp, assuming UTC when no offset is present."""
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(str(text).strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
