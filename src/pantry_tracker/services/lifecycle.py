"""Lifecycle rules for editing an ingredient.

An :class:`EditSession` owns the draft of one ingredient while it is being
modified. Freezing, ripening and opening shift the expiration date once per
session and restore the baseline date when reversed. Operations that need the
user's approval leave a pending transition that the caller resolves with
:meth:`EditSession.commit` or :meth:`EditSession.cancel`.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta

from pantry_tracker.domain.errors import NoPendingTransitionError
from pantry_tracker.domain.ingredients import FRESH, FROZEN, RIPE, UNRIPE, Ingredient
from pantry_tracker.domain.lifecycle import (
    Adjustment,
    Confirmation,
    Notice,
    RelativeTo,
    Transition,
)
from pantry_tracker.services.dates import (
    add_months,
    days_remaining,
    format_date,
    parse_date,
    resolve_estimate,
)

FREEZE_EXTENSION_MONTHS = 6
MAX_SHORTENED_DAYS = 7

_logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(tz=UTC)


def shortened_expiration(days_left: int, today: date) -> date | None:
    """Return the expiration after opening or ripening, None when expired.

    More than a week left is capped at one week; otherwise half of the
    remaining days are kept.
    """
    if days_left > MAX_SHORTENED_DAYS:
        return today + timedelta(days=MAX_SHORTENED_DAYS)
    if days_left > 0:
        return today + timedelta(days=days_left // 2)
    return None


@dataclass
class EditSession:
    """Editing state for a single ingredient."""

    original: Ingredient
    clock: Clock = utc_now
    relative_to: RelativeTo = RelativeTo.BASELINE
    draft: Ingredient = field(init=False)
    baseline_expiration: date | None = field(init=False)
    baseline_status: str | None = field(init=False)
    days_remaining: int = field(init=False)
    freeze: Adjustment = field(init=False, default=Adjustment.UNTOUCHED)
    ripening: Adjustment = field(init=False, default=Adjustment.UNTOUCHED)
    opening: Adjustment = field(init=False, default=Adjustment.UNTOUCHED)
    pending: Transition | None = field(init=False, default=None)
    _pending_opens: bool = field(init=False, default=False, repr=False)

    def __post_init__(self) -> None:
        self.draft = self.original
        self.baseline_expiration = self.original.expiration_date
        self.baseline_status = self.original.status
        self.days_remaining = days_remaining(self.baseline_expiration, self._today())

    @property
    def is_dirty(self) -> bool:
        """Return True when the draft differs from the loaded ingredient."""
        return self.draft != self.original

    def apply_type_change(self, new_type: str | None) -> Transition:
        """Change the confection type, freezing or thawing as needed."""
        self._drop_pending()
        draft = self.draft
        new_type = new_type or None
        if new_type == draft.confection_type:
            return Transition(draft)

        changes: dict[str, object] = {"confection_type": new_type}
        if new_type != FRESH:
            changes["status"] = None
            changes["last_checked_at"] = None

        notice = None
        if (
            draft.confection_type == FRESH
            and new_type == FROZEN
            and self.freeze is not Adjustment.APPLIED
            and self.baseline_expiration is not None
        ):
            frozen_until = add_months(self.baseline_expiration, FREEZE_EXTENSION_MONTHS)
            changes["expiration_date"] = frozen_until
            self.freeze = Adjustment.APPLIED
            notice = Notice(
                title="Item has been frozen!",
                message=(
                    "The expiration date has been updated to: "
                    f"{format_date(frozen_until)}"
                ),
            )
            _logger.debug("Froze %s until %s", draft.name, frozen_until)
        elif new_type != FROZEN and self.freeze is Adjustment.APPLIED:
            changes["expiration_date"] = self.baseline_expiration
            self.freeze = Adjustment.REVERTED
            _logger.debug("Thawed %s back to %s", draft.name, self.baseline_expiration)

        return self._apply(Transition(replace(draft, **changes), notice=notice))

    def apply_ripeness_change(self, new_status: str | None) -> Transition:
        """Record a ripeness change; ripening an unripe item shortens its life."""
        self._drop_pending()
        draft = self.draft
        if not draft.is_fresh:
            return Transition(draft)

        new_status = new_status or None
        changes: dict[str, object] = {
            "status": new_status,
            "last_checked_at": self.clock(),
        }
        notice = None
        if (
            self.baseline_status == UNRIPE
            and new_status == RIPE
            and self.ripening is not Adjustment.APPLIED
        ):
            ripe_until = shortened_expiration(self._days_left(), self._today())
            if ripe_until is not None:
                changes["expiration_date"] = ripe_until
            self.ripening = Adjustment.APPLIED
            shown = ripe_until or draft.expiration_date
            notice = Notice(
                title="Ripeness updated",
                message=(
                    f"The expiration date has been adjusted to: {format_date(shown)}"
                ),
            )
            _logger.debug("Ripened %s, expires %s", draft.name, shown)
        elif new_status != RIPE and self.ripening is Adjustment.APPLIED:
            changes["expiration_date"] = self.baseline_expiration
            self.ripening = Adjustment.REVERTED

        return self._apply(Transition(replace(draft, **changes), notice=notice))

    def apply_opened_change(self, opened: bool) -> Transition:
        """Open or close the package.

        Opening proposes a shorter expiration that must be confirmed, unless
        the ingredient has already expired.
        """
        self._drop_pending()
        draft = self.draft
        if opened == bool(draft.is_opened):
            return Transition(draft)

        if not opened:
            if self.opening is Adjustment.APPLIED:
                self.opening = Adjustment.REVERTED
            closed = replace(
                draft, is_opened=False, expiration_date=self.baseline_expiration
            )
            return self._apply(Transition(closed))

        opened_until = shortened_expiration(self._days_left(), self._today())
        if opened_until is None:
            return self._apply(Transition(replace(draft, is_opened=True)))

        transition = Transition(
            replace(draft, is_opened=True, expiration_date=opened_until),
            confirmation=Confirmation(
                title="Item has been opened!",
                message=(
                    "The expiration date has been adjusted to: "
                    f"{format_date(opened_until)}.\nWould you like to proceed?"
                ),
            ),
        )
        self.pending = transition
        self._pending_opens = True
        return transition

    def apply_manual_check(self) -> Transition:
        """Propose marking the ripeness as checked now."""
        self._drop_pending()
        draft = self.draft
        if not draft.is_fresh:
            return Transition(draft)
        transition = Transition(
            replace(draft, last_checked_at=self.clock()),
            confirmation=Confirmation(
                title="Ripeness checked",
                message=(
                    "You have checked the ripeness. Last checked time has been "
                    "updated.\nWould you like to proceed?"
                ),
            ),
        )
        self.pending = transition
        return transition

    def set_details(
        self,
        *,
        name: str | None = None,
        brand: str | None = None,
        category: str | None = None,
        location: str | None = None,
    ) -> Transition:
        """Update descriptive fields; None leaves a field unchanged."""
        self._drop_pending()
        changes: dict[str, object] = {}
        if name is not None:
            changes["name"] = name
        for key, value in (
            ("brand", brand),
            ("category", category),
            ("location", location),
        ):
            if value is not None:
                changes[key] = value or None
        return self._apply(Transition(replace(self.draft, **changes)))

    def set_exact_expiration(self, value: str | date) -> Transition:
        """Set an exact expiration date; unparseable input is ignored."""
        self._drop_pending()
        parsed = value if isinstance(value, date) else parse_date(value)
        if parsed is None:
            return Transition(self.draft)
        return self._apply(Transition(replace(self.draft, expiration_date=parsed)))

    def set_estimated_expiration(self, label: str) -> Transition:
        """Set the expiration from an estimate label such as "1 week"."""
        self._drop_pending()
        parsed = parse_date(resolve_estimate(label, self._today()))
        if parsed is None:
            return Transition(self.draft)
        return self._apply(Transition(replace(self.draft, expiration_date=parsed)))

    def commit(self) -> Ingredient:
        """Accept the pending transition and return the new draft."""
        transition = self._take_pending()
        if self._pending_opens:
            self.opening = Adjustment.APPLIED
        self._pending_opens = False
        self.draft = transition.proposed
        return self.draft

    def cancel(self) -> Ingredient:
        """Decline the pending transition and return the unchanged draft."""
        self._take_pending()
        self._pending_opens = False
        return self.draft

    def _apply(self, transition: Transition) -> Transition:
        self.draft = transition.proposed
        return transition

    def _take_pending(self) -> Transition:
        if self.pending is None:
            raise NoPendingTransitionError("No change is awaiting confirmation")
        transition = self.pending
        self.pending = None
        return transition

    def _drop_pending(self) -> None:
        if self.pending is not None:
            _logger.debug("Discarding unconfirmed change for %s", self.draft.name)
            self.cancel()

    def _days_left(self) -> int:
        if self.relative_to is RelativeTo.CURRENT:
            return days_remaining(self.draft.expiration_date, self._today())
        return self.days_remaining

    def _today(self) -> date:
        return self.clock().date()
