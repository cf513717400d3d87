"""Domain models for ingredient edit sessions."""

from dataclasses import dataclass
from enum import Enum

from pantry_tracker.domain.ingredients import Ingredient


class Adjustment(Enum):
    """State of a one-time expiration adjustment within an edit session."""

    UNTOUCHED = "untouched"
    APPLIED = "applied"
    REVERTED = "reverted"


class RelativeTo(Enum):
    """Reference date used when shortening an expiration date."""

    BASELINE = "baseline"
    CURRENT = "current"


@dataclass(frozen=True)
class Notice:
    """Informational message for the user."""

    title: str
    message: str


@dataclass(frozen=True)
class Confirmation:
    """Request for the user to accept or decline a proposed change."""

    title: str
    message: str


@dataclass(frozen=True)
class Transition:
    """Proposed next draft produced by a lifecycle operation."""

    proposed: Ingredient
    notice: Notice | None = None
    confirmation: Confirmation | None = None

    @property
    def needs_confirmation(self) -> bool:
        """Return True when the caller must accept or decline the change."""
        return self.confirmation is not None
