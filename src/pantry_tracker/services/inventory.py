"""Inventory service for adding, editing and removing ingredients."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from pantry_tracker.domain.errors import IngredientNotFoundError
from pantry_tracker.domain.ingredients import Ingredient
from pantry_tracker.domain.lifecycle import RelativeTo
from pantry_tracker.services.dates import parse_date, resolve_estimate
from pantry_tracker.services.lifecycle import Clock, EditSession, utc_now
from pantry_tracker.services.queries import expiring_soon, sort_by_expiration
from pantry_tracker.services.records import (
    parse_ingredient,
    serialize_ingredient,
    validate_ingredient,
)

_logger = logging.getLogger(__name__)


class InventoryRepository(Protocol):
    """Persistence interface for the full ingredient collection."""

    def load_all(self) -> list[dict[str, object]]:
        """Return every stored ingredient record."""

    def save_all(self, records: list[dict[str, object]]) -> None:
        """Replace the stored collection with the given records."""


@dataclass
class InventoryService:
    """Application service over the stored ingredient collection."""

    repository: InventoryRepository
    clock: Clock = utc_now
    relative_to: RelativeTo = RelativeTo.BASELINE

    def list_ingredients(self) -> list[Ingredient]:
        """Return all ingredients in insertion order."""
        return [parse_ingredient(row) for row in self.repository.load_all()]

    def list_expiring(self, threshold_days: int) -> list[Ingredient]:
        """Return ingredients expiring within the threshold, soonest first."""
        today = self.clock().date()
        return sort_by_expiration(
            expiring_soon(self.list_ingredients(), threshold_days, today=today)
        )

    def add_ingredient(  # noqa: PLR0913
        self,
        name: str,
        *,
        brand: str | None = None,
        category: str | None = None,
        location: str | None = None,
        confection_type: str | None = None,
        expiration_date: date | None = None,
        estimate: str | None = None,
    ) -> Ingredient:
        """Validate and append a new ingredient.

        An exact expiration date wins over an estimate label.
        """
        if expiration_date is None and estimate:
            expiration_date = parse_date(
                resolve_estimate(estimate, self.clock().date())
            )
        ingredient = Ingredient(
            name=name,
            expiration_date=expiration_date,
            brand=brand or None,
            category=category or None,
            location=location or None,
            confection_type=confection_type or None,
        )
        validate_ingredient(ingredient, require_expiration=True)
        ingredients = self.list_ingredients()
        ingredients.append(ingredient)
        self._save(ingredients)
        _logger.info("Added ingredient %s", ingredient.name)
        return ingredient

    def add_scanned_product(self, name: str) -> Ingredient:
        """Append a name-only ingredient found by a barcode scan."""
        ingredient = Ingredient(name=name)
        validate_ingredient(ingredient)
        ingredients = self.list_ingredients()
        ingredients.append(ingredient)
        self._save(ingredients)
        _logger.info("Added scanned product %s", name)
        return ingredient

    def get_at(self, position: int) -> Ingredient:
        """Return the ingredient at a position in the collection."""
        ingredients = self.list_ingredients()
        if not 0 <= position < len(ingredients):
            raise IngredientNotFoundError(f"No ingredient at position {position}")
        return ingredients[position]

    def delete_ingredient(self, ingredient: Ingredient) -> None:
        """Remove the first stored ingredient equal to the given one."""
        ingredients = self.list_ingredients()
        try:
            ingredients.remove(ingredient)
        except ValueError as exc:
            raise IngredientNotFoundError(
                f"Ingredient {ingredient.name} is no longer stored"
            ) from exc
        self._save(ingredients)
        _logger.info("Deleted ingredient %s", ingredient.name)

    def start_edit(self, name: str) -> EditSession:
        """Open an edit session for the first ingredient with the given name."""
        for ingredient in self.list_ingredients():
            if ingredient.name == name:
                return EditSession(
                    original=ingredient,
                    clock=self.clock,
                    relative_to=self.relative_to,
                )
        raise IngredientNotFoundError(f"Ingredient {name} was not found")

    def save_edit(self, session: EditSession) -> Ingredient:
        """Replace the edited ingredient in the collection.

        A change still awaiting confirmation is discarded first. On failure
        the session is left untouched so saving can be retried.
        """
        if session.pending is not None:
            session.cancel()
        draft = session.draft
        validate_ingredient(draft)
        ingredients = self.list_ingredients()
        for index, ingredient in enumerate(ingredients):
            if ingredient.name == session.original.name:
                ingredients[index] = draft
                break
        else:
            raise IngredientNotFoundError(
                f"Ingredient {session.original.name} was not found"
            )
        self._save(ingredients)
        _logger.info("Updated ingredient %s", draft.name)
        return draft

    def _save(self, ingredients: list[Ingredient]) -> None:
        self.repository.save_all(
            [serialize_ingredient(ingredient) for ingredient in ingredients]
        )
