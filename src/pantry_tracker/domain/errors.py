"""Error types raised by the pantry tracker."""


class PantryError(Exception):
    """Base class for recoverable pantry tracker errors."""


class ValidationError(PantryError):
    """Raised when user input is rejected before any state change."""


class PersistenceError(PantryError):
    """Raised when the ingredient store cannot be read or written."""


class IngredientNotFoundError(PantryError):
    """Raised when an ingredient is no longer present in the collection."""


class EditSessionNotFoundError(PantryError):
    """Raised when an edit session id is unknown or already closed."""


class NoPendingTransitionError(PantryError):
    """Raised when commit or cancel is called without a pending change."""


class ProductLookupError(PantryError):
    """Raised when the product lookup service cannot be reached or parsed."""


class ProductNotFoundError(ProductLookupError):
    """Raised when a scanned code has no matching product."""
