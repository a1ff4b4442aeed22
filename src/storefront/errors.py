"""Error taxonomy for storefront operations.

``ValidationError`` is Protean's own exception (raised by fields, invariants
and aggregate methods for malformed input). The remaining errors describe
failures that are not about the shape of the input. All of them carry a
``messages`` dict shaped like Protean's: ``{"field": ["message", ...]}``.
"""

from protean.exceptions import ValidationError

__all__ = [
    "ConcurrentModificationError",
    "ConstraintViolationError",
    "EmptyCartError",
    "NotFoundError",
    "StorefrontError",
    "ValidationError",
]


class StorefrontError(Exception):
    """Base class for non-validation storefront failures."""

    def __init__(self, messages):
        self.messages = messages
        super().__init__(messages)


class NotFoundError(StorefrontError):
    """A referenced user, cart, product, order or address does not exist."""


class EmptyCartError(StorefrontError):
    """Checkout was attempted on a cart without items."""


class ConcurrentModificationError(StorefrontError):
    """Another operation holds the cart; the checkout could not proceed."""


class ConstraintViolationError(StorefrontError):
    """A referential rule forbids the requested change."""
