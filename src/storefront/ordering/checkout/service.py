"""Checkout entry point used by the API and scripts."""

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from storefront.errors import ConcurrentModificationError
from storefront.ordering.checkout.locks import cart_locks
from storefront.ordering.checkout.placement import PlaceOrder

logger = structlog.get_logger(__name__)

DEFAULT_LOCK_TIMEOUT = 5.0


def lock_timeout() -> float:
    """Seconds to wait for a busy cart, from ``[custom] checkout_lock_timeout``."""
    custom = current_domain.config.get("custom") or {}
    return float(custom.get("checkout_lock_timeout", DEFAULT_LOCK_TIMEOUT))


def checkout(cart_id, user_id, shipping_amount=0.0, address_id=None, timeout=None) -> str:
    """Turn the cart into a Pending order and return the order id.

    Raises:
        EmptyCartError: the cart has no items; nothing was written.
        NotFoundError: the user or cart is missing, or the cart is someone else's.
        ConcurrentModificationError: another checkout held the cart past ``timeout``,
            or the cart changed underneath the checkout on every retry.
        ValidationError: malformed input, such as a negative shipping amount.
    """
    command = PlaceOrder(
        cart_id=cart_id,
        user_id=user_id,
        shipping_amount=shipping_amount,
        address_id=address_id,
    )
    with cart_locks.hold(cart_id, timeout=lock_timeout() if timeout is None else timeout):
        try:
            order_id = current_domain.process(command, asynchronous=False)
        except ExpectedVersionError as exc:
            raise ConcurrentModificationError(
                {"cart": [f"Cart {cart_id} was modified while being checked out"]}
            ) from exc

    logger.info("Placed order from cart", order_id=order_id, cart_id=str(cart_id), user_id=str(user_id))
    return order_id
