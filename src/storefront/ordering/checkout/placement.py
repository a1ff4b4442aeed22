"""Order placement: converts a cart into an order inside one unit of work.

The handler reads the cart, creates the order and its lines, empties the
cart and takes every line out of inventory. Protean commits all of it
together or rolls all of it back.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import EmptyCartError, NotFoundError
from storefront.identity.user import User
from storefront.inventory.record import InventoryRecord
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.order.order import Order
from storefront.utils.queries import get_or_raise

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    shipping_amount = Float(default=0.0, min_value=0.0)
    address_id = Identifier()


def _apply_to_inventory(order):
    """Decrement inventory for every line of ``order``, once per order item."""
    repo = current_domain.repository_for(InventoryRecord)
    records = {}
    for item in order.items:
        product_id = str(item.product_id)
        if product_id not in records:
            try:
                records[product_id] = repo.get(product_id)
            except ObjectNotFoundError:
                records[product_id] = None

        record = records[product_id]
        if record is None:
            logger.warning(
                "No inventory record for ordered product",
                order_id=str(order.id),
                product_id=product_id,
            )
            continue

        record.apply_order_item(order_item_id=item.id, quantity=item.quantity, order_id=order.id)

    for record in records.values():
        if record is not None:
            repo.add(record)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        user = get_or_raise(User, command.user_id, "user")
        cart = get_or_raise(ShoppingCart, command.cart_id, "cart")

        if str(cart.user_id) != str(user.id):
            raise NotFoundError({"cart": [f"Cart {command.cart_id} does not belong to user {command.user_id}"]})
        if command.address_id and user.find_address(command.address_id) is None:
            raise NotFoundError({"address": [f"Address {command.address_id} does not belong to user"]})
        if not cart.items:
            raise EmptyCartError({"cart": ["Cart has no items to check out"]})

        order = Order.place(
            user_id=user.id,
            lines=[(item.product_id, item.quantity, item.unit_price) for item in cart.items],
            shipping_amount=command.shipping_amount or 0.0,
            address_id=command.address_id,
            cart_id=cart.id,
        )
        cart.clear(order_id=order.id)

        current_domain.repository_for(Order).add(order)
        current_domain.repository_for(ShoppingCart).add(cart)
        _apply_to_inventory(order)
        return str(order.id)
