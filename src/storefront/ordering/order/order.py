"""Order aggregate: an immutable record of a completed checkout.

Order lines copy product, quantity and unit price from the cart at the time
of purchase and are never edited afterwards; only the status label moves.
``total_amount`` is the sum of line totals and excludes shipping.

Statuses:
    Pending, Processing, Shipped, Delivered, Cancelled, Refunded

No transition graph is enforced: payment and fulfilment processes outside
this domain decide which label applies.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"


# Orders in these states count towards revenue and sales figures
REVENUE_STATUSES = frozenset(
    {
        OrderStatus.PROCESSING.value,
        OrderStatus.SHIPPED.value,
        OrderStatus.DELIVERED.value,
    }
)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A line of an order, priced at the moment of purchase."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier()  # Cleared when the user is deleted
    address_id = Identifier()
    cart_id = Identifier()
    order_date = DateTime()
    total_amount = Float(required=True, min_value=0.0)
    shipping_amount = Float(default=0.0, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)

    @invariant.post
    def total_must_match_line_totals(self):
        line_sum = round(sum(item.total_price for item in self.items), 2)
        if abs(line_sum - (self.total_amount or 0.0)) > 0.005:
            raise ValidationError(
                {"total_amount": [f"Total {self.total_amount} does not match line totals {line_sum}"]}
            )

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines, shipping_amount=0.0, address_id=None, cart_id=None, order_date=None):
        """Create a Pending order from cart lines.

        Args:
            user_id: The user placing the order.
            lines: Iterable of (product_id, quantity, unit_price) tuples.
            shipping_amount: Charged on top of ``total_amount``.
            address_id: Delivery address, one of the user's addresses.
            cart_id: The cart the lines were taken from.
        """
        order_date = order_date or datetime.now(UTC)
        items = [
            OrderItem(
                product_id=str(product_id),
                quantity=quantity,
                unit_price=unit_price,
                total_price=round(quantity * unit_price, 2),
            )
            for product_id, quantity, unit_price in lines
        ]
        if not items:
            raise ValidationError({"items": ["An order needs at least one item"]})

        order = cls(
            user_id=str(user_id),
            address_id=str(address_id) if address_id else None,
            cart_id=str(cart_id) if cart_id else None,
            order_date=order_date,
            total_amount=round(sum(item.total_price for item in items), 2),
            shipping_amount=shipping_amount or 0.0,
            status=OrderStatus.PENDING.value,
            items=items,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                cart_id=order.cart_id,
                address_id=order.address_id,
                items=json.dumps(
                    [
                        {
                            "order_item_id": str(item.id),
                            "product_id": str(item.product_id),
                            "quantity": item.quantity,
                            "unit_price": item.unit_price,
                            "total_price": item.total_price,
                        }
                        for item in order.items
                    ]
                ),
                total_amount=order.total_amount,
                shipping_amount=order.shipping_amount,
                order_date=order_date,
            )
        )
        return order

    @property
    def grand_total(self):
        return round(self.total_amount + (self.shipping_amount or 0.0), 2)

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def change_status(self, new_status):
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status {new_status!r}"]}) from None

        previous = self.status
        if previous == target.value:
            return

        self.status = target.value
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=datetime.now(UTC),
            )
        )
