"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new order."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    cart_id = Identifier()
    address_id = Identifier()
    items = Text(required=True)  # JSON: list of {order_item_id, product_id, quantity, unit_price, total_price}
    total_amount = Float(required=True)
    shipping_amount = Float(required=True)
    order_date = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An external process (payment, fulfilment, support) moved the order to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
