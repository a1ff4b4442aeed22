"""Domain events for the InventoryRecord aggregate."""

from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="InventoryRecord")
class InventoryInitialized:
    """An inventory record was opened for a product."""

    __version__ = 1

    product_id = Identifier(required=True)
    stock = Integer(required=True)
    reserved = Integer(required=True)
    initialized_at = DateTime(required=True)


@storefront.event(part_of="InventoryRecord")
class StockReceived:
    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    new_stock = Integer(required=True)
    received_at = DateTime(required=True)


@storefront.event(part_of="InventoryRecord")
class StockReserved:
    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    new_reserved = Integer(required=True)
    reserved_at = DateTime(required=True)


@storefront.event(part_of="InventoryRecord")
class ReservedStockReleased:
    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    new_reserved = Integer(required=True)
    released_at = DateTime(required=True)


@storefront.event(part_of="InventoryRecord")
class InventoryAdjusted:
    """Stock and reservation counters were decremented for a placed order item."""

    __version__ = 1

    product_id = Identifier(required=True)
    order_item_id = Identifier(required=True)
    order_id = Identifier()
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    previous_reserved = Integer(required=True)
    new_reserved = Integer(required=True)
    adjusted_at = DateTime(required=True)
