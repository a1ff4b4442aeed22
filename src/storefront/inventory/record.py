"""InventoryRecord aggregate: stock counters for one product.

Stock Model:
    stock:    units available to sell
    reserved: units held against carts or orders not yet placed

Both counters are floored at zero. Placing an order decrements both by the
ordered quantity; the record keeps a ledger of the order items it has already
applied, keyed by order item id, so replaying an adjustment is a no-op.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.domain import storefront
from storefront.inventory.events import (
    InventoryAdjusted,
    InventoryInitialized,
    ReservedStockReleased,
    StockReceived,
    StockReserved,
)


@storefront.entity(part_of="InventoryRecord")
class AppliedOrderItem:
    """Ledger entry: an order item whose quantity has been taken out of stock."""

    order_item_id = Identifier(required=True)
    order_id = Identifier()
    quantity = Integer(required=True, min_value=1)
    applied_at = DateTime()


@storefront.aggregate
class InventoryRecord:
    product_id = Identifier(identifier=True, required=True)
    stock = Integer(default=0)
    reserved = Integer(default=0)
    applied_order_items = HasMany(AppliedOrderItem)
    last_updated = DateTime()

    @invariant.post
    def counters_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})
        if self.reserved is not None and self.reserved < 0:
            raise ValidationError({"reserved": ["Reserved cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, product_id, stock=0, reserved=0):
        now = datetime.now(UTC)
        record = cls(
            product_id=str(product_id),
            stock=stock,
            reserved=reserved,
            last_updated=now,
        )
        record.raise_(
            InventoryInitialized(
                product_id=str(product_id),
                stock=stock,
                reserved=reserved,
                initialized_at=now,
            )
        )
        return record

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def receive(self, quantity):
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        now = datetime.now(UTC)
        self.stock += quantity
        self.last_updated = now

        self.raise_(
            StockReceived(
                product_id=str(self.product_id),
                quantity=quantity,
                new_stock=self.stock,
                received_at=now,
            )
        )

    def reserve(self, quantity):
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        unreserved = self.stock - self.reserved
        if quantity > unreserved:
            raise ValidationError({"quantity": [f"Insufficient stock: {unreserved} unreserved, {quantity} requested"]})

        now = datetime.now(UTC)
        self.reserved += quantity
        self.last_updated = now

        self.raise_(
            StockReserved(
                product_id=str(self.product_id),
                quantity=quantity,
                new_reserved=self.reserved,
                reserved_at=now,
            )
        )

    def release(self, quantity):
        """Return reserved units; never drops ``reserved`` below zero."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        now = datetime.now(UTC)
        self.reserved = max(self.reserved - quantity, 0)
        self.last_updated = now

        self.raise_(
            ReservedStockReleased(
                product_id=str(self.product_id),
                quantity=quantity,
                new_reserved=self.reserved,
                released_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Order placement
    # -------------------------------------------------------------------
    def has_applied(self, order_item_id):
        return any(str(entry.order_item_id) == str(order_item_id) for entry in self.applied_order_items)

    def apply_order_item(self, order_item_id, quantity, order_id=None):
        """Take a placed order item out of stock and reservations.

        Returns False, changing nothing, when the order item was applied before.
        """
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        if self.has_applied(order_item_id):
            return False

        now = datetime.now(UTC)
        previous_stock = self.stock
        previous_reserved = self.reserved

        self.stock = max(previous_stock - quantity, 0)
        self.reserved = max(previous_reserved - quantity, 0)
        self.last_updated = now
        self.add_applied_order_items(
            AppliedOrderItem(
                order_item_id=str(order_item_id),
                order_id=str(order_id) if order_id else None,
                quantity=quantity,
                applied_at=now,
            )
        )

        self.raise_(
            InventoryAdjusted(
                product_id=str(self.product_id),
                order_item_id=str(order_item_id),
                order_id=str(order_id) if order_id else None,
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
                previous_reserved=previous_reserved,
                new_reserved=self.reserved,
                adjusted_at=now,
            )
        )
        return True
