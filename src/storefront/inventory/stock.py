"""Stock management: commands and handler for inventory records."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.inventory.record import InventoryRecord
from storefront.utils.queries import exists, get_or_raise

logger = structlog.get_logger(__name__)


@storefront.command(part_of="InventoryRecord")
class InitializeInventory:
    """Open the inventory record of a product. One record per product."""

    product_id = Identifier(required=True)
    stock = Integer(default=0, min_value=0)
    reserved = Integer(default=0, min_value=0)


@storefront.command(part_of="InventoryRecord")
class ReceiveStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="InventoryRecord")
class ReserveStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="InventoryRecord")
class ReleaseReservedStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="InventoryRecord")
class ApplyOrderItemToInventory:
    """Decrement stock for one placed order item; safe to repeat."""

    product_id = Identifier(required=True)
    order_item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    order_id = Identifier()


@storefront.command_handler(part_of=InventoryRecord)
class ManageStockHandler:
    @handle(InitializeInventory)
    def initialize_inventory(self, command):
        get_or_raise(Product, command.product_id, "product")
        if exists(InventoryRecord, command.product_id):
            raise ValidationError({"product_id": ["Inventory already initialized for this product"]})

        record = InventoryRecord.create(
            product_id=command.product_id,
            stock=command.stock or 0,
            reserved=command.reserved or 0,
        )
        current_domain.repository_for(InventoryRecord).add(record)
        return str(record.product_id)

    @handle(ReceiveStock)
    def receive_stock(self, command):
        repo = current_domain.repository_for(InventoryRecord)
        record = get_or_raise(InventoryRecord, command.product_id, "inventory")
        record.receive(command.quantity)
        repo.add(record)

    @handle(ReserveStock)
    def reserve_stock(self, command):
        repo = current_domain.repository_for(InventoryRecord)
        record = get_or_raise(InventoryRecord, command.product_id, "inventory")
        record.reserve(command.quantity)
        repo.add(record)

    @handle(ReleaseReservedStock)
    def release_reserved_stock(self, command):
        repo = current_domain.repository_for(InventoryRecord)
        record = get_or_raise(InventoryRecord, command.product_id, "inventory")
        record.release(command.quantity)
        repo.add(record)

    @handle(ApplyOrderItemToInventory)
    def apply_order_item(self, command):
        repo = current_domain.repository_for(InventoryRecord)
        record = get_or_raise(InventoryRecord, command.product_id, "inventory")
        applied = record.apply_order_item(
            order_item_id=command.order_item_id,
            quantity=command.quantity,
            order_id=command.order_id,
        )
        if applied:
            repo.add(record)
        else:
            logger.info(
                "Order item already applied to inventory",
                product_id=str(command.product_id),
                order_item_id=str(command.order_item_id),
            )
        return applied
