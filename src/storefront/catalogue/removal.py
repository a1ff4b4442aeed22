"""Product removal: command and handler applying the restrict/cascade rules.

A product still referenced by a cart line or an order line cannot be removed.
Otherwise its inventory record, reviews and view logs go with it.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.activity.product_view import ProductView
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import ConstraintViolationError
from storefront.inventory.record import InventoryRecord
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.order.order import Order
from storefront.reviews.review import Review
from storefront.utils.queries import fetch_all, get_or_raise

logger = structlog.get_logger(__name__)


def _referenced_by(aggregate_cls, product_id):
    return any(
        str(item.product_id) == product_id for aggregate in fetch_all(aggregate_cls) for item in aggregate.items
    )


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class RemoveProductHandler:
    @handle(RemoveProduct)
    def remove_product(self, command):
        product = get_or_raise(Product, command.product_id, "product")
        product_id = str(product.id)

        if _referenced_by(ShoppingCart, product_id):
            raise ConstraintViolationError({"product_id": ["Product is referenced by a cart item"]})
        if _referenced_by(Order, product_id):
            raise ConstraintViolationError({"product_id": ["Product is referenced by an order item"]})

        inventory_repo = current_domain.repository_for(InventoryRecord)
        for record in fetch_all(InventoryRecord, product_id=product_id):
            inventory_repo._dao.delete(record)

        for record_cls in (Review, ProductView):
            repo = current_domain.repository_for(record_cls)
            for record in fetch_all(record_cls, product_id=product_id):
                repo._dao.delete(record)

        current_domain.repository_for(Product)._dao.delete(product)
        logger.info("Removed product", product_id=product_id)
