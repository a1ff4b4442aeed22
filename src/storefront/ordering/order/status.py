"""Order status changes: command and handler used by payment and fulfilment processes."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.utils.queries import get_or_raise


@storefront.command(part_of="Order")
class ChangeOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@storefront.command_handler(part_of=Order)
class ChangeOrderStatusHandler:
    @handle(ChangeOrderStatus)
    def change_order_status(self, command):
        order = get_or_raise(Order, command.order_id, "order")
        order.change_status(command.status)
        current_domain.repository_for(Order).add(order)
