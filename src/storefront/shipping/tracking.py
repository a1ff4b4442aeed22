"""Shipment tracking: commands and handler for carrier updates."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.shipping.shipment import Shipment
from storefront.utils.queries import get_or_raise


@storefront.command(part_of="Shipment")
class CreateShipment:
    order_id = Identifier(required=True)
    carrier = String(max_length=100)


@storefront.command(part_of="Shipment")
class MarkShipped:
    shipment_id = Identifier(required=True)
    tracking_number = String(required=True, max_length=200)
    carrier = String(max_length=100)


@storefront.command(part_of="Shipment")
class MarkDelivered:
    shipment_id = Identifier(required=True)


@storefront.command_handler(part_of=Shipment)
class ShipmentTrackingHandler:
    @handle(CreateShipment)
    def create_shipment(self, command):
        order = get_or_raise(Order, command.order_id, "order")
        shipment = Shipment.create(order_id=order.id, carrier=command.carrier)
        current_domain.repository_for(Shipment).add(shipment)
        return str(shipment.id)

    @handle(MarkShipped)
    def mark_shipped(self, command):
        shipment = get_or_raise(Shipment, command.shipment_id, "shipment")
        shipment.ship(tracking_number=command.tracking_number, carrier=command.carrier)
        current_domain.repository_for(Shipment).add(shipment)

    @handle(MarkDelivered)
    def mark_delivered(self, command):
        shipment = get_or_raise(Shipment, command.shipment_id, "shipment")
        shipment.deliver()
        current_domain.repository_for(Shipment).add(shipment)
