"""Shipment aggregate: one parcel of an order, tracked through a carrier.

State Machine:
    NOT_SHIPPED → SHIPPED → DELIVERED
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront
from storefront.shipping.events import ShipmentCreated, ShipmentDelivered, ShipmentDispatched


class ShipmentStatus(Enum):
    NOT_SHIPPED = "NOT_SHIPPED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"


@storefront.aggregate
class Shipment:
    order_id = Identifier(required=True)
    carrier = String(max_length=100)
    tracking_number = String(max_length=200)
    shipped_at = DateTime()
    delivered_at = DateTime()
    status = String(choices=ShipmentStatus, default=ShipmentStatus.NOT_SHIPPED.value)

    @classmethod
    def create(cls, order_id, carrier=None):
        shipment = cls(order_id=str(order_id), carrier=carrier, status=ShipmentStatus.NOT_SHIPPED.value)
        shipment.raise_(ShipmentCreated(shipment_id=str(shipment.id), order_id=str(order_id), carrier=carrier))
        return shipment

    def ship(self, tracking_number, carrier=None, shipped_at=None):
        if self.status != ShipmentStatus.NOT_SHIPPED.value:
            raise ValidationError({"status": ["Only shipments that have not shipped can be dispatched"]})

        carrier = carrier or self.carrier
        if not carrier:
            raise ValidationError({"carrier": ["A carrier is required to dispatch a shipment"]})

        shipped_at = shipped_at or datetime.now(UTC)
        self.carrier = carrier
        self.tracking_number = tracking_number
        self.shipped_at = shipped_at
        self.status = ShipmentStatus.SHIPPED.value

        self.raise_(
            ShipmentDispatched(
                shipment_id=str(self.id),
                order_id=str(self.order_id),
                carrier=carrier,
                tracking_number=tracking_number,
                shipped_at=shipped_at,
            )
        )

    def deliver(self, delivered_at=None):
        if self.status != ShipmentStatus.SHIPPED.value:
            raise ValidationError({"status": ["Only shipped parcels can be delivered"]})

        delivered_at = delivered_at or datetime.now(UTC)
        self.delivered_at = delivered_at
        self.status = ShipmentStatus.DELIVERED.value

        self.raise_(
            ShipmentDelivered(
                shipment_id=str(self.id),
                order_id=str(self.order_id),
                delivered_at=delivered_at,
            )
        )
