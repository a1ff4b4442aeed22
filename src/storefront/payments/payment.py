"""Payment aggregate: a record of one payment attempt against an order.

Payments are captured by an external gateway; this aggregate only records
what the gateway reported.

State Machine:
    INITIATED → SUCCESS → REFUNDED
    INITIATED → FAILED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from storefront.domain import storefront
from storefront.payments.events import (
    PaymentFailed,
    PaymentInitiated,
    PaymentRefunded,
    PaymentSucceeded,
)


class PaymentMethod(Enum):
    UPI = "UPI"
    CARD = "Card"
    NET_BANKING = "NetBanking"
    COD = "COD"


class PaymentStatus(Enum):
    INITIATED = "INITIATED"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


_VALID_TRANSITIONS = {
    PaymentStatus.INITIATED: {PaymentStatus.SUCCESS, PaymentStatus.FAILED},
    PaymentStatus.SUCCESS: {PaymentStatus.REFUNDED},
    PaymentStatus.FAILED: set(),
    PaymentStatus.REFUNDED: set(),
}


@storefront.aggregate
class Payment:
    order_id = Identifier(required=True)
    payment_method = String(required=True, choices=PaymentMethod)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.INITIATED.value)
    amount = Float(required=True, min_value=0.0)
    paid_at = DateTime()
    gateway_response = Text()  # JSON, as reported by the gateway

    @classmethod
    def initiate(cls, order_id, payment_method, amount):
        payment = cls(
            order_id=str(order_id),
            payment_method=payment_method,
            payment_status=PaymentStatus.INITIATED.value,
            amount=amount,
        )
        payment.raise_(
            PaymentInitiated(
                payment_id=str(payment.id),
                order_id=str(order_id),
                payment_method=payment_method,
                amount=amount,
            )
        )
        return payment

    def _assert_can_transition(self, target):
        current = PaymentStatus(self.payment_status)
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"payment_status": [f"Cannot transition from {current.value} to {target.value}"]})

    def succeed(self, gateway_response=None):
        self._assert_can_transition(PaymentStatus.SUCCESS)
        now = datetime.now(UTC)
        self.payment_status = PaymentStatus.SUCCESS.value
        self.paid_at = now
        if gateway_response is not None:
            self.gateway_response = json.dumps(gateway_response)

        self.raise_(
            PaymentSucceeded(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                amount=self.amount,
                paid_at=now,
            )
        )

    def fail(self, reason=None, gateway_response=None):
        self._assert_can_transition(PaymentStatus.FAILED)
        self.payment_status = PaymentStatus.FAILED.value
        if gateway_response is not None:
            self.gateway_response = json.dumps(gateway_response)

        self.raise_(PaymentFailed(payment_id=str(self.id), order_id=str(self.order_id), reason=reason))

    def refund(self):
        self._assert_can_transition(PaymentStatus.REFUNDED)
        self.payment_status = PaymentStatus.REFUNDED.value

        self.raise_(PaymentRefunded(payment_id=str(self.id), order_id=str(self.order_id), amount=self.amount))
