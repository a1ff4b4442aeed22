"""Payment recording: commands and handler for gateway outcomes."""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.payments.payment import Payment
from storefront.utils.queries import get_or_raise


def _parse_response(raw):
    if raw is None:
        return None
    return json.loads(raw) if isinstance(raw, str) else raw


@storefront.command(part_of="Payment")
class InitiatePayment:
    order_id = Identifier(required=True)
    payment_method = String(required=True, max_length=20)
    amount = Float(min_value=0.0)  # Defaults to the order's total plus shipping


@storefront.command(part_of="Payment")
class RecordPaymentSuccess:
    payment_id = Identifier(required=True)
    gateway_response = Text()  # JSON


@storefront.command(part_of="Payment")
class RecordPaymentFailure:
    payment_id = Identifier(required=True)
    reason = String(max_length=500)
    gateway_response = Text()  # JSON


@storefront.command(part_of="Payment")
class RefundPayment:
    payment_id = Identifier(required=True)


@storefront.command_handler(part_of=Payment)
class RecordPaymentHandler:
    @handle(InitiatePayment)
    def initiate_payment(self, command):
        order = get_or_raise(Order, command.order_id, "order")
        amount = command.amount if command.amount is not None else order.grand_total

        payment = Payment.initiate(
            order_id=order.id,
            payment_method=command.payment_method,
            amount=amount,
        )
        current_domain.repository_for(Payment).add(payment)
        return str(payment.id)

    @handle(RecordPaymentSuccess)
    def record_payment_success(self, command):
        payment = get_or_raise(Payment, command.payment_id, "payment")
        payment.succeed(gateway_response=_parse_response(command.gateway_response))
        current_domain.repository_for(Payment).add(payment)

    @handle(RecordPaymentFailure)
    def record_payment_failure(self, command):
        payment = get_or_raise(Payment, command.payment_id, "payment")
        payment.fail(reason=command.reason, gateway_response=_parse_response(command.gateway_response))
        current_domain.repository_for(Payment).add(payment)

    @handle(RefundPayment)
    def refund_payment(self, command):
        payment = get_or_raise(Payment, command.payment_id, "payment")
        payment.refund()
        current_domain.repository_for(Payment).add(payment)
