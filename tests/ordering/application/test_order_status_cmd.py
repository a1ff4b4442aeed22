"""Application tests for ChangeOrderStatus."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.errors import NotFoundError
from storefront.ordering.order.order import Order
from storefront.ordering.order.status import ChangeOrderStatus


def _status(order_id):
    return current_domain.repository_for(Order).get(order_id).status


class TestChangeOrderStatus:
    def test_change_persists(self, order_id):
        current_domain.process(ChangeOrderStatus(order_id=order_id, status="Shipped"), asynchronous=False)
        assert _status(order_id) == "Shipped"

    def test_no_transition_graph(self, order_id):
        current_domain.process(ChangeOrderStatus(order_id=order_id, status="Delivered"), asynchronous=False)
        current_domain.process(ChangeOrderStatus(order_id=order_id, status="Processing"), asynchronous=False)
        assert _status(order_id) == "Processing"

    def test_unknown_label_rejected(self, order_id):
        with pytest.raises(ValidationError):
            current_domain.process(ChangeOrderStatus(order_id=order_id, status="Lost"), asynchronous=False)
        assert _status(order_id) == "Pending"

    def test_unknown_order(self):
        with pytest.raises(NotFoundError):
            current_domain.process(ChangeOrderStatus(order_id="no-such-order", status="Shipped"), asynchronous=False)
