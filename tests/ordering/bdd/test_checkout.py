"""BDD tests for checkout."""

from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when
from storefront.errors import EmptyCartError, NotFoundError
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.checkout.service import checkout
from storefront.ordering.order.order import Order

scenarios("features/checkout.feature")


def _attempt(outcome, cart_id, user_id, **kwargs):
    try:
        outcome["order_id"] = checkout(cart_id, user_id, **kwargs)
    except (EmptyCartError, NotFoundError) as exc:
        outcome["exc"] = exc


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the user checks out")
def user_checks_out(outcome, cart_id, user_id):
    _attempt(outcome, cart_id, user_id)


@when(parsers.cfparse("the user checks out with shipping {shipping:f}"))
def user_checks_out_with_shipping(outcome, cart_id, user_id, shipping):
    _attempt(outcome, cart_id, user_id, shipping_amount=shipping)


@when("another user checks out the cart")
def another_user_checks_out(outcome, cart_id, register_user):
    stranger = register_user(full_name="Vikram Singh", email="vikram@gmail.com")
    _attempt(outcome, cart_id, stranger)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
def _order(outcome):
    assert outcome["exc"] is None
    return current_domain.repository_for(Order).get(outcome["order_id"])


@then(parsers.cfparse("an order totalling {total:f} is placed with {count:d} items"))
def order_placed(outcome, total, count):
    order = _order(outcome)
    assert order.total_amount == total
    assert len(order.items) == count


@then(parsers.cfparse('the order is "{status}"'))
def order_status(outcome, status):
    assert _order(outcome).status == status


@then(parsers.cfparse("the order charges {shipping:f} for shipping"))
def order_shipping(outcome, shipping):
    assert _order(outcome).shipping_amount == shipping


@then("the cart is empty")
def cart_is_empty(cart_id):
    assert len(current_domain.repository_for(ShoppingCart).get(cart_id).items) == 0


@then("the checkout fails because the cart is empty")
def fails_empty(outcome):
    assert isinstance(outcome["exc"], EmptyCartError)


@then("the checkout fails because the cart was not found")
def fails_not_found(outcome):
    assert isinstance(outcome["exc"], NotFoundError)
