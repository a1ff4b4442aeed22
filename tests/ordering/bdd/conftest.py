"""Shared BDD fixtures and step definitions for checkout."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.inventory.record import InventoryRecord
from storefront.ordering.order.order import Order
from storefront.utils.queries import fetch_all


@pytest.fixture()
def products():
    """Product ids by name."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the checkout result or the error it raised."""
    return {"order_id": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} units in stock'))
def product_in_stock(create_product, products, name, price, stock):
    products[name] = create_product(name=name, price=price, stock=stock)


@given("a registered user with a cart")
def registered_user_with_cart(cart_id):
    return cart_id


@given(parsers.cfparse('the cart holds {quantity:d} "{name}"'))
def cart_holds(add_to_cart, products, quantity, name):
    add_to_cart(products[name], quantity=quantity)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("no order exists")
def no_order_exists():
    assert fetch_all(Order) == []


@then(parsers.cfparse('"{name}" has {stock:d} units in stock'))
def units_in_stock(products, name, stock):
    assert current_domain.repository_for(InventoryRecord).get(products[name]).stock == stock
