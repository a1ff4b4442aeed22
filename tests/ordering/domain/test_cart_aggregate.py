"""Tests for ShoppingCart item management and clearing."""

import json

import pytest
from protean.exceptions import ValidationError
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.events import CartCleared, CartCreated, CartItemAdded


class TestCartCreation:
    def test_create_sets_owner(self):
        cart = ShoppingCart.create(user_id="user-001")
        assert str(cart.user_id) == "user-001"

    def test_create_starts_empty(self):
        cart = ShoppingCart.create(user_id="user-001")
        assert len(cart.items) == 0
        assert cart.total == 0

    def test_create_raises_event(self):
        cart = ShoppingCart.create(user_id="user-001")
        assert any(isinstance(e, CartCreated) for e in cart._events)

    def test_user_is_required(self):
        with pytest.raises(ValidationError):
            ShoppingCart(user_id=None)


class TestAddItem:
    def test_add_new_product(self):
        cart = ShoppingCart.create(user_id="user-001")
        cart.add_item("prod-A", 2, 100.0)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].unit_price == 100.0

    def test_same_product_increases_quantity(self):
        cart = ShoppingCart.create(user_id="user-001")
        cart.add_item("prod-A", 1, 100.0)
        cart.add_item("prod-A", 2, 100.0)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_existing_line_keeps_captured_price(self):
        cart = ShoppingCart.create(user_id="user-001")
        cart.add_item("prod-A", 1, 100.0)
        cart.add_item("prod-A", 1, 120.0)
        assert cart.items[0].unit_price == 100.0
        assert cart.total == 200.0

    def test_zero_quantity_rejected(self):
        cart = ShoppingCart.create(user_id="user-001")
        with pytest.raises(ValidationError):
            cart.add_item("prod-A", 0, 100.0)

    def test_negative_price_rejected(self):
        cart = ShoppingCart.create(user_id="user-001")
        with pytest.raises(ValidationError):
            cart.add_item("prod-A", 1, -1.0)

    def test_add_raises_event_with_price(self):
        cart = ShoppingCart.create(user_id="user-001")
        cart.add_item("prod-A", 1, 79999.0)
        event = next(e for e in cart._events if isinstance(e, CartItemAdded))
        assert event.product_id == "prod-A"
        assert event.unit_price == 79999.0


class TestUpdateAndRemove:
    def test_update_quantity(self):
        cart = ShoppingCart.create(user_id="user-001")
        item = cart.add_item("prod-A", 1, 10.0)
        cart.update_item_quantity(item.id, 4)
        assert cart.items[0].quantity == 4

    def test_update_unknown_item(self):
        cart = ShoppingCart.create(user_id="user-001")
        with pytest.raises(ValidationError):
            cart.update_item_quantity("missing", 2)

    def test_remove_item(self):
        cart = ShoppingCart.create(user_id="user-001")
        item = cart.add_item("prod-A", 1, 10.0)
        cart.remove_item(item.id)
        assert len(cart.items) == 0

    def test_remove_unknown_item(self):
        cart = ShoppingCart.create(user_id="user-001")
        with pytest.raises(ValidationError):
            cart.remove_item("missing")


class TestClear:
    def test_clear_empties_cart(self):
        cart = ShoppingCart.create(user_id="user-001")
        cart.add_item("prod-A", 1, 79999.0)
        cart.add_item("prod-B", 1, 69999.0)
        cart.clear(order_id="ord-001")
        assert len(cart.items) == 0

    def test_clear_records_snapshot(self):
        cart = ShoppingCart.create(user_id="user-001")
        cart.add_item("prod-A", 2, 50.0)
        cart.clear(order_id="ord-001")

        event = next(e for e in cart._events if isinstance(e, CartCleared))
        assert event.order_id == "ord-001"
        assert json.loads(event.items) == [{"product_id": "prod-A", "quantity": 2, "unit_price": 50.0}]
