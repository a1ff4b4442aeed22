"""Application tests for checkout: order creation, cart clearing and inventory."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.errors import EmptyCartError, NotFoundError
from storefront.identity.addresses import AddAddress
from storefront.inventory.record import InventoryRecord
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.management import CreateCart
from storefront.ordering.checkout.service import checkout
from storefront.ordering.order.order import Order, OrderStatus
from storefront.utils.queries import fetch_all


@pytest.fixture()
def phones(create_product):
    iphone = create_product(name="iPhone 14", price=79999.00, stock=50)
    galaxy = create_product(name="Samsung Galaxy S23", price=69999.00, stock=40)
    return iphone, galaxy


def _inventory(product_id):
    return current_domain.repository_for(InventoryRecord).get(product_id)


class TestCheckoutTwoItems:
    def test_order_total_and_items(self, phones, cart_id, user_id, add_to_cart):
        iphone, galaxy = phones
        add_to_cart(iphone)
        add_to_cart(galaxy)

        order_id = checkout(cart_id, user_id)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.total_amount == 149998.00
        assert len(order.items) == 2
        assert sum(item.total_price for item in order.items) == order.total_amount

    def test_order_defaults(self, phones, cart_id, user_id, add_to_cart):
        add_to_cart(phones[0])

        order = current_domain.repository_for(Order).get(checkout(cart_id, user_id))
        assert order.status == OrderStatus.PENDING.value
        assert order.shipping_amount == 0.0
        assert order.order_date is not None
        assert str(order.user_id) == user_id
        assert str(order.cart_id) == cart_id

    def test_cart_is_emptied_but_kept(self, phones, cart_id, user_id, add_to_cart):
        add_to_cart(phones[0])
        add_to_cart(phones[1])

        checkout(cart_id, user_id)

        cart = current_domain.repository_for(ShoppingCart).get(cart_id)
        assert len(cart.items) == 0

    def test_inventory_decremented_per_item(self, phones, cart_id, user_id, add_to_cart):
        iphone, galaxy = phones
        add_to_cart(iphone)
        add_to_cart(galaxy)

        checkout(cart_id, user_id)

        assert _inventory(iphone).stock == 49
        assert _inventory(galaxy).stock == 39
        assert _inventory(iphone).reserved == 0

    def test_inventory_ledger_records_order_items(self, phones, cart_id, user_id, add_to_cart):
        add_to_cart(phones[0])
        order = current_domain.repository_for(Order).get(checkout(cart_id, user_id))

        record = _inventory(phones[0])
        assert record.has_applied(order.items[0].id)

    def test_inventory_floors_at_zero(self, create_product, cart_id, user_id, add_to_cart):
        scarce = create_product(name="Men T-Shirt", price=999.00, stock=1, category="Fashion")
        add_to_cart(scarce, quantity=3)

        checkout(cart_id, user_id)

        record = _inventory(scarce)
        assert record.stock == 0
        assert record.reserved == 0

    def test_quantities_are_carried(self, phones, cart_id, user_id, add_to_cart):
        add_to_cart(phones[0], quantity=2)
        add_to_cart(phones[0], quantity=1)

        order = current_domain.repository_for(Order).get(checkout(cart_id, user_id))
        assert order.items[0].quantity == 3
        assert order.total_amount == 239997.00
        assert _inventory(phones[0]).stock == 47

    def test_cart_can_be_reused(self, phones, cart_id, user_id, add_to_cart):
        add_to_cart(phones[0])
        first = checkout(cart_id, user_id)
        add_to_cart(phones[1])
        second = checkout(cart_id, user_id)

        assert first != second
        assert len(fetch_all(Order, user_id=user_id)) == 2


class TestCheckoutOptions:
    def test_shipping_amount_is_stored_separately(self, phones, cart_id, user_id, add_to_cart):
        add_to_cart(phones[0])
        order = current_domain.repository_for(Order).get(checkout(cart_id, user_id, shipping_amount=49.0))
        assert order.shipping_amount == 49.0
        assert order.total_amount == 79999.00

    def test_negative_shipping_rejected(self, phones, cart_id, user_id, add_to_cart):
        add_to_cart(phones[0])
        with pytest.raises(ValidationError):
            checkout(cart_id, user_id, shipping_amount=-10.0)
        assert fetch_all(Order) == []

    def test_address_of_user_is_recorded(self, phones, cart_id, user_id, add_to_cart):
        address_id = current_domain.process(
            AddAddress(user_id=user_id, street="MG Road", city="Bengaluru", pincode="560001"),
            asynchronous=False,
        )
        add_to_cart(phones[0])

        order = current_domain.repository_for(Order).get(checkout(cart_id, user_id, address_id=address_id))
        assert str(order.address_id) == address_id

    def test_foreign_address_rejected(self, phones, cart_id, user_id, add_to_cart, register_user):
        other = register_user(full_name="Anjali Gupta", email="anjali@gmail.com")
        foreign_address = current_domain.process(
            AddAddress(user_id=other, street="Park Street", city="Kolkata", pincode="700016"),
            asynchronous=False,
        )
        add_to_cart(phones[0])

        with pytest.raises(NotFoundError):
            checkout(cart_id, user_id, address_id=foreign_address)


class TestCheckoutFailures:
    def test_empty_cart(self, phones, cart_id, user_id):
        with pytest.raises(EmptyCartError):
            checkout(cart_id, user_id)

        assert fetch_all(Order) == []
        assert _inventory(phones[0]).stock == 50
        assert _inventory(phones[1]).stock == 40

    def test_missing_cart(self, user_id):
        with pytest.raises(NotFoundError):
            checkout("no-such-cart", user_id)

    def test_missing_user(self, cart_id):
        with pytest.raises(NotFoundError):
            checkout(cart_id, "no-such-user")

    def test_cart_of_another_user(self, phones, cart_id, add_to_cart, register_user):
        add_to_cart(phones[0])
        stranger = register_user(full_name="Vikram Singh", email="vikram@gmail.com")

        with pytest.raises(NotFoundError):
            checkout(cart_id, stranger)

        cart = current_domain.repository_for(ShoppingCart).get(cart_id)
        assert len(cart.items) == 1
        assert fetch_all(Order) == []

    def test_fault_while_applying_inventory_leaves_nothing_behind(
        self, phones, cart_id, user_id, add_to_cart, monkeypatch
    ):
        iphone, galaxy = phones
        add_to_cart(iphone)
        add_to_cart(galaxy)

        original = InventoryRecord.apply_order_item
        calls = []

        def fail_on_second_line(record, *args, **kwargs):
            calls.append(record.id)
            if len(calls) == 2:
                raise RuntimeError("inventory store unavailable")
            return original(record, *args, **kwargs)

        monkeypatch.setattr(InventoryRecord, "apply_order_item", fail_on_second_line)

        with pytest.raises(RuntimeError):
            checkout(cart_id, user_id)

        assert len(calls) == 2
        assert fetch_all(Order) == []
        cart = current_domain.repository_for(ShoppingCart).get(cart_id)
        assert len(cart.items) == 2
        assert _inventory(iphone).stock == 50
        assert not _inventory(iphone).applied_order_items
        assert _inventory(galaxy).stock == 40

    def test_product_without_inventory_is_skipped(self, phones, cart_id, user_id, add_to_cart):
        add_to_cart(phones[0])
        record = _inventory(phones[0])
        current_domain.repository_for(InventoryRecord)._dao.delete(record)

        order_id = checkout(cart_id, user_id)
        assert current_domain.repository_for(Order).get(order_id).total_amount == 79999.00


class TestCreateCart:
    def test_one_cart_per_user(self, user_id):
        first = current_domain.process(CreateCart(user_id=user_id), asynchronous=False)
        second = current_domain.process(CreateCart(user_id=user_id), asynchronous=False)
        assert first == second

    def test_unknown_user_rejected(self):
        with pytest.raises(NotFoundError):
            current_domain.process(CreateCart(user_id="no-such-user"), asynchronous=False)
