"""Application tests for categories, products and product removal."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.activity.product_view import ProductView
from storefront.activity.recording import RecordProductView
from storefront.catalogue.management import AddProductImage, CreateCategory, CreateProduct, UpdateProductPrice
from storefront.catalogue.product import Product
from storefront.catalogue.removal import RemoveProduct
from storefront.errors import ConstraintViolationError, NotFoundError
from storefront.inventory.record import InventoryRecord
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.items import RemoveFromCart
from storefront.ordering.checkout.service import checkout
from storefront.reviews.review import Review
from storefront.reviews.submission import SubmitReview
from storefront.utils.queries import exists, fetch_all


class TestCategories:
    def test_duplicate_name_rejected(self):
        current_domain.process(CreateCategory(name="Mobiles"), asynchronous=False)
        with pytest.raises(ValidationError):
            current_domain.process(CreateCategory(name="mobiles"), asynchronous=False)


class TestProducts:
    def test_create_requires_category(self):
        with pytest.raises(NotFoundError):
            current_domain.process(
                CreateProduct(category_id="no-such-category", name="iPhone 14", price=79999.00),
                asynchronous=False,
            )

    def test_update_price(self, create_product):
        product_id = create_product()
        current_domain.process(UpdateProductPrice(product_id=product_id, price=74999.00), asynchronous=False)
        assert current_domain.repository_for(Product).get(product_id).price == 74999.00

    def test_price_change_does_not_touch_cart_lines(self, create_product, cart_id, add_to_cart):
        product_id = create_product(price=100.0)
        add_to_cart(product_id)
        current_domain.process(UpdateProductPrice(product_id=product_id, price=150.0), asynchronous=False)

        cart = current_domain.repository_for(ShoppingCart).get(cart_id)
        assert cart.items[0].unit_price == 100.0

    def test_add_images(self, create_product):
        product_id = create_product()
        current_domain.process(
            AddProductImage(product_id=product_id, image_url="https://example.com/a.jpg"),
            asynchronous=False,
        )
        current_domain.process(
            AddProductImage(product_id=product_id, image_url="https://example.com/b.jpg", is_primary=True),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert [i.image_url for i in product.images if i.is_primary] == ["https://example.com/b.jpg"]


class TestRemoveProduct:
    def test_unreferenced_product_cascades(self, create_product, user_id):
        product_id = create_product()
        current_domain.process(SubmitReview(product_id=product_id, user_id=user_id, rating=4), asynchronous=False)
        current_domain.process(RecordProductView(product_id=product_id, session_id="sess1"), asynchronous=False)

        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)

        assert not exists(Product, product_id)
        assert not exists(InventoryRecord, product_id)
        assert fetch_all(Review) == []
        assert fetch_all(ProductView) == []

    def test_product_in_cart_is_restricted(self, create_product, add_to_cart):
        product_id = create_product()
        add_to_cart(product_id)

        with pytest.raises(ConstraintViolationError):
            current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
        assert exists(Product, product_id)

    def test_product_in_order_is_restricted(self, create_product, cart_id, user_id, add_to_cart):
        product_id = create_product()
        add_to_cart(product_id)
        checkout(cart_id, user_id)

        with pytest.raises(ConstraintViolationError):
            current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)

    def test_removed_from_cart_then_removable(self, create_product, cart_id, add_to_cart):
        product_id = create_product()
        item_id = add_to_cart(product_id)
        current_domain.process(RemoveFromCart(cart_id=cart_id, item_id=item_id), asynchronous=False)

        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
        assert not exists(Product, product_id)
