import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the config overlay before the domain is first imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    """Run every test inside the storefront domain and wipe its data afterwards."""
    from storefront.domain import storefront
    from storefront.utils.db import reset_data

    with storefront_bed.domain_context():
        yield
    reset_data(storefront)


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def register_user():
    from protean import current_domain
    from storefront.identity.registration import RegisterUser

    def _register(full_name="Rahul Sharma", email="rahul@gmail.com", phone=None):
        return current_domain.process(
            RegisterUser(full_name=full_name, email=email, phone=phone, password_hash="pass123"),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def create_product():
    from protean import current_domain
    from storefront.catalogue.management import CreateCategory, CreateProduct

    categories = {}

    def _create(name="iPhone 14", price=79999.00, stock=50, category="Mobiles", brand=None):
        if category not in categories:
            categories[category] = current_domain.process(CreateCategory(name=category), asynchronous=False)
        return current_domain.process(
            CreateProduct(
                category_id=categories[category],
                name=name,
                brand=brand,
                price=price,
                initial_stock=stock,
            ),
            asynchronous=False,
        )

    _create.categories = categories
    return _create


@pytest.fixture()
def user_id(register_user):
    return register_user()


@pytest.fixture()
def cart_id(user_id):
    from protean import current_domain
    from storefront.ordering.cart.management import CreateCart

    return current_domain.process(CreateCart(user_id=user_id), asynchronous=False)


@pytest.fixture()
def add_to_cart(cart_id):
    from protean import current_domain
    from storefront.ordering.cart.items import AddToCart

    def _add(product_id, quantity=1, to_cart=None):
        return current_domain.process(
            AddToCart(cart_id=to_cart or cart_id, product_id=product_id, quantity=quantity),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def order_id(create_product, cart_id, user_id, add_to_cart):
    """A Pending order for one iPhone 14 (79999.00)."""
    from storefront.ordering.checkout.service import checkout

    add_to_cart(create_product())
    return checkout(cart_id, user_id)


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient
    from storefront.api.application import create_app

    return TestClient(create_app())
