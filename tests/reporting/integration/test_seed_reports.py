"""Reports over the sample data set."""

import pytest
from protean import current_domain
from storefront.inventory.record import InventoryRecord
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.order.order import Order
from storefront.reporting import reports
from storefront.seed import seed_sample_data


@pytest.fixture()
def sample():
    return seed_sample_data()


def test_seed_counts(sample):
    assert len(sample["users"]) == 3
    assert len(sample["products"]) == 4
    assert len(sample["orders"]) == 4
    assert len(sample["carts"]) == 2


def test_orders_decremented_inventory(sample):
    repo = current_domain.repository_for(InventoryRecord)
    stocks = [repo.get(pid).stock for pid in sample["products"]]
    assert stocks == [48, 39, 19, 199]


def test_two_item_order_total(sample):
    order = current_domain.repository_for(Order).get(sample["orders"][1])
    assert order.total_amount == 149998.00
    assert len(order.items) == 2


def test_open_carts_hold_items(sample):
    cart = current_domain.repository_for(ShoppingCart).get(sample["carts"][0])
    assert len(cart.items) == 2
    assert cart.total == 149998.00


def test_revenue_per_category(sample):
    rows = {r.category_name: (r.revenue, r.orders_count) for r in reports.revenue_per_category()}
    assert rows == {
        "Mobiles": (229997.00, 2),
        "Laptops": (89999.00, 1),
        "Fashion": (999.00, 1),
    }


def test_best_sellers(sample):
    rows = reports.best_selling_products()
    assert rows[0].product_name == "iPhone 14"
    assert rows[0].qty_sold == 2


def test_order_history_of_first_user(sample):
    rows = reports.order_history(sample["users"][0])
    assert len(rows) == 3
    assert {r.order_id for r in rows} == set(sample["orders"][:2])


def test_most_searched(sample):
    rows = reports.most_searched_queries()
    assert (rows[0].query_text, rows[0].freq) == ("iPhone", 2)


def test_most_viewed(sample):
    rows = reports.most_viewed_products()
    assert (rows[0].product_name, rows[0].views) == ("iPhone 14", 3)


def test_average_ratings(sample):
    rows = {r.product_name: r.avg_rating for r in reports.average_rating_per_product()}
    assert rows == {
        "iPhone 14": 5.0,
        "Samsung Galaxy S23": 4.0,
        "MacBook Air M1": 5.0,
        "Men T-Shirt": 3.0,
    }


def test_monthly_revenue_single_month(sample):
    [row] = reports.monthly_revenue()
    assert row.revenue == 79999.00 + 149998.00 + 999.00 + 89999.00
