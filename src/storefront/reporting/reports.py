"""Sales, engagement and rating reports.

Every report is a read-only aggregation over the stored records. Only orders
whose status is Processing, Shipped or Delivered count towards sales and
revenue. Rolling windows are measured back from ``as_of`` (default: now).
"""

import calendar
from collections import Counter, defaultdict
from datetime import UTC, date, datetime, timedelta

from pydantic import BaseModel

from storefront.activity.product_view import ProductView
from storefront.activity.search_log import SearchLog
from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.ordering.order.order import REVENUE_STATUSES, Order
from storefront.reviews.review import Review
from storefront.utils.queries import fetch_all


# ---------------------------------------------------------------------------
# Report rows
# ---------------------------------------------------------------------------
class BestSellerRow(BaseModel):
    product_id: str
    product_name: str
    qty_sold: int


class RecentBestSellerRow(BaseModel):
    product_id: str
    product_name: str
    total_qty_sold: int
    revenue: float


class CategoryRevenueRow(BaseModel):
    category_id: str
    category_name: str
    revenue: float
    orders_count: int


class OrderHistoryRow(BaseModel):
    order_id: str
    order_date: datetime | None
    status: str
    total_amount: float
    order_item_id: str
    product_id: str
    product_name: str | None
    qty: int
    unit_price: float
    total_price: float


class MostViewedRow(BaseModel):
    product_id: str
    product_name: str
    views: int


class SearchFrequencyRow(BaseModel):
    query_text: str | None
    freq: int


class ViewsAndSalesRow(BaseModel):
    product_id: str
    product_name: str
    views_last_30d: int
    qty_sold_last_30d: int


class AverageRatingRow(BaseModel):
    product_id: str
    product_name: str
    avg_rating: float | None
    reviews_count: int


class MonthlyRevenueRow(BaseModel):
    year_month: str
    revenue: float


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _utc(moment):
    """Normalize to naive UTC so stored and computed instants compare."""
    if moment is None:
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC).replace(tzinfo=None)
    return moment


def _as_of(as_of):
    return _utc(as_of or datetime.now(UTC))


def _months_before(day: date, months: int) -> date:
    """Same day ``months`` earlier, clamped to the end of shorter months."""
    index = day.year * 12 + (day.month - 1) - months
    year, month0 = divmod(index, 12)
    last_day = calendar.monthrange(year, month0 + 1)[1]
    return date(year, month0 + 1, min(day.day, last_day))


def _revenue_orders(since=None):
    orders = [o for o in fetch_all(Order) if o.status in REVENUE_STATUSES]
    if since is not None:
        orders = [o for o in orders if o.order_date is not None and _utc(o.order_date) >= since]
    return orders


def _products():
    return {str(p.id): p for p in fetch_all(Product)}


def _name(products, product_id):
    product = products.get(product_id)
    return product.name if product else None


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------
def best_selling_products(limit=10):
    """Top products by units sold, all time."""
    products = _products()
    quantities = Counter()
    for order in _revenue_orders():
        for item in order.items:
            quantities[str(item.product_id)] += item.quantity

    rows = [
        BestSellerRow(product_id=pid, product_name=_name(products, pid) or "", qty_sold=qty)
        for pid, qty in quantities.items()
        if pid in products
    ]
    rows.sort(key=lambda r: (-r.qty_sold, r.product_name))
    return rows[:limit]


def best_selling_last_30_days(as_of=None, days=30):
    """Units sold and revenue per product over the trailing window."""
    since = _as_of(as_of) - timedelta(days=days)
    products = _products()
    quantities = Counter()
    revenue = defaultdict(float)
    for order in _revenue_orders(since):
        for item in order.items:
            pid = str(item.product_id)
            quantities[pid] += item.quantity
            revenue[pid] += item.total_price

    rows = [
        RecentBestSellerRow(
            product_id=pid,
            product_name=_name(products, pid) or "",
            total_qty_sold=qty,
            revenue=round(revenue[pid], 2),
        )
        for pid, qty in quantities.items()
        if pid in products
    ]
    rows.sort(key=lambda r: (-r.total_qty_sold, r.product_name))
    return rows


def revenue_per_category():
    """Revenue and distinct order count per category, including categories with no sales."""
    products = _products()
    revenue = defaultdict(float)
    orders_by_category = defaultdict(set)
    for order in _revenue_orders():
        for item in order.items:
            product = products.get(str(item.product_id))
            if product is None or not product.category_id:
                continue
            category_id = str(product.category_id)
            revenue[category_id] += item.total_price
            orders_by_category[category_id].add(str(order.id))

    rows = [
        CategoryRevenueRow(
            category_id=str(category.id),
            category_name=category.name,
            revenue=round(revenue[str(category.id)], 2),
            orders_count=len(orders_by_category[str(category.id)]),
        )
        for category in fetch_all(Category)
    ]
    rows.sort(key=lambda r: (-r.revenue, r.category_name))
    return rows


def order_history(user_id):
    """Every line of every order the user placed, newest order first."""
    products = _products()
    orders = fetch_all(Order, user_id=str(user_id))
    orders.sort(key=lambda o: _utc(o.order_date) or datetime.min, reverse=True)

    return [
        OrderHistoryRow(
            order_id=str(order.id),
            order_date=order.order_date,
            status=order.status,
            total_amount=order.total_amount,
            order_item_id=str(item.id),
            product_id=str(item.product_id),
            product_name=_name(products, str(item.product_id)),
            qty=item.quantity,
            unit_price=item.unit_price,
            total_price=item.total_price,
        )
        for order in orders
        for item in order.items
    ]


def monthly_revenue(as_of=None, months=6):
    """Order revenue per calendar month since the same day ``months`` ago, oldest first."""
    start = _months_before(_as_of(as_of).date(), months)
    since = datetime(start.year, start.month, start.day)

    totals = defaultdict(float)
    for order in _revenue_orders(since):
        totals[_utc(order.order_date).strftime("%Y-%m")] += order.total_amount

    return [MonthlyRevenueRow(year_month=month, revenue=round(totals[month], 2)) for month in sorted(totals)]


# ---------------------------------------------------------------------------
# Engagement
# ---------------------------------------------------------------------------
def _views_since(since):
    counts = Counter()
    for view in fetch_all(ProductView):
        if view.viewed_at is not None and _utc(view.viewed_at) >= since:
            counts[str(view.product_id)] += 1
    return counts


def most_viewed_products(as_of=None, days=30, limit=20):
    since = _as_of(as_of) - timedelta(days=days)
    products = _products()
    rows = [
        MostViewedRow(product_id=pid, product_name=_name(products, pid) or "", views=views)
        for pid, views in _views_since(since).items()
        if pid in products
    ]
    rows.sort(key=lambda r: (-r.views, r.product_name))
    return rows[:limit]


def most_searched_queries(limit=20):
    counts = Counter(log.query_text for log in fetch_all(SearchLog))
    rows = [SearchFrequencyRow(query_text=text, freq=freq) for text, freq in counts.items()]
    rows.sort(key=lambda r: (-r.freq, r.query_text or ""))
    return rows[:limit]


def views_and_sales(as_of=None, days=30, limit=50):
    """Views and units sold per product over the trailing window, best sellers first."""
    since = _as_of(as_of) - timedelta(days=days)
    views = _views_since(since)
    sold = Counter()
    for order in _revenue_orders(since):
        for item in order.items:
            sold[str(item.product_id)] += item.quantity

    rows = [
        ViewsAndSalesRow(
            product_id=str(product.id),
            product_name=product.name,
            views_last_30d=views[str(product.id)],
            qty_sold_last_30d=sold[str(product.id)],
        )
        for product in fetch_all(Product)
    ]
    rows.sort(key=lambda r: (-r.qty_sold_last_30d, -r.views_last_30d, r.product_name))
    return rows[:limit]


# ---------------------------------------------------------------------------
# Ratings
# ---------------------------------------------------------------------------
def average_rating_per_product():
    """Mean rating per product. Products without reviews sort last with no average."""
    ratings = defaultdict(list)
    for review in fetch_all(Review):
        ratings[str(review.product_id)].append(review.rating)

    rows = []
    for product in fetch_all(Product):
        scores = ratings[str(product.id)]
        rows.append(
            AverageRatingRow(
                product_id=str(product.id),
                product_name=product.name,
                avg_rating=sum(scores) / len(scores) if scores else None,
                reviews_count=len(scores),
            )
        )
    rows.sort(key=lambda r: (r.avg_rating is None, -(r.avg_rating or 0.0), r.product_name))
    return rows
