"""Read-only report endpoints."""

from datetime import datetime

from fastapi import APIRouter, Query

from storefront.reporting import reports
from storefront.reporting.reports import (
    AverageRatingRow,
    BestSellerRow,
    CategoryRevenueRow,
    MonthlyRevenueRow,
    MostViewedRow,
    OrderHistoryRow,
    RecentBestSellerRow,
    SearchFrequencyRow,
    ViewsAndSalesRow,
)

report_router = APIRouter(prefix="/reports", tags=["reports"])


@report_router.get("/best-sellers", response_model=list[BestSellerRow])
async def best_sellers(limit: int = Query(10, ge=1)):
    return reports.best_selling_products(limit=limit)


@report_router.get("/best-sellers/recent", response_model=list[RecentBestSellerRow])
async def recent_best_sellers(as_of: datetime | None = None, days: int = Query(30, ge=1)):
    return reports.best_selling_last_30_days(as_of=as_of, days=days)


@report_router.get("/revenue-per-category", response_model=list[CategoryRevenueRow])
async def revenue_per_category():
    return reports.revenue_per_category()


@report_router.get("/order-history/{user_id}", response_model=list[OrderHistoryRow])
async def order_history(user_id: str):
    return reports.order_history(user_id)


@report_router.get("/monthly-revenue", response_model=list[MonthlyRevenueRow])
async def monthly_revenue(as_of: datetime | None = None, months: int = Query(6, ge=1)):
    return reports.monthly_revenue(as_of=as_of, months=months)


@report_router.get("/most-viewed", response_model=list[MostViewedRow])
async def most_viewed(as_of: datetime | None = None, days: int = Query(30, ge=1), limit: int = Query(20, ge=1)):
    return reports.most_viewed_products(as_of=as_of, days=days, limit=limit)


@report_router.get("/most-searched", response_model=list[SearchFrequencyRow])
async def most_searched(limit: int = Query(20, ge=1)):
    return reports.most_searched_queries(limit=limit)


@report_router.get("/views-and-sales", response_model=list[ViewsAndSalesRow])
async def views_and_sales(as_of: datetime | None = None, days: int = Query(30, ge=1), limit: int = Query(50, ge=1)):
    return reports.views_and_sales(as_of=as_of, days=days, limit=limit)


@report_router.get("/average-ratings", response_model=list[AverageRatingRow])
async def average_ratings():
    return reports.average_rating_per_product()
