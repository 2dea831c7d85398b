"""Product-level reports: leaderboard, single-product detail, monthly series."""

from __future__ import annotations

from typing import Optional

from app.verticals.sales.analytics import aggregate_by_product, compare_periods, filter_sales, round2
from app.verticals.sales.domain.dataset import DatasetSnapshot
from app.verticals.sales.schemas.reports import (
    Effects,
    PeriodKpis,
    ProductDetailReport,
    ProductTimeSeries,
    RevenueDelta,
    TopProductsReport,
)

from .common import month_points, product_info, ranked_product_contributions, resolve_product


def top_products(
    snapshot: DatasetSnapshot,
    *,
    year: int,
    ref: int,
    category_id: Optional[str] = None,
    limit: int,
) -> TopProductsReport:
    totals, by_product = aggregate_by_product(
        snapshot, year=year, ref=ref, category_id=category_id
    )
    total_delta = totals.revenue_year - totals.revenue_ref

    return TopProductsReport(
        scope={"year": year, "ref": ref, "categoryId": category_id, "limit": limit},
        total_delta=round2(total_delta),
        items=ranked_product_contributions(
            snapshot, by_product, total_delta=total_delta, limit=limit
        ),
    )


def product_detail(
    snapshot: DatasetSnapshot, *, year: int, ref: int, product_id: str
) -> ProductDetailReport:
    product = resolve_product(snapshot, product_id)
    dec = compare_periods(snapshot, year=year, ref=ref, product_id=product.id)
    return ProductDetailReport(
        scope={"year": year, "ref": ref, "productId": product_id},
        product=product_info(snapshot, product),
        year=PeriodKpis.from_aggregate(dec.year),
        ref=PeriodKpis.from_aggregate(dec.ref),
        delta=RevenueDelta.from_decomposition(dec),
        decomposition=Effects.from_decomposition(dec),
    )


def product_timeseries(
    snapshot: DatasetSnapshot, *, year: int, product_id: str
) -> ProductTimeSeries:
    product = resolve_product(snapshot, product_id)
    rows = filter_sales(snapshot, year=year, product_id=product.id)
    return ProductTimeSeries(
        scope={"year": year, "productId": product_id},
        product=product_info(snapshot, product, full=False),
        points=month_points(rows),
    )
