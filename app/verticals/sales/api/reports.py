from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.verticals.sales.api.dependencies import current_snapshot
from app.verticals.sales.domain.dataset import DatasetSnapshot
from app.verticals.sales.params import (
    parse_limit,
    parse_month,
    parse_optional_id,
    parse_optional_year,
    parse_year,
    require_id,
)
from app.verticals.sales.reports import comparison, kpis, meta, month_detail, products
from app.verticals.sales.schemas.reports import (
    CategoriesReport,
    CategoryContributionReport,
    DiagnosticReport,
    HealthReport,
    MonthDetailReport,
    PriceVolumeAnalysis,
    ProductDetailReport,
    ProductTimeSeries,
    RevenueTimeSeries,
    TopProductsReport,
    YearlyComparison,
    YearlyKpiReport,
    YearsReport,
)

# Raw strings on purpose: parsing + error reporting lives in params.py
router = APIRouter(tags=["sales", "reports"])


# ----------------------------
# Meta
# ----------------------------
@router.get("/health", response_model=HealthReport)
def health(snapshot: DatasetSnapshot = Depends(current_snapshot)):
    return meta.health(snapshot)


@router.get("/meta/years", response_model=YearsReport)
def meta_years(snapshot: DatasetSnapshot = Depends(current_snapshot)):
    return meta.available_years(snapshot)


@router.get("/meta/categories", response_model=CategoriesReport)
def meta_categories(snapshot: DatasetSnapshot = Depends(current_snapshot)):
    return meta.list_categories(snapshot)


# ----------------------------
# KPIs + time series
# ----------------------------
@router.get("/kpis/yearly", response_model=YearlyKpiReport)
def kpis_yearly(
    year: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    snapshot: DatasetSnapshot = Depends(current_snapshot),
):
    return kpis.yearly_kpis(
        snapshot,
        year=parse_optional_year(year),
        category_id=parse_optional_id(category_id),
    )


@router.get("/timeseries/revenue", response_model=RevenueTimeSeries)
def timeseries_revenue(
    year: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    snapshot: DatasetSnapshot = Depends(current_snapshot),
):
    return kpis.revenue_timeseries(
        snapshot,
        year=parse_year(year),
        category_id=parse_optional_id(category_id),
    )


@router.get("/timeseries/product", response_model=ProductTimeSeries)
def timeseries_product(
    year: Optional[str] = Query(None),
    product_id: Optional[str] = Query(None, alias="productId"),
    snapshot: DatasetSnapshot = Depends(current_snapshot),
):
    return products.product_timeseries(
        snapshot,
        year=parse_year(year),
        product_id=require_id(product_id, name="productId"),
    )


# ----------------------------
# Year vs reference year
# ----------------------------
@router.get("/compare/yearly", response_model=YearlyComparison)
def compare_yearly(
    year: Optional[str] = Query(None),
    ref: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    snapshot: DatasetSnapshot = Depends(current_snapshot),
):
    return comparison.yearly_comparison(
        snapshot,
        year=parse_year(year),
        ref=parse_year(ref, name="ref"),
        category_id=parse_optional_id(category_id),
    )


@router.get("/analysis/category-contribution", response_model=CategoryContributionReport)
def analysis_category_contribution(
    year: Optional[str] = Query(None),
    ref: Optional[str] = Query(None),
    snapshot: DatasetSnapshot = Depends(current_snapshot),
):
    return comparison.category_contribution(
        snapshot, year=parse_year(year), ref=parse_year(ref, name="ref")
    )


@router.get("/analysis/price-volume", response_model=PriceVolumeAnalysis)
def analysis_price_volume(
    year: Optional[str] = Query(None),
    ref: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    snapshot: DatasetSnapshot = Depends(current_snapshot),
):
    return comparison.price_volume_analysis(
        snapshot,
        year=parse_year(year),
        ref=parse_year(ref, name="ref"),
        category_id=parse_optional_id(category_id),
    )


@router.get("/analysis/diagnostic", response_model=DiagnosticReport)
def analysis_diagnostic(
    year: Optional[str] = Query(None),
    ref: Optional[str] = Query(None),
    snapshot: DatasetSnapshot = Depends(current_snapshot),
):
    return comparison.diagnostic(
        snapshot, year=parse_year(year), ref=parse_year(ref, name="ref")
    )


# ----------------------------
# Products + month drill-down
# ----------------------------
@router.get("/analysis/top-products", response_model=TopProductsReport)
def analysis_top_products(
    year: Optional[str] = Query(None),
    ref: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    limit: Optional[str] = Query(None),
    snapshot: DatasetSnapshot = Depends(current_snapshot),
):
    return products.top_products(
        snapshot,
        year=parse_year(year),
        ref=parse_year(ref, name="ref"),
        category_id=parse_optional_id(category_id),
        limit=parse_limit(limit),
    )


@router.get("/analysis/product", response_model=ProductDetailReport)
def analysis_product(
    year: Optional[str] = Query(None),
    ref: Optional[str] = Query(None),
    product_id: Optional[str] = Query(None, alias="productId"),
    snapshot: DatasetSnapshot = Depends(current_snapshot),
):
    return products.product_detail(
        snapshot,
        year=parse_year(year),
        ref=parse_year(ref, name="ref"),
        product_id=require_id(product_id, name="productId"),
    )


@router.get("/analysis/month-detail", response_model=MonthDetailReport)
def analysis_month_detail(
    year: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    ref: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    limit: Optional[str] = Query(None),
    snapshot: DatasetSnapshot = Depends(current_snapshot),
):
    return month_detail.month_detail(
        snapshot,
        year=parse_year(year),
        month=parse_month(month),
        ref=parse_optional_year(ref, name="ref"),
        category_id=parse_optional_id(category_id),
        limit=parse_limit(limit),
    )
