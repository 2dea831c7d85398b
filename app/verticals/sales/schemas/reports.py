# app/verticals/sales/schemas/reports.py
"""
Response contracts for the report endpoints.

Builders compute with full float precision; the `from_*` constructors below
are the output boundary where money and percentages get rounded to 2 decimals.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from app.verticals.sales.analytics import Aggregate, Decomposition, round2


class ReportModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ----------------------------
# Building blocks
# ----------------------------
class PeriodKpis(ReportModel):
    revenue: float
    quantity: float
    avg_price: float

    @classmethod
    def from_aggregate(cls, agg: Aggregate) -> "PeriodKpis":
        return cls(
            revenue=round2(agg.revenue),
            quantity=agg.quantity,
            avg_price=round2(agg.avg_price),
        )


class MonthPoint(PeriodKpis):
    month: int


class RevenueDelta(ReportModel):
    revenue: float
    pct_revenue: float

    @classmethod
    def from_decomposition(cls, dec: Decomposition) -> "RevenueDelta":
        return cls(revenue=round2(dec.delta_revenue), pct_revenue=round2(dec.pct_revenue))


class ComparisonDelta(RevenueDelta):
    quantity: float
    avg_price: float

    @classmethod
    def from_decomposition(cls, dec: Decomposition) -> "ComparisonDelta":
        return cls(
            revenue=round2(dec.delta_revenue),
            quantity=dec.delta_quantity,
            avg_price=round2(dec.delta_avg_price),
            pct_revenue=round2(dec.pct_revenue),
        )


class Effects(ReportModel):
    volume_effect: float
    price_effect: float
    mix_effect: float

    @classmethod
    def from_decomposition(cls, dec: Decomposition) -> "Effects":
        return cls(
            volume_effect=round2(dec.volume_effect),
            price_effect=round2(dec.price_effect),
            mix_effect=round2(dec.mix_effect),
        )


class ProductInfo(ReportModel):
    product_id: str
    name: str
    category: str
    brand: Optional[str] = None
    sku: Optional[str] = None


# ----------------------------
# Meta
# ----------------------------
class LoadedCounts(ReportModel):
    categories: int
    products: int
    sales: int


class HealthReport(ReportModel):
    ok: bool
    loaded: LoadedCounts


class ReloadReport(ReportModel):
    ok: bool
    version_id: str
    reloaded: LoadedCounts


class YearsReport(ReportModel):
    years: List[int]


class CategoryOut(ReportModel):
    id: str
    name: str


class CategoriesReport(ReportModel):
    categories: List[CategoryOut]


# ----------------------------
# Reports
# ----------------------------
class YearlyKpiReport(ReportModel):
    scope: Dict[str, Any]
    kpis: PeriodKpis


class RevenueTimeSeries(ReportModel):
    scope: Dict[str, Any]
    points: List[MonthPoint]


class CategoryContribution(ReportModel):
    category_id: str
    category: str
    revenue_ref: float
    revenue_year: float
    delta: float
    share_of_delta: float


class CategoryContributionReport(ReportModel):
    scope: Dict[str, Any]
    total_delta: float
    contributions: List[CategoryContribution]


class YearlyComparison(ReportModel):
    scope: Dict[str, Any]
    year: PeriodKpis
    ref: PeriodKpis
    delta: ComparisonDelta


class PriceVolumeAnalysis(ReportModel):
    scope: Dict[str, Any]
    year: PeriodKpis
    ref: PeriodKpis
    delta: RevenueDelta
    decomposition: Effects


class DiagnosticSummary(ReportModel):
    delta_revenue: float
    pct_revenue: float


class CategoryDriver(ReportModel):
    category_id: str
    category: str
    delta: float


class ProductDriver(ReportModel):
    product_id: str
    product: str
    delta: float


class DiagnosticReport(ReportModel):
    scope: Dict[str, Any]
    summary: DiagnosticSummary
    drivers: Effects
    top_category: Optional[CategoryDriver] = None
    top_products: List[ProductDriver]


class ProductContribution(ReportModel):
    product_id: str
    product: str
    category: str
    revenue_ref: float
    revenue_year: float
    delta: float
    quantity_ref: float
    quantity_year: float
    avg_price_ref: float
    avg_price_year: float
    decomposition: Effects
    share_of_delta: float


class TopProductsReport(ReportModel):
    scope: Dict[str, Any]
    total_delta: float
    items: List[ProductContribution]


class ProductDetailReport(ReportModel):
    scope: Dict[str, Any]
    product: ProductInfo
    year: PeriodKpis
    ref: PeriodKpis
    delta: RevenueDelta
    decomposition: Effects


class ProductTimeSeries(ReportModel):
    scope: Dict[str, Any]
    product: ProductInfo
    points: List[MonthPoint]


class MonthDetailReport(ReportModel):
    scope: Dict[str, Any]
    month: PeriodKpis
    ref: PeriodKpis
    delta: RevenueDelta
    decomposition: Effects
    total_delta: float
    top_products: List[ProductContribution]
