"""Year vs reference-year reports over the whole scope or one category."""

from __future__ import annotations

from typing import Optional

from app.verticals.sales.analytics import (
    aggregate_by_product,
    compare_periods,
    rank,
    round2,
    share_of_delta,
)
from app.verticals.sales.domain.dataset import DatasetSnapshot
from app.verticals.sales.schemas.reports import (
    CategoryContribution,
    CategoryContributionReport,
    CategoryDriver,
    ComparisonDelta,
    DiagnosticReport,
    DiagnosticSummary,
    Effects,
    PeriodKpis,
    PriceVolumeAnalysis,
    ProductDriver,
    RevenueDelta,
    YearlyComparison,
)

DIAGNOSTIC_TOP_PRODUCTS = 3


def yearly_comparison(
    snapshot: DatasetSnapshot,
    *,
    year: int,
    ref: int,
    category_id: Optional[str] = None,
) -> YearlyComparison:
    dec = compare_periods(snapshot, year=year, ref=ref, category_id=category_id)
    return YearlyComparison(
        scope={"year": year, "ref": ref, "categoryId": category_id},
        year=PeriodKpis.from_aggregate(dec.year),
        ref=PeriodKpis.from_aggregate(dec.ref),
        delta=ComparisonDelta.from_decomposition(dec),
    )


def price_volume_analysis(
    snapshot: DatasetSnapshot,
    *,
    year: int,
    ref: int,
    category_id: Optional[str] = None,
) -> PriceVolumeAnalysis:
    dec = compare_periods(snapshot, year=year, ref=ref, category_id=category_id)
    return PriceVolumeAnalysis(
        scope={"year": year, "ref": ref, "categoryId": category_id},
        year=PeriodKpis.from_aggregate(dec.year),
        ref=PeriodKpis.from_aggregate(dec.ref),
        delta=RevenueDelta.from_decomposition(dec),
        decomposition=Effects.from_decomposition(dec),
    )


def _category_deltas(snapshot: DatasetSnapshot, *, year: int, ref: int):
    return [
        (cat, compare_periods(snapshot, year=year, ref=ref, category_id=cat.id))
        for cat in snapshot.categories
    ]


def category_contribution(
    snapshot: DatasetSnapshot, *, year: int, ref: int
) -> CategoryContributionReport:
    per_cat = _category_deltas(snapshot, year=year, ref=ref)
    total_delta = sum(dec.delta_revenue for _, dec in per_cat)

    contributions = [
        CategoryContribution(
            category_id=cat.id,
            category=cat.name,
            revenue_ref=round2(dec.ref.revenue),
            revenue_year=round2(dec.year.revenue),
            delta=round2(dec.delta_revenue),
            share_of_delta=share_of_delta(dec.delta_revenue, total_delta),
        )
        for cat, dec in rank(per_cat, lambda x: x[1].delta_revenue)
    ]
    return CategoryContributionReport(
        scope={"year": year, "ref": ref},
        total_delta=round2(total_delta),
        contributions=contributions,
    )


def diagnostic(snapshot: DatasetSnapshot, *, year: int, ref: int) -> DiagnosticReport:
    """
    Whole-scope drivers plus the category and the products that moved revenue
    the most (by absolute delta).
    """
    dec = compare_periods(snapshot, year=year, ref=ref)

    top_cat = rank(
        _category_deltas(snapshot, year=year, ref=ref),
        lambda x: x[1].delta_revenue,
        1,
    )
    top_category = (
        CategoryDriver(
            category_id=top_cat[0][0].id,
            category=top_cat[0][0].name,
            delta=round2(top_cat[0][1].delta_revenue),
        )
        if top_cat
        else None
    )

    # every catalogue product takes part, including those without sales
    _, by_product = aggregate_by_product(snapshot, year=year, ref=ref)
    product_deltas = []
    for p in snapshot.products:
        acc = by_product.get(p.id)
        delta = acc.revenue_year - acc.revenue_ref if acc else 0.0
        product_deltas.append((p, delta))

    top_products = [
        ProductDriver(product_id=p.id, product=p.name, delta=round2(delta))
        for p, delta in rank(product_deltas, lambda x: x[1], DIAGNOSTIC_TOP_PRODUCTS)
    ]

    return DiagnosticReport(
        scope={"year": year, "ref": ref},
        summary=DiagnosticSummary(
            delta_revenue=round2(dec.delta_revenue),
            pct_revenue=round2(dec.pct_revenue),
        ),
        drivers=Effects.from_decomposition(dec),
        top_category=top_category,
        top_products=top_products,
    )
