from __future__ import annotations

from typing import Optional

from app.verticals.sales.analytics import aggregate_by_product, decompose, round2
from app.verticals.sales.domain.dataset import DatasetSnapshot
from app.verticals.sales.schemas.reports import (
    Effects,
    MonthDetailReport,
    PeriodKpis,
    RevenueDelta,
)

from .common import ranked_product_contributions


def month_detail(
    snapshot: DatasetSnapshot,
    *,
    year: int,
    month: int,
    ref: Optional[int] = None,
    category_id: Optional[str] = None,
    limit: int,
) -> MonthDetailReport:
    """
    Drill-down on one calendar month: `month` of `year` vs the same month of
    `ref` (default: the previous year).
    """
    if ref is None:
        ref = year - 1

    totals, by_product = aggregate_by_product(
        snapshot, year=year, ref=ref, category_id=category_id, month=month
    )
    dec = decompose(totals.year, totals.ref)

    return MonthDetailReport(
        scope={
            "year": year,
            "month": month,
            "ref": ref,
            "categoryId": category_id,
            "limit": limit,
        },
        month=PeriodKpis.from_aggregate(dec.year),
        ref=PeriodKpis.from_aggregate(dec.ref),
        delta=RevenueDelta.from_decomposition(dec),
        decomposition=Effects.from_decomposition(dec),
        total_delta=round2(dec.delta_revenue),
        top_products=ranked_product_contributions(
            snapshot, by_product, total_delta=dec.delta_revenue, limit=limit
        ),
    )
