from __future__ import annotations

from typing import Optional

from app.verticals.sales.analytics import filter_sales, sum_revenue
from app.verticals.sales.domain.dataset import DatasetSnapshot
from app.verticals.sales.schemas.reports import PeriodKpis, RevenueTimeSeries, YearlyKpiReport

from .common import month_points


def yearly_kpis(
    snapshot: DatasetSnapshot,
    *,
    year: Optional[int] = None,
    category_id: Optional[str] = None,
) -> YearlyKpiReport:
    rows = filter_sales(snapshot, year=year, category_id=category_id)
    return YearlyKpiReport(
        scope={"year": year, "categoryId": category_id},
        kpis=PeriodKpis.from_aggregate(sum_revenue(rows)),
    )


def revenue_timeseries(
    snapshot: DatasetSnapshot,
    *,
    year: int,
    category_id: Optional[str] = None,
) -> RevenueTimeSeries:
    rows = filter_sales(snapshot, year=year, category_id=category_id)
    return RevenueTimeSeries(
        scope={"year": year, "categoryId": category_id},
        points=month_points(rows),
    )
