from __future__ import annotations

from app.verticals.sales.domain.dataset import DatasetSnapshot
from app.verticals.sales.schemas.reports import (
    CategoriesReport,
    CategoryOut,
    HealthReport,
    LoadedCounts,
    YearsReport,
)


def health(snapshot: DatasetSnapshot) -> HealthReport:
    return HealthReport(ok=True, loaded=LoadedCounts(**snapshot.counts()))


def available_years(snapshot: DatasetSnapshot) -> YearsReport:
    return YearsReport(years=sorted({s.year for s in snapshot.sales}))


def list_categories(snapshot: DatasetSnapshot) -> CategoriesReport:
    return CategoriesReport(
        categories=[CategoryOut(id=c.id, name=c.name) for c in snapshot.categories]
    )
