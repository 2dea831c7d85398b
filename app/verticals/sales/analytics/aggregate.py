"""Filter and sum primitives over the sales rows of a snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from app.verticals.sales.domain.dataset import DatasetSnapshot
from app.verticals.sales.domain.models import SalesRow


@dataclass(frozen=True)
class Aggregate:
    revenue: float = 0.0
    quantity: float = 0.0

    @property
    def avg_price(self) -> float:
        return weighted_avg_price(self.revenue, self.quantity)


def weighted_avg_price(revenue: float, quantity: float) -> float:
    return revenue / quantity if quantity > 0 else 0.0


def filter_sales(
    snapshot: DatasetSnapshot,
    *,
    year: Optional[int] = None,
    category_id: Optional[str] = None,
    product_id: Optional[str] = None,
    month: Optional[int] = None,
) -> list[SalesRow]:
    """
    Rows matching every given criterion, in input order.
    Rows whose product does not resolve are always dropped.
    """
    out: list[SalesRow] = []
    for s in snapshot.sales:
        if year is not None and s.year != year:
            continue
        if month is not None and s.month != month:
            continue
        if product_id is not None and s.product_id != product_id:
            continue
        p = snapshot.product_by_id.get(s.product_id)
        if p is None:
            continue
        if category_id and p.category_id != category_id:
            continue
        out.append(s)
    return out


def sum_revenue(rows: Iterable[SalesRow]) -> Aggregate:
    revenue = 0.0
    quantity = 0.0
    for r in rows:
        revenue += r.quantity * r.unit_price
        quantity += r.quantity
    return Aggregate(revenue=revenue, quantity=quantity)


def monthly_buckets(rows: Iterable[SalesRow]) -> list[Aggregate]:
    """12 aggregates, index = month - 1; months without rows stay at zero."""
    revenue = [0.0] * 12
    quantity = [0.0] * 12
    for r in rows:
        i = r.month - 1
        revenue[i] += r.quantity * r.unit_price
        quantity[i] += r.quantity
    return [Aggregate(revenue=revenue[i], quantity=quantity[i]) for i in range(12)]


@dataclass
class PeriodAccumulator:
    """Running year/ref sums for single-pass aggregation."""

    revenue_year: float = 0.0
    quantity_year: float = 0.0
    revenue_ref: float = 0.0
    quantity_ref: float = 0.0

    def add(self, row: SalesRow, *, current: bool) -> None:
        if current:
            self.revenue_year += row.quantity * row.unit_price
            self.quantity_year += row.quantity
        else:
            self.revenue_ref += row.quantity * row.unit_price
            self.quantity_ref += row.quantity

    @property
    def year(self) -> Aggregate:
        return Aggregate(revenue=self.revenue_year, quantity=self.quantity_year)

    @property
    def ref(self) -> Aggregate:
        return Aggregate(revenue=self.revenue_ref, quantity=self.quantity_ref)


def aggregate_by_product(
    snapshot: DatasetSnapshot,
    *,
    year: int,
    ref: int,
    category_id: Optional[str] = None,
    month: Optional[int] = None,
) -> tuple[PeriodAccumulator, dict[str, PeriodAccumulator]]:
    """
    One pass over the sales: totals and per-product sums for both periods.
    Per-product order is first appearance in the sales rows.
    When year == ref a row counts for both periods.
    """
    totals = PeriodAccumulator()
    by_product: dict[str, PeriodAccumulator] = {}

    for s in snapshot.sales:
        if month is not None and s.month != month:
            continue
        if s.year != year and s.year != ref:
            continue
        p = snapshot.product_by_id.get(s.product_id)
        if p is None:
            continue
        if category_id and p.category_id != category_id:
            continue

        acc = by_product.get(s.product_id)
        if acc is None:
            acc = by_product[s.product_id] = PeriodAccumulator()
        for current in (True, False):
            if s.year == (year if current else ref):
                totals.add(s, current=current)
                acc.add(s, current=current)

    return totals, by_product
