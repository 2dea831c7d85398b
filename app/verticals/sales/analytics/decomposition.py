"""Price / volume / mix decomposition of a revenue delta between two periods."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.verticals.sales.domain.dataset import DatasetSnapshot

from .aggregate import Aggregate, filter_sales, sum_revenue


def pct(delta: float, reference: float) -> float:
    return delta / reference * 100 if reference != 0 else 0.0


@dataclass(frozen=True)
class Decomposition:
    """
    year/ref aggregates plus the split of their revenue delta.
    volume_effect + price_effect + mix_effect == delta_revenue (unrounded).
    """

    year: Aggregate
    ref: Aggregate

    delta_revenue: float
    delta_quantity: float
    delta_avg_price: float
    pct_revenue: float

    volume_effect: float
    price_effect: float
    mix_effect: float


def decompose(year: Aggregate, ref: Aggregate) -> Decomposition:
    """
    Both aggregates must come from the same filtering context; not checked here.
    """
    avg_y = year.avg_price
    avg_r = ref.avg_price
    delta = year.revenue - ref.revenue

    volume_effect = (year.quantity - ref.quantity) * avg_r  # volume at ref price
    price_effect = (avg_y - avg_r) * year.quantity  # price on current volume
    mix_effect = delta - volume_effect - price_effect  # residual

    return Decomposition(
        year=year,
        ref=ref,
        delta_revenue=delta,
        delta_quantity=year.quantity - ref.quantity,
        delta_avg_price=avg_y - avg_r,
        pct_revenue=pct(delta, ref.revenue),
        volume_effect=volume_effect,
        price_effect=price_effect,
        mix_effect=mix_effect,
    )


def compare_periods(
    snapshot: DatasetSnapshot,
    *,
    year: int,
    ref: int,
    category_id: Optional[str] = None,
    product_id: Optional[str] = None,
    month: Optional[int] = None,
) -> Decomposition:
    """Aggregate both periods under the same filter, then decompose."""
    filters = {"category_id": category_id, "product_id": product_id, "month": month}
    rows_y = filter_sales(snapshot, year=year, **filters)
    rows_r = filter_sales(snapshot, year=ref, **filters)
    return decompose(sum_revenue(rows_y), sum_revenue(rows_r))
