from __future__ import annotations

from .aggregate import (
    Aggregate,
    PeriodAccumulator,
    aggregate_by_product,
    filter_sales,
    monthly_buckets,
    sum_revenue,
    weighted_avg_price,
)
from .decomposition import Decomposition, compare_periods, decompose, pct
from .ranking import rank, share_of_delta
from .rounding import round2

__all__ = [
    "Aggregate",
    "PeriodAccumulator",
    "aggregate_by_product",
    "filter_sales",
    "monthly_buckets",
    "sum_revenue",
    "weighted_avg_price",
    "Decomposition",
    "compare_periods",
    "decompose",
    "pct",
    "rank",
    "share_of_delta",
    "round2",
]
