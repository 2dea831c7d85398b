from __future__ import annotations

from typing import Callable, Optional, Sequence, TypeVar

from .rounding import round2

T = TypeVar("T")


def rank(
    items: Sequence[T],
    delta: Callable[[T], float],
    limit: Optional[int] = None,
) -> list[T]:
    # sorted() is stable: ties keep input order
    ordered = sorted(items, key=lambda item: abs(delta(item)), reverse=True)
    if limit is not None:
        return ordered[:limit]
    return ordered


def share_of_delta(delta: float, total_delta: float) -> float:
    """Percentage of the peer-group total, rounded to 2 decimals."""
    if total_delta == 0:
        return 0.0
    return round2(delta / total_delta * 100)
