from __future__ import annotations

from typing import Optional

from app.verticals.sales.analytics import (
    PeriodAccumulator,
    decompose,
    monthly_buckets,
    rank,
    round2,
    share_of_delta,
)
from app.verticals.sales.domain.dataset import UNKNOWN_PRODUCT_LABEL, DatasetSnapshot
from app.verticals.sales.domain.models import Product, SalesRow
from app.verticals.sales.errors import NotFoundError
from app.verticals.sales.schemas.reports import (
    Effects,
    MonthPoint,
    ProductContribution,
    ProductInfo,
)


def resolve_product(snapshot: DatasetSnapshot, product_id: str) -> Product:
    product = snapshot.get_product(product_id)
    if product is None:
        raise NotFoundError("Product not found", param="productId")
    return product


def product_info(snapshot: DatasetSnapshot, product: Product, *, full: bool = True) -> ProductInfo:
    return ProductInfo(
        product_id=product.id,
        name=product.name,
        category=snapshot.category_label(product.category_id),
        brand=product.brand if full else None,
        sku=product.sku if full else None,
    )


def month_points(rows: list[SalesRow]) -> list[MonthPoint]:
    return [
        MonthPoint(
            month=i + 1,
            revenue=round2(agg.revenue),
            quantity=agg.quantity,
            avg_price=round2(agg.avg_price),
        )
        for i, agg in enumerate(monthly_buckets(rows))
    ]


def ranked_product_contributions(
    snapshot: DatasetSnapshot,
    by_product: dict[str, PeriodAccumulator],
    *,
    total_delta: float,
    limit: Optional[int],
) -> list[ProductContribution]:
    """
    Per-product decomposition, ranked by |delta|. Shares use `total_delta`
    (the full peer group), not the truncated list.
    """
    decs = [(pid, decompose(acc.year, acc.ref)) for pid, acc in by_product.items()]
    items: list[ProductContribution] = []
    for pid, dec in rank(decs, lambda x: x[1].delta_revenue, limit):
        p = snapshot.get_product(pid)
        items.append(
            ProductContribution(
                product_id=pid,
                product=p.name if p else UNKNOWN_PRODUCT_LABEL,
                category=snapshot.category_label(p.category_id if p else None),
                revenue_ref=round2(dec.ref.revenue),
                revenue_year=round2(dec.year.revenue),
                delta=round2(dec.delta_revenue),
                quantity_ref=dec.ref.quantity,
                quantity_year=dec.year.quantity,
                avg_price_ref=round2(dec.ref.avg_price),
                avg_price_year=round2(dec.year.avg_price),
                decomposition=Effects.from_decomposition(dec),
                share_of_delta=share_of_delta(dec.delta_revenue, total_delta),
            )
        )
    return items
