from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Category:
    id: str
    name: str


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    brand: str
    sku: str
    category_id: str
    active: bool


@dataclass(frozen=True)
class SalesRow:
    """Aggregated monthly sales for one product."""

    id: str
    product_id: str
    year: int
    month: int  # 1..12
    quantity: float
    unit_price: float

    @property
    def revenue(self) -> float:
        return self.quantity * self.unit_price
