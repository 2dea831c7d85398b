from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .models import Category, Product, SalesRow

# Display label for a product whose category id does not resolve
UNKNOWN_CATEGORY_LABEL = "Catégorie"
UNKNOWN_PRODUCT_LABEL = "Produit"


@dataclass(frozen=True)
class DatasetSnapshot:
    """
    Immutable in-memory dataset. A reload builds a new snapshot and swaps the
    reference; nothing mutates an existing one.
    """

    version_id: str

    categories: tuple[Category, ...]
    products: tuple[Product, ...]
    sales: tuple[SalesRow, ...]

    product_by_id: Mapping[str, Product] = field(repr=False)    # id -> Product
    category_by_id: Mapping[str, Category] = field(repr=False)  # id -> Category

    @classmethod
    def build(
        cls,
        *,
        version_id: str,
        categories: Iterable[Category],
        products: Iterable[Product],
        sales: Iterable[SalesRow],
    ) -> "DatasetSnapshot":
        cats = tuple(categories)
        prods = tuple(products)
        return cls(
            version_id=version_id,
            categories=cats,
            products=prods,
            sales=tuple(sales),
            product_by_id=MappingProxyType({p.id: p for p in prods}),
            category_by_id=MappingProxyType({c.id: c for c in cats}),
        )

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.product_by_id.get(product_id)

    def category_label(self, category_id: Optional[str]) -> str:
        cat = self.category_by_id.get(category_id) if category_id else None
        return cat.name if cat else UNKNOWN_CATEGORY_LABEL

    def counts(self) -> dict[str, int]:
        return {
            "categories": len(self.categories),
            "products": len(self.products),
            "sales": len(self.sales),
        }
