from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from app.core.logging_config import logger
from app.core.settings import settings
from app.observability.metrics import dataset_rows_gauge, reload_counter
from app.verticals.sales.data_validators.common import (
    ParseError,
    get_cell,
    parse_csv,
    parse_int,
    parse_number,
    to_bool,
    to_str,
)
from app.verticals.sales.domain.dataset import DatasetSnapshot
from app.verticals.sales.domain.models import Category, Product, SalesRow


# =============================================================================
# Paths (single source for storage locations)
# =============================================================================

CATEGORIES_FILE = "categories.csv"
PRODUCTS_FILE = "produits.csv"
SALES_FILE = "ventes_mensuelles.csv"


def data_root() -> Path:
    return Path(settings.DATA_DIR).resolve()


# =============================================================================
# CSV -> snapshot
# =============================================================================


def _load_categories(dataset_dir: Path, delimiter: str) -> list[Category]:
    rows = parse_csv(
        dataset_dir / CATEGORIES_FILE,
        required_headers=["id_categorie", "nom"],
        delimiter=delimiter,
    )
    categories: list[Category] = []
    for r in rows:
        cid = to_str(get_cell(r, ["id_categorie"]))
        if cid:
            categories.append(Category(id=cid, name=to_str(get_cell(r, ["nom"]))))
    return categories


def _load_products(dataset_dir: Path, delimiter: str) -> list[Product]:
    rows = parse_csv(
        dataset_dir / PRODUCTS_FILE,
        required_headers=["id_produit", "nom", "id_categorie"],
        delimiter=delimiter,
    )
    products: list[Product] = []
    for r in rows:
        pid = to_str(get_cell(r, ["id_produit"]))
        if not pid:
            continue
        products.append(
            Product(
                id=pid,
                name=to_str(get_cell(r, ["nom"])),
                brand=to_str(get_cell(r, ["marque"])),
                sku=to_str(get_cell(r, ["sku"])),
                category_id=to_str(get_cell(r, ["id_categorie"])),
                active=to_bool(get_cell(r, ["actif"])),
            )
        )
    return products


def _load_sales(dataset_dir: Path, delimiter: str) -> list[SalesRow]:
    path = dataset_dir / SALES_FILE
    rows = parse_csv(
        path,
        required_headers=[
            "id_produit",
            "annee",
            "mois",
            "quantite",
            "prix_moyen_unitaire",
        ],
        delimiter=delimiter,
    )
    sales: list[SalesRow] = []
    for i, r in enumerate(rows, start=1):
        src = f"{path}:row {i}"
        month = parse_int(get_cell(r, ["mois"]), source=f"{src}:mois")
        if not 1 <= month <= 12:
            raise ParseError(f"{src}:mois out of range: {month}")
        quantity = parse_number(get_cell(r, ["quantite"]), source=f"{src}:quantite")
        unit_price = parse_number(
            get_cell(r, ["prix_moyen_unitaire"]), source=f"{src}:prix_moyen_unitaire"
        )
        if quantity < 0 or unit_price < 0:
            raise ParseError(f"{src}: quantity and unit price must be >= 0")

        sales.append(
            SalesRow(
                id=to_str(get_cell(r, ["id_vente_mensuelle"])) or f"row-{i}",
                product_id=to_str(get_cell(r, ["id_produit"])),
                year=parse_int(get_cell(r, ["annee"]), source=f"{src}:annee"),
                month=month,
                quantity=quantity,
                unit_price=unit_price,
            )
        )
    return sales


def load_snapshot(
    dataset_dir: Path, *, delimiter: Optional[str] = None
) -> DatasetSnapshot:
    """
    Reads the three CSV files and builds a fully indexed snapshot.
    Raises ParseError on any malformed file; never returns a partial snapshot.
    """
    delimiter = delimiter or settings.CSV_DELIMITER
    start = time.time()

    snapshot = DatasetSnapshot.build(
        version_id=f"{time.strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}",
        categories=_load_categories(dataset_dir, delimiter),
        products=_load_products(dataset_dir, delimiter),
        sales=_load_sales(dataset_dir, delimiter),
    )

    logger.info(
        "dataset_loaded",
        data_dir=str(dataset_dir),
        version_id=snapshot.version_id,
        duration_ms=round((time.time() - start) * 1000, 2),
        **snapshot.counts(),
    )
    return snapshot


# =============================================================================
# Loaded data API (read-only for reports) + atomic swap
# =============================================================================


@dataclass(frozen=True)
class ReloadResult:
    ok: bool
    version_id: str
    categories: int
    products: int
    sales: int


class DatasetStore:
    """
    Holds the published snapshot. Readers take `current()` once and keep that
    reference for the whole request; `reload()` builds the next snapshot
    completely before swapping it in.
    """

    def __init__(self, data_dir: Path, *, delimiter: Optional[str] = None):
        self.data_dir = Path(data_dir)
        self.delimiter = delimiter
        self._snapshot: Optional[DatasetSnapshot] = None
        self._lock = threading.Lock()

    def current(self) -> DatasetSnapshot:
        snap = self._snapshot
        if snap is not None:
            return snap
        with self._lock:
            if self._snapshot is None:
                self._publish(load_snapshot(self.data_dir, delimiter=self.delimiter))
            return self._snapshot

    def reload(self) -> ReloadResult:
        with self._lock:
            try:
                snap = load_snapshot(self.data_dir, delimiter=self.delimiter)
            except ParseError as e:
                reload_counter.labels(result="error").inc()
                logger.error(
                    "dataset_reload_failed", data_dir=str(self.data_dir), error=str(e)
                )
                raise
            self._publish(snap)

        reload_counter.labels(result="success").inc()
        return ReloadResult(ok=True, version_id=snap.version_id, **snap.counts())

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    def _publish(self, snap: DatasetSnapshot) -> None:
        # single reference assignment; readers see old or new, never a mix
        self._snapshot = snap
        for table, n in snap.counts().items():
            dataset_rows_gauge.labels(table=table).set(n)


_STORE: Optional[DatasetStore] = None


def get_dataset_store() -> DatasetStore:
    global _STORE
    if _STORE is None:
        _STORE = DatasetStore(data_root())
    return _STORE
