import os

os.environ.setdefault("LOAD_ON_STARTUP", "0")  # no dataset load at import/startup during tests

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.core.rate_limit import limiter
from app.main import app
from app.verticals.sales.domain.dataset import DatasetSnapshot
from app.verticals.sales.domain.models import Category, Product, SalesRow
from app.verticals.sales.storage.loader import DatasetStore, get_dataset_store


CATEGORIES_CSV = """id_categorie,nom
c1,Cat One
c2,Cat Two
"""

PRODUCTS_CSV = """id_produit,nom,marque,sku,id_categorie,actif
p1,Product One,Brand A,SKU-001,c1,true
p2,Product Two,Brand A,SKU-002,c1,true
p3,Product Three,Brand B,SKU-003,c2,false
p4,Orphan Product,Brand C,SKU-004,c-missing,true
"""

# p1 reproduces the 10 x 5.00 -> 12 x 5.50 example; px has no product
SALES_CSV = """id_vente_mensuelle,id_produit,annee,mois,quantite,prix_moyen_unitaire
s1,p1,2023,1,10,5.00
s2,p1,2024,1,12,5.50
s3,p2,2023,2,4,10
s4,p2,2024,2,2,12
s5,p3,2023,1,1,100
s6,p3,2024,1,3,100
s7,px,2024,1,5,1
"""


def write_dataset(
    target: Path,
    *,
    categories: str = CATEGORIES_CSV,
    products: str = PRODUCTS_CSV,
    sales: str = SALES_CSV,
) -> Path:
    target.mkdir(parents=True, exist_ok=True)
    (target / "categories.csv").write_text(categories, encoding="utf-8")
    (target / "produits.csv").write_text(products, encoding="utf-8")
    (target / "ventes_mensuelles.csv").write_text(sales, encoding="utf-8")
    return target


@pytest.fixture
def data_dir(tmp_path):
    return write_dataset(tmp_path / "data")


@pytest.fixture
def store(data_dir):
    return DatasetStore(data_dir)


@pytest.fixture
def snapshot(store):
    return store.current()


@pytest.fixture
def example_snapshot():
    """One category, one product, one row per year."""
    return DatasetSnapshot.build(
        version_id="example",
        categories=[Category(id="c1", name="Cat One")],
        products=[
            Product(
                id="p1",
                name="Product One",
                brand="Brand A",
                sku="SKU-001",
                category_id="c1",
                active=True,
            )
        ],
        sales=[
            SalesRow(id="s1", product_id="p1", year=2023, month=1, quantity=10, unit_price=5.00),
            SalesRow(id="s2", product_id="p1", year=2024, month=1, quantity=12, unit_price=5.50),
        ],
    )


@pytest.fixture
def client(store):
    limiter.reset()
    app.dependency_overrides[get_dataset_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
