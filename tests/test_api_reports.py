from conftest import CATEGORIES_CSV, write_dataset

from app.core.settings import settings

RELOADS_ALLOWED = int(settings.RELOAD_RATE_LIMIT.split("/")[0])


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "loaded": {"categories": 2, "products": 4, "sales": 7}}


def test_meta(client):
    assert client.get("/meta/years").json() == {"years": [2023, 2024]}
    cats = client.get("/meta/categories").json()["categories"]
    assert cats[0] == {"id": "c1", "name": "Cat One"}


def test_kpis_yearly_optional_params(client):
    r = client.get("/kpis/yearly", params={"year": "2024", "categoryId": "c2"})
    assert r.status_code == 200
    body = r.json()
    assert body["scope"] == {"year": 2024, "categoryId": "c2"}
    assert body["kpis"] == {"revenue": 300.0, "quantity": 3.0, "avg_price": 100.0}


def test_kpis_yearly_empty_strings_mean_absent(client):
    body = client.get("/kpis/yearly", params={"year": "", "categoryId": ""}).json()
    assert body["scope"] == {"year": None, "categoryId": None}
    assert body["kpis"]["revenue"] == 580.0


def test_timeseries_revenue_requires_year(client):
    r = client.get("/timeseries/revenue")
    assert r.status_code == 400
    assert r.json() == {"error": "year is required", "code": "VALIDATION_ERROR", "param": "year"}


def test_compare_yearly(client):
    body = client.get("/compare/yearly", params={"year": 2024, "ref": 2023, "categoryId": "c1"}).json()
    assert body["year"]["revenue"] == 90.0
    assert body["ref"]["revenue"] == 90.0
    assert body["delta"] == {"revenue": 0.0, "quantity": 0.0, "avg_price": 0.0, "pct_revenue": 0.0}


def test_compare_yearly_ref_out_of_range(client):
    r = client.get("/compare/yearly", params={"year": 2024, "ref": 1999})
    assert r.status_code == 400
    assert r.json()["param"] == "ref"


def test_price_volume(client):
    body = client.get("/analysis/price-volume", params={"year": 2024, "ref": 2023}).json()
    assert body["decomposition"] == {"volume_effect": 25.33, "price_effect": 174.67, "mix_effect": 0.0}


def test_category_contribution(client):
    body = client.get("/analysis/category-contribution", params={"year": 2024, "ref": 2023}).json()
    assert [c["category"] for c in body["contributions"]] == ["Cat Two", "Cat One"]


def test_diagnostic(client):
    body = client.get("/analysis/diagnostic", params={"year": 2024, "ref": 2023}).json()
    assert body["top_category"]["category_id"] == "c2"
    assert len(body["top_products"]) == 3


def test_top_products_limit_is_clamped(client):
    body = client.get("/analysis/top-products", params={"year": 2024, "ref": 2023, "limit": 0}).json()
    assert body["scope"]["limit"] == 1
    assert len(body["items"]) == 1

    body = client.get("/analysis/top-products", params={"year": 2024, "ref": 2023, "limit": 999}).json()
    assert body["scope"]["limit"] == 50
    assert len(body["items"]) == 3


def test_top_products_bad_limit(client):
    r = client.get("/analysis/top-products", params={"year": 2024, "ref": 2023, "limit": "lots"})
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_product_detail_missing_product_id(client):
    r = client.get("/analysis/product", params={"year": 2024, "ref": 2023})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing productId", "code": "MISSING_PARAMETER", "param": "productId"}


def test_product_detail_not_found_has_no_data(client):
    r = client.get("/analysis/product", params={"year": 2024, "ref": 2023, "productId": "zzz"})
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found", "code": "NOT_FOUND", "param": "productId"}


def test_product_detail(client):
    body = client.get("/analysis/product", params={"year": 2024, "ref": 2023, "productId": "p1"}).json()
    assert body["scope"] == {"year": 2024, "ref": 2023, "productId": "p1"}
    assert body["delta"] == {"revenue": 16.0, "pct_revenue": 32.0}


def test_timeseries_product(client):
    r = client.get("/timeseries/product", params={"year": 2024, "productId": "p3"})
    assert r.status_code == 200
    assert r.json()["points"][0]["revenue"] == 300.0
    assert client.get("/timeseries/product", params={"year": 2024}).status_code == 400
    assert client.get("/timeseries/product", params={"year": 2024, "productId": "zzz"}).status_code == 404


def test_month_detail_default_ref(client):
    body = client.get("/analysis/month-detail", params={"year": 2024, "month": 1}).json()
    assert body["scope"] == {"year": 2024, "month": 1, "ref": 2023, "categoryId": None, "limit": 10}
    assert body["total_delta"] == 216.0


def test_month_detail_bad_month(client):
    r = client.get("/analysis/month-detail", params={"year": 2024, "month": 13})
    assert r.status_code == 400
    assert r.json()["param"] == "month"


def test_reload_publishes_new_snapshot(client, data_dir):
    assert client.get("/health").json()["loaded"]["categories"] == 2
    write_dataset(data_dir, categories=CATEGORIES_CSV + "c3,Cat Three\n")

    r = client.post("/admin/reload")

    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["reloaded"] == {"categories": 3, "products": 4, "sales": 7}
    assert client.get("/health").json()["loaded"]["categories"] == 3


def test_reload_failure_keeps_serving_old_data(client, data_dir):
    assert client.get("/health").json()["loaded"]["sales"] == 7
    (data_dir / "ventes_mensuelles.csv").write_text("id_produit,annee\np1,2024\n", encoding="utf-8")

    r = client.post("/admin/reload")

    assert r.status_code == 500
    body = r.json()
    assert body["code"] == "RELOAD_FAILED"
    assert "missing required headers" in body["error"]
    assert set(body) == {"error", "code", "param"}
    assert client.get("/health").json()["loaded"]["sales"] == 7


def test_metrics_endpoint(client):
    client.get("/analysis/product", params={"year": 2024, "ref": 2023})
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "sales_kpi_report_errors_total" in r.text


def test_reload_is_rate_limited(client):
    for _ in range(RELOADS_ALLOWED):
        assert client.post("/admin/reload").status_code == 200

    r = client.post("/admin/reload")
    assert r.status_code == 429


def test_reload_rate_limit_ignores_request_headers(client):
    for i in range(RELOADS_ALLOWED):
        assert client.post("/admin/reload", headers={"x-user-id": f"u{i}"}).status_code == 200

    r = client.post("/admin/reload", headers={"x-user-id": "someone-else"})
    assert r.status_code == 429


def test_latency_metric_labels_by_route_template(client):
    for i in range(3):
        assert client.get(f"/no-such-route-{i}").status_code == 404
    client.get("/analysis/product", params={"year": 2024, "ref": 2023, "productId": "p1"})

    text = client.get("/metrics").text
    assert 'route="unmatched"' in text
    assert 'route="/analysis/product"' in text
    assert "no-such-route" not in text
