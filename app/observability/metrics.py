from fastapi import APIRouter
from starlette.responses import Response

from prometheus_client import Counter, Gauge, Histogram, generate_latest, CONTENT_TYPE_LATEST

router = APIRouter(tags=["observability"])

report_error_counter = Counter(
    "sales_kpi_report_errors_total",
    "Rejected report requests",
    ["code"],  # VALIDATION_ERROR|MISSING_PARAMETER|NOT_FOUND
)

reload_counter = Counter(
    "sales_kpi_dataset_reload_total",
    "Dataset reloads",
    ["result"],  # success|error
)

dataset_rows_gauge = Gauge(
    "sales_kpi_dataset_rows",
    "Rows in the published dataset snapshot",
    ["table"],  # categories|products|sales
)

latency_hist = Histogram(
    "sales_kpi_api_latency_seconds",
    "API latency per route",
    ["route"],  # e.g. /analysis/top-products
)


@router.get("/metrics", include_in_schema=True)
def metrics() -> Response:
    # Prometheus expects text/plain; version=0.0.4
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
