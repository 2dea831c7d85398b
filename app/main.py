# app/main.py
import time
import uuid

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.core.settings import settings
from app.core.logging_config import setup_logging, logger
from app.core.rate_limit import limiter
from app.observability.metrics import latency_hist, report_error_counter
from app.observability.metrics import router as metrics_router
from app.verticals.sales.api import admin, reports
from app.verticals.sales.errors import ReportError
from app.verticals.sales.storage.loader import get_dataset_store


if settings.SENTRY_DSN:
    sentry_sdk.init(dsn=settings.SENTRY_DSN, integrations=[FastApiIntegration()])


# ----------------------------------------------------
# App init
# ----------------------------------------------------
app = FastAPI(title="Sales KPI API", version="0.1.0")

setup_logging()
logger.info("startup", service=settings.APP_NAME)


@app.on_event("startup")
def _load_dataset():
    # Runs at app startup (not at import); tests override the store instead
    if settings.LOAD_ON_STARTUP:
        get_dataset_store().current()


# ----------------------------------------------------
# Logging middleware
# ----------------------------------------------------
def _route_label(request: Request) -> str:
    # matched route template, so unknown paths share one series
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    start = time.time()

    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    client_ip = request.client.host if request.client else "unknown"

    bound_logger = logger.bind(
        request_id=request_id,
        ip=client_ip,
        endpoint=str(request.url.path),
        method=request.method,
    )

    bound_logger.info("request_started")
    response = await call_next(request)
    elapsed = time.time() - start
    latency_hist.labels(route=_route_label(request)).observe(elapsed)

    bound_logger.bind(
        status_code=response.status_code, latency_ms=round(elapsed * 1000, 2)
    ).info("request_finished")
    response.headers["X-Request-ID"] = request_id
    return response


# ----------------------------------------------------
# Middleware
# ----------------------------------------------------
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RateLimitExceeded)
def ratelimit_handler(request: Request, exc: RateLimitExceeded):
    return PlainTextResponse(str(exc), status_code=429)


@app.exception_handler(ReportError)
def report_error_handler(request: Request, exc: ReportError):
    report_error_counter.labels(code=exc.code).inc()
    logger.info(
        "request_rejected",
        endpoint=str(request.url.path),
        code=exc.code,
        param=exc.param,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# ----------------------------------------------------
# Routers
# ----------------------------------------------------
app.include_router(reports.router)
app.include_router(admin.router)
app.include_router(metrics_router)  # /metrics
