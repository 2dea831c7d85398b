from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from app.core.logging_config import logger
from app.core.rate_limit import limiter
from app.core.settings import settings
from app.verticals.sales.data_validators.common import ParseError
from app.verticals.sales.errors import ReloadFailedError
from app.verticals.sales.schemas.reports import LoadedCounts, ReloadReport
from app.verticals.sales.storage.loader import DatasetStore, get_dataset_store

router = APIRouter(prefix="/admin", tags=["sales", "admin"])


@router.post("/reload", response_model=ReloadReport)
@limiter.limit(settings.RELOAD_RATE_LIMIT)
def reload_dataset(
    request: Request,
    store: DatasetStore = Depends(get_dataset_store),
):
    """
    Re-read the CSV files and publish the new snapshot atomically.
    On a load error the previous snapshot stays in place.
    """
    try:
        res = store.reload()
    except ParseError as e:
        raise ReloadFailedError(str(e)) from e

    logger.info("dataset_reloaded", version_id=res.version_id)
    return ReloadReport(
        ok=res.ok,
        version_id=res.version_id,
        reloaded=LoadedCounts(
            categories=res.categories, products=res.products, sales=res.sales
        ),
    )
