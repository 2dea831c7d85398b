from __future__ import annotations

from fastapi import Depends

from app.verticals.sales.domain.dataset import DatasetSnapshot
from app.verticals.sales.storage.loader import DatasetStore, get_dataset_store


def current_snapshot(store: DatasetStore = Depends(get_dataset_store)) -> DatasetSnapshot:
    # captured once per request; a concurrent reload does not affect it
    return store.current()
