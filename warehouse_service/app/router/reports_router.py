# app/router/reports_router.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from shared.core.config import settings
from shared.core.database import StorageClient, get_storage
from shared.helpers.degrade_helper import degrade_on_storage_failure
from ..schemas.reports_schemas import StockGroup, StockOverview
from ..crud import reports_crud as crud

router = APIRouter(prefix="/api/stock", tags=["stock_reports"])


@router.get("/overview", response_model=StockOverview)
def stock_overview(
    threshold: Optional[int] = Query(None, ge=0),
    storage: StorageClient = Depends(get_storage)
):
    if threshold is None:
        threshold = settings.LOW_STOCK_THRESHOLD

    def fetch():
        with storage.session_scope() as db:
            return crud.get_stock_overview(db, threshold)

    return degrade_on_storage_failure(fetch, StockOverview, label="stock overview")


@router.get("/by-category", response_model=List[StockGroup])
def stock_by_category(storage: StorageClient = Depends(get_storage)):
    def fetch():
        with storage.session_scope() as db:
            return crud.get_stock_by_category(db)

    return degrade_on_storage_failure(fetch, list, label="stock by category")


@router.get("/by-warehouse", response_model=List[StockGroup])
def stock_by_warehouse(storage: StorageClient = Depends(get_storage)):
    def fetch():
        with storage.session_scope() as db:
            return crud.get_stock_by_warehouse(db)

    return degrade_on_storage_failure(fetch, list, label="stock by warehouse")
