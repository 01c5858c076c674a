# app/router/order_shipments_router.py
from typing import List
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from shared.core.database import StorageClient, get_db, get_storage
from shared.core.exceptions import NotFoundError
from shared.helpers.degrade_helper import degrade_on_storage_failure
from shared.helpers.json_response_helper import success_response, warehouse_error_response
from shared.utils.app_status_code import AppStatusCode
from ..schemas.order_shipments_schemas import (
    OrderShipmentCreate,
    OrderShipmentListResponse,
    OrderShipmentOut,
    OrderShipmentRequest,
    OrderShipmentUpdate,
    ShipmentStatusUpdate,
    ShipmentSyncResult,
)
from ..schemas.reports_schemas import ShipmentActivity, ShipmentStats
from ..crud import order_shipments_crud as crud
from ..crud import reports_crud
from ..crud.fulfillment_ledger import FulfillmentLedger
from ..crud.scheduler.shipment_sync import sync_processed_plans_into_shipments

router = APIRouter(prefix="/api/order-shipments", tags=["order_shipments"])

RECENT_ACTIVITY_MAX = 50


def get_ledger(request: Request) -> FulfillmentLedger:
    return request.app.state.ledger


@router.get("/", response_model=OrderShipmentListResponse)
def read_shipments(
    params: OrderShipmentRequest = Depends(),
    db: Session = Depends(get_db)
):
    # Pick up any production plans finished since the last look
    sync_processed_plans_into_shipments(db)
    return crud.get_order_shipments(db, params)


@router.post("/sync", response_model=ShipmentSyncResult)
def sync_shipments(db: Session = Depends(get_db)):
    return ShipmentSyncResult(inserted=sync_processed_plans_into_shipments(db))

# ----------------- Reports -----------------


@router.get("/stats", response_model=ShipmentStats)
def shipment_stats(storage: StorageClient = Depends(get_storage)):
    def fetch():
        with storage.session_scope() as db:
            return reports_crud.get_shipment_stats(db)

    return degrade_on_storage_failure(fetch, ShipmentStats, label="shipment stats")


@router.get("/recent-activity", response_model=List[ShipmentActivity])
def recent_activity(
    limit: int = Query(10),
    storage: StorageClient = Depends(get_storage)
):
    limit = max(1, min(limit, RECENT_ACTIVITY_MAX))

    def fetch():
        with storage.session_scope() as db:
            return reports_crud.get_recent_shipment_activity(db, limit)

    return degrade_on_storage_failure(fetch, list, label="recent shipment activity")


@router.get("/{shipment_id}", response_model=OrderShipmentOut)
def read_shipment(shipment_id: int, db: Session = Depends(get_db)):
    db_shipment = crud.get_order_shipment_by_id(db, shipment_id)
    if not db_shipment:
        raise NotFoundError("Shipment", shipment_id)
    return db_shipment


@router.post("/", response_model=OrderShipmentOut)
def create_shipment(shipment: OrderShipmentCreate, db: Session = Depends(get_db)):
    return crud.create_order_shipment(db, shipment)


@router.put("/{shipment_id}", response_model=OrderShipmentOut)
def update_shipment(
    shipment_id: int,
    shipment: OrderShipmentUpdate,
    db: Session = Depends(get_db)
):
    db_shipment = crud.update_order_shipment(db, shipment_id, shipment)
    if not db_shipment:
        raise NotFoundError("Shipment", shipment_id)
    return db_shipment


@router.delete("/{shipment_id}")
def delete_shipment(shipment_id: int, db: Session = Depends(get_db)):
    if not crud.delete_order_shipment(db, shipment_id):
        raise NotFoundError("Shipment", shipment_id)
    return success_response(message="Shipment deleted successfully")


@router.post("/{shipment_id}/status", response_model=OrderShipmentOut)
def update_shipment_status(
    shipment_id: int,
    payload: ShipmentStatusUpdate,
    ledger: FulfillmentLedger = Depends(get_ledger)
):
    try:
        return ledger.transition_shipment_status(
            shipment_id,
            payload.status,
            ship_date=payload.ship_date,
            delivery_date=payload.delivery_date,
        )
    except NotFoundError as e:
        # Status changes report an unknown order as a bad request, not a 404
        return warehouse_error_response(e, AppStatusCode.RECORD_NOT_FOUND, 400)
