# app/router/system_router.py
from fastapi import APIRouter, Depends
from shared.core.database import StorageClient, get_storage
from ..schemas.reports_schemas import HealthStatus

router = APIRouter(prefix="/api/health", tags=["system"])


@router.get("/db", response_model=HealthStatus)
def database_health(storage: StorageClient = Depends(get_storage)):
    ok = storage.ping()
    dialect = storage.engine.dialect.name if ok else None
    return HealthStatus(ok=ok, dialect=dialect)
