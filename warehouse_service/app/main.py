import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import Settings, settings as default_settings
from shared.core.database import StorageClient
from shared.core.exceptions import InfrastructureError
from shared.core.logging_config import configure_logging
from shared.exception_handler import setup_exception_handlers

from . import models  # noqa: F401  registers every table on Base.metadata
from .crud.fulfillment_ledger import FulfillmentLedger
from .router import inventory_items_router, order_shipments_router, reports_router, system_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    storage: StorageClient = app.state.storage
    try:
        storage.connect()
    except InfrastructureError:
        # Keep serving; requests retry the connection and reports degrade meanwhile
        logger.error("Starting without a database connection")
    yield
    storage.dispose()


def create_app(settings: Settings = default_settings, storage: Optional[StorageClient] = None) -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

    app.state.storage = storage or StorageClient.from_settings(settings)
    app.state.ledger = FulfillmentLedger(app.state.storage)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(inventory_items_router.router)
    app.include_router(inventory_items_router.lookup_router)
    app.include_router(order_shipments_router.router)
    app.include_router(reports_router.router)
    app.include_router(system_router.router)

    return app


app = create_app()
