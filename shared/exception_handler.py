import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from shared.core.exceptions import FulfillmentError, InfrastructureError, NotFoundError
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def _failure(message: str, status_code: str, http_status: int, data=None) -> JSONResponse:
    wrapped = JsonOutResult(
        data=data,
        status="Failure",
        status_code=status_code,
        message=message
    ).model_dump()
    return JSONResponse(content=wrapped, status_code=http_status)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # error_response() already built the envelope
        if isinstance(exc.detail, dict) and {"status", "status_code", "message"}.issubset(exc.detail.keys()):
            return JSONResponse(content=exc.detail, status_code=exc.status_code)
        return _failure(str(exc.detail), AppStatusCode.OPERATION_FAILED, exc.status_code or 400)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _failure(str(exc), AppStatusCode.INVALID_INPUT, 422)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _failure(exc.message, AppStatusCode.RECORD_NOT_FOUND, 404, exc.details)

    @app.exception_handler(FulfillmentError)
    async def fulfillment_handler(request: Request, exc: FulfillmentError):
        return _failure(exc.message, AppStatusCode.FULFILLMENT_REJECTED, 400, exc.details)

    @app.exception_handler(InfrastructureError)
    async def infrastructure_handler(request: Request, exc: InfrastructureError):
        logger.error("Infrastructure error on %s %s", request.method, request.url.path, exc_info=exc)
        return _failure("Storage is unavailable, please retry later", AppStatusCode.STORAGE_UNAVAILABLE, 500)

    @app.exception_handler(SQLAlchemyError)
    async def database_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
        return _failure("Database query failed", AppStatusCode.OPERATION_ERROR, 500)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        return _failure("Internal server error", AppStatusCode.OPERATION_FAILED, 500)
