from typing import Any, Optional

from fastapi import HTTPException

from shared.core.exceptions import WarehouseError
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode


def success_response(data: Any = None, message: str = "Success",
                     status_code: str = AppStatusCode.OPERATION_SUCCESSFUL) -> JsonOutResult:
    return JsonOutResult(data=data, status="Success", status_code=status_code, message=message)


def error_response(message: str, status_code: str = AppStatusCode.OPERATION_FAILED,
                   http_status: int = 400, data: Optional[Any] = None):
    """Abort the request with a Failure envelope; exception_handler passes it through as is."""
    envelope = JsonOutResult(data=data, status="Failure", status_code=status_code, message=message)
    raise HTTPException(status_code=http_status, detail=envelope.model_dump())


def warehouse_error_response(exc: WarehouseError, status_code: str, http_status: int = 400):
    # entity ids and rejection reasons go back to the caller in `data`
    return error_response(exc.message, status_code, http_status, data=exc.details or None)
