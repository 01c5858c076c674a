"""
Error taxonomy shared by the warehouse service.

    WarehouseError
    +-- NotFoundError            -> client error (404, 400 on status transitions)
    +-- FulfillmentError         -> client error (400), message kept for the caller
    |   +-- InvalidTransitionError
    +-- InfrastructureError      -> server error (500), details only in the log
"""
from typing import Any, Optional


class WarehouseError(Exception):
    code = "WAREHOUSE_ERROR"

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(WarehouseError):
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} not found", entity=entity, entity_id=entity_id)
        self.entity = entity
        self.entity_id = entity_id


class FulfillmentError(WarehouseError):
    code = "FULFILLMENT_ERROR"

    def __init__(self, message: str = "cannot ship", reason: Optional[str] = None, **details: Any):
        super().__init__(message, reason=reason, **details)
        self.reason = reason


class InvalidTransitionError(FulfillmentError):
    code = "INVALID_TRANSITION"

    def __init__(self, current_status: str, new_status: str):
        super().__init__(
            f"cannot move shipment from {current_status} to {new_status}",
            reason="invalid_transition",
            current_status=current_status,
            new_status=new_status,
        )
        self.current_status = current_status
        self.new_status = new_status


class InfrastructureError(WarehouseError):
    code = "INFRASTRUCTURE_ERROR"
