from enum import Enum


class InventoryStatus(str, Enum):

    active = "active"
    out_of_stock = "out-of-stock"
    inactive = "inactive"


class ShipmentStatus(str, Enum):

    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"


class QuantityOperation(str, Enum):

    set = "set"
    add = "add"
    subtract = "subtract"


class PlanStatus(str, Enum):

    processing = "processing"
    processed = "processed"
