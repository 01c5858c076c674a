from .catalog import Category, Product, ProductPricing, Warehouse
from .inventory_items import InventoryItem
from .order_shipments import OrderShipment
from .production_planning import ProductionPlan
