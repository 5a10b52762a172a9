# Pydantic Schemas Package
from .warehouse import (
    WarehouseCreate, WarehouseUpdate, WarehouseResponse, WarehouseRef,
    LocationCreate, LocationUpdate, LocationResponse,
    CategoryCreate, CategoryUpdate, CategoryResponse,
)
from .product import ProductCreate, ProductUpdate, ProductResponse, ProductSummary
from .stock import StockMovementResponse, StockRecord
from .receipt import ReceiptCreate, ReceiptItemCreate, ReceiptResponse, ReceiptList, Pagination
from .delivery import DeliveryCreate, DeliveryItemCreate, DeliveryUpdate, DeliveryResponse
from .transfer import TransferCreate, TransferItemCreate, TransferStatusUpdate, TransferResponse
from .dashboard import DashboardKPIs, DashboardFilters

__all__ = [
    "WarehouseCreate", "WarehouseUpdate", "WarehouseResponse", "WarehouseRef",
    "LocationCreate", "LocationUpdate", "LocationResponse",
    "CategoryCreate", "CategoryUpdate", "CategoryResponse",
    "ProductCreate", "ProductUpdate", "ProductResponse", "ProductSummary",
    "StockMovementResponse", "StockRecord",
    "ReceiptCreate", "ReceiptItemCreate", "ReceiptResponse", "ReceiptList", "Pagination",
    "DeliveryCreate", "DeliveryItemCreate", "DeliveryUpdate", "DeliveryResponse",
    "TransferCreate", "TransferItemCreate", "TransferStatusUpdate", "TransferResponse",
    "DashboardKPIs", "DashboardFilters",
]
