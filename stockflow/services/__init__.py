# Services Package
from .stock_service import StockService
from .product_service import ProductService
from .warehouse_service import WarehouseService
from .receipt_service import ReceiptService
from .delivery_service import DeliveryService
from .transfer_service import TransferService
from .dashboard_service import DashboardService
from .mail_service import MailService
from . import workflow

__all__ = [
    "StockService",
    "ProductService",
    "WarehouseService",
    "ReceiptService",
    "DeliveryService",
    "TransferService",
    "DashboardService",
    "MailService",
    "workflow",
]
