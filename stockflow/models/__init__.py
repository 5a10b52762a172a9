from .base import TimestampMixin, UUIDMixin, VersionMixin
from .master import Warehouse, Location, Category, AppUser
from .product import Product
from .stock import StockMovement, MovementType
from .receipt import Receipt, ReceiptItem, ReceiptStatus
from .delivery import Delivery, DeliveryItem, DeliveryStatus, DeliveryOperation
from .transfer import Transfer, TransferItem, TransferStatus
from .audit import AuditLog

__all__ = [
    # Base
    "TimestampMixin", "UUIDMixin", "VersionMixin",
    # Master
    "Warehouse", "Location", "Category", "AppUser",
    # Product
    "Product",
    # Stock
    "StockMovement", "MovementType",
    # Workflows
    "Receipt", "ReceiptItem", "ReceiptStatus",
    "Delivery", "DeliveryItem", "DeliveryStatus", "DeliveryOperation",
    "Transfer", "TransferItem", "TransferStatus",
    # Audit
    "AuditLog",
]
