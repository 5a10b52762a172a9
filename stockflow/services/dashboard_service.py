"""
Dashboard Service - KPI counts and filter options
"""
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import Optional, Dict
from uuid import UUID

from stockflow.models import (
    Product, Warehouse, Category, Receipt, ReceiptStatus,
    Delivery, DeliveryStatus, Transfer
)

PENDING_RECEIPT_STATUSES = [ReceiptStatus.DRAFT, ReceiptStatus.READY]
PENDING_DELIVERY_STATUSES = [DeliveryStatus.DRAFT, DeliveryStatus.READY]

class DashboardService:

    @staticmethod
    def get_kpis(
        db: Session,
        warehouse_id: Optional[UUID] = None,
        category_id: Optional[UUID] = None,
        receipt_status: Optional[ReceiptStatus] = None,
        delivery_status: Optional[DeliveryStatus] = None
    ) -> Dict[str, int]:
        """
        Counts for the dashboard cards.

        Receipts and deliveries count as pending while DRAFT or READY unless an
        explicit status filter is given.
        """
        products = db.query(Product)
        if warehouse_id:
            products = products.filter(Product.warehouse_id == warehouse_id)
        if category_id:
            products = products.filter(Product.category_id == category_id)

        receipts = db.query(Receipt)
        if warehouse_id:
            receipts = receipts.filter(Receipt.warehouse_id == warehouse_id)
        if receipt_status:
            receipts = receipts.filter(Receipt.status == receipt_status)
        else:
            receipts = receipts.filter(Receipt.status.in_(PENDING_RECEIPT_STATUSES))

        deliveries = db.query(Delivery)
        if warehouse_id:
            deliveries = deliveries.filter(Delivery.warehouse_id == warehouse_id)
        if delivery_status:
            deliveries = deliveries.filter(Delivery.status == delivery_status)
        else:
            deliveries = deliveries.filter(Delivery.status.in_(PENDING_DELIVERY_STATUSES))

        transfers = db.query(Transfer)
        if warehouse_id:
            transfers = transfers.filter(
                or_(Transfer.from_warehouse_id == warehouse_id, Transfer.to_warehouse_id == warehouse_id)
            )

        return {
            "total_products": products.count(),
            "low_stock_items": products.filter(
                Product.stock > 0, Product.stock <= Product.min_stock_level
            ).count(),
            "out_of_stock_items": products.filter(Product.stock == 0).count(),
            "pending_receipts": receipts.count(),
            "pending_deliveries": deliveries.count(),
            "internal_transfers": transfers.count(),
        }

    @staticmethod
    def get_filters(db: Session) -> Dict:
        return {
            "warehouses": db.query(Warehouse).order_by(Warehouse.name).all(),
            "categories": db.query(Category).order_by(Category.name).all(),
            "receipt_statuses": [s.value for s in ReceiptStatus],
            "delivery_statuses": [s.value for s in DeliveryStatus],
        }
