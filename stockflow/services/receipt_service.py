"""
Receipt Service - inbound stock workflow
"""
import logging
from sqlalchemy.orm import Session, selectinload, joinedload
from typing import List, Optional, Tuple
from uuid import UUID

from stockflow.core import atomic
from stockflow.core.exceptions import NotFound, ValidationFailed
from stockflow.models import Receipt, ReceiptItem, ReceiptStatus, Product, Warehouse, MovementType
from stockflow.schemas.receipt import ReceiptCreate
from .stock_service import StockService
from .workflow import apply_transition, generate_record_number, utcnow

logger = logging.getLogger(__name__)

class ReceiptService:
    """Receipt business logic: DRAFT -> READY -> DONE"""

    @staticmethod
    def get_receipts(
        db: Session,
        status: Optional[ReceiptStatus] = None,
        warehouse_id: Optional[UUID] = None,
        page: int = 1,
        per_page: int = 20
    ) -> Tuple[List[Receipt], int]:
        """Get receipts with filters and pagination"""
        query = db.query(Receipt)

        if status:
            query = query.filter(Receipt.status == status)

        if warehouse_id:
            query = query.filter(Receipt.warehouse_id == warehouse_id)

        total = query.count()

        receipts = query.options(
            joinedload(Receipt.warehouse),
            selectinload(Receipt.items).joinedload(ReceiptItem.product)
        ).order_by(Receipt.created_at.desc())\
            .offset((page - 1) * per_page)\
            .limit(per_page)\
            .all()

        return receipts, total

    @staticmethod
    def get_receipt(db: Session, receipt_id: UUID) -> Receipt:
        receipt = db.query(Receipt).options(
            joinedload(Receipt.warehouse),
            selectinload(Receipt.items).joinedload(ReceiptItem.product)
        ).filter(Receipt.id == receipt_id).first()
        if not receipt:
            raise NotFound("Receipt", receipt_id)
        return receipt

    @staticmethod
    def create_receipt(db: Session, receipt_data: ReceiptCreate, created_by: Optional[UUID] = None) -> Receipt:
        """Create a DRAFT receipt; no stock changes until it is validated"""
        with atomic(db):
            if not db.query(Warehouse).filter(Warehouse.id == receipt_data.warehouse_id).first():
                raise NotFound("Warehouse", receipt_data.warehouse_id)

            errors = []
            for item_data in receipt_data.items:
                product = db.query(Product).filter(Product.id == item_data.product_id).first()
                if not product:
                    errors.append(f"Product with ID {item_data.product_id} not found")
                elif product.warehouse_id != receipt_data.warehouse_id:
                    errors.append(f"Product {product.sku} is not in the receiving warehouse")
            if errors:
                raise ValidationFailed("Receipt items are invalid", details=errors)

            receipt = Receipt(
                receipt_number=generate_record_number("RCP"),
                supplier_name=receipt_data.supplier_name,
                warehouse_id=receipt_data.warehouse_id,
                notes=receipt_data.notes,
                status=ReceiptStatus.DRAFT,
                user_id=created_by
            )
            for item_data in receipt_data.items:
                receipt.items.append(ReceiptItem(product_id=item_data.product_id, quantity=item_data.quantity))
            db.add(receipt)

        logger.info(f"Created receipt {receipt.receipt_number} with {len(receipt_data.items)} items")
        return ReceiptService.get_receipt(db, receipt.id)

    @staticmethod
    def validate_receipt(db: Session, receipt_id: UUID, performed_by: Optional[UUID] = None) -> Receipt:
        """
        Advance a receipt one step.

        DRAFT -> READY changes nothing but the status. READY -> DONE increments
        every item's product stock and writes one RECEIPT movement per item,
        all in one transaction. DONE and CANCELED receipts are rejected.
        """
        with atomic(db):
            receipt = ReceiptService.get_receipt(db, receipt_id)
            label = f"Receipt {receipt.receipt_number}"
            number = receipt.receipt_number
            items = list(receipt.items)

            if receipt.status == ReceiptStatus.DRAFT:
                apply_transition(db, receipt, ReceiptStatus.READY, label, performed_by)
                target = ReceiptStatus.READY
            else:
                apply_transition(db, receipt, ReceiptStatus.DONE, label, performed_by, validated_at=utcnow())
                for item in items:
                    StockService.adjust_stock(
                        db, item.product, item.quantity, MovementType.RECEIPT,
                        reference_id=receipt_id,
                        user_id=performed_by,
                        notes=f"Stock received from receipt {number}"
                    )
                target = ReceiptStatus.DONE

        logger.info(f"{label} moved to {target.value} ({len(items)} items)")
        return ReceiptService.get_receipt(db, receipt_id)

    @staticmethod
    def cancel_receipt(db: Session, receipt_id: UUID, performed_by: Optional[UUID] = None) -> Receipt:
        with atomic(db):
            receipt = ReceiptService.get_receipt(db, receipt_id)
            label = f"Receipt {receipt.receipt_number}"
            apply_transition(db, receipt, ReceiptStatus.CANCELED, label, performed_by)

        logger.info(f"{label} canceled")
        return ReceiptService.get_receipt(db, receipt_id)
