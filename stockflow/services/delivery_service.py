"""
Delivery Service - outbound stock workflow
"""
import logging
from sqlalchemy.orm import Session, selectinload, joinedload
from sqlalchemy import or_
from typing import List, Optional
from uuid import UUID

from stockflow.core import atomic
from stockflow.core.exceptions import NotFound, ValidationFailed, InsufficientStock, InvalidTransition
from stockflow.models import (
    Delivery, DeliveryItem, DeliveryStatus, DeliveryOperation,
    Product, Warehouse, MovementType
)
from stockflow.schemas.delivery import DeliveryCreate, DeliveryUpdate
from .stock_service import StockService
from .workflow import (
    apply_transition, ensure_transition, guarded_update, is_terminal, generate_record_number, utcnow
)

logger = logging.getLogger(__name__)

class DeliveryService:
    """Delivery business logic: DRAFT -> [READY] -> DONE"""

    @staticmethod
    def get_deliveries(
        db: Session,
        status: Optional[DeliveryStatus] = None,
        search: Optional[str] = None,
        warehouse_id: Optional[UUID] = None
    ) -> List[Delivery]:
        query = db.query(Delivery).options(
            joinedload(Delivery.warehouse),
            selectinload(Delivery.items).joinedload(DeliveryItem.product)
        )

        if status:
            query = query.filter(Delivery.status == status)

        if warehouse_id:
            query = query.filter(Delivery.warehouse_id == warehouse_id)

        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(
                    Delivery.delivery_number.ilike(search_term),
                    Delivery.customer_name.ilike(search_term)
                )
            )

        return query.order_by(Delivery.created_at.desc()).all()

    @staticmethod
    def get_delivery(db: Session, delivery_id: UUID) -> Delivery:
        delivery = db.query(Delivery).options(
            joinedload(Delivery.warehouse),
            selectinload(Delivery.items).joinedload(DeliveryItem.product)
        ).filter(Delivery.id == delivery_id).first()
        if not delivery:
            raise NotFound("Delivery", delivery_id)
        return delivery

    @staticmethod
    def _check_items(db: Session, warehouse_id: UUID, product_ids: List[UUID]) -> None:
        errors = []
        for product_id in product_ids:
            product = db.query(Product).filter(Product.id == product_id).first()
            if not product:
                errors.append(f"Product with ID {product_id} not found")
            elif product.warehouse_id != warehouse_id:
                errors.append(f"Product {product.sku} is not in the delivery warehouse")
        if errors:
            raise ValidationFailed("Delivery items are invalid", details=errors)

    @staticmethod
    def create_delivery(db: Session, delivery_data: DeliveryCreate, created_by: Optional[UUID] = None) -> Delivery:
        """Create a DRAFT delivery; stock is checked again when it is validated"""
        with atomic(db):
            if not db.query(Warehouse).filter(Warehouse.id == delivery_data.warehouse_id).first():
                raise NotFound("Warehouse", delivery_data.warehouse_id)
            DeliveryService._check_items(db, delivery_data.warehouse_id, [i.product_id for i in delivery_data.items])

            delivery = Delivery(
                delivery_number=generate_record_number("DEL"),
                customer_name=delivery_data.customer_name,
                delivery_address=delivery_data.delivery_address,
                schedule_date=delivery_data.schedule_date,
                warehouse_id=delivery_data.warehouse_id,
                operation_type=delivery_data.operation_type,
                notes=delivery_data.notes,
                status=DeliveryStatus.DRAFT,
                user_id=created_by
            )
            for item_data in delivery_data.items:
                delivery.items.append(DeliveryItem(product_id=item_data.product_id, quantity=item_data.quantity))
            db.add(delivery)

        logger.info(f"Created delivery {delivery.delivery_number} ({delivery_data.operation_type.value})")
        return DeliveryService.get_delivery(db, delivery.id)

    @staticmethod
    def _complete(db: Session, delivery: Delivery, performed_by: Optional[UUID]) -> None:
        """Mark DONE and move stock for every item; caller holds the transaction"""
        label = f"Delivery {delivery.delivery_number}"
        ensure_transition(label, delivery.status, DeliveryStatus.DONE)

        delivery_id = delivery.id
        number = delivery.delivery_number
        operation = delivery.operation_type
        items = list(delivery.items)

        if operation == DeliveryOperation.DECREMENT:
            shortages = StockService.find_shortages(items)
            if shortages:
                logger.warning(f"{label} rejected: {len(shortages)} items short")
                raise InsufficientStock("Insufficient stock for delivery validation", details=shortages)

        sign = 1 if operation == DeliveryOperation.INCREMENT else -1
        apply_transition(db, delivery, DeliveryStatus.DONE, label, performed_by, delivered_at=utcnow())
        for item in items:
            StockService.adjust_stock(
                db, item.product, sign * item.quantity, MovementType.DELIVERY,
                reference_id=delivery_id,
                user_id=performed_by,
                notes=f"Delivery {number} validated ({operation.value})"
            )
        logger.info(f"{label} validated: {len(items)} items, {operation.value}")

    @staticmethod
    def validate_delivery(db: Session, delivery_id: UUID, performed_by: Optional[UUID] = None) -> Delivery:
        """
        Complete a delivery.

        Only DRAFT deliveries can be validated. For DECREMENT deliveries every
        item must be covered by current stock; if any is not, nothing changes
        and all shortfalls are reported.
        """
        with atomic(db):
            delivery = DeliveryService.get_delivery(db, delivery_id)
            # READY deliveries are completed through a status edit
            if delivery.status == DeliveryStatus.READY:
                logger.warning(f"Delivery {delivery.delivery_number} is READY, validate refused")
                raise InvalidTransition("Only DRAFT deliveries can be validated")
            DeliveryService._complete(db, delivery, performed_by)

        return DeliveryService.get_delivery(db, delivery_id)

    @staticmethod
    def update_delivery(
        db: Session,
        delivery_id: UUID,
        delivery_data: DeliveryUpdate,
        performed_by: Optional[UUID] = None
    ) -> Delivery:
        """Edit header fields and/or move status; DONE goes through validation"""
        with atomic(db):
            delivery = DeliveryService.get_delivery(db, delivery_id)
            label = f"Delivery {delivery.delivery_number}"
            update_data = delivery_data.model_dump(exclude_unset=True)
            new_status = update_data.pop("status", None)

            if is_terminal(delivery.status):
                raise InvalidTransition(f"{label} is already {delivery.status.value} and cannot be changed")

            if update_data.get("warehouse_id") and update_data["warehouse_id"] != delivery.warehouse_id:
                if not db.query(Warehouse).filter(Warehouse.id == update_data["warehouse_id"]).first():
                    raise NotFound("Warehouse", update_data["warehouse_id"])
                DeliveryService._check_items(db, update_data["warehouse_id"], [i.product_id for i in delivery.items])

            header = {
                field: value for field, value in update_data.items()
                if not (value is None and field in ("warehouse_id", "operation_type"))
            }
            if header:
                guarded_update(db, delivery, label, **header)

            if new_status is not None and new_status != delivery.status:
                if new_status == DeliveryStatus.DONE:
                    DeliveryService._complete(db, delivery, performed_by)
                else:
                    apply_transition(db, delivery, new_status, label, performed_by)
                    logger.info(f"{label} moved to {new_status.value}")

        return DeliveryService.get_delivery(db, delivery_id)

    @staticmethod
    def delete_delivery(db: Session, delivery_id: UUID) -> None:
        with atomic(db):
            delivery = DeliveryService.get_delivery(db, delivery_id)
            if delivery.status != DeliveryStatus.DRAFT:
                raise InvalidTransition("Only DRAFT deliveries can be deleted")
            db.delete(delivery)
        logger.info(f"Deleted delivery {delivery_id}")
