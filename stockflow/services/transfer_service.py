"""
Transfer Service - moving stock between warehouses
"""
import logging
from sqlalchemy.orm import Session, selectinload, joinedload
from sqlalchemy import or_
from typing import List, Optional, Tuple
from uuid import UUID

from stockflow.core import atomic
from stockflow.core.exceptions import NotFound, ValidationFailed, InsufficientStock, InvalidTransition
from stockflow.models import (
    Transfer, TransferItem, TransferStatus, Product, Warehouse, MovementType
)
from stockflow.schemas.transfer import TransferCreate
from .stock_service import StockService
from .workflow import apply_transition, ensure_transition, generate_record_number, utcnow

logger = logging.getLogger(__name__)

class TransferService:
    """Transfer business logic: DRAFT -> [IN_TRANSIT] -> COMPLETED"""

    @staticmethod
    def get_transfers(
        db: Session,
        status: Optional[TransferStatus] = None,
        from_warehouse_id: Optional[UUID] = None,
        to_warehouse_id: Optional[UUID] = None,
        search: Optional[str] = None
    ) -> List[Transfer]:
        query = db.query(Transfer).options(
            joinedload(Transfer.from_warehouse),
            joinedload(Transfer.to_warehouse),
            selectinload(Transfer.items).joinedload(TransferItem.product)
        )

        if status:
            query = query.filter(Transfer.status == status)

        if from_warehouse_id:
            query = query.filter(Transfer.from_warehouse_id == from_warehouse_id)

        if to_warehouse_id:
            query = query.filter(Transfer.to_warehouse_id == to_warehouse_id)

        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(
                    Transfer.transfer_number.ilike(search_term),
                    Transfer.notes.ilike(search_term)
                )
            )

        return query.order_by(Transfer.created_at.desc()).all()

    @staticmethod
    def get_transfer(db: Session, transfer_id: UUID) -> Transfer:
        transfer = db.query(Transfer).options(
            joinedload(Transfer.from_warehouse),
            joinedload(Transfer.to_warehouse),
            selectinload(Transfer.items).joinedload(TransferItem.product)
        ).filter(Transfer.id == transfer_id).first()
        if not transfer:
            raise NotFound("Transfer", transfer_id)
        return transfer

    @staticmethod
    def _source_problems(items, from_warehouse_id: UUID) -> Tuple[List[str], List[str]]:
        """(wrong-warehouse messages, shortage messages) for a set of items"""
        misplaced = [
            f"Product {item.product.sku} is not in the source warehouse"
            for item in items if item.product.warehouse_id != from_warehouse_id
        ]
        in_place = [item for item in items if item.product.warehouse_id == from_warehouse_id]
        return misplaced, StockService.find_shortages(in_place)

    @staticmethod
    def create_transfer(db: Session, transfer_data: TransferCreate, created_by: Optional[UUID] = None) -> Transfer:
        """Create a DRAFT transfer after checking products against the source warehouse"""
        with atomic(db):
            if not db.query(Warehouse).filter(Warehouse.id == transfer_data.from_warehouse_id).first():
                raise NotFound("Source warehouse", transfer_data.from_warehouse_id)
            if not db.query(Warehouse).filter(Warehouse.id == transfer_data.to_warehouse_id).first():
                raise NotFound("Destination warehouse", transfer_data.to_warehouse_id)

            transfer = Transfer(
                transfer_number=generate_record_number("TRF"),
                from_warehouse_id=transfer_data.from_warehouse_id,
                to_warehouse_id=transfer_data.to_warehouse_id,
                notes=transfer_data.notes,
                status=TransferStatus.DRAFT,
                user_id=created_by
            )

            errors = []
            for item_data in transfer_data.items:
                product = db.query(Product).filter(Product.id == item_data.product_id).first()
                if not product:
                    errors.append(f"Product with ID {item_data.product_id} not found")
                    continue
                transfer.items.append(TransferItem(product_id=product.id, product=product, quantity=item_data.quantity))

            misplaced, shortages = TransferService._source_problems(transfer.items, transfer_data.from_warehouse_id)
            errors.extend(misplaced + shortages)
            if errors:
                transfer.items.clear()
                raise ValidationFailed("Stock validation failed", details=errors)

            db.add(transfer)

        logger.info(f"Created transfer {transfer.transfer_number} with {len(transfer_data.items)} items")
        return TransferService.get_transfer(db, transfer.id)

    @staticmethod
    def _destination_product(db: Session, source: Product, to_warehouse_id: UUID) -> Tuple[Product, bool]:
        """
        Find the destination product for ``source`` by SKU, or create it.

        A created product copies the source's descriptive fields and starts at
        zero stock. Returns (product, created).
        """
        existing = db.query(Product).filter(
            Product.sku == source.sku,
            Product.warehouse_id == to_warehouse_id
        ).first()
        if existing:
            return existing, False

        product = Product(
            sku=source.sku,
            name=source.name,
            description=source.description,
            category_id=source.category_id,
            warehouse_id=to_warehouse_id,
            unit_of_measure=source.unit_of_measure,
            min_stock_level=source.min_stock_level,
            stock=0
        )
        db.add(product)
        db.flush()
        return product, True

    @staticmethod
    def _complete(db: Session, transfer: Transfer, performed_by: Optional[UUID]) -> None:
        """
        Move every item from the source to the destination warehouse.

        Each item writes a negative TRANSFER movement on the source product and a
        positive one on the matching (or newly created) destination product.
        Caller holds the transaction.
        """
        label = f"Transfer {transfer.transfer_number}"
        ensure_transition(label, transfer.status, TransferStatus.COMPLETED)

        transfer_id = transfer.id
        number = transfer.transfer_number
        from_id = transfer.from_warehouse_id
        to_id = transfer.to_warehouse_id
        from_name = transfer.from_warehouse.name
        to_name = transfer.to_warehouse.name
        items = list(transfer.items)

        misplaced, shortages = TransferService._source_problems(items, from_id)
        if misplaced:
            raise ValidationFailed("Transfer items are not in the source warehouse", details=misplaced + shortages)
        if shortages:
            logger.warning(f"{label} rejected: {len(shortages)} items short")
            raise InsufficientStock("Insufficient stock for transfer completion", details=shortages)

        apply_transition(db, transfer, TransferStatus.COMPLETED, label, performed_by, completed_at=utcnow())

        created = 0
        for item in items:
            source = item.product
            StockService.adjust_stock(
                db, source, -item.quantity, MovementType.TRANSFER,
                reference_id=transfer_id,
                user_id=performed_by,
                notes=f"Transfer {number} - Out to {to_name}"
            )

            destination, is_new = TransferService._destination_product(db, source, to_id)
            created += is_new
            StockService.adjust_stock(
                db, destination, item.quantity, MovementType.TRANSFER,
                reference_id=transfer_id,
                user_id=performed_by,
                notes=f"Transfer {number} - In from {from_name}" + (" (new product)" if is_new else "")
            )

        logger.info(f"{label} completed: {len(items)} items, {created} new destination products")

    @staticmethod
    def complete_transfer(db: Session, transfer_id: UUID, performed_by: Optional[UUID] = None) -> Transfer:
        with atomic(db):
            transfer = TransferService.get_transfer(db, transfer_id)
            TransferService._complete(db, transfer, performed_by)

        return TransferService.get_transfer(db, transfer_id)

    @staticmethod
    def update_status(
        db: Session,
        transfer_id: UUID,
        new_status: TransferStatus,
        performed_by: Optional[UUID] = None
    ) -> Transfer:
        """Status edit; COMPLETED runs the full completion"""
        with atomic(db):
            transfer = TransferService.get_transfer(db, transfer_id)
            if new_status == TransferStatus.COMPLETED:
                TransferService._complete(db, transfer, performed_by)
            else:
                label = f"Transfer {transfer.transfer_number}"
                apply_transition(db, transfer, new_status, label, performed_by)
                logger.info(f"{label} moved to {new_status.value}")

        return TransferService.get_transfer(db, transfer_id)

    @staticmethod
    def delete_transfer(db: Session, transfer_id: UUID) -> None:
        with atomic(db):
            transfer = TransferService.get_transfer(db, transfer_id)
            if transfer.status != TransferStatus.DRAFT:
                raise InvalidTransition("Only DRAFT transfers can be deleted")
            db.delete(transfer)
        logger.info(f"Deleted transfer {transfer_id}")
