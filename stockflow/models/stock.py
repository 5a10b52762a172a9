"""
Stock Movement Ledger
"""
import enum
import logging

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Enum as SQLEnum, event
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from stockflow.core import Base
from stockflow.core.exceptions import LedgerImmutable
from .base import UUIDMixin

logger = logging.getLogger(__name__)


class MovementType(str, enum.Enum):
    RECEIPT = "RECEIPT"
    DELIVERY = "DELIVERY"
    TRANSFER = "TRANSFER"
    ADJUSTMENT = "ADJUSTMENT"  # manual correction through the product endpoint


class StockMovement(Base, UUIDMixin):
    """Append-only record of one signed change to a product's stock"""
    __tablename__ = "stock_movement"

    product_id = Column(UUID(as_uuid=True), ForeignKey("product.id"), nullable=False, index=True)
    warehouse_id = Column(UUID(as_uuid=True), ForeignKey("warehouse.id"), nullable=False, index=True)

    # Movement info
    type = Column(SQLEnum(MovementType, name="movement_type"), nullable=False)
    quantity = Column(Integer, nullable=False)  # Positive = increase, negative = decrease

    # Reference: receipt / delivery / transfer id (product id for adjustments)
    reference_id = Column(UUID(as_uuid=True), nullable=False, index=True)

    # Metadata
    notes = Column(Text)
    user_id = Column(UUID(as_uuid=True), ForeignKey("app_user.id"))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    # Relationships
    product = relationship("Product", back_populates="movements")
    warehouse = relationship("Warehouse")


@event.listens_for(StockMovement, "before_update")
def _block_movement_update(mapper, connection, target):
    logger.error(f"Blocked update of stock movement {target.id}")
    raise LedgerImmutable(target.id, "update")


@event.listens_for(StockMovement, "before_delete")
def _block_movement_delete(mapper, connection, target):
    logger.error(f"Blocked delete of stock movement {target.id}")
    raise LedgerImmutable(target.id, "delete")
