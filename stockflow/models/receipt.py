"""
Receipt Models - inbound stock
"""
import enum

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Enum as SQLEnum, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from stockflow.core import Base
from .base import UUIDMixin, TimestampMixin, VersionMixin


class ReceiptStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    READY = "READY"
    DONE = "DONE"
    CANCELED = "CANCELED"


class Receipt(Base, UUIDMixin, TimestampMixin, VersionMixin):
    __tablename__ = "receipt"

    receipt_number = Column(String(50), unique=True, nullable=False)  # RCP-1718000000000-1234
    supplier_name = Column(String(200), nullable=False)
    warehouse_id = Column(UUID(as_uuid=True), ForeignKey("warehouse.id"), nullable=False, index=True)
    status = Column(SQLEnum(ReceiptStatus, name="receipt_status"), nullable=False, default=ReceiptStatus.DRAFT, index=True)
    notes = Column(Text)

    user_id = Column(UUID(as_uuid=True), ForeignKey("app_user.id"))
    validated_at = Column(DateTime(timezone=True))

    # Relationships
    warehouse = relationship("Warehouse")
    user = relationship("AppUser")
    items = relationship("ReceiptItem", back_populates="receipt", cascade="all, delete-orphan")


class ReceiptItem(Base, UUIDMixin):
    __tablename__ = "receipt_item"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_receipt_item_quantity"),)

    receipt_id = Column(UUID(as_uuid=True), ForeignKey("receipt.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(UUID(as_uuid=True), ForeignKey("product.id"), nullable=False)
    quantity = Column(Integer, nullable=False)

    receipt = relationship("Receipt", back_populates="items")
    product = relationship("Product")
