"""
Delivery Models - outbound (or returned) stock
"""
import enum

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Enum as SQLEnum, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from stockflow.core import Base
from .base import UUIDMixin, TimestampMixin, VersionMixin


class DeliveryStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    READY = "READY"
    DONE = "DONE"
    CANCELED = "CANCELED"


class DeliveryOperation(str, enum.Enum):
    DECREMENT = "DECREMENT"  # goods leave the warehouse
    INCREMENT = "INCREMENT"  # goods come back (returns)


class Delivery(Base, UUIDMixin, TimestampMixin, VersionMixin):
    __tablename__ = "delivery"

    delivery_number = Column(String(50), unique=True, nullable=False)  # DEL-1718000000000-1234
    customer_name = Column(String(200))
    delivery_address = Column(Text)
    schedule_date = Column(DateTime(timezone=True))
    warehouse_id = Column(UUID(as_uuid=True), ForeignKey("warehouse.id"), nullable=False, index=True)
    operation_type = Column(SQLEnum(DeliveryOperation, name="delivery_operation"), nullable=False, default=DeliveryOperation.DECREMENT)
    status = Column(SQLEnum(DeliveryStatus, name="delivery_status"), nullable=False, default=DeliveryStatus.DRAFT, index=True)
    notes = Column(Text)

    user_id = Column(UUID(as_uuid=True), ForeignKey("app_user.id"))
    delivered_at = Column(DateTime(timezone=True))

    # Relationships
    warehouse = relationship("Warehouse")
    user = relationship("AppUser")
    items = relationship("DeliveryItem", back_populates="delivery", cascade="all, delete-orphan")


class DeliveryItem(Base, UUIDMixin):
    __tablename__ = "delivery_item"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_delivery_item_quantity"),)

    delivery_id = Column(UUID(as_uuid=True), ForeignKey("delivery.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(UUID(as_uuid=True), ForeignKey("product.id"), nullable=False)
    quantity = Column(Integer, nullable=False)

    delivery = relationship("Delivery", back_populates="items")
    product = relationship("Product")
