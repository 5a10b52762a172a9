"""
Transfer Models - stock moved between two warehouses
"""
import enum

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Enum as SQLEnum, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from stockflow.core import Base
from .base import UUIDMixin, TimestampMixin, VersionMixin


class TransferStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    IN_TRANSIT = "IN_TRANSIT"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class Transfer(Base, UUIDMixin, TimestampMixin, VersionMixin):
    __tablename__ = "transfer"
    __table_args__ = (
        CheckConstraint("from_warehouse_id <> to_warehouse_id", name="ck_transfer_distinct_warehouses"),
    )

    transfer_number = Column(String(50), unique=True, nullable=False)  # TRF-1718000000000-1234
    from_warehouse_id = Column(UUID(as_uuid=True), ForeignKey("warehouse.id"), nullable=False, index=True)
    to_warehouse_id = Column(UUID(as_uuid=True), ForeignKey("warehouse.id"), nullable=False, index=True)
    status = Column(SQLEnum(TransferStatus, name="transfer_status"), nullable=False, default=TransferStatus.DRAFT, index=True)
    notes = Column(Text)

    user_id = Column(UUID(as_uuid=True), ForeignKey("app_user.id"))
    completed_at = Column(DateTime(timezone=True))

    # Relationships
    from_warehouse = relationship("Warehouse", foreign_keys=[from_warehouse_id])
    to_warehouse = relationship("Warehouse", foreign_keys=[to_warehouse_id])
    user = relationship("AppUser")
    items = relationship("TransferItem", back_populates="transfer", cascade="all, delete-orphan")

    @property
    def items_count(self) -> int:
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)


class TransferItem(Base, UUIDMixin):
    __tablename__ = "transfer_item"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_transfer_item_quantity"),)

    transfer_id = Column(UUID(as_uuid=True), ForeignKey("transfer.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(UUID(as_uuid=True), ForeignKey("product.id"), nullable=False)
    quantity = Column(Integer, nullable=False)

    transfer = relationship("Transfer", back_populates="items")
    product = relationship("Product")
