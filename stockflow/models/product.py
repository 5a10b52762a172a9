"""
Product & SKU Models
"""
from sqlalchemy import Column, String, Integer, ForeignKey, Text, CheckConstraint, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from stockflow.core import Base
from .base import UUIDMixin, TimestampMixin

class Product(Base, UUIDMixin, TimestampMixin):
    """Product Master - one row per SKU per warehouse"""
    __tablename__ = "product"
    __table_args__ = (
        UniqueConstraint("sku", "warehouse_id", name="uq_product_sku_warehouse"),
        CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),
    )

    sku = Column(String(50), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    category_id = Column(UUID(as_uuid=True), ForeignKey("category.id"), nullable=False, index=True)
    warehouse_id = Column(UUID(as_uuid=True), ForeignKey("warehouse.id"), nullable=False, index=True)
    unit_of_measure = Column(String(20), nullable=False, default="pcs")
    stock = Column(Integer, nullable=False, default=0)
    min_stock_level = Column(Integer)  # Low stock alert threshold

    # Relationships
    category = relationship("Category", back_populates="products")
    warehouse = relationship("Warehouse", back_populates="products")
    movements = relationship("StockMovement", back_populates="product")

    @property
    def stock_status(self) -> str:
        if self.stock == 0:
            return "out"
        if self.min_stock_level is not None and self.stock <= self.min_stock_level:
            return "low"
        return "ok"
