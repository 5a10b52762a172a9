"""
Master Tables: Warehouse, Location, Category, AppUser
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from stockflow.core import Base
from .base import UUIDMixin, TimestampMixin

class Warehouse(Base, UUIDMixin, TimestampMixin):
    """Warehouse / physical site"""
    __tablename__ = "warehouse"

    name = Column(String(200), unique=True, nullable=False)
    short_code = Column(String(20))
    location = Column(Text)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    locations = relationship("Location", back_populates="warehouse", cascade="all, delete-orphan")
    products = relationship("Product", back_populates="warehouse")

class Location(Base, UUIDMixin, TimestampMixin):
    """Sub-location inside a warehouse (rack, zone, shelf)"""
    __tablename__ = "location"

    warehouse_id = Column(UUID(as_uuid=True), ForeignKey("warehouse.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    short_code = Column(String(20))

    # Relationships
    warehouse = relationship("Warehouse", back_populates="locations")

class Category(Base, UUIDMixin, TimestampMixin):
    """Product Category"""
    __tablename__ = "category"

    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text)

    # Relationships
    products = relationship("Product", back_populates="category")

class AppUser(Base, UUIDMixin, TimestampMixin):
    """Application User"""
    __tablename__ = "app_user"

    email = Column(String(200), unique=True, nullable=False)
    name = Column(String(200))
    hashed_password = Column(String(255))
    role = Column(String(20), nullable=False, default="staff")  # admin, staff
    is_active = Column(Boolean, default=True, nullable=False)

    # Password reset (OTP)
    reset_token = Column(String(10))
    reset_token_expiry = Column(DateTime(timezone=True))

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
