"""
Product Schemas
"""
import re
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from .warehouse import WarehouseRef

SKU_PATTERN = re.compile(r"^[A-Z0-9-]+$")


def _normalize_sku(value: str) -> str:
    value = value.strip().upper()
    if not SKU_PATTERN.match(value):
        raise ValueError("SKU must be alphanumeric with hyphens")
    return value


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    sku: str = Field(..., min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=500)
    category_id: UUID
    warehouse_id: UUID
    unit_of_measure: str = Field(..., min_length=1, max_length=20)
    stock: int = Field(0, ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)

    @field_validator("sku")
    @classmethod
    def normalize_sku(cls, value: str) -> str:
        return _normalize_sku(value)

class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    sku: Optional[str] = Field(None, min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=500)
    category_id: Optional[UUID] = None
    unit_of_measure: Optional[str] = Field(None, min_length=1, max_length=20)
    stock: Optional[int] = Field(None, ge=0)  # ledgered as an ADJUSTMENT
    min_stock_level: Optional[int] = Field(None, ge=0)
    adjustment_note: Optional[str] = Field(None, max_length=500)

    @field_validator("sku")
    @classmethod
    def normalize_sku(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_sku(value) if value is not None else value

class CategoryRef(BaseModel):
    id: UUID
    name: str

    class Config:
        from_attributes = True

class ProductResponse(BaseModel):
    id: UUID
    sku: str
    name: str
    description: Optional[str]
    category_id: UUID
    warehouse_id: UUID
    unit_of_measure: str
    stock: int
    min_stock_level: Optional[int]
    stock_status: str
    category: CategoryRef
    warehouse: WarehouseRef
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ProductSummary(BaseModel):
    """Product fields embedded in workflow item responses"""
    id: UUID
    sku: str
    name: str
    stock: int
    unit_of_measure: str
    warehouse_id: UUID

    class Config:
        from_attributes = True
