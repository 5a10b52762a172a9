"""
Receipt Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from stockflow.models.receipt import ReceiptStatus
from .product import ProductSummary
from .warehouse import WarehouseRef

class ReceiptItemCreate(BaseModel):
    product_id: UUID
    quantity: int = Field(..., ge=1)

class ReceiptCreate(BaseModel):
    supplier_name: str = Field(..., min_length=2, max_length=200)
    warehouse_id: UUID
    notes: Optional[str] = None
    items: List[ReceiptItemCreate] = Field(..., min_length=1)

class ReceiptItemResponse(BaseModel):
    id: UUID
    product_id: UUID
    quantity: int
    product: ProductSummary

    class Config:
        from_attributes = True

class ReceiptResponse(BaseModel):
    id: UUID
    receipt_number: str
    supplier_name: str
    warehouse_id: UUID
    status: ReceiptStatus
    notes: Optional[str]
    user_id: Optional[UUID]
    validated_at: Optional[datetime]
    version: int
    created_at: datetime
    warehouse: WarehouseRef
    items: List[ReceiptItemResponse] = []

    class Config:
        from_attributes = True

class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int

class ReceiptList(BaseModel):
    receipts: List[ReceiptResponse]
    pagination: Pagination
