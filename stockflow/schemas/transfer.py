"""
Transfer Schemas
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from stockflow.models.transfer import TransferStatus
from .product import ProductSummary
from .warehouse import WarehouseRef

class TransferItemCreate(BaseModel):
    product_id: UUID
    quantity: int = Field(..., gt=0)

class TransferCreate(BaseModel):
    from_warehouse_id: UUID
    to_warehouse_id: UUID
    notes: Optional[str] = Field(None, max_length=500)
    items: List[TransferItemCreate] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_distinct_warehouses(self):
        if self.from_warehouse_id == self.to_warehouse_id:
            raise ValueError("Source and destination warehouses must be different")
        return self

class TransferStatusUpdate(BaseModel):
    status: TransferStatus

class TransferItemResponse(BaseModel):
    id: UUID
    product_id: UUID
    quantity: int
    product: ProductSummary

    class Config:
        from_attributes = True

class TransferResponse(BaseModel):
    id: UUID
    transfer_number: str
    from_warehouse_id: UUID
    to_warehouse_id: UUID
    status: TransferStatus
    notes: Optional[str]
    user_id: Optional[UUID]
    completed_at: Optional[datetime]
    version: int
    created_at: datetime
    from_warehouse: WarehouseRef
    to_warehouse: WarehouseRef
    items: List[TransferItemResponse] = []
    items_count: int
    total_quantity: int

    class Config:
        from_attributes = True
