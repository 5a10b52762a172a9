"""
Stock Schemas
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from uuid import UUID

from stockflow.models.stock import MovementType

class StockMovementResponse(BaseModel):
    id: UUID
    product_id: UUID
    warehouse_id: UUID
    type: MovementType
    quantity: int
    reference_id: UUID
    notes: Optional[str]
    user_id: Optional[UUID]
    created_at: datetime

    class Config:
        from_attributes = True

class StockRecord(BaseModel):
    product_id: UUID
    sku: str
    product_name: str
    category_name: str
    warehouse_id: UUID
    warehouse_name: str
    warehouse_location: Optional[str]
    stock: int
    min_stock_level: Optional[int]
    unit_of_measure: str
    stock_status: str
