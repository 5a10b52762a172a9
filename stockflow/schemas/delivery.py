"""
Delivery Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from stockflow.models.delivery import DeliveryStatus, DeliveryOperation
from .product import ProductSummary
from .warehouse import WarehouseRef

class DeliveryItemCreate(BaseModel):
    product_id: UUID
    quantity: int = Field(..., gt=0)

class DeliveryCreate(BaseModel):
    warehouse_id: UUID
    customer_name: Optional[str] = Field(None, max_length=200)
    delivery_address: Optional[str] = None
    schedule_date: Optional[datetime] = None
    operation_type: DeliveryOperation = DeliveryOperation.DECREMENT
    notes: Optional[str] = Field(None, max_length=500)
    items: List[DeliveryItemCreate] = Field(..., min_length=1)

class DeliveryUpdate(BaseModel):
    status: Optional[DeliveryStatus] = None
    warehouse_id: Optional[UUID] = None
    customer_name: Optional[str] = Field(None, max_length=200)
    delivery_address: Optional[str] = None
    schedule_date: Optional[datetime] = None
    operation_type: Optional[DeliveryOperation] = None
    notes: Optional[str] = Field(None, max_length=500)

class DeliveryItemResponse(BaseModel):
    id: UUID
    product_id: UUID
    quantity: int
    product: ProductSummary

    class Config:
        from_attributes = True

class DeliveryResponse(BaseModel):
    id: UUID
    delivery_number: str
    customer_name: Optional[str]
    delivery_address: Optional[str]
    schedule_date: Optional[datetime]
    warehouse_id: UUID
    operation_type: DeliveryOperation
    status: DeliveryStatus
    notes: Optional[str]
    user_id: Optional[UUID]
    delivered_at: Optional[datetime]
    version: int
    created_at: datetime
    warehouse: WarehouseRef
    items: List[DeliveryItemResponse] = []

    class Config:
        from_attributes = True
