"""
Warehouse, Location & Category Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

class WarehouseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    short_code: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = None
    is_active: bool = True

class WarehouseUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    short_code: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = None
    is_active: Optional[bool] = None

class WarehouseResponse(BaseModel):
    id: UUID
    name: str
    short_code: Optional[str]
    location: Optional[str]
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True

class WarehouseRef(BaseModel):
    id: UUID
    name: str
    location: Optional[str] = None

    class Config:
        from_attributes = True

class LocationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    short_code: Optional[str] = Field(None, max_length=20)
    warehouse_id: UUID

class LocationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    short_code: Optional[str] = Field(None, max_length=20)
    warehouse_id: Optional[UUID] = None

class LocationResponse(BaseModel):
    id: UUID
    name: str
    short_code: Optional[str]
    warehouse_id: UUID
    warehouse: WarehouseRef

    class Config:
        from_attributes = True

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None

class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None

class CategoryResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str]

    class Config:
        from_attributes = True
