"""
Dashboard Schemas
"""
from pydantic import BaseModel
from typing import List

from .warehouse import WarehouseRef, CategoryResponse

class DashboardKPIs(BaseModel):
    total_products: int
    low_stock_items: int
    out_of_stock_items: int
    pending_receipts: int
    pending_deliveries: int
    internal_transfers: int

class DashboardFilters(BaseModel):
    warehouses: List[WarehouseRef]
    categories: List[CategoryResponse]
    receipt_statuses: List[str]
    delivery_statuses: List[str]
