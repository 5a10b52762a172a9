"""
API Router - JSON Endpoints
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, List
from uuid import UUID
from datetime import datetime

from stockflow.core import get_db
from stockflow.models import AppUser, MovementType, ReceiptStatus, DeliveryStatus
from stockflow.schemas import StockRecord, StockMovementResponse, DashboardKPIs, DashboardFilters
from stockflow.services import StockService, DashboardService

# Import sub-routers
from .auth import router as auth_router, get_current_active_user
from .products import router as products_router
from .warehouses import router as warehouses_router, locations_router, categories_router
from .receipts import router as receipts_router
from .deliveries import router as deliveries_router
from .transfers import router as transfers_router

api_router = APIRouter(tags=["API"])

# Include sub-routers
api_router.include_router(auth_router)
api_router.include_router(products_router)
api_router.include_router(warehouses_router)
api_router.include_router(locations_router)
api_router.include_router(categories_router)
api_router.include_router(receipts_router)
api_router.include_router(deliveries_router)
api_router.include_router(transfers_router)

# ===================== HEALTH & STATUS =====================

@api_router.get("/status")
async def api_status():
    return {"status": "ok", "version": "1.0.0", "timestamp": datetime.now().isoformat()}

# ===================== STOCK =====================

@api_router.get("/stock", response_model=List[StockRecord])
def stock_overview(
    search: Optional[str] = Query(None),
    category_id: Optional[UUID] = Query(None),
    warehouse_id: Optional[UUID] = Query(None),
    status: Optional[str] = Query(None, pattern="^(all|out|low|ok)$"),
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return StockService.get_stock_records(db, search, category_id, warehouse_id, status)


@api_router.get("/stock/movements", response_model=List[StockMovementResponse])
def stock_movements(
    product_id: Optional[UUID] = Query(None),
    warehouse_id: Optional[UUID] = Query(None),
    movement_type: Optional[MovementType] = Query(None, alias="type"),
    reference_id: Optional[UUID] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return StockService.get_movements(db, product_id, warehouse_id, movement_type, reference_id, limit)

# ===================== DASHBOARD =====================

@api_router.get("/dashboard/kpis", response_model=DashboardKPIs)
def dashboard_kpis(
    warehouse_id: Optional[UUID] = Query(None),
    category_id: Optional[UUID] = Query(None),
    receipt_status: Optional[ReceiptStatus] = Query(None),
    delivery_status: Optional[DeliveryStatus] = Query(None),
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return DashboardService.get_kpis(db, warehouse_id, category_id, receipt_status, delivery_status)


@api_router.get("/dashboard/filters", response_model=DashboardFilters)
def dashboard_filters(
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return DashboardService.get_filters(db)
