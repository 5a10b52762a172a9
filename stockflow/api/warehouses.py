"""
Warehouses, Locations and Categories API
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from stockflow.core import get_db
from stockflow.models import AppUser
from stockflow.schemas import (
    WarehouseCreate, WarehouseUpdate, WarehouseResponse,
    LocationCreate, LocationUpdate, LocationResponse,
    CategoryCreate, CategoryUpdate, CategoryResponse,
)
from stockflow.services import WarehouseService
from .auth import get_current_active_user, require_admin

router = APIRouter(prefix="/warehouses", tags=["warehouses"])
locations_router = APIRouter(prefix="/locations", tags=["locations"])
categories_router = APIRouter(prefix="/categories", tags=["categories"])

# ============== Warehouses Endpoints ==============

@router.get("", response_model=List[WarehouseResponse])
def list_warehouses(
    active_only: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return WarehouseService.get_warehouses(db, active_only)


@router.get("/{warehouse_id}", response_model=WarehouseResponse)
def get_warehouse(
    warehouse_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return WarehouseService.get_warehouse(db, warehouse_id)


@router.post("", response_model=WarehouseResponse, status_code=status.HTTP_201_CREATED)
def create_warehouse(
    data: WarehouseCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_admin)
):
    return WarehouseService.create_warehouse(db, data)


@router.put("/{warehouse_id}", response_model=WarehouseResponse)
def update_warehouse(
    warehouse_id: UUID,
    data: WarehouseUpdate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_admin)
):
    return WarehouseService.update_warehouse(db, warehouse_id, data)


@router.delete("/{warehouse_id}")
def delete_warehouse(
    warehouse_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_admin)
):
    WarehouseService.delete_warehouse(db, warehouse_id)
    return {"message": "Warehouse deleted"}

# ============== Locations Endpoints ==============

@locations_router.get("", response_model=List[LocationResponse])
def list_locations(
    warehouse_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return WarehouseService.get_locations(db, warehouse_id)


@locations_router.get("/{location_id}", response_model=LocationResponse)
def get_location(
    location_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return WarehouseService.get_location(db, location_id)


@locations_router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
def create_location(
    data: LocationCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return WarehouseService.create_location(db, data)


@locations_router.put("/{location_id}", response_model=LocationResponse)
def update_location(
    location_id: UUID,
    data: LocationUpdate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return WarehouseService.update_location(db, location_id, data)


@locations_router.delete("/{location_id}")
def delete_location(
    location_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    WarehouseService.delete_location(db, location_id)
    return {"message": "Location deleted"}

# ============== Categories Endpoints ==============

@categories_router.get("", response_model=List[CategoryResponse])
def list_categories(
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return WarehouseService.get_categories(db)


@categories_router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    data: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_admin)
):
    return WarehouseService.create_category(db, data)


@categories_router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_admin)
):
    return WarehouseService.update_category(db, category_id, data)


@categories_router.delete("/{category_id}")
def delete_category(
    category_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_admin)
):
    WarehouseService.delete_category(db, category_id)
    return {"message": "Category deleted"}
