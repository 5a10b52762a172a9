"""
Products API
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from stockflow.core import get_db
from stockflow.models import AppUser
from stockflow.schemas import ProductCreate, ProductUpdate, ProductResponse
from stockflow.services import ProductService
from .auth import get_current_active_user

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductResponse])
def list_products(
    search: Optional[str] = Query(None),
    category_id: Optional[UUID] = Query(None),
    warehouse_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return ProductService.get_products(db, search, category_id, warehouse_id)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return ProductService.get_product_by_id(db, product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    data: ProductCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return ProductService.create_product(db, data, created_by=current_user.id)


@router.patch("/{product_id}", response_model=ProductResponse)
@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: UUID,
    data: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    """Update product; a changed stock value is recorded as an ADJUSTMENT movement"""
    return ProductService.update_product(db, product_id, data, updated_by=current_user.id)


@router.delete("/{product_id}")
def delete_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    ProductService.delete_product(db, product_id)
    return {"message": "Product deleted"}
