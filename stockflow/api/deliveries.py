"""
Deliveries API - outbound stock
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from stockflow.core import get_db
from stockflow.models import AppUser, DeliveryStatus
from stockflow.schemas import DeliveryCreate, DeliveryUpdate, DeliveryResponse
from stockflow.services import DeliveryService
from .auth import get_current_active_user

router = APIRouter(prefix="/deliveries", tags=["deliveries"])


@router.get("", response_model=List[DeliveryResponse])
def list_deliveries(
    status_filter: Optional[DeliveryStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None),
    warehouse_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return DeliveryService.get_deliveries(db, status_filter, search, warehouse_id)


@router.get("/{delivery_id}", response_model=DeliveryResponse)
def get_delivery(
    delivery_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return DeliveryService.get_delivery(db, delivery_id)


@router.post("", response_model=DeliveryResponse, status_code=status.HTTP_201_CREATED)
def create_delivery(
    data: DeliveryCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return DeliveryService.create_delivery(db, data, created_by=current_user.id)


@router.patch("/{delivery_id}", response_model=DeliveryResponse)
@router.put("/{delivery_id}", response_model=DeliveryResponse)
def update_delivery(
    delivery_id: UUID,
    data: DeliveryUpdate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    """Edit header fields or move status; status DONE validates the delivery"""
    return DeliveryService.update_delivery(db, delivery_id, data, performed_by=current_user.id)


@router.put("/{delivery_id}/validate", response_model=DeliveryResponse)
def validate_delivery(
    delivery_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return DeliveryService.validate_delivery(db, delivery_id, performed_by=current_user.id)


@router.delete("/{delivery_id}")
def delete_delivery(
    delivery_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    DeliveryService.delete_delivery(db, delivery_id)
    return {"message": "Delivery deleted"}
