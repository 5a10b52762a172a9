"""
Transfers API - stock moves between warehouses
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from stockflow.core import get_db
from stockflow.models import AppUser, TransferStatus
from stockflow.schemas import TransferCreate, TransferStatusUpdate, TransferResponse
from stockflow.services import TransferService
from .auth import get_current_active_user

router = APIRouter(prefix="/transfers", tags=["transfers"])


@router.get("", response_model=List[TransferResponse])
def list_transfers(
    status_filter: Optional[TransferStatus] = Query(None, alias="status"),
    from_warehouse_id: Optional[UUID] = Query(None),
    to_warehouse_id: Optional[UUID] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return TransferService.get_transfers(db, status_filter, from_warehouse_id, to_warehouse_id, search)


@router.get("/{transfer_id}", response_model=TransferResponse)
def get_transfer(
    transfer_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return TransferService.get_transfer(db, transfer_id)


@router.post("", response_model=TransferResponse, status_code=status.HTTP_201_CREATED)
def create_transfer(
    data: TransferCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return TransferService.create_transfer(db, data, created_by=current_user.id)


@router.put("/{transfer_id}", response_model=TransferResponse)
def update_transfer(
    transfer_id: UUID,
    data: TransferStatusUpdate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    """Status edit; COMPLETED moves the stock"""
    return TransferService.update_status(db, transfer_id, data.status, performed_by=current_user.id)


@router.put("/{transfer_id}/complete", response_model=TransferResponse)
def complete_transfer(
    transfer_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return TransferService.complete_transfer(db, transfer_id, performed_by=current_user.id)


@router.delete("/{transfer_id}")
def delete_transfer(
    transfer_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    TransferService.delete_transfer(db, transfer_id)
    return {"message": "Transfer deleted"}
