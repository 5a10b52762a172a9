"""
Receipts API - inbound stock
"""
import math
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from stockflow.core import get_db
from stockflow.models import AppUser, ReceiptStatus
from stockflow.schemas import ReceiptCreate, ReceiptResponse, ReceiptList
from stockflow.services import ReceiptService
from .auth import get_current_active_user

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.get("", response_model=ReceiptList)
def list_receipts(
    status_filter: Optional[ReceiptStatus] = Query(None, alias="status"),
    warehouse_id: Optional[UUID] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    receipts, total = ReceiptService.get_receipts(db, status_filter, warehouse_id, page, limit)
    return {
        "receipts": receipts,
        "pagination": {
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": math.ceil(total / limit)
        }
    }


@router.get("/{receipt_id}", response_model=ReceiptResponse)
def get_receipt(
    receipt_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return ReceiptService.get_receipt(db, receipt_id)


@router.post("", response_model=ReceiptResponse, status_code=status.HTTP_201_CREATED)
def create_receipt(
    data: ReceiptCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return ReceiptService.create_receipt(db, data, created_by=current_user.id)


@router.put("/{receipt_id}/validate", response_model=ReceiptResponse)
def validate_receipt(
    receipt_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    """DRAFT -> READY, then READY -> DONE (stock is received on the second call)"""
    return ReceiptService.validate_receipt(db, receipt_id, performed_by=current_user.id)


@router.put("/{receipt_id}/cancel", response_model=ReceiptResponse)
def cancel_receipt(
    receipt_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return ReceiptService.cancel_receipt(db, receipt_id, performed_by=current_user.id)
