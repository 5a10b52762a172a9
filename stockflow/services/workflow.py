"""
Workflow Status Transitions - shared by receipts, deliveries and transfers

Every workflow moves DRAFT -> [READY | IN_TRANSIT] -> {DONE | COMPLETED},
with CANCELED reachable from any non-terminal state. Terminal states have no
outgoing transitions.
"""
import logging
import random
import time
from datetime import datetime, timezone
from typing import Dict, FrozenSet, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from stockflow.core.exceptions import InvalidTransition, ConcurrencyConflict
from stockflow.models import AuditLog, ReceiptStatus, DeliveryStatus, TransferStatus

logger = logging.getLogger(__name__)

RECEIPT_TRANSITIONS: Dict[ReceiptStatus, FrozenSet[ReceiptStatus]] = {
    ReceiptStatus.DRAFT: frozenset({ReceiptStatus.READY, ReceiptStatus.CANCELED}),
    ReceiptStatus.READY: frozenset({ReceiptStatus.DONE, ReceiptStatus.CANCELED}),
    ReceiptStatus.DONE: frozenset(),
    ReceiptStatus.CANCELED: frozenset(),
}

DELIVERY_TRANSITIONS: Dict[DeliveryStatus, FrozenSet[DeliveryStatus]] = {
    DeliveryStatus.DRAFT: frozenset({DeliveryStatus.READY, DeliveryStatus.DONE, DeliveryStatus.CANCELED}),
    DeliveryStatus.READY: frozenset({DeliveryStatus.DONE, DeliveryStatus.CANCELED}),
    DeliveryStatus.DONE: frozenset(),
    DeliveryStatus.CANCELED: frozenset(),
}

TRANSFER_TRANSITIONS: Dict[TransferStatus, FrozenSet[TransferStatus]] = {
    TransferStatus.DRAFT: frozenset({TransferStatus.IN_TRANSIT, TransferStatus.COMPLETED, TransferStatus.CANCELED}),
    TransferStatus.IN_TRANSIT: frozenset({TransferStatus.COMPLETED, TransferStatus.CANCELED}),
    TransferStatus.COMPLETED: frozenset(),
    TransferStatus.CANCELED: frozenset(),
}

TRANSITIONS = {
    ReceiptStatus: RECEIPT_TRANSITIONS,
    DeliveryStatus: DELIVERY_TRANSITIONS,
    TransferStatus: TRANSFER_TRANSITIONS,
}


def generate_record_number(prefix: str) -> str:
    """RCP-1718000000000-1234 style document number"""
    return f"{prefix}-{int(time.time() * 1000)}-{random.randint(1000, 9999)}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def allowed_transitions(current) -> FrozenSet:
    return TRANSITIONS[type(current)][current]


def is_terminal(status) -> bool:
    return not allowed_transitions(status)


def can_transition(current, target) -> bool:
    return target in allowed_transitions(current)


def ensure_transition(label: str, current, target) -> None:
    """Raise InvalidTransition unless current -> target is in the table"""
    if can_transition(current, target):
        return
    if is_terminal(current):
        message = f"{label} is already {current.value} and cannot be changed"
    else:
        message = f"Cannot move {label} from {current.value} to {target.value}"
    logger.warning(message)
    raise InvalidTransition(message)


def guarded_update(db: Session, record, label: str, **values) -> None:
    """
    Write ``values`` to a workflow record and bump its version.

    The UPDATE only matches while the row still has the status and version
    that were read into ``record``; otherwise ConcurrencyConflict is raised.
    ``record`` is expired afterwards so the next access reloads it.
    """
    model = type(record)
    updated = db.query(model).filter(
        model.id == record.id,
        model.status == record.status,
        model.version == record.version,
    ).update(
        {model.version: model.version + 1, **{getattr(model, k): v for k, v in values.items()}},
        synchronize_session=False
    )
    if updated != 1:
        logger.warning(f"{label} changed concurrently, update refused")
        raise ConcurrencyConflict(f"{label} was modified by another request, reload and try again")
    db.expire(record)


def apply_transition(
    db: Session,
    record,
    target,
    label: str,
    performed_by: Optional[UUID] = None,
    **values
) -> None:
    """
    Move a workflow record to ``target`` with a guarded UPDATE.

    The row is only updated if it still has the status and version that were
    read; anything else means another request got there first. The status
    change is written to the audit log in the same transaction.
    """
    current = record.status
    ensure_transition(label, current, target)

    record_id, version = record.id, record.version
    guarded_update(db, record, label, status=target, **values)

    db.add(AuditLog(
        table_name=type(record).__tablename__,
        record_id=str(record_id),
        action="STATUS_CHANGE",
        performed_by=performed_by,
        before_data={"status": current.value, "version": version},
        after_data={"status": target.value, "version": version + 1},
    ))
