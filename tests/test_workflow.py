"""
Transition tables and the guarded status update.
"""
import re

import pytest

from stockflow.core.exceptions import InvalidTransition, ConcurrencyConflict
from stockflow.models import (
    AuditLog, Delivery, DeliveryStatus, ReceiptStatus, TransferStatus
)
from stockflow.services.workflow import (
    TRANSITIONS, allowed_transitions, apply_transition, can_transition,
    ensure_transition, generate_record_number, is_terminal
)

TERMINAL = [
    ReceiptStatus.DONE, ReceiptStatus.CANCELED,
    DeliveryStatus.DONE, DeliveryStatus.CANCELED,
    TransferStatus.COMPLETED, TransferStatus.CANCELED,
]


def test_every_status_has_a_row():
    for status_enum, table in TRANSITIONS.items():
        assert set(table) == set(status_enum)


@pytest.mark.parametrize("status", TERMINAL)
def test_terminal_states_have_no_exits(status):
    assert is_terminal(status)
    assert allowed_transitions(status) == frozenset()


def test_canceled_reachable_from_every_open_state():
    for table in TRANSITIONS.values():
        for status, targets in table.items():
            if targets:
                assert any(t.value == "CANCELED" for t in targets), status


def test_receipt_must_pass_through_ready():
    assert not can_transition(ReceiptStatus.DRAFT, ReceiptStatus.DONE)
    assert can_transition(ReceiptStatus.DRAFT, ReceiptStatus.READY)
    assert can_transition(ReceiptStatus.READY, ReceiptStatus.DONE)


def test_delivery_and_transfer_can_complete_from_draft():
    assert can_transition(DeliveryStatus.DRAFT, DeliveryStatus.DONE)
    assert can_transition(DeliveryStatus.READY, DeliveryStatus.DONE)
    assert can_transition(TransferStatus.DRAFT, TransferStatus.COMPLETED)
    assert can_transition(TransferStatus.IN_TRANSIT, TransferStatus.COMPLETED)
    assert not can_transition(TransferStatus.IN_TRANSIT, TransferStatus.DRAFT)


def test_ensure_transition_messages():
    with pytest.raises(InvalidTransition, match="already DONE"):
        ensure_transition("Receipt RCP-1", ReceiptStatus.DONE, ReceiptStatus.CANCELED)

    with pytest.raises(InvalidTransition, match="from DRAFT to DONE"):
        ensure_transition("Receipt RCP-1", ReceiptStatus.DRAFT, ReceiptStatus.DONE)

    ensure_transition("Receipt RCP-1", ReceiptStatus.DRAFT, ReceiptStatus.READY)


def test_record_number_format():
    number = generate_record_number("TRF")
    assert re.match(r"^TRF-\d{13}-\d{4}$", number)


def _draft_delivery(db, warehouse):
    delivery = Delivery(
        delivery_number=generate_record_number("DEL"),
        warehouse_id=warehouse.id,
        status=DeliveryStatus.DRAFT,
    )
    db.add(delivery)
    db.commit()
    return delivery


def test_apply_transition_bumps_version_and_audits(db, main_warehouse, staff_user):
    delivery = _draft_delivery(db, main_warehouse)
    delivery_id = delivery.id

    apply_transition(db, delivery, DeliveryStatus.READY, "Delivery D", staff_user.id)
    db.commit()

    db.refresh(delivery)
    assert delivery.status == DeliveryStatus.READY
    assert delivery.version == 2

    log = db.query(AuditLog).filter(AuditLog.record_id == str(delivery_id)).one()
    assert log.action == "STATUS_CHANGE"
    assert log.table_name == "delivery"
    assert log.before_data == {"status": "DRAFT", "version": 1}
    assert log.after_data == {"status": "READY", "version": 2}
    assert log.performed_by == staff_user.id


def test_stale_record_is_rejected(db, main_warehouse):
    delivery = _draft_delivery(db, main_warehouse)
    assert delivery.version == 1

    # Another request moves the row on; the loaded object still says version 1
    db.query(Delivery).filter(Delivery.id == delivery.id).update(
        {Delivery.version: Delivery.version + 1}, synchronize_session=False
    )

    with pytest.raises(ConcurrencyConflict):
        apply_transition(db, delivery, DeliveryStatus.READY, "Delivery D")
    db.rollback()

    assert db.query(AuditLog).count() == 0


def test_concurrency_conflict_is_an_invalid_transition():
    assert issubclass(ConcurrencyConflict, InvalidTransition)
    assert ConcurrencyConflict.status_code == 409
