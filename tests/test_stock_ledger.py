"""
The ledgered stock adjustment and append-only movements.
"""
from types import SimpleNamespace
from uuid import uuid4

import pytest

from stockflow.core import atomic
from stockflow.core.exceptions import InsufficientStock, LedgerImmutable
from stockflow.models import MovementType, StockMovement
from stockflow.services import StockService


def test_adjust_stock_writes_one_signed_movement(db, main_warehouse, make_product):
    product = make_product(main_warehouse, sku="A-1", stock=10)
    reference_id = uuid4()

    with atomic(db):
        StockService.adjust_stock(db, product, -3, MovementType.DELIVERY, reference_id, notes="out")

    db.refresh(product)
    assert product.stock == 7
    movement = db.query(StockMovement).one()
    assert movement.quantity == -3
    assert movement.type == MovementType.DELIVERY
    assert movement.reference_id == reference_id
    assert movement.warehouse_id == main_warehouse.id


def test_adjust_stock_never_goes_negative(db, main_warehouse, make_product):
    product = make_product(main_warehouse, sku="A-1", stock=2)

    with pytest.raises(InsufficientStock) as exc_info:
        with atomic(db):
            StockService.adjust_stock(db, product, -5, MovementType.DELIVERY, uuid4())

    assert exc_info.value.details == ["Insufficient stock for A-1: Available 2, Requested 5"]
    db.refresh(product)
    assert product.stock == 2
    assert db.query(StockMovement).count() == 0


def test_failed_item_rolls_back_earlier_items(db, main_warehouse, make_product):
    first = make_product(main_warehouse, sku="A-1", stock=10)
    second = make_product(main_warehouse, sku="A-2", stock=1)

    with pytest.raises(InsufficientStock):
        with atomic(db):
            StockService.adjust_stock(db, first, -4, MovementType.DELIVERY, uuid4())
            StockService.adjust_stock(db, second, -4, MovementType.DELIVERY, uuid4())

    db.refresh(first)
    assert first.stock == 10
    assert db.query(StockMovement).count() == 0


def test_zero_adjustment_is_refused(db, main_warehouse, make_product):
    product = make_product(main_warehouse, stock=1)
    with pytest.raises(ValueError):
        StockService.adjust_stock(db, product, 0, MovementType.ADJUSTMENT, product.id)


def test_find_shortages_sums_repeated_products():
    product = SimpleNamespace(sku="A-1", stock=5)
    other = SimpleNamespace(sku="B-1", stock=1)
    pid, oid = uuid4(), uuid4()
    items = [
        SimpleNamespace(product_id=pid, product=product, quantity=3),
        SimpleNamespace(product_id=pid, product=product, quantity=3),
        SimpleNamespace(product_id=oid, product=other, quantity=1),
    ]

    assert StockService.find_shortages(items) == [
        "Insufficient stock for A-1: Available 5, Requested 6"
    ]
    assert StockService.find_shortages(items[:1]) == []


def _one_movement(db, product):
    with atomic(db):
        StockService.adjust_stock(db, product, 5, MovementType.RECEIPT, uuid4())
    return db.query(StockMovement).one()


def test_movements_cannot_be_updated(db, main_warehouse, make_product):
    movement = _one_movement(db, make_product(main_warehouse, stock=0))

    movement.quantity = 50
    with pytest.raises(LedgerImmutable):
        db.flush()
    db.rollback()

    assert db.query(StockMovement).one().quantity == 5


def test_movements_cannot_be_deleted(db, main_warehouse, make_product):
    movement = _one_movement(db, make_product(main_warehouse, stock=0))

    db.delete(movement)
    with pytest.raises(LedgerImmutable):
        db.flush()
    db.rollback()

    assert db.query(StockMovement).count() == 1


def test_stock_records_and_filters(db, main_warehouse, west_warehouse, make_product):
    make_product(main_warehouse, sku="OUT-1", stock=0)
    make_product(main_warehouse, sku="LOW-1", stock=3, min_stock_level=5)
    make_product(west_warehouse, sku="OK-1", stock=50, min_stock_level=5)

    records = StockService.get_stock_records(db)
    assert [r["sku"] for r in records] == ["OUT-1", "LOW-1", "OK-1"]
    assert [r["stock_status"] for r in records] == ["out", "low", "ok"]

    assert [r["sku"] for r in StockService.get_stock_records(db, status="low")] == ["LOW-1"]
    assert [r["sku"] for r in StockService.get_stock_records(db, warehouse_id=west_warehouse.id)] == ["OK-1"]
    assert [r["sku"] for r in StockService.get_stock_records(db, search="out")] == ["OUT-1"]
