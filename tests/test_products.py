"""
Products, warehouses and categories: ledgered stock edits and reference checks.
"""
import pytest
from pydantic import ValidationError

from stockflow.core.exceptions import Conflict, NotFound
from stockflow.models import MovementType, StockMovement
from stockflow.schemas import ProductCreate, ProductUpdate, WarehouseCreate, CategoryCreate
from stockflow.services import ProductService, WarehouseService


def _create(db, warehouse, category, sku="lap-001", stock=0, user=None):
    data = ProductCreate(
        name="Laptop",
        sku=sku,
        category_id=category.id,
        warehouse_id=warehouse.id,
        unit_of_measure="pcs",
        stock=stock,
        min_stock_level=2,
    )
    return ProductService.create_product(db, data, created_by=user.id if user else None)


def test_sku_is_normalized():
    data = ProductCreate(
        name="Laptop", sku="  lap-001 ", category_id="00000000-0000-0000-0000-000000000001",
        warehouse_id="00000000-0000-0000-0000-000000000002", unit_of_measure="pcs",
    )
    assert data.sku == "LAP-001"

    with pytest.raises(ValidationError):
        ProductUpdate(sku="bad sku!")


def test_opening_stock_is_ledgered(db, main_warehouse, category, staff_user):
    product = _create(db, main_warehouse, category, stock=12, user=staff_user)

    assert product.sku == "LAP-001"
    assert product.stock == 12
    movement = db.query(StockMovement).one()
    assert (movement.type, movement.quantity, movement.reference_id) == (
        MovementType.ADJUSTMENT, 12, product.id
    )
    assert movement.notes == "Opening stock"


def test_zero_opening_stock_writes_nothing(db, main_warehouse, category):
    _create(db, main_warehouse, category, stock=0)
    assert db.query(StockMovement).count() == 0


def test_stock_edit_goes_through_the_ledger(db, main_warehouse, category):
    product = _create(db, main_warehouse, category, stock=10)

    product = ProductService.update_product(
        db, product.id, ProductUpdate(stock=7, name="Laptop Pro", adjustment_note="Cycle count")
    )

    assert (product.stock, product.name) == (7, "Laptop Pro")
    correction = db.query(StockMovement).filter(StockMovement.quantity < 0).one()
    assert correction.quantity == -3
    assert correction.type == MovementType.ADJUSTMENT
    assert correction.notes == "Cycle count"


def test_unchanged_stock_writes_nothing(db, main_warehouse, category):
    product = _create(db, main_warehouse, category, stock=10)
    ProductService.update_product(db, product.id, ProductUpdate(stock=10, description="13 inch"))
    assert db.query(StockMovement).count() == 1


def test_sku_unique_per_warehouse(db, main_warehouse, west_warehouse, category):
    _create(db, main_warehouse, category)

    with pytest.raises(Conflict):
        _create(db, main_warehouse, category)

    other = _create(db, west_warehouse, category)
    assert other.sku == "LAP-001"


def test_unknown_category(db, main_warehouse, category):
    product = _create(db, main_warehouse, category)
    from uuid import uuid4
    with pytest.raises(NotFound, match="Category not found"):
        ProductService.update_product(db, product.id, ProductUpdate(category_id=uuid4()))


def test_product_with_history_cannot_be_deleted(db, main_warehouse, category):
    with_history = _create(db, main_warehouse, category, sku="HIST-1", stock=5)
    without_history = _create(db, main_warehouse, category, sku="NEW-1", stock=0)

    with pytest.raises(Conflict, match="HIST-1"):
        ProductService.delete_product(db, with_history.id)

    ProductService.delete_product(db, without_history.id)
    assert [p.sku for p in ProductService.get_products(db)] == ["HIST-1"]


def test_warehouse_with_products_cannot_be_deleted(db, main_warehouse, category):
    _create(db, main_warehouse, category)

    with pytest.raises(Conflict):
        WarehouseService.delete_warehouse(db, main_warehouse.id)

    empty = WarehouseService.create_warehouse(db, WarehouseCreate(name="East Coast Facility", location="Boston, MA"))
    WarehouseService.delete_warehouse(db, empty.id)
    assert [w.name for w in WarehouseService.get_warehouses(db)] == ["Main Warehouse"]


def test_duplicate_names_conflict(db, main_warehouse, category):
    with pytest.raises(Conflict):
        WarehouseService.create_warehouse(db, WarehouseCreate(name="Main Warehouse"))
    with pytest.raises(Conflict):
        WarehouseService.create_category(db, CategoryCreate(name="Electronics"))
