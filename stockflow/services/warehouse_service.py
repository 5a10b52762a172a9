"""
Warehouse Service - warehouses, their locations, and product categories
"""
import logging
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_
from typing import List, Optional
from uuid import UUID

from stockflow.core import atomic
from stockflow.core.exceptions import NotFound, Conflict
from stockflow.models import Warehouse, Location, Category, Product, Receipt, Delivery, Transfer
from stockflow.schemas.warehouse import (
    WarehouseCreate, WarehouseUpdate,
    LocationCreate, LocationUpdate,
    CategoryCreate, CategoryUpdate,
)

logger = logging.getLogger(__name__)

class WarehouseService:
    """Warehouse, Location and Category business logic"""

    # ===================== WAREHOUSES =====================

    @staticmethod
    def get_warehouses(db: Session, active_only: bool = False) -> List[Warehouse]:
        query = db.query(Warehouse)
        if active_only:
            query = query.filter(Warehouse.is_active == True)
        return query.order_by(Warehouse.created_at.desc(), Warehouse.name).all()

    @staticmethod
    def get_warehouse(db: Session, warehouse_id: UUID) -> Warehouse:
        warehouse = db.query(Warehouse).filter(Warehouse.id == warehouse_id).first()
        if not warehouse:
            raise NotFound("Warehouse", warehouse_id)
        return warehouse

    @staticmethod
    def create_warehouse(db: Session, data: WarehouseCreate) -> Warehouse:
        with atomic(db):
            if db.query(Warehouse).filter(Warehouse.name == data.name).first():
                raise Conflict(f"Warehouse {data.name} already exists")
            warehouse = Warehouse(**data.model_dump())
            db.add(warehouse)
        db.refresh(warehouse)
        logger.info(f"Created warehouse {warehouse.name}")
        return warehouse

    @staticmethod
    def update_warehouse(db: Session, warehouse_id: UUID, data: WarehouseUpdate) -> Warehouse:
        with atomic(db):
            warehouse = WarehouseService.get_warehouse(db, warehouse_id)
            update_data = data.model_dump(exclude_unset=True)
            if update_data.get("name") and update_data["name"] != warehouse.name:
                if db.query(Warehouse).filter(Warehouse.name == update_data["name"]).first():
                    raise Conflict(f"Warehouse {update_data['name']} already exists")
            for field, value in update_data.items():
                setattr(warehouse, field, value)
        db.refresh(warehouse)
        return warehouse

    @staticmethod
    def delete_warehouse(db: Session, warehouse_id: UUID) -> None:
        with atomic(db):
            warehouse = WarehouseService.get_warehouse(db, warehouse_id)
            if db.query(Product.id).filter(Product.warehouse_id == warehouse_id).first():
                raise Conflict(f"Warehouse {warehouse.name} still holds products")
            has_documents = (
                db.query(Receipt.id).filter(Receipt.warehouse_id == warehouse_id).first()
                or db.query(Delivery.id).filter(Delivery.warehouse_id == warehouse_id).first()
                or db.query(Transfer.id).filter(
                    or_(Transfer.from_warehouse_id == warehouse_id, Transfer.to_warehouse_id == warehouse_id)
                ).first()
            )
            if has_documents:
                raise Conflict(f"Warehouse {warehouse.name} has receipts, deliveries or transfers")
            db.delete(warehouse)
        logger.info(f"Deleted warehouse {warehouse_id}")

    # ===================== LOCATIONS =====================

    @staticmethod
    def get_locations(db: Session, warehouse_id: Optional[UUID] = None) -> List[Location]:
        query = db.query(Location).options(joinedload(Location.warehouse))
        if warehouse_id:
            query = query.filter(Location.warehouse_id == warehouse_id)
        return query.order_by(Location.created_at.desc(), Location.name).all()

    @staticmethod
    def get_location(db: Session, location_id: UUID) -> Location:
        location = db.query(Location).filter(Location.id == location_id).first()
        if not location:
            raise NotFound("Location", location_id)
        return location

    @staticmethod
    def create_location(db: Session, data: LocationCreate) -> Location:
        with atomic(db):
            WarehouseService.get_warehouse(db, data.warehouse_id)
            location = Location(**data.model_dump())
            db.add(location)
        db.refresh(location)
        return location

    @staticmethod
    def update_location(db: Session, location_id: UUID, data: LocationUpdate) -> Location:
        with atomic(db):
            location = WarehouseService.get_location(db, location_id)
            update_data = data.model_dump(exclude_unset=True)
            if update_data.get("warehouse_id"):
                WarehouseService.get_warehouse(db, update_data["warehouse_id"])
            for field, value in update_data.items():
                setattr(location, field, value)
        db.refresh(location)
        return location

    @staticmethod
    def delete_location(db: Session, location_id: UUID) -> None:
        with atomic(db):
            location = WarehouseService.get_location(db, location_id)
            db.delete(location)

    # ===================== CATEGORIES =====================

    @staticmethod
    def get_categories(db: Session) -> List[Category]:
        return db.query(Category).order_by(Category.name).all()

    @staticmethod
    def get_category(db: Session, category_id: UUID) -> Category:
        category = db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise NotFound("Category", category_id)
        return category

    @staticmethod
    def create_category(db: Session, data: CategoryCreate) -> Category:
        with atomic(db):
            if db.query(Category).filter(Category.name == data.name).first():
                raise Conflict(f"Category {data.name} already exists")
            category = Category(**data.model_dump())
            db.add(category)
        db.refresh(category)
        return category

    @staticmethod
    def update_category(db: Session, category_id: UUID, data: CategoryUpdate) -> Category:
        with atomic(db):
            category = WarehouseService.get_category(db, category_id)
            update_data = data.model_dump(exclude_unset=True)
            if update_data.get("name") and update_data["name"] != category.name:
                if db.query(Category).filter(Category.name == update_data["name"]).first():
                    raise Conflict(f"Category {update_data['name']} already exists")
            for field, value in update_data.items():
                setattr(category, field, value)
        db.refresh(category)
        return category

    @staticmethod
    def delete_category(db: Session, category_id: UUID) -> None:
        with atomic(db):
            category = WarehouseService.get_category(db, category_id)
            if db.query(Product.id).filter(Product.category_id == category_id).first():
                raise Conflict(f"Category {category.name} is used by products")
            db.delete(category)
