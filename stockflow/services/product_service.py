"""
Product Service - Business Logic for Products
"""
import logging
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_
from typing import List, Optional
from uuid import UUID

from stockflow.core import atomic
from stockflow.core.exceptions import NotFound, Conflict
from stockflow.models import (
    Product, Category, Warehouse, StockMovement, MovementType,
    ReceiptItem, DeliveryItem, TransferItem
)
from stockflow.schemas.product import ProductCreate, ProductUpdate
from .stock_service import StockService

logger = logging.getLogger(__name__)

class ProductService:
    """Product business logic"""

    @staticmethod
    def get_products(
        db: Session,
        search: Optional[str] = None,
        category_id: Optional[UUID] = None,
        warehouse_id: Optional[UUID] = None
    ) -> List[Product]:
        """Get products with filters, newest first"""
        query = db.query(Product).options(
            joinedload(Product.category),
            joinedload(Product.warehouse)
        )

        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(
                    Product.sku.ilike(search_term),
                    Product.name.ilike(search_term)
                )
            )

        if category_id:
            query = query.filter(Product.category_id == category_id)

        if warehouse_id:
            query = query.filter(Product.warehouse_id == warehouse_id)

        return query.order_by(Product.created_at.desc(), Product.sku).all()

    @staticmethod
    def get_product_by_id(db: Session, product_id: UUID) -> Product:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFound("Product", product_id)
        return product

    @staticmethod
    def get_product_by_sku(db: Session, sku: str, warehouse_id: UUID) -> Optional[Product]:
        """Get product by SKU within one warehouse"""
        return db.query(Product).filter(
            Product.sku == sku,
            Product.warehouse_id == warehouse_id
        ).first()

    @staticmethod
    def _check_references(db: Session, category_id: Optional[UUID], warehouse_id: Optional[UUID]) -> None:
        if category_id and not db.query(Category).filter(Category.id == category_id).first():
            raise NotFound("Category", category_id)
        if warehouse_id and not db.query(Warehouse).filter(Warehouse.id == warehouse_id).first():
            raise NotFound("Warehouse", warehouse_id)

    @staticmethod
    def create_product(db: Session, product_data: ProductCreate, created_by: Optional[UUID] = None) -> Product:
        """Create new product; an opening stock is ledgered as an adjustment"""
        with atomic(db):
            ProductService._check_references(db, product_data.category_id, product_data.warehouse_id)
            if ProductService.get_product_by_sku(db, product_data.sku, product_data.warehouse_id):
                raise Conflict(f"SKU {product_data.sku} already exists in this warehouse")

            product = Product(
                sku=product_data.sku,
                name=product_data.name,
                description=product_data.description,
                category_id=product_data.category_id,
                warehouse_id=product_data.warehouse_id,
                unit_of_measure=product_data.unit_of_measure,
                stock=0,
                min_stock_level=product_data.min_stock_level
            )
            db.add(product)
            db.flush()

            if product_data.stock:
                StockService.adjust_stock(
                    db, product, product_data.stock, MovementType.ADJUSTMENT,
                    reference_id=product.id,
                    user_id=created_by,
                    notes="Opening stock"
                )

        db.refresh(product)
        logger.info(f"Created product {product.sku} in warehouse {product.warehouse_id}")
        return product

    @staticmethod
    def update_product(
        db: Session,
        product_id: UUID,
        product_data: ProductUpdate,
        updated_by: Optional[UUID] = None
    ) -> Product:
        """
        Update product fields.

        A new ``stock`` value is not written directly: the difference is applied
        through the ledger as an ADJUSTMENT movement.
        """
        with atomic(db):
            product = ProductService.get_product_by_id(db, product_id)
            update_data = product_data.model_dump(exclude_unset=True)
            new_stock = update_data.pop("stock", None)
            note = update_data.pop("adjustment_note", None)

            ProductService._check_references(db, update_data.get("category_id"), None)
            if update_data.get("sku") and update_data["sku"] != product.sku:
                if ProductService.get_product_by_sku(db, update_data["sku"], product.warehouse_id):
                    raise Conflict(f"SKU {update_data['sku']} already exists in this warehouse")

            for field, value in update_data.items():
                if value is None and field in ("name", "sku", "category_id", "unit_of_measure"):
                    continue
                setattr(product, field, value)
            db.flush()

            if new_stock is not None and new_stock != product.stock:
                StockService.adjust_stock(
                    db, product, new_stock - product.stock, MovementType.ADJUSTMENT,
                    reference_id=product.id,
                    user_id=updated_by,
                    notes=note or "Manual stock correction"
                )

        db.refresh(product)
        return product

    @staticmethod
    def delete_product(db: Session, product_id: UUID) -> None:
        """Delete a product that has no ledger history and no workflow items"""
        with atomic(db):
            product = ProductService.get_product_by_id(db, product_id)

            in_use = (
                db.query(StockMovement.id).filter(StockMovement.product_id == product_id).first()
                or db.query(ReceiptItem.id).filter(ReceiptItem.product_id == product_id).first()
                or db.query(DeliveryItem.id).filter(DeliveryItem.product_id == product_id).first()
                or db.query(TransferItem.id).filter(TransferItem.product_id == product_id).first()
            )
            if in_use:
                raise Conflict(f"Product {product.sku} has stock history and cannot be deleted")

            db.delete(product)
        logger.info(f"Deleted product {product_id}")
