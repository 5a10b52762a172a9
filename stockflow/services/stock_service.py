"""
Stock Service - the ledgered stock adjustment and stock queries
"""
import logging
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_
from typing import List, Optional, Dict
from uuid import UUID

from stockflow.core.exceptions import InsufficientStock
from stockflow.models import StockMovement, MovementType, Product

logger = logging.getLogger(__name__)

class StockService:
    """Stock/Inventory business logic"""

    @staticmethod
    def adjust_stock(
        db: Session,
        product: Product,
        delta: int,
        movement_type: MovementType,
        reference_id: UUID,
        user_id: Optional[UUID] = None,
        notes: Optional[str] = None
    ) -> StockMovement:
        """
        Apply a signed stock change and append its ledger row.

        This is the only place product stock is written. Decrements are
        guarded in the UPDATE predicate so stock can never go negative even
        if it changed after the caller's availability check. Does not commit;
        callers run it inside ``atomic``.
        """
        if delta == 0:
            raise ValueError("Stock adjustment must be non-zero")

        query = db.query(Product).filter(Product.id == product.id)
        if delta < 0:
            query = query.filter(Product.stock >= -delta)

        updated = query.update({Product.stock: Product.stock + delta}, synchronize_session=False)
        if updated != 1:
            db.expire(product, ["stock"])
            raise InsufficientStock(
                "Insufficient stock",
                details=[f"Insufficient stock for {product.sku}: Available {product.stock}, Requested {-delta}"]
            )

        movement = StockMovement(
            product_id=product.id,
            warehouse_id=product.warehouse_id,
            type=movement_type,
            quantity=delta,
            reference_id=reference_id,
            user_id=user_id,
            notes=notes
        )
        db.add(movement)
        db.expire(product, ["stock"])
        logger.debug(f"{movement_type.value} {delta:+d} {product.sku} ref={reference_id}")
        return movement

    @staticmethod
    def find_shortages(items) -> List[str]:
        """
        Check every item against current stock and describe each shortfall.

        Items naming the same product are summed before comparing. Returns an
        empty list when everything is available.
        """
        requested: Dict[UUID, int] = {}
        products: Dict[UUID, Product] = {}
        for item in items:
            requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity
            products[item.product_id] = item.product

        errors = []
        for product_id, quantity in requested.items():
            product = products[product_id]
            if product.stock < quantity:
                errors.append(
                    f"Insufficient stock for {product.sku}: Available {product.stock}, Requested {quantity}"
                )
        return errors

    @staticmethod
    def get_stock_records(
        db: Session,
        search: Optional[str] = None,
        category_id: Optional[UUID] = None,
        warehouse_id: Optional[UUID] = None,
        status: Optional[str] = None
    ) -> List[Dict]:
        """Current stock per product with out/low/ok status, lowest stock first"""
        query = db.query(Product).options(
            joinedload(Product.category),
            joinedload(Product.warehouse)
        )

        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(
                    Product.name.ilike(search_term),
                    Product.sku.ilike(search_term)
                )
            )

        if category_id:
            query = query.filter(Product.category_id == category_id)

        if warehouse_id:
            query = query.filter(Product.warehouse_id == warehouse_id)

        results = []
        for product in query.order_by(Product.stock.asc(), Product.name.asc()).all():
            stock_status = product.stock_status
            if status and status != "all" and stock_status != status:
                continue

            results.append({
                "product_id": product.id,
                "sku": product.sku,
                "product_name": product.name,
                "category_name": product.category.name,
                "warehouse_id": product.warehouse_id,
                "warehouse_name": product.warehouse.name,
                "warehouse_location": product.warehouse.location,
                "stock": product.stock,
                "min_stock_level": product.min_stock_level,
                "unit_of_measure": product.unit_of_measure,
                "stock_status": stock_status
            })

        return results

    @staticmethod
    def get_movements(
        db: Session,
        product_id: Optional[UUID] = None,
        warehouse_id: Optional[UUID] = None,
        movement_type: Optional[MovementType] = None,
        reference_id: Optional[UUID] = None,
        limit: int = 50
    ) -> List[StockMovement]:
        """Get recent stock movements (move history)"""
        query = db.query(StockMovement)

        if product_id:
            query = query.filter(StockMovement.product_id == product_id)

        if warehouse_id:
            query = query.filter(StockMovement.warehouse_id == warehouse_id)

        if movement_type:
            query = query.filter(StockMovement.type == movement_type)

        if reference_id:
            query = query.filter(StockMovement.reference_id == reference_id)

        return query.order_by(StockMovement.created_at.desc()).limit(limit).all()
