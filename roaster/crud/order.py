"""Order data access

- create_order inserts the order, its items and its sequence number in one
  transaction; prices are always taken from the catalog server-side
- listing with pagination and archive filters, status/archive changes
- the order query behind the production schedule
"""

import logging
import math
from datetime import datetime, time, timedelta, timezone
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from ..core.order_number import order_number_for
from ..core.production import CANCELLED, ProductionOptions
from ..models import Order, OrderItem, OrderStatus, Product, User
from .product import products_for_user
from .sequence import ORDERS, next_value

logger = logging.getLogger(__name__)


class OrderValidationError(ValueError):
    """The order cannot be placed as submitted"""


def _with_details(query):
    return query.options(
        joinedload(Order.user),
        joinedload(Order.items).joinedload(OrderItem.product),
    )


def _price_list(db: Session, user: User) -> dict:
    """product id -> (product, effective price) for everything ``user`` may order"""
    if user.is_admin:
        products = db.query(Product).filter(Product.is_active.is_(True)).all()
        return {p.id: (p, p.price) for p in products}
    return {vp.id: (vp.product, vp.effective_price) for vp in products_for_user(db, user)}


def create_order(db: Session, user: User, items: List[Tuple[str, int]], notes: Optional[str] = None,
                 status: OrderStatus = OrderStatus.PENDING) -> Order:
    """Place an order for ``user``. ``items`` is a list of (product id, quantity)."""
    if not items:
        raise OrderValidationError("an order needs at least one item")
    prices = _price_list(db, user)

    lines = []
    for product_id, quantity in items:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise OrderValidationError(f"quantity must be a positive whole number (product {product_id})")
        if product_id not in prices:
            raise OrderValidationError(f"product {product_id} is not available")
        product, unit_price = prices[product_id]
        lines.append((product, quantity, float(unit_price or 0)))

    try:
        order = Order(
            user_id=user.id,
            sequence_number=next_value(db, ORDERS),
            status=status,
            notes=notes,
            total_amount=0.0,
        )
        total = 0.0
        for position, (product, quantity, unit_price) in enumerate(lines):
            line_total = quantity * unit_price
            total += line_total
            order.items.append(OrderItem(
                product_id=product.id,
                position=position,
                quantity=quantity,
                unit_price=unit_price,
                total_price=line_total,
            ))
        order.total_amount = total
        db.add(order)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(order)
    logger.info("order %s placed by %s with %d items", order_number_for(order), user.email, len(lines))
    return order


def get_order(db: Session, order_id: str) -> Optional[Order]:
    return _with_details(db.query(Order)).filter(Order.id == order_id).first()


def list_user_orders(db: Session, user_id: str, limit: Optional[int] = None) -> List[Order]:
    """A customer's orders, newest first"""
    query = _with_details(db.query(Order)).filter(Order.user_id == user_id).order_by(Order.created_at.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def list_orders(db: Session, page: int = 1, limit: int = 50, user_id: Optional[str] = None,
                include_archived: bool = False, archived_only: bool = False) -> Tuple[List[Order], int, int]:
    """Admin order list. Returns (orders, total, pages)."""
    query = db.query(Order)
    if user_id:
        query = query.filter(Order.user_id == user_id)
    if archived_only:
        query = query.filter(Order.is_archived.is_(True))
    elif not include_archived:
        query = query.filter(Order.is_archived.is_(False))
    total = query.count()
    page = max(page, 1)
    orders = (
        _with_details(query)
        .order_by(Order.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return orders, total, math.ceil(total / limit) if limit else 0


def update_status(db: Session, order: Order, status: OrderStatus) -> Order:
    previous = order.status
    order.status = status
    db.commit()
    db.refresh(order)
    logger.info("order %s status %s -> %s", order_number_for(order), previous.value, status.value)
    return order


def set_archived(db: Session, order: Order, archived: bool) -> Order:
    order.is_archived = archived
    db.commit()
    db.refresh(order)
    logger.info("order %s %s", order_number_for(order), "archived" if archived else "unarchived")
    return order


def bulk_update_status(db: Session, order_ids: List[str], status: OrderStatus) -> int:
    orders = db.query(Order).filter(Order.id.in_(order_ids)).all()
    for order in orders:
        order.status = status
    db.commit()
    logger.info("bulk status %s on %d orders", status.value, len(orders))
    return len(orders)


def _day_bounds(options: ProductionOptions) -> Tuple[datetime, datetime]:
    start = datetime.combine(options.start_date, time.min, tzinfo=timezone.utc)
    end = datetime.combine(options.end_date + timedelta(days=1), time.min, tzinfo=timezone.utc)
    return start, end


def production_orders(db: Session, options: ProductionOptions) -> List[Order]:
    """Orders that feed the production schedule, oldest first"""
    start, end = _day_bounds(options)
    query = (
        _with_details(db.query(Order))
        .filter(Order.created_at >= start, Order.created_at < end)
        .filter(Order.status != OrderStatus(CANCELLED))
    )
    if options.status_filter and options.status_filter.lower() != "all":
        query = query.filter(Order.status == OrderStatus(options.status_filter.upper()))
    if not options.include_archived:
        query = query.filter(Order.is_archived.is_(False))
    return query.order_by(Order.created_at).all()


def orders_since(db: Session, since: datetime, user_id: Optional[str] = None) -> List[Order]:
    query = _with_details(db.query(Order)).filter(Order.created_at >= since)
    if user_id:
        query = query.filter(Order.user_id == user_id)
    return query.order_by(Order.created_at.desc()).all()
