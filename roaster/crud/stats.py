"""Dashboard statistics"""

from typing import Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models import Order, OrderStatus, Product, User, UserRole


def dashboard_stats(db: Session) -> Dict:
    revenue = (
        db.query(func.coalesce(func.sum(Order.total_amount), 0.0))
        .filter(Order.status != OrderStatus.CANCELLED)
        .scalar()
    )
    return {
        "total_orders": db.query(func.count(Order.id)).scalar(),
        "total_revenue": float(revenue or 0),
        "active_customers": db.query(func.count(User.id))
        .filter(User.role != UserRole.ADMIN, User.is_active.is_(True))
        .scalar(),
        "active_products": db.query(func.count(Product.id)).filter(Product.is_active.is_(True)).scalar(),
    }
