"""Database models

All SQLAlchemy ORM models.
"""

from .base import Base
from .user import User, UserRole
from .product import Product, ProductCategory
from .customer_product import CustomerProduct
from .order import Order, OrderItem, OrderStatus
from .favorite import Favorite
from .settings import BrandingSettings, ReminderSettings
from .sequence import Sequence

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Product",
    "ProductCategory",
    "CustomerProduct",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Favorite",
    "BrandingSettings",
    "ReminderSettings",
    "Sequence",
]
