from .auth import router as auth_router
from .products import router as products_router
from .orders import router as orders_router
from .favorites import router as favorites_router
from .profile import router as profile_router
from .admin_orders import router as admin_orders_router
from .production import router as production_router
from .customers import router as customers_router
from .admin_settings import router as admin_settings_router

__all__ = [
    "auth_router",
    "products_router",
    "orders_router",
    "favorites_router",
    "profile_router",
    "admin_orders_router",
    "production_router",
    "customers_router",
    "admin_settings_router",
]
