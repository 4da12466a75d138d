"""API data models

Pydantic request/response models, re-exported per resource.
"""

from .user import (
    UserLogin, Token, UserRead, CustomerRead, CustomerCreate, CustomerUpdate,
    ProfileUpdate, PasswordChange, PasswordReset,
)
from .product import (
    ProductCreate, ProductUpdate, ProductRead, CatalogProduct, ProductBulkAction,
    ProductBulkResult, ProductImportError, ProductImportResult, AssignmentStatus, AssignmentUpdate,
)
from .order import (
    OrderItemCreate, OrderCreate, AdminOrderCreate, OrderItemRead, OrderRead,
    OrderStatusUpdate, ArchiveRequest, OrderPage,
)
from .production import ProductionSchedule, BulkStatusUpdate, BulkStatusResult
from .settings import BrandingRead, BrandingUpdate, ReminderSettingsUpdate, ReminderSettingsRead
from .analytics import DashboardStats, Analytics
