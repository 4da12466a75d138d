"""Production schedule schemas"""

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.order import OrderStatus


class ProductionOrderEntry(BaseModel):
    order_id: str
    order_number: str
    customer_name: str
    quantity: int
    production_weight: float
    status: str
    due_date: datetime


class ProductionDetails(BaseModel):
    bean_origin: Optional[str] = None
    roast_level: Optional[str] = None
    production_weight_per_unit: float
    production_unit: str
    production_notes: Optional[str] = None
    processing_method: Optional[str] = None
    flavor_profile: Optional[List[str]] = None


class ProductionItem(BaseModel):
    product_id: str
    product_name: str
    category: str
    unit: Optional[str] = None
    total_quantity: int
    total_production_weight: float
    order_count: int
    production_details: ProductionDetails
    orders: List[ProductionOrderEntry]


class DateRange(BaseModel):
    start_date: date
    end_date: date


class CategorySummary(BaseModel):
    quantity: int
    products: int


class ProductionSummary(BaseModel):
    total_products: int
    total_quantity: int
    by_category: Dict[str, CategorySummary]


class ProductionSchedule(BaseModel):
    date_range: DateRange
    total_items: int
    total_orders: int
    production_items: List[ProductionItem]
    orders_by_status: Dict[str, int]
    summary: ProductionSummary


class BulkStatusUpdate(BaseModel):
    order_ids: List[str] = Field(min_length=1)
    status: OrderStatus


class BulkStatusResult(BaseModel):
    updated: int
    status: OrderStatus
