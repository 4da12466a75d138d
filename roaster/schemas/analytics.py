"""Dashboard statistics and analytics schemas"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_orders: int
    total_revenue: float
    active_customers: int
    active_products: int


class AnalyticsSummary(BaseModel):
    total_orders: int
    total_revenue: float
    average_order_value: float
    revenue_growth: float


class CustomerRevenue(BaseModel):
    email: Optional[str] = None
    company_name: Optional[str] = None
    contact_name: Optional[str] = None
    total_revenue: float
    order_count: int


class ProductRevenue(BaseModel):
    id: Optional[str] = None
    name: str
    category: str
    total_quantity: int
    total_revenue: float
    order_count: int


class RevenuePoint(BaseModel):
    date: str
    revenue: float


class AnalyticsPeriod(BaseModel):
    days: int
    start_date: datetime
    end_date: datetime


class Analytics(BaseModel):
    summary: AnalyticsSummary
    orders_by_status: Dict[str, int]
    top_customers: List[CustomerRevenue]
    top_products: List[ProductRevenue]
    revenue_by_category: Dict[str, float]
    revenue_trend: List[RevenuePoint]
    period: AnalyticsPeriod
