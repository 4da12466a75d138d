"""Order schemas"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..models.order import OrderStatus


class OrderItemCreate(BaseModel):
    product_id: str
    quantity: int = Field(gt=0)


class OrderCreate(BaseModel):
    items: List[OrderItemCreate] = Field(min_length=1)
    notes: Optional[str] = None


class AdminOrderCreate(OrderCreate):
    user_id: str
    status: OrderStatus = OrderStatus.PENDING


class OrderItemRead(BaseModel):
    id: str
    product_id: str
    product_name: Optional[str] = None
    quantity: int
    unit_price: Optional[float] = None
    total_price: Optional[float] = None


class OrderRead(BaseModel):
    id: str
    order_number: str
    user_id: str
    customer_name: Optional[str] = None
    sequence_number: Optional[int] = None
    status: OrderStatus
    total_amount: Optional[float] = None
    total_display: Optional[str] = None
    notes: Optional[str] = None
    is_archived: bool
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemRead] = []


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class ArchiveRequest(BaseModel):
    action: Literal["archive", "unarchive"]


class OrderPage(BaseModel):
    orders: List[OrderRead]
    total: int
    page: int
    limit: int
    pages: int
