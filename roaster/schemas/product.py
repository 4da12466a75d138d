"""Product schemas"""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..models.product import ProductCategory


class ProductBase(BaseModel):
    name: str = Field(min_length=1)
    description: str
    category: ProductCategory
    price: float = Field(ge=0)
    unit: str
    is_global: bool = True
    is_active: bool = True
    hide_prices: bool = False
    image_url: Optional[str] = None
    bean_origin: Optional[str] = None
    roast_level: Optional[str] = None
    processing_method: Optional[str] = None
    flavor_profile: Optional[List[str]] = None
    production_weight_per_unit: Optional[float] = Field(default=None, ge=0)
    production_unit: Optional[str] = None
    production_notes: Optional[str] = None


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[ProductCategory] = None
    price: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = None
    is_global: Optional[bool] = None
    is_active: Optional[bool] = None
    hide_prices: Optional[bool] = None
    image_url: Optional[str] = None
    bean_origin: Optional[str] = None
    roast_level: Optional[str] = None
    processing_method: Optional[str] = None
    flavor_profile: Optional[List[str]] = None
    production_weight_per_unit: Optional[float] = Field(default=None, ge=0)
    production_unit: Optional[str] = None
    production_notes: Optional[str] = None


class ProductRead(ProductBase):
    id: str
    description: Optional[str] = None
    unit: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CatalogProduct(BaseModel):
    """A product as a customer sees it; price is None when hidden from the role"""
    id: str
    name: str
    description: Optional[str] = None
    category: ProductCategory
    unit: Optional[str] = None
    price: Optional[float] = None
    price_display: str
    has_custom_price: bool = False
    is_global: bool
    image_url: Optional[str] = None
    bean_origin: Optional[str] = None
    roast_level: Optional[str] = None
    flavor_profile: Optional[List[str]] = None


BulkAction = Literal[
    "delete", "updateCategory", "archive", "deactivate", "activate", "makeGlobal", "makeExclusive"
]


class ProductBulkAction(BaseModel):
    action: BulkAction
    product_ids: List[str] = Field(min_length=1)
    category: Optional[ProductCategory] = None


class ProductBulkResult(BaseModel):
    action: str
    affected: int
    deactivated: int = 0


class ProductImportError(BaseModel):
    line: int
    error: str


class ProductImportResult(BaseModel):
    imported: int
    errors: List[ProductImportError] = []


class AssignmentStatus(BaseModel):
    product_id: str
    name: str
    category: ProductCategory
    price: float
    is_global: bool
    assigned: bool
    custom_price: Optional[float] = None


class AssignmentUpdate(BaseModel):
    """Replaces every assignment of the customer"""
    product_ids: List[str] = []
    custom_prices: Dict[str, Optional[float]] = {}
