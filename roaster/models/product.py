"""Product model

Catalog entries. Global products are visible to every customer; exclusive
(non-global) products need a CustomerProduct assignment.
"""

import enum

from sqlalchemy import Column, String, Boolean, DateTime, Text, Float, Enum, JSON
from sqlalchemy.orm import relationship
from .base import Base, new_id, utcnow


class ProductCategory(str, enum.Enum):
    WHOLE_BEANS = "WHOLE_BEANS"
    ESPRESSO = "ESPRESSO"
    RETAIL_PACKS = "RETAIL_PACKS"
    ACCESSORIES = "ACCESSORIES"


class Product(Base):
    """Products table"""
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(Enum(ProductCategory, name="productcategory"), nullable=False)
    unit = Column(String(64), nullable=True)  # e.g. "5 lb bag"
    price = Column(Float, nullable=False, default=0.0)
    is_global = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True)
    hide_prices = Column(Boolean, nullable=False, default=False)
    image_url = Column(String(512), nullable=True)

    # coffee details
    bean_origin = Column(String(255), nullable=True)
    roast_level = Column(String(64), nullable=True)
    processing_method = Column(String(128), nullable=True)
    flavor_profile = Column(JSON, nullable=True)  # list of tasting notes

    # production planning; empty values fall back to 5.0 / "lbs"
    production_weight_per_unit = Column(Float, nullable=True)
    production_unit = Column(String(32), nullable=True)
    production_notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    assignments = relationship(
        "CustomerProduct", back_populates="product", cascade="all, delete-orphan"
    )
