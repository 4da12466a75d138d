"""Customer product assignment model"""

from sqlalchemy import Column, String, Boolean, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, new_id


class CustomerProduct(Base):
    """Grants a customer access to a product, optionally at a custom price"""
    __tablename__ = "customer_products"
    __table_args__ = (UniqueConstraint("user_id", "product_id", name="uq_customer_product"),)

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    custom_price = Column(Float, nullable=True)  # overrides Product.price for this customer
    is_active = Column(Boolean, nullable=False, default=True)

    user = relationship("User", back_populates="product_assignments")
    product = relationship("Product", back_populates="assignments")
