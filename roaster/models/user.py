"""User model

Administrators and wholesale customer accounts share one table; any user whose
role is not ADMIN is a customer.
"""

import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, Enum
from sqlalchemy.orm import relationship
from .base import Base, new_id, utcnow


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class User(Base):
    """Users table"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(Enum(UserRole, name="userrole"), nullable=False, default=UserRole.EMPLOYEE)
    is_active = Column(Boolean, nullable=False, default=True)
    # shown zero-padded in order numbers
    customer_code = Column(Integer, unique=True, nullable=True)
    company_name = Column(String(255), nullable=True)
    contact_name = Column(String(255), nullable=True)
    phone = Column(String(64), nullable=True)
    address = Column(String(512), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    orders = relationship("Order", back_populates="user")
    product_assignments = relationship(
        "CustomerProduct", back_populates="user", cascade="all, delete-orphan"
    )
    favorites = relationship("Favorite", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def display_name(self) -> str:
        return self.company_name or self.contact_name or self.email
