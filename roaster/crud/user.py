"""User and customer data access"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from .. import schemas
from ..models import Order, User, UserRole
from ..security import generate_temporary_password, get_password_hash, verify_password
from .sequence import CUSTOMER_CODE, next_value

logger = logging.getLogger(__name__)


class EmailTakenError(ValueError):
    pass


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(db: Session, email: str, password: str, role: UserRole = UserRole.EMPLOYEE, **fields) -> User:
    """Create a user. Customers (any non-admin role) get the next customer code."""
    email = email.strip().lower()
    if get_user_by_email(db, email):
        raise EmailTakenError(f"email already registered: {email}")
    user = User(email=email, hashed_password=get_password_hash(password), role=role, **fields)
    try:
        if role != UserRole.ADMIN:
            user.customer_code = next_value(db, CUSTOMER_CODE)
        db.add(user)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    logger.info("created %s user %s (code %s)", role.value, email, user.customer_code)
    return user


def list_customers(db: Session, include_inactive: bool = True) -> List[User]:
    query = db.query(User).filter(User.role != UserRole.ADMIN)
    if not include_inactive:
        query = query.filter(User.is_active.is_(True))
    return query.order_by(User.created_at.desc()).all()


def get_customer(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id, User.role != UserRole.ADMIN).first()


def update_user(db: Session, user: User, update: schemas.CustomerUpdate) -> User:
    data = update.dict(exclude_unset=True)
    if "email" in data and data["email"]:
        email = data["email"].strip().lower()
        other = get_user_by_email(db, email)
        if other is not None and other.id != user.id:
            raise EmailTakenError(f"email already registered: {email}")
        data["email"] = email
    for field, value in data.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


def delete_customer(db: Session, user: User) -> bool:
    """Delete a customer; one with orders is only deactivated. Returns True when deleted."""
    has_orders = db.query(Order.id).filter(Order.user_id == user.id).first() is not None
    if has_orders:
        user.is_active = False
        db.commit()
        logger.info("deactivated customer %s (has orders)", user.email)
        return False
    db.delete(user)
    db.commit()
    logger.info("deleted customer %s", user.email)
    return True


def set_password(db: Session, user: User, password: str) -> User:
    user.hashed_password = get_password_hash(password)
    db.commit()
    db.refresh(user)
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> bool:
    if not verify_password(current_password, user.hashed_password):
        return False
    set_password(db, user, new_password)
    return True


def reset_password(db: Session, user: User) -> str:
    """Give the user a random password and return it"""
    temporary = generate_temporary_password()
    set_password(db, user, temporary)
    logger.info("password reset for %s", user.email)
    return temporary


def update_profile(db: Session, user: User, update: schemas.ProfileUpdate) -> User:
    for field, value in update.dict(exclude_unset=True).items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


def assign_missing_customer_codes(db: Session) -> List[User]:
    """Give every customer without a code the next code, oldest account first"""
    customers = (
        db.query(User)
        .filter(User.role != UserRole.ADMIN, User.customer_code.is_(None))
        .order_by(User.created_at)
        .all()
    )
    try:
        for user in customers:
            user.customer_code = next_value(db, CUSTOMER_CODE)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return customers


def ensure_admin(db: Session, email: str, password: str) -> bool:
    """Create an admin account, or reset its password and role. Returns True when created."""
    user = get_user_by_email(db, email)
    if user:
        user.role = UserRole.ADMIN
        user.is_active = True
        set_password(db, user, password)
        logger.info("admin password reset for %s", user.email)
        return False
    create_user(db, email, password, UserRole.ADMIN, contact_name="Administrator")
    return True
