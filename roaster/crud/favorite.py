"""Favorite products"""

from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from ..models import Favorite


def list_favorites(db: Session, user_id: str) -> List[Favorite]:
    return (
        db.query(Favorite)
        .options(joinedload(Favorite.product))
        .filter(Favorite.user_id == user_id)
        .order_by(Favorite.created_at.desc())
        .all()
    )


def get_favorite(db: Session, user_id: str, product_id: str) -> Optional[Favorite]:
    return db.query(Favorite).filter(Favorite.user_id == user_id, Favorite.product_id == product_id).first()


def add_favorite(db: Session, user_id: str, product_id: str) -> Favorite:
    """Add a favorite; adding one twice returns the existing row"""
    existing = get_favorite(db, user_id, product_id)
    if existing:
        return existing
    favorite = Favorite(user_id=user_id, product_id=product_id)
    db.add(favorite)
    db.commit()
    db.refresh(favorite)
    return favorite


def remove_favorite(db: Session, user_id: str, product_id: str) -> bool:
    favorite = get_favorite(db, user_id, product_id)
    if not favorite:
        return False
    db.delete(favorite)
    db.commit()
    return True
