from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...database.connection import get_db
from .deps import get_current_user, require_admin
from .serializers import order_read, orders_read

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=List[schemas.OrderRead])
def my_orders(limit: Optional[int] = Query(None, ge=1, le=500),
              user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    """The current user's orders, newest first"""
    return orders_read(crud.list_user_orders(db, user.id, limit), user.role)


@router.post("", response_model=schemas.OrderRead, status_code=201)
def place_order(order: schemas.OrderCreate, user: models.User = Depends(get_current_user),
                db: Session = Depends(get_db)):
    """Place an order; unit prices come from the catalog, never from the request"""
    db_order = crud.create_order(db, user, [(i.product_id, i.quantity) for i in order.items], order.notes)
    return order_read(crud.get_order(db, db_order.id), user.role)


@router.get("/{order_id}", response_model=schemas.OrderRead)
def get_order(order_id: str, user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    db_order = crud.get_order(db, order_id)
    if not db_order:
        raise HTTPException(status_code=404, detail="Order not found")
    if db_order.user_id != user.id and not user.is_admin:
        raise HTTPException(status_code=403, detail="Not your order")
    return order_read(db_order, user.role)


@router.patch("/{order_id}", response_model=schemas.OrderRead)
def update_order_status(order_id: str, update: schemas.OrderStatusUpdate,
                        admin: models.User = Depends(require_admin), db: Session = Depends(get_db)):
    db_order = crud.get_order(db, order_id)
    if not db_order:
        raise HTTPException(status_code=404, detail="Order not found")
    crud.update_status(db, db_order, update.status)
    return order_read(crud.get_order(db, order_id), admin.role)
