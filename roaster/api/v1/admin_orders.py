from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...database.connection import get_db
from .deps import require_admin
from .serializers import order_read, orders_read

router = APIRouter(prefix="/admin/orders", tags=["admin"])


@router.get("", response_model=schemas.OrderPage)
def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    user_id: Optional[str] = None,
    include_archived: bool = False,
    archived_only: bool = False,
    admin: models.User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """All orders, newest first; archived orders are hidden unless asked for"""
    orders, total, pages = crud.list_orders(db, page, limit, user_id, include_archived, archived_only)
    return schemas.OrderPage(orders=orders_read(orders, admin.role), total=total, page=page, limit=limit, pages=pages)


@router.post("", response_model=schemas.OrderRead, status_code=201)
def create_order_for_customer(order: schemas.AdminOrderCreate, admin: models.User = Depends(require_admin),
                              db: Session = Depends(get_db)):
    customer = crud.get_customer(db, order.user_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    if customer.customer_code is None:
        raise HTTPException(status_code=400, detail="Customer has no customer code")
    db_order = crud.create_order(
        db, customer, [(i.product_id, i.quantity) for i in order.items], order.notes, order.status
    )
    return order_read(crud.get_order(db, db_order.id), admin.role)


@router.patch("/{order_id}/archive", response_model=schemas.OrderRead)
def archive_order(order_id: str, body: schemas.ArchiveRequest, admin: models.User = Depends(require_admin),
                  db: Session = Depends(get_db)):
    db_order = crud.get_order(db, order_id)
    if not db_order:
        raise HTTPException(status_code=404, detail="Order not found")
    crud.set_archived(db, db_order, body.action == "archive")
    return order_read(crud.get_order(db, order_id), admin.role)
