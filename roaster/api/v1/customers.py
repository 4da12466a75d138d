"""Customer account management (admin)"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...database.connection import get_db
from ...models import UserRole
from .deps import require_admin
from .serializers import orders_read

router = APIRouter(prefix="/admin/customers", tags=["admin"])


def _customer_or_404(db: Session, customer_id: str) -> models.User:
    customer = crud.get_customer(db, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("", response_model=List[schemas.CustomerRead])
def list_customers(_: models.User = Depends(require_admin), db: Session = Depends(get_db)):
    return crud.list_customers(db)


@router.post("", response_model=schemas.CustomerRead, status_code=201)
def create_customer(body: schemas.CustomerCreate, _: models.User = Depends(require_admin),
                    db: Session = Depends(get_db)):
    """Create a customer account; it gets the next customer code"""
    if body.role == UserRole.ADMIN:
        raise HTTPException(status_code=400, detail="Customers cannot have the ADMIN role")
    fields = body.dict(exclude={"email", "password", "role"})
    try:
        return crud.create_user(db, body.email, body.password, body.role, **fields)
    except crud.EmailTakenError:
        raise HTTPException(status_code=400, detail="Email already registered")


@router.get("/{customer_id}", response_model=schemas.CustomerRead)
def get_customer(customer_id: str, _: models.User = Depends(require_admin), db: Session = Depends(get_db)):
    return _customer_or_404(db, customer_id)


@router.patch("/{customer_id}", response_model=schemas.CustomerRead)
def update_customer(customer_id: str, update: schemas.CustomerUpdate, _: models.User = Depends(require_admin),
                    db: Session = Depends(get_db)):
    customer = _customer_or_404(db, customer_id)
    if update.role == UserRole.ADMIN:
        raise HTTPException(status_code=400, detail="Customers cannot have the ADMIN role")
    try:
        return crud.update_user(db, customer, update)
    except crud.EmailTakenError:
        raise HTTPException(status_code=400, detail="Email already registered")


@router.delete("/{customer_id}")
def delete_customer(customer_id: str, _: models.User = Depends(require_admin), db: Session = Depends(get_db)):
    customer = _customer_or_404(db, customer_id)
    if crud.delete_customer(db, customer):
        return {"message": "Customer deleted"}
    return {"message": "Customer has orders and was deactivated"}


@router.post("/{customer_id}/reset-password", response_model=schemas.PasswordReset)
def reset_password(customer_id: str, _: models.User = Depends(require_admin), db: Session = Depends(get_db)):
    customer = _customer_or_404(db, customer_id)
    return schemas.PasswordReset(user_id=customer.id, temporary_password=crud.reset_password(db, customer))


@router.get("/{customer_id}/orders", response_model=List[schemas.OrderRead])
def customer_orders(customer_id: str, admin: models.User = Depends(require_admin),
                    db: Session = Depends(get_db)):
    customer = _customer_or_404(db, customer_id)
    return orders_read(crud.list_user_orders(db, customer.id), admin.role)


@router.get("/{customer_id}/products", response_model=List[schemas.AssignmentStatus])
def customer_products(customer_id: str, _: models.User = Depends(require_admin), db: Session = Depends(get_db)):
    """Every active product with this customer's assignment status"""
    customer = _customer_or_404(db, customer_id)
    return crud.assignment_status(db, customer.id)


@router.post("/{customer_id}/products", response_model=List[schemas.AssignmentStatus])
def assign_products(customer_id: str, body: schemas.AssignmentUpdate, _: models.User = Depends(require_admin),
                    db: Session = Depends(get_db)):
    """Replace the customer's product assignments"""
    customer = _customer_or_404(db, customer_id)
    try:
        crud.replace_assignments(db, customer.id, body.product_ids, body.custom_prices)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return crud.assignment_status(db, customer.id)
