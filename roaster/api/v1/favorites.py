from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...core.pricing import VisibleProduct
from ...database.connection import get_db
from .deps import get_current_user
from .serializers import catalog_product

router = APIRouter(prefix="/favorites", tags=["favorites"])


class FavoriteCreate(BaseModel):
    product_id: str


@router.get("", response_model=List[schemas.CatalogProduct])
def list_favorites(user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Favorite products that the user can still order"""
    if user.is_admin:
        visible = {p.id: VisibleProduct(p) for p in crud.list_products(db)}
    else:
        visible = {v.id: v for v in crud.products_for_user(db, user)}
    return [
        catalog_product(visible[f.product_id], user.role)
        for f in crud.list_favorites(db, user.id)
        if f.product_id in visible
    ]


@router.post("", status_code=201)
def add_favorite(body: FavoriteCreate, user: models.User = Depends(get_current_user),
                 db: Session = Depends(get_db)):
    if not crud.get_product(db, body.product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    favorite = crud.add_favorite(db, user.id, body.product_id)
    return {"product_id": favorite.product_id, "created_at": favorite.created_at}


@router.delete("/{product_id}")
def remove_favorite(product_id: str, user: models.User = Depends(get_current_user),
                    db: Session = Depends(get_db)):
    if not crud.remove_favorite(db, user.id, product_id):
        raise HTTPException(status_code=404, detail="Favorite not found")
    return {"message": "Favorite removed"}
