"""Product catalog routes

Customers get the products visible to them with role-masked prices; managing
the catalog is admin only.
"""

from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...core.pricing import VisibleProduct
from ...database.connection import get_db
from .deps import get_current_user, require_admin
from .serializers import catalog_product

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[schemas.CatalogProduct])
def list_products(user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    if user.is_admin:
        visible = [VisibleProduct(p) for p in crud.list_products(db)]
    else:
        visible = crud.products_for_user(db, user)
    return [catalog_product(v, user.role) for v in visible]


@router.post("", response_model=schemas.ProductRead, status_code=201)
def create_product(product: schemas.ProductCreate, _: models.User = Depends(require_admin),
                   db: Session = Depends(get_db)):
    return crud.create_product(db, product)


@router.post("/bulk", response_model=schemas.ProductBulkResult)
def bulk_products(body: schemas.ProductBulkAction, _: models.User = Depends(require_admin),
                  db: Session = Depends(get_db)):
    """Bulk delete, re-categorise, (de)activate or change visibility"""
    try:
        affected, deactivated = crud.bulk_action(db, body.action, body.product_ids, body.category)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return schemas.ProductBulkResult(action=body.action, affected=affected, deactivated=deactivated)


@router.post("/import", response_model=schemas.ProductImportResult)
async def import_products(file: UploadFile = File(...), _: models.User = Depends(require_admin),
                          db: Session = Depends(get_db)):
    """CSV import; nothing is imported when any row fails validation"""
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="File must be a CSV")
    raw = await file.read()
    try:
        imported, errors = crud.import_products(db, raw.decode("utf-8-sig"))
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded")
    except crud.ProductImportFormatError as exc:
        raise HTTPException(status_code=400, detail=f"CSV parsing error: {exc}")
    if errors:
        raise HTTPException(
            status_code=400,
            detail={"error": "Validation errors found", "errors": errors},
        )
    return schemas.ProductImportResult(imported=imported)


@router.get("/{product_id}", response_model=schemas.ProductRead)
def get_product(product_id: str, _: models.User = Depends(require_admin), db: Session = Depends(get_db)):
    product = crud.get_product(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.patch("/{product_id}", response_model=schemas.ProductRead)
def update_product(product_id: str, update: schemas.ProductUpdate, _: models.User = Depends(require_admin),
                   db: Session = Depends(get_db)):
    product = crud.update_product(db, product_id, update)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/{product_id}")
def delete_product(product_id: str, _: models.User = Depends(require_admin), db: Session = Depends(get_db)):
    """Delete a product, or deactivate it when orders reference it"""
    product = crud.get_product(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    if crud.delete_product(db, product):
        return {"message": "Product deleted"}
    return {"message": "Product is referenced by orders and was deactivated"}
