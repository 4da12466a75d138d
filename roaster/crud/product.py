"""Product catalog data access

- admin CRUD, bulk actions and CSV import
- per-customer visibility (global catalog plus assignments) and custom prices
"""

import csv
import io
import math
import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from .. import schemas
from ..core.pricing import VisibleProduct, visible_products
from ..models import CustomerProduct, OrderItem, Product, ProductCategory, User

logger = logging.getLogger(__name__)

IMPORT_REQUIRED_HEADERS = ["name", "description", "category", "price", "unit"]


class ProductImportFormatError(ValueError):
    """The CSV file itself is unusable (empty, missing headers)"""


def get_product(db: Session, product_id: str) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()


def list_products(db: Session, include_inactive: bool = False) -> List[Product]:
    query = db.query(Product)
    if not include_inactive:
        query = query.filter(Product.is_active.is_(True))
    return query.order_by(Product.category, Product.name).all()


def create_product(db: Session, product: schemas.ProductCreate) -> Product:
    db_product = Product(**product.dict())
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product


def update_product(db: Session, product_id: str, product_update: schemas.ProductUpdate) -> Optional[Product]:
    db_product = get_product(db, product_id)
    if not db_product:
        return None
    for field, value in product_update.dict(exclude_unset=True).items():
        setattr(db_product, field, value)
    db.commit()
    db.refresh(db_product)
    return db_product


def _is_ordered(db: Session, product_id: str) -> bool:
    return db.query(OrderItem.id).filter(OrderItem.product_id == product_id).first() is not None


def delete_product(db: Session, product: Product) -> bool:
    """Delete a product; one referenced by orders is only deactivated. Returns True when deleted."""
    if _is_ordered(db, product.id):
        product.is_active = False
        db.commit()
        return False
    db.delete(product)
    db.commit()
    return True


def bulk_action(db: Session, action: str, product_ids: List[str],
                category: Optional[ProductCategory] = None) -> Tuple[int, int]:
    """Apply a bulk action. Returns (affected, deactivated instead of deleted)."""
    products = db.query(Product).filter(Product.id.in_(product_ids)).all()
    deactivated = 0
    if action == "delete":
        for product in products:
            if _is_ordered(db, product.id):
                product.is_active = False
                deactivated += 1
            else:
                db.delete(product)
    elif action == "updateCategory":
        if category is None:
            raise ValueError("category is required for updateCategory")
        for product in products:
            product.category = category
    elif action in ("archive", "deactivate"):
        for product in products:
            product.is_active = False
    elif action == "activate":
        for product in products:
            product.is_active = True
    elif action == "makeGlobal":
        for product in products:
            product.is_global = True
    elif action == "makeExclusive":
        for product in products:
            product.is_global = False
    else:
        raise ValueError(f"unknown action: {action}")
    db.commit()
    logger.info("bulk %s on %d products", action, len(products))
    return len(products), deactivated


def _flag(value: str, default: bool = True) -> bool:
    value = (value or "").strip()
    return value.lower() == "true" if value else default


def parse_product_csv(text: str) -> Tuple[List[schemas.ProductCreate], List[Dict]]:
    """Validate every row of an import file.

    Returns the parsed products and a list of ``{line, error}`` entries; line
    numbers count the header as line 1.
    """
    reader = csv.DictReader(io.StringIO(text.strip()))
    headers = [h.strip().lower() for h in (reader.fieldnames or [])]
    for required in IMPORT_REQUIRED_HEADERS:
        if required not in headers:
            raise ProductImportFormatError(f"missing required header: {required}")
    reader.fieldnames = headers

    products: List[schemas.ProductCreate] = []
    errors: List[Dict] = []
    for line, row in enumerate(reader, start=2):
        row = {k: (v or "").strip() for k, v in row.items() if k}
        row_errors = []
        for required in IMPORT_REQUIRED_HEADERS:
            if not row.get(required):
                row_errors.append(f"{required} is required")
        category = row.get("category", "").upper()
        if category and category not in ProductCategory.__members__:
            row_errors.append("category must be one of: " + ", ".join(ProductCategory.__members__))
        price = None
        if row.get("price"):
            try:
                price = float(row["price"])
            except ValueError:
                price = None
            if price is None or not math.isfinite(price) or price < 0:
                row_errors.append("price must be a valid positive number")
        if row_errors:
            errors.extend({"line": line, "error": e} for e in row_errors)
            continue
        products.append(schemas.ProductCreate(
            name=row["name"],
            description=row["description"],
            category=ProductCategory(category),
            price=price,
            unit=row["unit"],
            is_global=_flag(row.get("is_global")),
            is_active=_flag(row.get("is_active")),
        ))
    if not products and not errors:
        raise ProductImportFormatError("CSV must have a header row and at least one data row")
    return products, errors


def import_products(db: Session, text: str) -> Tuple[int, List[Dict]]:
    """Import products from CSV. Nothing is written when any row is invalid."""
    products, errors = parse_product_csv(text)
    if errors:
        return 0, errors
    for product in products:
        db.add(Product(**product.dict()))
    db.commit()
    logger.info("imported %d products", len(products))
    return len(products), []


def get_assignments(db: Session, user_id: str) -> List[CustomerProduct]:
    return (
        db.query(CustomerProduct)
        .options(joinedload(CustomerProduct.product))
        .filter(CustomerProduct.user_id == user_id)
        .all()
    )


def products_for_user(db: Session, user: User) -> List[VisibleProduct]:
    """Products ``user`` can order, with the effective price"""
    global_products = (
        db.query(Product)
        .filter(Product.is_global.is_(True), Product.is_active.is_(True))
        .order_by(Product.category, Product.name)
        .all()
    )
    return visible_products(global_products, get_assignments(db, user.id))


def assignment_status(db: Session, user_id: str) -> List[Dict]:
    assignments = {a.product_id: a for a in get_assignments(db, user_id)}
    result = []
    for product in list_products(db):
        assignment = assignments.get(product.id)
        result.append({
            "product_id": product.id,
            "name": product.name,
            "category": product.category,
            "price": product.price,
            "is_global": product.is_global,
            "assigned": assignment is not None and assignment.is_active,
            "custom_price": assignment.custom_price if assignment else None,
        })
    return result


def replace_assignments(db: Session, user_id: str, product_ids: List[str],
                        custom_prices: Dict[str, Optional[float]]) -> List[CustomerProduct]:
    """Replace all assignments of a customer in one transaction"""
    known = {p.id for p in db.query(Product.id).filter(Product.id.in_(product_ids)).all()} if product_ids else set()
    missing = [pid for pid in product_ids if pid not in known]
    if missing:
        raise ValueError(f"unknown products: {', '.join(missing)}")
    try:
        db.query(CustomerProduct).filter(CustomerProduct.user_id == user_id).delete()
        created = []
        for product_id in dict.fromkeys(product_ids):
            price = custom_prices.get(product_id)
            assignment = CustomerProduct(
                user_id=user_id,
                product_id=product_id,
                custom_price=float(price) if price is not None else None,
                is_active=True,
            )
            db.add(assignment)
            created.append(assignment)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("assigned %d products to customer %s", len(created), user_id)
    return created
