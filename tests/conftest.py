import os
import sys
from pathlib import Path
import pytest

# Ensure project root is on sys.path so tests can import the 'roaster' package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Point the app at a throw-away SQLite file before anything imports the settings
os.environ["DATABASE_URL"] = f"sqlite:///{ROOT / 'test_roaster.db'}"
os.environ.setdefault("SECRET_KEY", "test-secret")

from roaster.db import Base, engine, SessionLocal
from roaster import crud
from roaster.models import Product, ProductCategory, UserRole

ADMIN_EMAIL = "admin@roastery.com"
ADMIN_PASSWORD = "admin-pass"
CUSTOMER_PASSWORD = "customer-pass"


@pytest.fixture(autouse=True)
def reset_db():
    # Drop all and re-create so the test DB matches the current models exactly
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def admin(db):
    return crud.create_user(db, ADMIN_EMAIL, ADMIN_PASSWORD, UserRole.ADMIN)


@pytest.fixture
def customer(db):
    return crud.create_user(db, "buyer@cafe.com", CUSTOMER_PASSWORD, UserRole.MANAGER, company_name="Corner Cafe")


def make_product(db, name, category=ProductCategory.WHOLE_BEANS, price=10.0, **fields):
    product = Product(name=name, description=f"{name} description", category=category, unit="5 lb bag",
                      price=price, **fields)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def login(client, email, password):
    r = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r
