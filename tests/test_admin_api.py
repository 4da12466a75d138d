import io

from fastapi.testclient import TestClient
import pytest

from roaster.main import app
from roaster import crud
from roaster.models import Product
from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, CUSTOMER_PASSWORD, login, make_product

client = TestClient(app)


@pytest.fixture(autouse=True)
def as_admin(admin):
    client.cookies.clear()
    login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


def test_customer_crud(db):
    r = client.post("/api/v1/admin/customers", json={
        "email": "new@cafe.com", "password": "welcome1", "company_name": "New Cafe",
    })
    assert r.status_code == 201, r.text
    created = r.json()
    assert created["customer_code"] == 1
    assert created["role"] == "EMPLOYEE"

    dup = client.post("/api/v1/admin/customers", json={"email": "new@cafe.com", "password": "welcome1"})
    assert dup.status_code == 400

    r = client.patch(f"/api/v1/admin/customers/{created['id']}", json={"contact_name": "Sam"})
    assert r.json()["contact_name"] == "Sam"
    assert [c["email"] for c in client.get("/api/v1/admin/customers").json()] == ["new@cafe.com"]

    assert client.delete(f"/api/v1/admin/customers/{created['id']}").json() == {"message": "Customer deleted"}
    assert client.get(f"/api/v1/admin/customers/{created['id']}").status_code == 404


def test_customers_with_orders_are_deactivated(db, customer):
    crud.create_order(db, customer, [(make_product(db, "House").id, 1)])
    r = client.delete(f"/api/v1/admin/customers/{customer.id}")
    assert "deactivated" in r.json()["message"]
    assert client.get(f"/api/v1/admin/customers/{customer.id}").json()["is_active"] is False
    assert len(client.get(f"/api/v1/admin/customers/{customer.id}/orders").json()) == 1


def test_reset_password(customer):
    r = client.post(f"/api/v1/admin/customers/{customer.id}/reset-password")
    temporary = r.json()["temporary_password"]
    client.cookies.clear()
    assert client.post("/api/v1/auth/login",
                       json={"email": customer.email, "password": CUSTOMER_PASSWORD}).status_code == 401
    login(client, customer.email, temporary)


def test_assignments_replace_previous_ones(db, customer):
    a = make_product(db, "A", is_global=False)
    b = make_product(db, "B", is_global=False)
    client.post(f"/api/v1/admin/customers/{customer.id}/products", json={"product_ids": [a.id]})
    r = client.post(f"/api/v1/admin/customers/{customer.id}/products", json={"product_ids": [b.id]})
    assigned = {row["name"]: row["assigned"] for row in r.json()}
    assert assigned == {"A": False, "B": True}
    r = client.post(f"/api/v1/admin/customers/{customer.id}/products", json={"product_ids": ["missing"]})
    assert r.status_code == 400


def test_product_crud_and_delete_rules(db, customer):
    r = client.post("/api/v1/products", json={
        "name": "Decaf", "description": "Swiss water", "category": "WHOLE_BEANS", "price": 15, "unit": "5 lb bag",
    })
    assert r.status_code == 201
    decaf_id = r.json()["id"]
    assert client.patch(f"/api/v1/products/{decaf_id}", json={"price": 16.5}).json()["price"] == 16.5
    assert client.delete(f"/api/v1/products/{decaf_id}").json() == {"message": "Product deleted"}

    ordered = make_product(db, "Ordered")
    crud.create_order(db, customer, [(ordered.id, 1)])
    r = client.delete(f"/api/v1/products/{ordered.id}")
    assert "deactivated" in r.json()["message"]
    db.expire_all()
    assert db.get(Product, ordered.id).is_active is False


def test_bulk_actions(db):
    a = make_product(db, "A")
    b = make_product(db, "B")
    r = client.post("/api/v1/products/bulk", json={
        "action": "updateCategory", "product_ids": [a.id, b.id], "category": "ESPRESSO",
    })
    assert r.json()["affected"] == 2
    client.post("/api/v1/products/bulk", json={"action": "makeExclusive", "product_ids": [a.id]})
    db.expire_all()
    assert db.get(Product, a.id).is_global is False
    assert db.get(Product, b.id).category.value == "ESPRESSO"

    r = client.post("/api/v1/products/bulk", json={"action": "updateCategory", "product_ids": [a.id]})
    assert r.status_code == 400
    r = client.post("/api/v1/products/bulk", json={"action": "explode", "product_ids": [a.id]})
    assert r.status_code == 422


def _upload(text, name="products.csv"):
    return client.post("/api/v1/products/import", files={"file": (name, io.BytesIO(text.encode()), "text/csv")})


def test_csv_import(db):
    good = (
        "name,description,category,price,unit,is_global\n"
        "Kenya AA,Bright and juicy,whole_beans,18.5,5 lb bag,false\n"
        "Espresso Forte,Dark,ESPRESSO,14,5 lb bag,\n"
    )
    r = _upload(good)
    assert r.json() == {"imported": 2, "errors": []}
    kenya = db.query(Product).filter(Product.name == "Kenya AA").one()
    assert kenya.is_global is False and kenya.price == 18.5


def test_csv_import_validates_every_row_first(db):
    bad = (
        "name,description,category,price,unit\n"
        "Fine,ok,ESPRESSO,10,bag\n"
        ",missing name,TEA,-1,bag\n"
    )
    r = _upload(bad)
    assert r.status_code == 400
    errors = r.json()["detail"]["errors"]
    assert {e["line"] for e in errors} == {3}
    assert len(errors) == 3
    assert db.query(Product).count() == 0

    assert _upload("name,price\nX,1\n").status_code == 400
    assert _upload(bad, name="products.txt").status_code == 400


def test_branding_and_reminders():
    assert client.get("/api/v1/branding").json()["company_name"] == "Roaster Ordering v1"
    r = client.put("/api/v1/admin/branding-settings", json={"company_name": "Bean Co", "show_stats": False})
    assert r.json()["company_name"] == "Bean Co"
    assert r.json()["show_stats"] is False
    assert r.json()["tagline"] == "Premium Wholesale Coffee"

    r = client.get("/api/v1/admin/reminder-settings").json()
    assert (r["day_of_week"], r["hour"], r["is_active"]) == (1, 9, False)
    assert r["schedule_description"] == "Monday at 9:00 AM (Pacific Time)"

    r = client.post("/api/v1/admin/reminder-settings", json={
        "day_of_week": 4, "hour": 15, "timezone": "America/New_York", "is_active": True,
    })
    assert r.json()["schedule_description"] == "Thursday at 3:00 PM (Eastern Time)"
    bad = client.post("/api/v1/admin/reminder-settings", json={"day_of_week": 4, "hour": 15, "timezone": "Nowhere"})
    assert bad.status_code == 422


def test_stats_and_analytics(db, customer):
    house = make_product(db, "House", price=10.0)
    crud.create_order(db, customer, [(house.id, 3)])
    stats = client.get("/api/v1/admin/stats").json()
    assert stats == {"total_orders": 1, "total_revenue": 30.0, "active_customers": 1, "active_products": 1}

    analytics = client.get("/api/v1/admin/analytics", params={"period": 7}).json()
    assert analytics["summary"]["total_orders"] == 1
    assert analytics["top_products"][0]["name"] == "House"
    assert client.get("/api/v1/admin/analytics", params={"customer": "someone-else"}).json()["summary"]["total_orders"] == 0


def test_favorites(db):
    house = make_product(db, "House")
    assert client.post("/api/v1/favorites", json={"product_id": house.id}).status_code == 201
    assert client.post("/api/v1/favorites", json={"product_id": house.id}).status_code == 201
    assert [p["name"] for p in client.get("/api/v1/favorites").json()] == ["House"]
    assert client.delete(f"/api/v1/favorites/{house.id}").status_code == 200
    assert client.delete(f"/api/v1/favorites/{house.id}").status_code == 404


def test_health():
    assert client.get("/health/db").json()["status"] == "healthy"
