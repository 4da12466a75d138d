import re

from fastapi.testclient import TestClient
import pytest

from roaster.main import app
from roaster import crud
from roaster.models import Order, OrderItem, Sequence, UserRole
from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, CUSTOMER_PASSWORD, login, make_product

client = TestClient(app)

ORDER_NUMBER = re.compile(r"^\d{4}-\d{6}-\d{4,}$")


@pytest.fixture(autouse=True)
def logged_out():
    client.cookies.clear()


def place(items, notes=None):
    return client.post("/api/v1/orders", json={"items": items, "notes": notes})


def test_place_order_prices_server_side(db, customer):
    house = make_product(db, "House", price=12.5)
    login(client, customer.email, CUSTOMER_PASSWORD)

    r = place([{"product_id": house.id, "quantity": 4}])
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["total_amount"] == 50.0
    assert body["items"][0]["unit_price"] == 12.5
    assert ORDER_NUMBER.match(body["order_number"])
    assert body["order_number"].startswith(f"{customer.customer_code:04d}-")
    assert body["order_number"].endswith("-0001")
    assert body["sequence_number"] == 1


def test_sequence_numbers_increase(db, customer):
    house = make_product(db, "House")
    login(client, customer.email, CUSTOMER_PASSWORD)
    numbers = [place([{"product_id": house.id, "quantity": 1}]).json()["sequence_number"] for _ in range(3)]
    assert numbers == [1, 2, 3]

    r = client.get("/api/v1/orders")
    assert [o["sequence_number"] for o in r.json()] == [3, 2, 1]
    assert len(client.get("/api/v1/orders?limit=2").json()) == 2


def test_counter_starts_after_existing_orders(db, customer):
    house = make_product(db, "House")
    db.add(Order(user_id=customer.id, sequence_number=41, total_amount=0,
                 items=[OrderItem(product_id=house.id, quantity=1, unit_price=0, total_price=0)]))
    db.commit()
    assert db.query(Sequence).filter(Sequence.name == crud.ORDERS).count() == 0
    assert crud.current_value(db, crud.CUSTOMER_CODE) == 1

    assert crud.next_value(db, crud.ORDERS) == 42
    assert crud.next_value(db, crud.ORDERS) == 43
    db.commit()


def test_invalid_orders_are_rejected(db, customer):
    house = make_product(db, "House")
    exclusive = make_product(db, "Private Reserve", is_global=False)
    retired = make_product(db, "Retired", is_active=False)
    login(client, customer.email, CUSTOMER_PASSWORD)

    assert place([]).status_code == 422
    assert place([{"product_id": house.id, "quantity": 0}]).status_code == 422
    r = place([{"product_id": exclusive.id, "quantity": 1}])
    assert r.status_code == 400
    assert "not available" in r.json()["detail"]
    assert place([{"product_id": retired.id, "quantity": 1}]).status_code == 400
    assert place([{"product_id": "missing", "quantity": 1}]).status_code == 400

    db.expire_all()
    assert db.query(Order).count() == 0
    # failed orders do not burn sequence numbers
    assert crud.current_value(db, crud.ORDERS) == 0


def test_exclusive_products_after_assignment(db, admin, customer):
    exclusive = make_product(db, "Private Reserve", price=30.0, is_global=False)
    house = make_product(db, "House", price=10.0)
    login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    r = client.post(f"/api/v1/admin/customers/{customer.id}/products",
                    json={"product_ids": [exclusive.id, house.id], "custom_prices": {exclusive.id: 24.0}})
    assert r.status_code == 200
    status = {row["product_id"]: row for row in r.json()}
    assert status[exclusive.id]["assigned"] and status[exclusive.id]["custom_price"] == 24.0

    client.cookies.clear()
    login(client, customer.email, CUSTOMER_PASSWORD)
    products = {p["id"]: p for p in client.get("/api/v1/products").json()}
    assert products[exclusive.id]["price"] == 24.0
    assert products[exclusive.id]["has_custom_price"]
    assert products[house.id]["price"] == 10.0

    r = place([{"product_id": exclusive.id, "quantity": 2}])
    assert r.status_code == 201
    assert r.json()["total_amount"] == 48.0


def test_order_visibility(db, customer):
    other = crud.create_user(db, "other@cafe.com", "other-pass", UserRole.MANAGER)
    house = make_product(db, "House")
    login(client, customer.email, CUSTOMER_PASSWORD)
    order_id = place([{"product_id": house.id, "quantity": 1}]).json()["id"]
    assert client.get(f"/api/v1/orders/{order_id}").status_code == 200

    client.cookies.clear()
    login(client, other.email, "other-pass")
    assert client.get(f"/api/v1/orders/{order_id}").status_code == 403
    assert client.get("/api/v1/orders/nope").status_code == 404


def test_hidden_prices_are_masked_for_employees(db):
    employee = crud.create_user(db, "staff@cafe.com", "staff-pass", UserRole.EMPLOYEE)
    secret = make_product(db, "Negotiated Blend", price=20.0, hide_prices=True)
    login(client, employee.email, "staff-pass")

    listed = client.get("/api/v1/products").json()
    assert listed[0]["price"] is None
    assert listed[0]["price_display"] == "Unit: 5 lb bag"

    body = place([{"product_id": secret.id, "quantity": 2}]).json()
    assert body["total_amount"] is None
    assert body["total_display"] == "Custom Pricing"
    assert body["items"][0]["unit_price"] is None


def test_admin_order_management(db, admin, customer):
    house = make_product(db, "House")
    login(client, ADMIN_EMAIL, ADMIN_PASSWORD)

    r = client.post("/api/v1/admin/orders", json={
        "user_id": customer.id, "items": [{"product_id": house.id, "quantity": 3}], "status": "CONFIRMED",
    })
    assert r.status_code == 201
    order_id = r.json()["id"]
    assert r.json()["status"] == "CONFIRMED"

    r = client.patch(f"/api/v1/orders/{order_id}", json={"status": "SHIPPED"})
    assert r.json()["status"] == "SHIPPED"

    r = client.patch(f"/api/v1/admin/orders/{order_id}/archive", json={"action": "archive"})
    assert r.json()["is_archived"] is True
    assert client.get("/api/v1/admin/orders").json()["total"] == 0
    assert client.get("/api/v1/admin/orders?include_archived=true").json()["total"] == 1
    page = client.get("/api/v1/admin/orders?archived_only=true").json()
    assert [o["id"] for o in page["orders"]] == [order_id]

    client.patch(f"/api/v1/admin/orders/{order_id}/archive", json={"action": "unarchive"})
    assert client.get("/api/v1/admin/orders").json()["total"] == 1


def test_admin_orders_need_a_customer_code(db, admin, customer):
    house = make_product(db, "House")
    customer.customer_code = None
    db.commit()
    login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    r = client.post("/api/v1/admin/orders", json={
        "user_id": customer.id, "items": [{"product_id": house.id, "quantity": 1}],
    })
    assert r.status_code == 400


def test_ui_order_flow(db, customer):
    house = make_product(db, "House", price=9.0)
    client.post("/ui/login", data={"email": customer.email, "password": CUSTOMER_PASSWORD})

    page = client.get("/ui/dashboard")
    assert page.status_code == 200
    assert "House" in page.text and "$9.00" in page.text

    r = client.post("/ui/orders", data={f"qty_{house.id}": "2", "notes": "back door"})
    assert r.status_code == 200
    assert "$18.00" in r.text
    assert "back door" in r.text

    r = client.post("/ui/orders", data={f"qty_{house.id}": "0"})
    assert r.status_code == 400
    assert "at least one item" in r.text
