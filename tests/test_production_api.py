from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
import pytest

from roaster.main import app
from roaster import crud
from roaster.models import OrderStatus, ProductCategory
from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, CUSTOMER_PASSWORD, login, make_product

client = TestClient(app)


@pytest.fixture(autouse=True)
def logged_out():
    client.cookies.clear()


@pytest.fixture
def orders(db, customer):
    beans = make_product(db, "House Blend", production_weight_per_unit=2.5)
    espresso = make_product(db, "Espresso", category=ProductCategory.ESPRESSO)
    first = crud.create_order(db, customer, [(beans.id, 4), (espresso.id, 1)])
    second = crud.create_order(db, customer, [(beans.id, 2), (beans.id, 1)], status=OrderStatus.CONFIRMED)
    cancelled = crud.create_order(db, customer, [(espresso.id, 50)])
    crud.update_status(db, cancelled, OrderStatus.CANCELLED)
    old = crud.create_order(db, customer, [(espresso.id, 7)])
    old.created_at = datetime.now(timezone.utc) - timedelta(days=30)
    db.commit()
    return {"beans": beans, "espresso": espresso, "first": first, "second": second, "old": old}


def test_schedule_groups_by_product(admin, orders):
    login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    r = client.get("/api/v1/admin/production")
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["total_orders"] == 2
    assert body["orders_by_status"] == {"PENDING": 1, "CONFIRMED": 1}
    beans, espresso = body["production_items"]
    assert beans["product_name"] == "House Blend"
    assert beans["total_quantity"] == 7
    assert beans["total_production_weight"] == 17.5
    assert beans["order_count"] == 2
    assert [e["quantity"] for e in beans["orders"]] == [4, 3]
    assert espresso["total_quantity"] == 1
    assert espresso["production_details"]["production_weight_per_unit"] == 5.0
    assert espresso["production_details"]["production_unit"] == "lbs"
    assert body["summary"]["by_category"] == {
        "WHOLE_BEANS": {"quantity": 7, "products": 1},
        "ESPRESSO": {"quantity": 1, "products": 1},
    }


def test_schedule_filters(admin, orders):
    login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    body = client.get("/api/v1/admin/production", params={"status": "CONFIRMED"}).json()
    assert body["total_orders"] == 1
    assert body["production_items"][0]["total_quantity"] == 3

    start = (datetime.now(timezone.utc) - timedelta(days=40)).date().isoformat()
    body = client.get("/api/v1/admin/production", params={"start_date": start}).json()
    assert body["total_orders"] == 3

    assert client.get("/api/v1/admin/production", params={"status": "LOST"}).status_code == 400
    assert client.get("/api/v1/admin/production",
                      params={"start_date": "2024-03-10", "end_date": "2024-03-01"}).status_code == 400


def test_archived_orders_need_the_flag(db, admin, orders):
    crud.set_archived(db, orders["first"], True)
    login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    assert client.get("/api/v1/admin/production").json()["total_orders"] == 1
    assert client.get("/api/v1/admin/production", params={"include_archived": "true"}).json()["total_orders"] == 2


def test_malformed_weights_are_reported(db, admin, orders):
    orders["beans"].production_weight_per_unit = -3
    db.commit()
    login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    r = client.get("/api/v1/admin/production")
    assert r.status_code == 422
    assert "invalid production weight" in r.json()["detail"]


def test_csv_export(admin, orders):
    login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    r = client.get("/api/v1/admin/production/csv")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "attachment" in r.headers["content-disposition"]
    lines = r.text.strip().splitlines()
    assert lines[1] == "House Blend,WHOLE_BEANS,7,5 lb bag,17.5,lbs,2"


def test_bulk_status_update(db, admin, orders):
    login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    ids = [orders["first"].id, orders["second"].id]
    r = client.post("/api/v1/admin/production", json={"order_ids": ids, "status": "SHIPPED"})
    assert r.json() == {"updated": 2, "status": "SHIPPED"}
    body = client.get("/api/v1/admin/production").json()
    assert body["orders_by_status"] == {"SHIPPED": 2}


def test_production_page(admin, orders):
    client.post("/ui/login", data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    r = client.get("/ui/admin/production")
    assert r.status_code == 200
    assert "House Blend" in r.text
    assert "17.5 lbs" in r.text
    r = client.get("/ui/admin/production/csv")
    assert r.headers["content-type"].startswith("text/csv")


def test_schedule_requires_admin_before_checking_filters(db, customer):
    assert client.get("/api/v1/admin/production", params={"status": "LOST"}).status_code == 401
    assert client.get("/api/v1/admin/production/csv", params={"status": "LOST"}).status_code == 401

    login(client, customer.email, CUSTOMER_PASSWORD)
    assert client.get("/api/v1/admin/production", params={"status": "LOST"}).status_code == 403
