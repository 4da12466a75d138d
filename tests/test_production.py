import math
from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest

from roaster.core.production import (
    ProductionDataError, ProductionOptions, aggregate_production, production_csv,
)

DAY = datetime(2024, 3, 5, 10, tzinfo=timezone.utc)
OPTIONS = ProductionOptions(start_date=date(2024, 3, 1), end_date=date(2024, 3, 7))

_seq = iter(range(1, 10000))


def product(pid, category="WHOLE_BEANS", weight=2.0, unit="lbs", name=None):
    return SimpleNamespace(
        id=pid, name=name or f"Product {pid}", category=category, unit="bag",
        production_weight_per_unit=weight, production_unit=unit,
        bean_origin=None, roast_level=None, production_notes=None,
        processing_method=None, flavor_profile=None,
    )


def order(oid, *lines, status="PENDING", created_at=DAY, archived=False, company="Cafe"):
    user = SimpleNamespace(customer_code=3, company_name=company, contact_name=None, email="c@cafe.com")
    return SimpleNamespace(
        id=oid, sequence_number=next(_seq), status=status, is_archived=archived,
        created_at=created_at, user=user,
        items=[SimpleNamespace(id=f"{oid}-{i}", product=p, quantity=q) for i, (p, q) in enumerate(lines)],
    )


def item_for(schedule, pid):
    return next(i for i in schedule["production_items"] if i["product_id"] == pid)


def test_quantities_and_weights_add_up_across_orders():
    p = product("p", weight=2.0)
    schedule = aggregate_production([order("o1", (p, 3)), order("o2", (p, 5))], OPTIONS)
    item = item_for(schedule, "p")
    assert item["total_quantity"] == 8
    assert item["total_production_weight"] == 16.0
    assert item["order_count"] == 2
    assert schedule["total_orders"] == 2


def test_repeated_product_in_one_order_is_one_entry():
    p = product("p", weight=1.5)
    schedule = aggregate_production([order("o1", (p, 2), (p, 3))], OPTIONS)
    item = item_for(schedule, "p")
    assert item["total_quantity"] == 5
    assert item["order_count"] == 1
    assert len(item["orders"]) == 1
    assert item["orders"][0]["quantity"] == 5
    assert item["orders"][0]["production_weight"] == 7.5


def test_missing_weight_and_unit_use_defaults():
    p = product("p", weight=None, unit=None)
    schedule = aggregate_production([order("o1", (p, 4))], OPTIONS)
    item = item_for(schedule, "p")
    assert item["production_details"]["production_weight_per_unit"] == 5.0
    assert item["production_details"]["production_unit"] == "lbs"
    assert item["total_production_weight"] == 20.0


def test_zero_weight_uses_default():
    schedule = aggregate_production([order("o1", (product("p", weight=0), 2))], OPTIONS)
    assert item_for(schedule, "p")["total_production_weight"] == 10.0


def test_cancelled_orders_are_never_scheduled():
    p = product("p")
    orders = [order("o1", (p, 1)), order("o2", (p, 9), status="CANCELLED")]
    schedule = aggregate_production(orders, OPTIONS)
    assert schedule["total_orders"] == 1
    assert item_for(schedule, "p")["total_quantity"] == 1
    assert "CANCELLED" not in schedule["orders_by_status"]


def test_filters_are_applied_to_unfiltered_input():
    p = product("p")
    orders = [
        order("in-range", (p, 1)),
        order("too-early", (p, 10), created_at=datetime(2024, 2, 29, 23, 59, tzinfo=timezone.utc)),
        order("end-day", (p, 2), created_at=datetime(2024, 3, 7, 23, 59, tzinfo=timezone.utc)),
        order("archived", (p, 100), archived=True),
        order("shipped", (p, 1000), status="SHIPPED"),
    ]
    schedule = aggregate_production(orders, ProductionOptions(
        start_date=date(2024, 3, 1), end_date=date(2024, 3, 7), status_filter="pending",
    ))
    assert schedule["total_orders"] == 2
    assert item_for(schedule, "p")["total_quantity"] == 3

    with_archived = aggregate_production(orders, ProductionOptions(
        start_date=date(2024, 3, 1), end_date=date(2024, 3, 7), include_archived=True,
    ))
    assert item_for(with_archived, "p")["total_quantity"] == 1103


def test_summary_matches_items():
    a = product("a", category="WHOLE_BEANS")
    b = product("b", category="ESPRESSO")
    c = product("c", category="WHOLE_BEANS")
    schedule = aggregate_production(
        [order("o1", (a, 2), (b, 7)), order("o2", (c, 4), (a, 1), status="CONFIRMED")], OPTIONS
    )
    summary = schedule["summary"]
    assert summary["total_quantity"] == sum(i["total_quantity"] for i in schedule["production_items"])
    assert sum(c["quantity"] for c in summary["by_category"].values()) == summary["total_quantity"]
    assert summary["by_category"]["WHOLE_BEANS"] == {"quantity": 7, "products": 2}
    assert summary["total_products"] == schedule["total_items"] == 3
    assert schedule["orders_by_status"] == {"PENDING": 1, "CONFIRMED": 1}


def test_sorted_by_quantity_with_stable_ties():
    a, b, c = product("a"), product("b"), product("c")
    schedule = aggregate_production([order("o1", (a, 2), (b, 5), (c, 2))], OPTIONS)
    assert [i["product_id"] for i in schedule["production_items"]] == ["b", "a", "c"]


def test_weights_keep_full_precision():
    p = product("p", weight=0.1)
    schedule = aggregate_production([order(f"o{i}", (p, 1)) for i in range(3)], OPTIONS)
    total = item_for(schedule, "p")["total_production_weight"]
    assert total == 0.1 + 0.1 + 0.1
    assert total != 0.3


def test_order_entries_carry_display_fields():
    schedule = aggregate_production([order("o1", (product("p"), 1), company="Bean Bar")], OPTIONS)
    entry = item_for(schedule, "p")["orders"][0]
    assert entry["customer_name"] == "Bean Bar"
    assert entry["due_date"] == DAY
    assert entry["status"] == "PENDING"
    assert entry["order_number"].startswith("0003-")


@pytest.mark.parametrize("weight", ["heavy", float("nan"), math.inf, -1.0])
def test_malformed_weight_fails_loudly(weight):
    with pytest.raises(ProductionDataError):
        aggregate_production([order("o1", (product("p", weight=weight), 1))], OPTIONS)


@pytest.mark.parametrize("quantity", [0, -2, 1.5, None])
def test_malformed_quantity_fails_loudly(quantity):
    with pytest.raises(ProductionDataError):
        aggregate_production([order("o1", (product("p"), quantity))], OPTIONS)


def test_empty_schedule():
    schedule = aggregate_production([], OPTIONS)
    assert schedule["production_items"] == []
    assert schedule["summary"] == {"total_products": 0, "total_quantity": 0, "by_category": {}}
    assert schedule["date_range"] == {"start_date": date(2024, 3, 1), "end_date": date(2024, 3, 7)}


def test_csv_rounds_weights_for_display():
    p = product("p", weight=0.1, name="House Blend")
    schedule = aggregate_production([order(f"o{i}", (p, 1)) for i in range(3)], OPTIONS)
    lines = production_csv(schedule).splitlines()
    assert lines[0] == "product,category,quantity,unit,production_weight,production_unit,orders"
    assert lines[1] == "House Blend,WHOLE_BEANS,3,bag,0.3,lbs,3"
