"""Production schedule aggregation

Groups order line items by product for a date range and works out how much
has to be roasted/packed:

- quantity and production weight per product (weight = quantity * weight per unit)
- one entry per order and product, merging repeated lines of the same product
- order counts per status and a per-category summary

Totals keep full float precision. Rounding to one decimal is a display concern
(templates and CSV export).
"""

import csv
import io
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from numbers import Real
from typing import Dict, Iterable, Optional

from .order_number import order_number_for

DEFAULT_WEIGHT_PER_UNIT = 5.0
DEFAULT_PRODUCTION_UNIT = "lbs"
CANCELLED = "CANCELLED"


class ProductionDataError(ValueError):
    """Order or product data that cannot be turned into a production weight"""


@dataclass
class ProductionOptions:
    start_date: date = field(default_factory=lambda: datetime.now(timezone.utc).date() - timedelta(days=7))
    end_date: date = field(default_factory=lambda: datetime.now(timezone.utc).date())
    status_filter: str = "all"
    include_archived: bool = False


def _value(obj) -> str:
    """Enum members and plain strings both come out as their string value"""
    return getattr(obj, "value", obj)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def weight_per_unit(product) -> float:
    """Production multiplier of a product.

    Missing (None) or zero falls back to 5.0. Anything else that is not a
    finite, non-negative number raises instead of being treated as zero.
    """
    raw = getattr(product, "production_weight_per_unit", None)
    if raw is None:
        return DEFAULT_WEIGHT_PER_UNIT
    if isinstance(raw, bool) or not isinstance(raw, (Real, Decimal)):
        raise ProductionDataError(
            f"product {getattr(product, 'id', '?')} has a non-numeric production weight: {raw!r}"
        )
    value = float(raw)
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise ProductionDataError(
            f"product {getattr(product, 'id', '?')} has an invalid production weight: {raw!r}"
        )
    if value == 0:
        return DEFAULT_WEIGHT_PER_UNIT
    return value


def production_unit(product) -> str:
    return getattr(product, "production_unit", None) or DEFAULT_PRODUCTION_UNIT


def customer_name(user) -> str:
    if user is None:
        return "Unknown Customer"
    return (
        getattr(user, "company_name", None)
        or getattr(user, "contact_name", None)
        or getattr(user, "email", None)
        or "Unknown Customer"
    )


def _quantity(item) -> int:
    qty = item.quantity
    if isinstance(qty, bool) or not isinstance(qty, int) or qty <= 0:
        raise ProductionDataError(f"order item {getattr(item, 'id', '?')} has an invalid quantity: {qty!r}")
    return qty


def order_matches(order, options: ProductionOptions) -> bool:
    """Apply the schedule filters to one order.

    Cancelled orders never reach production, whatever the status filter says.
    """
    status = _value(order.status)
    if status == CANCELLED:
        return False
    if options.status_filter and options.status_filter.lower() != "all":
        if status != options.status_filter.upper():
            return False
    if order.is_archived and not options.include_archived:
        return False
    created = _as_utc(order.created_at).date()
    return options.start_date <= created <= options.end_date


def _new_production_item(product) -> Dict:
    return {
        "product_id": product.id,
        "product_name": product.name,
        "category": _value(product.category),
        "unit": product.unit,
        "total_quantity": 0,
        "total_production_weight": 0.0,
        "order_count": 0,
        "production_details": {
            "bean_origin": getattr(product, "bean_origin", None),
            "roast_level": getattr(product, "roast_level", None),
            "production_weight_per_unit": weight_per_unit(product),
            "production_unit": production_unit(product),
            "production_notes": getattr(product, "production_notes", None),
            "processing_method": getattr(product, "processing_method", None),
            "flavor_profile": getattr(product, "flavor_profile", None),
        },
        "orders": [],
    }


def aggregate_production(orders: Iterable, options: Optional[ProductionOptions] = None) -> Dict:
    """Build the production schedule for the orders matching ``options``.

    Products come out sorted by total quantity, largest first. Products with
    the same quantity keep the order in which they were first seen.
    """
    if options is None:
        options = ProductionOptions()

    production_map: Dict[str, Dict] = {}
    # (product id, order id) -> order entry inside that product's item
    order_entries: Dict[tuple, Dict] = {}
    orders_by_status: Dict[str, int] = {}
    total_orders = 0

    for order in orders:
        if not order_matches(order, options):
            continue
        total_orders += 1
        status = _value(order.status)
        orders_by_status[status] = orders_by_status.get(status, 0) + 1

        for item in order.items or []:
            product = item.product
            if product is None:
                raise ProductionDataError(f"order item {getattr(item, 'id', '?')} has no product")

            production_item = production_map.get(product.id)
            if production_item is None:
                production_item = _new_production_item(product)
                production_map[product.id] = production_item

            quantity = _quantity(item)
            order_weight = quantity * production_item["production_details"]["production_weight_per_unit"]

            production_item["total_quantity"] += quantity
            production_item["total_production_weight"] += order_weight

            key = (product.id, order.id)
            entry = order_entries.get(key)
            if entry is None:
                entry = {
                    "order_id": order.id,
                    "order_number": order_number_for(order),
                    "customer_name": customer_name(getattr(order, "user", None)),
                    "quantity": quantity,
                    "production_weight": order_weight,
                    "status": status,
                    "due_date": order.created_at,
                }
                order_entries[key] = entry
                production_item["orders"].append(entry)
                production_item["order_count"] += 1
            else:
                # same product on several lines of one order
                entry["quantity"] += quantity
                entry["production_weight"] += order_weight

    # sorted() is stable, so ties keep insertion order
    production_items = sorted(production_map.values(), key=lambda p: p["total_quantity"], reverse=True)

    by_category: Dict[str, Dict[str, int]] = {}
    for item in production_items:
        bucket = by_category.setdefault(item["category"], {"quantity": 0, "products": 0})
        bucket["quantity"] += item["total_quantity"]
        bucket["products"] += 1

    return {
        "date_range": {"start_date": options.start_date, "end_date": options.end_date},
        "total_items": len(production_items),
        "total_orders": total_orders,
        "production_items": production_items,
        "orders_by_status": orders_by_status,
        "summary": {
            "total_products": len(production_items),
            "total_quantity": sum(item["total_quantity"] for item in production_items),
            "by_category": by_category,
        },
    }


def production_csv(schedule: Dict) -> str:
    """CSV export of a schedule, one row per product"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["product", "category", "quantity", "unit", "production_weight", "production_unit", "orders"])
    for item in schedule["production_items"]:
        writer.writerow([
            item["product_name"],
            item["category"],
            item["total_quantity"],
            item["unit"] or "",
            f"{item['total_production_weight']:.1f}",
            item["production_details"]["production_unit"],
            item["order_count"],
        ])
    return buffer.getvalue()
