"""Sales analytics for the admin dashboard"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, Optional

TOP_N = 10


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _status(order) -> str:
    return getattr(order.status, "value", order.status)


def revenue_growth(this_week: float, last_week: float) -> float:
    """Week over week growth in percent, rounded to 2 decimals"""
    if last_week > 0:
        growth = (this_week - last_week) / last_week * 100
    elif this_week > 0:
        growth = 100.0
    else:
        growth = 0.0
    return round(growth, 2)


def build_analytics(orders: Iterable, period_days: int = 30, now: Optional[datetime] = None) -> Dict:
    """Summarise non-cancelled orders created in the last ``period_days``."""
    if now is None:
        now = datetime.now(timezone.utc)
    now = _as_utc(now)
    start = now - timedelta(days=period_days)

    selected = [
        o for o in orders
        if _status(o) != "CANCELLED" and start <= _as_utc(o.created_at) <= now
    ]

    total_revenue = sum(o.total_amount or 0 for o in selected)
    total_orders = len(selected)

    orders_by_status: Dict[str, int] = {}
    customers: Dict[str, Dict] = {}
    products: Dict[str, Dict] = {}
    daily: Dict[str, float] = {}

    for order in selected:
        status = _status(order)
        orders_by_status[status] = orders_by_status.get(status, 0) + 1

        user = order.user
        key = user.email if user is not None else "Unknown"
        customer = customers.setdefault(key, {
            "email": getattr(user, "email", None),
            "company_name": getattr(user, "company_name", None),
            "contact_name": getattr(user, "contact_name", None),
            "total_revenue": 0.0,
            "order_count": 0,
        })
        customer["total_revenue"] += order.total_amount or 0
        customer["order_count"] += 1

        for item in order.items:
            product = item.product
            product_id = product.id if product is not None else None
            entry = products.setdefault(product_id, {
                "id": product_id,
                "name": product.name if product is not None else "Unknown Product",
                "category": getattr(product.category, "value", product.category) if product is not None else "Unknown",
                "total_quantity": 0,
                "total_revenue": 0.0,
                "order_count": 0,
            })
            entry["total_quantity"] += item.quantity or 0
            entry["total_revenue"] += (item.quantity or 0) * (item.unit_price or 0)
            entry["order_count"] += 1

        day = _as_utc(order.created_at).date().isoformat()
        daily[day] = daily.get(day, 0.0) + (order.total_amount or 0)

    revenue_by_category: Dict[str, float] = {}
    for entry in products.values():
        revenue_by_category[entry["category"]] = revenue_by_category.get(entry["category"], 0.0) + entry["total_revenue"]

    one_week_ago = now - timedelta(days=7)
    two_weeks_ago = now - timedelta(days=14)
    this_week = sum(o.total_amount or 0 for o in selected if _as_utc(o.created_at) >= one_week_ago)
    last_week = sum(
        o.total_amount or 0 for o in selected
        if two_weeks_ago <= _as_utc(o.created_at) < one_week_ago
    )

    return {
        "summary": {
            "total_orders": total_orders,
            "total_revenue": total_revenue,
            "average_order_value": total_revenue / total_orders if total_orders else 0,
            "revenue_growth": revenue_growth(this_week, last_week),
        },
        "orders_by_status": orders_by_status,
        "top_customers": sorted(customers.values(), key=lambda c: c["total_revenue"], reverse=True)[:TOP_N],
        "top_products": sorted(products.values(), key=lambda p: p["total_revenue"], reverse=True)[:TOP_N],
        "revenue_by_category": revenue_by_category,
        "revenue_trend": [{"date": d, "revenue": daily[d]} for d in sorted(daily)],
        "period": {"days": period_days, "start_date": start, "end_date": now},
    }
