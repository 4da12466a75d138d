"""Template helpers

Formatting used by the HTML pages.
"""

from ..core.order_number import order_number_for
from ..core.pricing import format_currency


def format_weight(value) -> str:
    """Production weight to one decimal"""
    if value is None:
        return '—'
    return f"{float(value):.1f}"


def format_datetime(dt) -> str:
    if dt:
        return dt.strftime('%Y-%m-%d %H:%M')
    return '—'


def status_label(status) -> str:
    value = getattr(status, "value", status) or ""
    return value.capitalize()


def register_filters(env) -> None:
    """Install the helpers as Jinja filters"""
    env.filters["currency"] = format_currency
    env.filters["weight"] = format_weight
    env.filters["datetime"] = format_datetime
    env.filters["status_label"] = status_label
    env.filters["order_number"] = order_number_for
