"""Order number formatting

Order numbers look like ``CCCC-YYMMDD-SSSS``:

- ``CCCC``   customer code, zero-padded to 4 digits (``0000`` when missing)
- ``YYMMDD`` order creation date in the display timezone
- ``SSSS``   global sequence number, zero-padded to 4 digits; widens past 9999

Naive datetimes are read as UTC, which is how the database stores them. The
display timezone is the server's local zone unless one is passed in (or
configured through ``ORDER_NUMBER_TIMEZONE`` for ``order_number_for``).
"""

from datetime import datetime, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..config.settings import settings

DateLike = Union[str, datetime]


def _parse_created_at(created_at: DateLike) -> datetime:
    if isinstance(created_at, datetime):
        dt = created_at
    else:
        text = str(created_at).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _date_part(created_at: DateLike, tz: Optional[tzinfo]) -> str:
    dt = _parse_created_at(created_at)
    # astimezone() without an argument converts to the server's local zone
    local = dt.astimezone(tz) if tz is not None else dt.astimezone()
    return local.strftime("%y%m%d")


def _customer_code_part(customer_code) -> str:
    try:
        code = int(customer_code or 0)
    except (TypeError, ValueError):
        code = 0
    return f"{max(code, 0):04d}"


def format_order_number(
    sequence_number: int,
    created_at: DateLike,
    customer_code: Optional[int] = None,
    tz: Optional[tzinfo] = None,
) -> str:
    """Render ``CCCC-YYMMDD-SSSS``.

    The sequence number is not validated; callers holding orders without one
    should go through ``order_number_for``.
    """
    return f"{_customer_code_part(customer_code)}-{_date_part(created_at, tz)}-{int(sequence_number):04d}"


def format_legacy_order_number(
    order_id: str,
    created_at: DateLike,
    customer_code: Optional[int] = None,
    tz: Optional[tzinfo] = None,
) -> str:
    """Fallback for orders created before sequence numbers existed:
    the last three characters of the raw id stand in for the sequence."""
    suffix = str(order_id)[-3:].upper()
    return f"{_customer_code_part(customer_code)}-{_date_part(created_at, tz)}-{suffix}"


def display_timezone() -> Optional[tzinfo]:
    """Configured order-number timezone, or None for server local time"""
    if settings.ORDER_NUMBER_TIMEZONE:
        return ZoneInfo(settings.ORDER_NUMBER_TIMEZONE)
    return None


def order_number_for(order, tz: Optional[tzinfo] = None) -> str:
    """Pick the right formatter for an Order-like object."""
    if tz is None:
        tz = display_timezone()
    user = getattr(order, "user", None)
    customer_code = getattr(user, "customer_code", None) if user is not None else None
    if order.sequence_number:
        return format_order_number(order.sequence_number, order.created_at, customer_code, tz)
    return format_legacy_order_number(order.id, order.created_at, customer_code, tz)
