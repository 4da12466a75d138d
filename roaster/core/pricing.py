"""Role based price visibility and price formatting"""

from typing import Iterable, List, Optional

PRIVILEGED_ROLES = ("ADMIN", "MANAGER")


def _role(role) -> str:
    return getattr(role, "value", role) or ""


def can_user_see_prices(role, product=None) -> bool:
    role = _role(role)
    if role in PRIVILEGED_ROLES:
        return True
    if role == "EMPLOYEE":
        return not (product is not None and getattr(product, "hide_prices", False))
    # unknown roles never see prices
    return False


def has_hidden_prices_for_user(role, items: Iterable) -> bool:
    """True when at least one item's product hides its price from ``role``"""
    if _role(role) in PRIVILEGED_ROLES:
        return False
    return any(getattr(item.product, "hide_prices", False) for item in items)


def safe_price(value) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def format_price(value) -> str:
    return f"{safe_price(value):.2f}"


def format_currency(value) -> str:
    return f"${format_price(value)}"


def format_price_for_user(role, price: Optional[float], product) -> str:
    if can_user_see_prices(role, product) and price is not None:
        return format_currency(price)
    unit = getattr(product, "unit", None)
    return f"Unit: {unit}" if unit else "Custom Pricing"


def format_total_for_user(role, total: float, has_hidden_items: bool) -> str:
    if _role(role) in PRIVILEGED_ROLES:
        return format_currency(total)
    if has_hidden_items:
        return "Custom Pricing"
    return format_currency(total)


class VisibleProduct:
    """A catalog product as one customer sees it, with the effective price"""

    def __init__(self, product, custom_price: Optional[float] = None):
        self.product = product
        self.custom_price = custom_price

    def __getattr__(self, name):
        return getattr(self.product, name)

    @property
    def effective_price(self) -> float:
        if self.custom_price is not None:
            return self.custom_price
        return self.product.price

    @property
    def has_custom_price(self) -> bool:
        return self.custom_price is not None


def visible_products(global_products: Iterable, assignments: Iterable) -> List[VisibleProduct]:
    """Merge the global catalog with one customer's assignments.

    Global active products come first, then assigned exclusive products.
    An active assignment's custom price overrides the catalog price, for
    global products too. Each product shows up once.
    """
    custom_prices = {}
    assigned = []
    for assignment in assignments:
        if not assignment.is_active or assignment.product is None:
            continue
        custom_prices[assignment.product_id] = assignment.custom_price
        assigned.append(assignment.product)

    result: List[VisibleProduct] = []
    seen = set()
    for product in list(global_products) + assigned:
        if product.id in seen or not product.is_active:
            continue
        seen.add(product.id)
        result.append(VisibleProduct(product, custom_prices.get(product.id)))
    return result
