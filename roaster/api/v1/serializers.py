"""Turn ORM objects into API responses, masking prices per role"""

from typing import List

from ... import schemas
from ...core.order_number import order_number_for
from ...core.pricing import (
    can_user_see_prices, format_price_for_user, format_total_for_user, has_hidden_prices_for_user,
)
from ...core.production import customer_name


def order_read(order, role) -> schemas.OrderRead:
    items = []
    for item in order.items:
        visible = can_user_see_prices(role, item.product)
        items.append(schemas.OrderItemRead(
            id=item.id,
            product_id=item.product_id,
            product_name=item.product.name if item.product else None,
            quantity=item.quantity,
            unit_price=item.unit_price if visible else None,
            total_price=item.total_price if visible else None,
        ))
    hidden = has_hidden_prices_for_user(role, order.items)
    return schemas.OrderRead(
        id=order.id,
        order_number=order_number_for(order),
        user_id=order.user_id,
        customer_name=customer_name(order.user),
        sequence_number=order.sequence_number,
        status=order.status,
        total_amount=None if hidden else order.total_amount,
        total_display=format_total_for_user(role, order.total_amount or 0, hidden),
        notes=order.notes,
        is_archived=order.is_archived,
        created_at=order.created_at,
        updated_at=order.updated_at,
        items=items,
    )


def orders_read(orders, role) -> List[schemas.OrderRead]:
    return [order_read(o, role) for o in orders]


def catalog_product(visible, role) -> schemas.CatalogProduct:
    price = visible.effective_price
    shown = can_user_see_prices(role, visible.product)
    return schemas.CatalogProduct(
        id=visible.id,
        name=visible.name,
        description=visible.description,
        category=visible.category,
        unit=visible.unit,
        price=price if shown else None,
        price_display=format_price_for_user(role, price, visible.product),
        has_custom_price=visible.has_custom_price,
        is_global=visible.is_global,
        image_url=visible.image_url,
        bean_origin=visible.bean_origin,
        roast_level=visible.roast_level,
        flavor_profile=visible.flavor_profile,
    )
