from .sequence import next_value, current_value, ORDERS, CUSTOMER_CODE

from .user import (
    EmailTakenError,
    get_user,
    get_user_by_email,
    create_user,
    list_customers,
    get_customer,
    update_user,
    delete_customer,
    set_password,
    change_password,
    reset_password,
    update_profile,
    assign_missing_customer_codes,
    ensure_admin,
)

from .product import (
    ProductImportFormatError,
    get_product,
    list_products,
    create_product,
    update_product,
    delete_product,
    bulk_action,
    parse_product_csv,
    import_products,
    get_assignments,
    products_for_user,
    assignment_status,
    replace_assignments,
)

from .order import (
    OrderValidationError,
    create_order,
    get_order,
    list_user_orders,
    list_orders,
    update_status,
    set_archived,
    bulk_update_status,
    production_orders,
    orders_since,
)

from .favorite import list_favorites, get_favorite, add_favorite, remove_favorite

from .settings import (
    DEFAULT_BRANDING,
    branding,
    update_branding,
    get_reminder_settings,
    update_reminder_settings,
)

from .stats import dashboard_stats
