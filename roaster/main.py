"""FastAPI application entry point

Wholesale coffee ordering service:
- JSON API under /api/v1 (catalog, orders, favorites, profile, admin)
- server-rendered pages under /ui for customers and the roastery admin
- session cookie login for both; Bearer tokens for API clients
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, Form, Depends, HTTPException
from fastapi.responses import RedirectResponse, HTMLResponse, JSONResponse, Response
from fastapi.templating import Jinja2Templates
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.middleware.sessions import SessionMiddleware

from .api.v1 import (
    auth_router,
    products_router,
    orders_router,
    favorites_router,
    profile_router,
    admin_orders_router,
    production_router,
    customers_router,
    admin_settings_router,
)
from .api.v1.production import build_schedule, production_options
from .database.connection import get_db
from . import auth as app_auth
from . import crud
from .config.settings import settings
from .core.logger import setup_logging
from .core.pricing import can_user_see_prices, format_price_for_user, format_total_for_user, has_hidden_prices_for_user
from .core.production import ProductionDataError, production_csv
from .crud.order import OrderValidationError
from .models import OrderStatus
from .utils.helpers import register_filters

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_TITLE, description=settings.APP_DESCRIPTION, version=settings.APP_VERSION)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie="session",
    max_age=settings.SESSION_MAX_AGE,
)

for router in (
    auth_router,
    products_router,
    orders_router,
    favorites_router,
    profile_router,
    admin_orders_router,
    production_router,
    customers_router,
    admin_settings_router,
):
    app.include_router(router, prefix="/api/v1")

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
register_filters(templates.env)


@app.exception_handler(ProductionDataError)
def production_data_error(request: Request, exc: ProductionDataError):
    logger.error("production data error: %s", exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(OrderValidationError)
def order_validation_error(request: Request, exc: OrderValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def _login_redirect():
    return RedirectResponse(url="/ui/login", status_code=303)


# UI routes
@app.get("/ui/login", response_class=HTMLResponse)
def login_form(request: Request):
    return templates.TemplateResponse(request, "login.html", {"error": None})


@app.post("/ui/login", response_class=HTMLResponse)
def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    user = app_auth.authenticate_and_login(request, db, email, password)
    if not user:
        return templates.TemplateResponse(
            request, "login.html", {"error": "Invalid email or password"}, status_code=401
        )
    target = "/ui/admin/orders" if user.is_admin else "/ui/dashboard"
    return RedirectResponse(url=target, status_code=303)


@app.get("/ui/logout")
def logout(request: Request):
    app_auth.clear_session(request)
    return _login_redirect()


def _dashboard(request: Request, db: Session, user, error: Optional[str] = None, status_code: int = 200):
    products = crud.products_for_user(db, user)
    rows = [
        {
            "product": p,
            "price_display": format_price_for_user(user.role, p.effective_price, p.product),
        }
        for p in products
    ]
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "user": user,
            "products": rows,
            "orders": crud.list_user_orders(db, user.id, limit=10),
            "branding": crud.branding(db),
            "error": error,
        },
        status_code=status_code,
    )


@app.get("/ui/dashboard", response_class=HTMLResponse)
def dashboard(request: Request, db: Session = Depends(get_db)):
    """Customer dashboard: catalog with role-masked prices, recent orders, order form"""
    user = app_auth.session_user(request, db)
    if user is None:
        return _login_redirect()
    return _dashboard(request, db, user)


@app.post("/ui/orders", response_class=HTMLResponse)
async def place_order_ui(request: Request, db: Session = Depends(get_db)):
    """Order form: one `qty_<product id>` field per product, blanks and zeros skipped"""
    user = app_auth.session_user(request, db)
    if user is None:
        return _login_redirect()
    form = await request.form()
    items = []
    try:
        for key, value in form.items():
            if key.startswith("qty_") and str(value).strip():
                quantity = int(value)
                if quantity:
                    items.append((key[4:], quantity))
    except ValueError:
        return _dashboard(request, db, user, "Quantities must be whole numbers", 400)
    try:
        order = crud.create_order(db, user, items, (form.get("notes") or None))
    except OrderValidationError as exc:
        return _dashboard(request, db, user, str(exc), 400)
    return RedirectResponse(url=f"/ui/orders/{order.id}", status_code=303)


@app.get("/ui/orders/{order_id}", response_class=HTMLResponse)
def order_detail(request: Request, order_id: str, db: Session = Depends(get_db)):
    user = app_auth.session_user(request, db)
    if user is None:
        return _login_redirect()
    order = crud.get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    if order.user_id != user.id and not user.is_admin:
        raise HTTPException(status_code=403, detail="Not your order")
    hidden = has_hidden_prices_for_user(user.role, order.items)
    return templates.TemplateResponse(
        request,
        "order_detail.html",
        {
            "user": user,
            "order": order,
            "lines": [
                {"item": item, "show_price": can_user_see_prices(user.role, item.product)}
                for item in order.items
            ],
            "total_display": format_total_for_user(user.role, order.total_amount or 0, hidden),
        },
    )


@app.get("/ui/admin/orders", response_class=HTMLResponse)
def admin_orders(request: Request, archived: str = "active", page: int = 1, db: Session = Depends(get_db)):
    """Admin order list; `archived` is active, all or only"""
    if not app_auth.is_admin(request):
        return _login_redirect()
    orders, total, pages = crud.list_orders(
        db,
        page=page,
        limit=50,
        include_archived=archived == "all",
        archived_only=archived == "only",
    )
    return templates.TemplateResponse(
        request,
        "admin_orders.html",
        {
            "orders": orders,
            "total": total,
            "page": page,
            "pages": pages,
            "archived": archived,
            "statuses": list(OrderStatus),
            "is_admin": True,
        },
    )


@app.post("/ui/admin/orders/{order_id}/archive")
def toggle_archive_ui(request: Request, order_id: str, db: Session = Depends(get_db)):
    if not app_auth.is_admin(request):
        return _login_redirect()
    order = crud.get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    crud.set_archived(db, order, not order.is_archived)
    return RedirectResponse(url="/ui/admin/orders", status_code=303)


@app.post("/ui/admin/orders/{order_id}/status")
def change_status_ui(request: Request, order_id: str, status: str = Form(...), db: Session = Depends(get_db)):
    if not app_auth.is_admin(request):
        return _login_redirect()
    order = crud.get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    if status not in OrderStatus.__members__:
        raise HTTPException(status_code=400, detail=f"Unknown status: {status}")
    crud.update_status(db, order, OrderStatus(status))
    return RedirectResponse(url="/ui/admin/orders", status_code=303)


@app.get("/ui/admin/production", response_class=HTMLResponse)
def production_page(
    request: Request,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status: str = "all",
    include_archived: bool = False,
    db: Session = Depends(get_db),
):
    """Production schedule page with date/status filters and a CSV link"""
    if not app_auth.is_admin(request):
        return _login_redirect()
    options = production_options(start_date, end_date, status, include_archived)
    return templates.TemplateResponse(
        request,
        "production.html",
        {
            "schedule": build_schedule(db, options),
            "options": options,
            "statuses": list(OrderStatus),
            "is_admin": True,
        },
    )


@app.get("/ui/admin/production/csv")
def production_csv_ui(
    request: Request,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status: str = "all",
    include_archived: bool = False,
    db: Session = Depends(get_db),
):
    if not app_auth.is_admin(request):
        return _login_redirect()
    options = production_options(start_date, end_date, status, include_archived)
    filename = f"production_{options.start_date.isoformat()}_{options.end_date.isoformat()}.csv"
    return Response(
        content=production_csv(build_schedule(db, options)),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@app.get("/health/db")
def health_check(db: Session = Depends(get_db)):
    """Database reachability"""
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "reachable"}
    except Exception:
        logger.exception("database health check failed")
        raise HTTPException(status_code=503, detail="Database connection failed")


@app.get("/")
def read_root():
    return {"service": settings.APP_TITLE, "status": "running"}
