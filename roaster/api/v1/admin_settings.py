from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...core.analytics import build_analytics
from ...core.reminders import schedule_description
from ...database.connection import get_db
from .deps import require_admin

router = APIRouter(prefix="/admin", tags=["admin"])


def _reminder_read(row) -> schemas.ReminderSettingsRead:
    return schemas.ReminderSettingsRead(
        id=row.id,
        day_of_week=row.day_of_week,
        hour=row.hour,
        timezone=row.timezone,
        is_active=row.is_active,
        email_enabled=row.email_enabled,
        sms_enabled=row.sms_enabled,
        schedule_description=schedule_description(row),
        updated_at=row.updated_at,
    )


@router.get("/branding-settings", response_model=schemas.BrandingRead)
def get_branding(_: models.User = Depends(require_admin), db: Session = Depends(get_db)):
    return crud.branding(db)


@router.put("/branding-settings", response_model=schemas.BrandingRead)
def update_branding(update: schemas.BrandingUpdate, _: models.User = Depends(require_admin),
                    db: Session = Depends(get_db)):
    """Partial update; fields left out keep their value"""
    return crud.update_branding(db, update)


@router.get("/reminder-settings", response_model=schemas.ReminderSettingsRead)
def get_reminder_settings(_: models.User = Depends(require_admin), db: Session = Depends(get_db)):
    return _reminder_read(crud.get_reminder_settings(db))


@router.post("/reminder-settings", response_model=schemas.ReminderSettingsRead)
def save_reminder_settings(update: schemas.ReminderSettingsUpdate, _: models.User = Depends(require_admin),
                           db: Session = Depends(get_db)):
    return _reminder_read(crud.update_reminder_settings(db, update))


@router.get("/stats", response_model=schemas.DashboardStats)
def stats(_: models.User = Depends(require_admin), db: Session = Depends(get_db)):
    return crud.dashboard_stats(db)


@router.get("/analytics", response_model=schemas.Analytics)
def analytics(period: int = Query(30, ge=1, le=3650), customer: Optional[str] = None,
              _: models.User = Depends(require_admin), db: Session = Depends(get_db)):
    now = datetime.now(timezone.utc)
    orders = crud.orders_since(db, now - timedelta(days=period), customer)
    return build_analytics(orders, period, now)
