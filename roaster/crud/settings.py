"""Branding and reminder settings (single rows)"""

import logging
from typing import Dict

from sqlalchemy.orm import Session

from .. import schemas
from ..models import BrandingSettings, ReminderSettings

logger = logging.getLogger(__name__)

DEFAULT_BRANDING = {
    "company_name": "Roaster Ordering v1",
    "primary_color": "#8B4513",
    "secondary_color": "#D2B48C",
    "accent_color": "#DAA520",
    "background_color": "#F5F5DC",
    "button_color": "#8B4513",
    "logo_url": None,
    "tagline": "Premium Wholesale Coffee",
    "font_family": "Inter",
    "theme": "light",
    "hero_title": "Wholesale Coffee Ordering",
    "hero_subtitle": "Made Simple",
    "hero_description": "Streamline your weekly coffee orders with our intuitive platform.",
    "show_stats": True,
    "show_features": True,
    "contact_email": "support@roasterordering.com",
    "contact_phone": "1-800-ROASTER",
}


def branding(db: Session) -> Dict:
    """Stored branding with the defaults filled in for empty columns"""
    row = db.query(BrandingSettings).order_by(BrandingSettings.id).first()
    result = dict(DEFAULT_BRANDING)
    if row is not None:
        for field in DEFAULT_BRANDING:
            value = getattr(row, field)
            if value is not None and value != "":
                result[field] = value
    return result


def update_branding(db: Session, update: schemas.BrandingUpdate) -> Dict:
    row = db.query(BrandingSettings).order_by(BrandingSettings.id).first()
    if row is None:
        row = BrandingSettings()
        db.add(row)
    for field, value in update.dict(exclude_unset=True).items():
        setattr(row, field, value)
    db.commit()
    logger.info("branding settings updated")
    return branding(db)


def get_reminder_settings(db: Session) -> ReminderSettings:
    """The reminder row, created with the defaults (Monday 09:00, inactive) on first use"""
    row = db.query(ReminderSettings).order_by(ReminderSettings.id).first()
    if row is None:
        row = ReminderSettings()
        db.add(row)
        db.commit()
        db.refresh(row)
    return row


def update_reminder_settings(db: Session, update: schemas.ReminderSettingsUpdate) -> ReminderSettings:
    row = get_reminder_settings(db)
    for field, value in update.dict().items():
        setattr(row, field, value)
    db.commit()
    db.refresh(row)
    logger.info("reminder settings updated: day %s hour %s %s", row.day_of_week, row.hour, row.timezone)
    return row
