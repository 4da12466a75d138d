"""Single-row settings models: branding and order reminders"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from .base import Base, utcnow


class BrandingSettings(Base):
    """Branding table; empty columns fall back to the built-in defaults"""
    __tablename__ = "branding_settings"

    id = Column(Integer, primary_key=True)
    company_name = Column(String(255), nullable=True)
    primary_color = Column(String(16), nullable=True)
    secondary_color = Column(String(16), nullable=True)
    accent_color = Column(String(16), nullable=True)
    background_color = Column(String(16), nullable=True)
    button_color = Column(String(16), nullable=True)
    logo_url = Column(String(512), nullable=True)
    tagline = Column(String(255), nullable=True)
    font_family = Column(String(64), nullable=True)
    theme = Column(String(16), nullable=True)
    hero_title = Column(String(255), nullable=True)
    hero_subtitle = Column(String(255), nullable=True)
    hero_description = Column(Text, nullable=True)
    show_stats = Column(Boolean, nullable=True)
    show_features = Column(Boolean, nullable=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class ReminderSettings(Base):
    """Weekly order reminder schedule"""
    __tablename__ = "reminder_settings"

    id = Column(Integer, primary_key=True)
    day_of_week = Column(Integer, nullable=False, default=1)  # 0 = Sunday
    hour = Column(Integer, nullable=False, default=9)  # 0-23, local to `timezone`
    timezone = Column(String(64), nullable=False, default="America/Los_Angeles")
    is_active = Column(Boolean, nullable=False, default=False)
    email_enabled = Column(Boolean, nullable=False, default=True)
    sms_enabled = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
