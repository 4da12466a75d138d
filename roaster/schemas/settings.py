"""Branding and reminder settings schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..core.reminders import validate_schedule


class BrandingRead(BaseModel):
    company_name: str
    primary_color: str
    secondary_color: str
    accent_color: str
    background_color: str
    button_color: str
    logo_url: Optional[str] = None
    tagline: str
    font_family: str
    theme: str
    hero_title: str
    hero_subtitle: str
    hero_description: str
    show_stats: bool
    show_features: bool
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None


class BrandingUpdate(BaseModel):
    company_name: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    accent_color: Optional[str] = None
    background_color: Optional[str] = None
    button_color: Optional[str] = None
    logo_url: Optional[str] = None
    tagline: Optional[str] = None
    font_family: Optional[str] = None
    theme: Optional[str] = None
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    hero_description: Optional[str] = None
    show_stats: Optional[bool] = None
    show_features: Optional[bool] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None


class ReminderSettingsUpdate(BaseModel):
    day_of_week: int = Field(ge=0, le=6)
    hour: int = Field(ge=0, le=23)
    timezone: str = "America/Los_Angeles"
    is_active: bool = False
    email_enabled: bool = True
    sms_enabled: bool = False

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, value: str) -> str:
        validate_schedule(0, 0, value)
        return value


class ReminderSettingsRead(BaseModel):
    id: int
    day_of_week: int
    hour: int
    timezone: str
    is_active: bool
    email_enabled: bool
    sms_enabled: bool
    schedule_description: str
    updated_at: Optional[datetime] = None
