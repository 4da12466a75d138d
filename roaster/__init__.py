"""Roaster Ordering application package

Single import point for the main submodules.
"""

from . import (
    auth,
    config,
    crud,
    db,
    models,
    schemas,
    security,
    core,
)

from .config import settings
from .db import get_db, engine, Base
from .auth import is_admin, authenticate_user, create_access_token, verify_token

# routes refer to the auth module under this name
app_auth = auth

__all__ = [
    "auth",
    "app_auth",
    "config",
    "crud",
    "db",
    "models",
    "schemas",
    "security",
    "core",
    "settings",
    "get_db",
    "engine",
    "Base",
    "is_admin",
    "authenticate_user",
    "create_access_token",
    "verify_token",
]
