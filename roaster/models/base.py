"""Shared model helpers"""

import uuid
from datetime import datetime, timezone

from ..database.connection import Base


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


__all__ = ["Base", "new_id", "utcnow"]
