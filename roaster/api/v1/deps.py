"""Shared route dependencies: the current user and the admin gate"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ... import auth as app_auth
from ... import models
from ...database.connection import get_db

logger = logging.getLogger(__name__)


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token:
        return token.strip()
    return None


def get_current_user(request: Request, db: Session = Depends(get_db)) -> models.User:
    """Session cookie first, then a Bearer token"""
    user = app_auth.session_user(request, db)
    if user is not None:
        return user
    token = _bearer_token(request)
    if token:
        user_id = app_auth.verify_token(token)
        if user_id:
            user = db.query(models.User).filter(models.User.id == user_id).first()
            if user is not None and user.is_active:
                return user
        logger.warning("rejected bearer token")
    raise HTTPException(status_code=401, detail="Not authenticated")


def require_admin(user: models.User = Depends(get_current_user)) -> models.User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
