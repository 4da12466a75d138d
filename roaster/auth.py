"""Authentication

Login sessions for the HTML pages and the API, plus JWT access tokens for
API clients that do not keep cookies.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from . import models
from .config.settings import settings
from .security import verify_password

logger = logging.getLogger(__name__)

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES


def authenticate_user(db: Session, email: str, password: str) -> Optional[models.User]:
    """Return the active user matching the credentials, or None"""
    email = (email or "").strip().lower()
    user = db.query(models.User).filter(models.User.email == email).first()
    if not user or not verify_password(password, user.hashed_password):
        logger.warning("failed login for %s", email)
        return None
    if not user.is_active:
        logger.warning("login attempt for inactive account %s", email)
        return None
    return user


def login_session(request: Request, user: models.User) -> None:
    request.session['user_id'] = user.id
    request.session['role'] = user.role.value


def authenticate_and_login(request: Request, db: Session, email: str, password: str) -> Optional[models.User]:
    """Check credentials and store the user in the session"""
    user = authenticate_user(db, email, password)
    if user is not None:
        login_session(request, user)
    return user


def clear_session(request: Request) -> None:
    request.session.clear()


def session_user(request: Request, db: Session) -> Optional[models.User]:
    """User logged in through the session cookie, if still active"""
    user_id = request.session.get('user_id')
    if not user_id:
        return None
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if user is None or not user.is_active:
        return None
    return user


def is_admin(request: Request) -> bool:
    """Quick session check used by the admin pages"""
    return bool(request.session.get('user_id')) and request.session.get('role') == models.UserRole.ADMIN.value


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token"""
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> Optional[str]:
    """Return the token subject (user id), or None for an invalid/expired token"""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub")
