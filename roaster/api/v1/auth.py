from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ... import schemas
from ... import auth as app_auth
from ...database.connection import get_db

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=schemas.UserRead)
def login(request: Request, credentials: schemas.UserLogin, db: Session = Depends(get_db)):
    """Log in and keep the user in the session cookie"""
    user = app_auth.authenticate_and_login(request, db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return user


@router.post("/logout")
def logout(request: Request):
    app_auth.clear_session(request)
    return {"message": "Logged out"}


@router.post("/token", response_model=schemas.Token)
def issue_token(credentials: schemas.UserLogin, db: Session = Depends(get_db)):
    """JWT for API clients without cookies"""
    user = app_auth.authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return schemas.Token(access_token=app_auth.create_access_token({"sub": user.id, "role": user.role.value}))
