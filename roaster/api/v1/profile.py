from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...database.connection import get_db
from .deps import get_current_user

router = APIRouter(tags=["profile"])


@router.get("/profile", response_model=schemas.UserRead)
def read_profile(user: models.User = Depends(get_current_user)):
    return user


@router.put("/profile", response_model=schemas.UserRead)
def update_profile(update: schemas.ProfileUpdate, user: models.User = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    return crud.update_profile(db, user, update)


@router.put("/profile/password")
def change_password(body: schemas.PasswordChange, user: models.User = Depends(get_current_user),
                    db: Session = Depends(get_db)):
    if not crud.change_password(db, user, body.current_password, body.new_password):
        raise HTTPException(status_code=400, detail="Current password is incorrect")
    return {"message": "Password updated"}


@router.get("/branding", response_model=schemas.BrandingRead)
def read_branding(_: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Branding with defaults for anything not configured"""
    return crud.branding(db)
