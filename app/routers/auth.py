from datetime import datetime, timedelta, timezone
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.crud import user as user_crud
from app.database import get_db
from app.schemas.user import UserCreate, UserLogin, Token, UserChangePassword
from app.services.auth import (
    authenticate_user,
    change_password as change_user_password,
    create_access_token,
    get_current_caller,
    get_password_hash,
    ACCESS_TOKEN_EXPIRE_MINUTES,
)
from app.utils.permissions import Caller

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: Session = Depends(get_db)):
    """Public: create a regular (non-admin) account."""
    user_crud.create_user(db, user, hashed_password=get_password_hash(user.password))
    return {"message": "Registration successful"}


@router.post("/login", response_model=Token)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    user = authenticate_user(db, credentials.username, credentials.password)

    issued_at = datetime.now(timezone.utc)
    access_token_expires = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(
        user, expires_delta=access_token_expires, now=issued_at
    )
    return Token(
        token=access_token,
        username=user.username,
        is_admin=user.is_admin,
        expires_at=issued_at + access_token_expires,
    )


@router.post("/change-password", response_model=dict)
def change_password(
    password_data: UserChangePassword,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    """
    Change the caller's password.
    The current password must be provided again for verification.
    """
    change_user_password(
        db, caller, password_data.current_password, password_data.new_password
    )
    return {"message": "Password changed successfully"}
