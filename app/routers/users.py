from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.crud import user as crud
from app.database import get_db
from app.exceptions import UserNotFound
from app.schemas.user import UserResponse, UserProfileUpdate
from app.services.auth import get_current_caller, require_capability
from app.utils.permissions import Caller, Capability

router = APIRouter()


@router.get("/current", response_model=UserResponse)
def read_current_user(
    caller: Caller = Depends(get_current_caller), db: Session = Depends(get_db)
):
    user = crud.get_user(db, caller.user_id)
    if user is None:
        raise UserNotFound()
    return user


@router.put("/profile", response_model=UserResponse)
def update_profile(
    profile: UserProfileUpdate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    user = crud.get_user(db, caller.user_id)
    if user is None:
        raise UserNotFound()
    return crud.update_profile(db, user, profile)


@router.get("/all", response_model=List[UserResponse])
def read_users(
    caller: Caller = Depends(require_capability(Capability.VIEW_USERS)),
    db: Session = Depends(get_db),
):
    return crud.get_users(db)


@router.get("/{user_id}", response_model=UserResponse)
def read_user(
    user_id: int,
    caller: Caller = Depends(require_capability(Capability.VIEW_USERS)),
    db: Session = Depends(get_db),
):
    user = crud.get_user(db, user_id)
    if user is None:
        raise UserNotFound()
    return user
