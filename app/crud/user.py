from sqlalchemy.orm import Session
from typing import List, Optional

from app.exceptions import EmailTaken, UsernameTaken
from app.models.user import User
from app.schemas.user import UserCreate, UserProfileUpdate
from app.services import log_service


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def create_user(
    db: Session, user: UserCreate, hashed_password: str, is_admin: bool = False
) -> User:
    if get_user_by_username(db, user.username):
        log_service.log_warning(
            db, f"Registration failed: username '{user.username}' already exists"
        )
        raise UsernameTaken()

    if get_user_by_email(db, user.email):
        log_service.log_warning(
            db, f"Registration failed: email '{user.email}' already exists"
        )
        raise EmailTaken()

    db_user = User(
        username=user.username,
        email=user.email,
        hashed_password=hashed_password,
        first_name=user.first_name,
        last_name=user.last_name,
        phone_number=user.phone_number,
        address=user.address,
        is_admin=is_admin,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    log_service.log_info(db, f"User '{db_user.username}' successfully registered")
    return db_user


def update_profile(db: Session, user: User, profile: UserProfileUpdate) -> User:
    other = (
        db.query(User).filter(User.email == profile.email, User.id != user.id).first()
    )
    if other:
        log_service.log_warning(
            db,
            f"Profile update failed: email '{profile.email}' already exists for another user",
        )
        raise EmailTaken()

    for field, value in profile.model_dump().items():
        setattr(user, field, value)

    try:
        db.commit()
    except Exception as e:
        db.rollback()
        log_service.log_error(
            db, f"Error updating profile for user '{user.username}': {e}"
        )
        raise
    db.refresh(user)

    log_service.log_info(db, f"Profile successfully updated for user '{user.username}'")
    return user


def set_password(db: Session, user: User, hashed_password: str) -> User:
    user.hashed_password = hashed_password
    db.commit()
    return user
