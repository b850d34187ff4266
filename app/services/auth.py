from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.crud import user as user_crud
from app.exceptions import (
    InvalidCredentials,
    InvalidCurrentPassword,
    Unauthenticated,
    UserNotFound,
)
from app.models.user import User
from app.services import log_service
from app.utils.permissions import Caller, Capability, authorize
import os
import logging
from dotenv import load_dotenv
import warnings

# Suppress the bcrypt warning
warnings.filterwarnings("ignore", ".*bcrypt version.*")
warnings.filterwarnings("ignore", ".*trapped.*error reading bcrypt version.*")
warnings.filterwarnings("ignore", ".*AttributeError.*__about__.*")

load_dotenv()

logger = logging.getLogger(__name__)

# Security configuration
SECRET_KEY = os.getenv("SECRET_KEY", "your-secret-key")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "120"))
JWT_ISSUER = os.getenv("JWT_ISSUER", "travel-api")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "travel-webapp")

ADMIN_ROLE = "Admin"
USER_ROLE = "User"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash; a corrupt hash never matches."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(
    user: User,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    if expires_delta:
        expire = issued_at + expires_delta
    else:
        expire = issued_at + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(user.id),
        "username": user.username,
        "role": ADMIN_ROLE if user.is_admin else USER_ROLE,
        "iat": issued_at,
        "exp": expire,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[Caller]:
    """
    Verify signature, expiry, issuer and audience of a bearer token.

    Expired, malformed and badly signed tokens are all reported the same
    way, as None.
    """
    try:
        payload = jwt.decode(
            token,
            SECRET_KEY,
            algorithms=[ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except JWTError:
        return None

    username = payload.get("username")
    role = payload.get("role")
    if username is None or role not in (ADMIN_ROLE, USER_ROLE):
        return None
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return None
    return Caller(user_id=user_id, username=username, is_admin=role == ADMIN_ROLE)


def authenticate_user(db: Session, username: str, password: str) -> User:
    if not username or not password:
        raise InvalidCredentials()

    user = user_crud.get_user_by_username(db, username)
    if not user:
        # Same amount of hashing work as a real check
        pwd_context.dummy_verify()
        log_service.log_warning(
            db, f"Authentication failed: user '{username}' not found"
        )
        raise InvalidCredentials()

    if not verify_password(password, user.hashed_password):
        log_service.log_warning(
            db, f"Authentication failed: invalid password for user '{username}'"
        )
        raise InvalidCredentials()

    log_service.log_info(db, f"User '{username}' successfully authenticated")
    return user


def change_password(
    db: Session, caller: Caller, current_password: str, new_password: str
) -> None:
    user = user_crud.get_user(db, caller.user_id)
    if user is None:
        log_service.log_warning(
            db, f"Password change failed: user with id={caller.user_id} not found"
        )
        raise UserNotFound()

    if not verify_password(current_password, user.hashed_password):
        log_service.log_warning(
            db,
            f"Password change failed: invalid current password for user '{user.username}'",
        )
        raise InvalidCurrentPassword()

    user_crud.set_password(db, user, get_password_hash(new_password))
    log_service.log_info(
        db, f"Password successfully changed for user '{user.username}'"
    )


def get_current_caller(token: Optional[str] = Depends(oauth2_scheme)) -> Caller:
    if not token:
        raise Unauthenticated()
    caller = decode_access_token(token)
    if caller is None:
        raise Unauthenticated()
    return caller


def require_capability(capability: Capability):
    """Dependency factory for endpoints reserved to a capability (admin-only ones)."""

    def _check(caller: Caller = Depends(get_current_caller)) -> Caller:
        authorize(caller, capability)
        return caller

    return _check
