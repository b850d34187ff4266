import os

from sqlalchemy.orm import Session
from app.models.user import User
from app.services.auth import get_password_hash
import logging

logger = logging.getLogger(__name__)


def create_initial_admin(db: Session):
    """
    Creates the bootstrap admin account when the users table is empty.
    """
    if db.query(User).count() > 0:
        logger.info("Users already exist, skipping initial admin.")
        return

    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        logger.warning("ADMIN_PASSWORD not set, no initial admin created.")
        return

    db_user = User(
        username=os.getenv("ADMIN_USERNAME", "admin"),
        email=os.getenv("ADMIN_EMAIL", "admin@example.com"),
        hashed_password=get_password_hash(password),
        first_name="Admin",
        is_admin=True,
    )
    db.add(db_user)
    db.commit()
    logger.info(f"Admin created: {db_user.username}")
