"""
Activity log persisted in the ``logs`` table.

Writes are fire-and-forget: a failure to store a log row is reported to the
process logger and otherwise ignored, so it never changes the outcome of the
operation being logged.
"""
import logging

from sqlalchemy.orm import Session

from app.crud import log as crud

logger = logging.getLogger(__name__)

INFORMATION = "Information"
WARNING = "Warning"
ERROR = "Error"


def _add_log(db: Session, level: str, message: str) -> None:
    try:
        crud.create_log(db, level=level, message=message)
    except Exception as e:
        db.rollback()
        logger.warning(f"Could not store activity log ({level}): {e}")


def log_info(db: Session, message: str) -> None:
    _add_log(db, INFORMATION, message)


def log_warning(db: Session, message: str) -> None:
    _add_log(db, WARNING, message)


def log_error(db: Session, message: str) -> None:
    _add_log(db, ERROR, message)
