from sqlalchemy.orm import Session
from typing import List

from app.models.log import Log


def create_log(db: Session, level: str, message: str) -> Log:
    db_log = Log(level=level, message=message)
    db.add(db_log)
    db.commit()
    return db_log


def get_logs(db: Session, count: int) -> List[Log]:
    return (
        db.query(Log).order_by(Log.timestamp.desc(), Log.id.desc()).limit(count).all()
    )


def get_logs_count(db: Session) -> int:
    return db.query(Log).count()
