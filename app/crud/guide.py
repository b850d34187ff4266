from sqlalchemy.orm import Session
from typing import List, Optional

from app.models.guide import Guide
from app.models.trip import Trip
from app.schemas.guide import GuideCreate, GuideUpdate
from app.services import log_service


def get_guide(db: Session, guide_id: int) -> Optional[Guide]:
    return db.query(Guide).filter(Guide.id == guide_id).first()


def get_guides(db: Session) -> List[Guide]:
    return db.query(Guide).order_by(Guide.id).all()


def get_guides_by_trip(db: Session, trip_id: int) -> List[Guide]:
    return (
        db.query(Guide)
        .join(Guide.trips)
        .filter(Trip.id == trip_id)
        .order_by(Guide.id)
        .all()
    )


def create_guide(db: Session, guide: GuideCreate) -> Guide:
    db_guide = Guide(**guide.model_dump())
    db.add(db_guide)
    db.commit()
    db.refresh(db_guide)
    log_service.log_info(db, f"Created guide: {db_guide.name}")
    return db_guide


def update_guide(db: Session, guide_id: int, guide: GuideUpdate) -> Optional[Guide]:
    db_guide = get_guide(db, guide_id)
    if not db_guide:
        return None

    for field, value in guide.model_dump().items():
        setattr(db_guide, field, value)

    db.commit()
    db.refresh(db_guide)
    log_service.log_info(db, f"Updated guide: {db_guide.name}")
    return db_guide


def delete_guide(db: Session, guide_id: int) -> bool:
    db_guide = get_guide(db, guide_id)
    if not db_guide:
        return False

    name = db_guide.name
    # Drop trip assignments together with the guide
    db_guide.trips.clear()
    db.delete(db_guide)
    db.commit()
    log_service.log_info(db, f"Deleted guide: {name}")
    return True
