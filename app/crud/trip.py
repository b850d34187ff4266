from sqlalchemy.orm import Session, joinedload, selectinload
from typing import List, Optional
import logging

from app.crud.trip_registration import (
    get_committed_participants,
    lock_trip,
    get_registration_count_for_trip,
)
from app.exceptions import (
    CapacityExceeded,
    DestinationNotFound,
    GuideNotFound,
    TripHasRegistrations,
    ValidationError,
)
from app.models.destination import Destination
from app.models.guide import Guide
from app.models.trip import Trip
from app.schemas.trip import TripCreate, TripUpdate
from app.services import log_service

logger = logging.getLogger(__name__)

MAX_SEARCH_COUNT = 100


def _trip_query(db: Session):
    return db.query(Trip).options(
        joinedload(Trip.destination), selectinload(Trip.guides)
    )


def get_trip(db: Session, trip_id: int) -> Optional[Trip]:
    return _trip_query(db).filter(Trip.id == trip_id).first()


def get_trips(db: Session) -> List[Trip]:
    return _trip_query(db).order_by(Trip.start_date, Trip.id).all()


def get_trips_by_destination(db: Session, destination_id: int) -> List[Trip]:
    return (
        _trip_query(db)
        .filter(Trip.destination_id == destination_id)
        .order_by(Trip.start_date, Trip.id)
        .all()
    )


def search_trips(
    db: Session,
    name: Optional[str] = None,
    description: Optional[str] = None,
    page: int = 1,
    count: int = 10,
) -> List[Trip]:
    if page < 1:
        raise ValidationError("Page number must be 1 or greater")
    if count < 1 or count > MAX_SEARCH_COUNT:
        raise ValidationError(f"Count must be between 1 and {MAX_SEARCH_COUNT}")

    log_service.log_info(
        db,
        f"Searching trips with name: '{name}', description: '{description}', page: {page}, count: {count}",
    )

    query = _trip_query(db)
    if name and name.strip():
        query = query.filter(Trip.name.icontains(name.strip(), autoescape=True))
    if description and description.strip():
        query = query.filter(
            Trip.description.isnot(None),
            Trip.description.icontains(description.strip(), autoescape=True),
        )

    results = (
        query.order_by(Trip.start_date, Trip.id)
        .offset((page - 1) * count)
        .limit(count)
        .all()
    )

    log_service.log_info(db, f"Search returned {len(results)} trips for page {page}")
    return results


def _check_destination(db: Session, destination_id: int) -> None:
    exists = db.query(Destination.id).filter(Destination.id == destination_id).first()
    if not exists:
        raise DestinationNotFound()


def _load_guides(db: Session, guide_ids: List[int]) -> List[Guide]:
    guides = db.query(Guide).filter(Guide.id.in_(guide_ids)).all() if guide_ids else []
    if len(guides) != len(set(guide_ids)):
        raise GuideNotFound()
    return guides


def create_trip(db: Session, trip: TripCreate) -> Trip:
    _check_destination(db, trip.destination_id)
    guides = _load_guides(db, trip.guide_ids)

    db_trip = Trip(**trip.model_dump(exclude={"guide_ids"}))
    db_trip.guides = guides
    db.add(db_trip)
    db.commit()
    db.refresh(db_trip)

    log_service.log_info(db, f"Created trip: {db_trip.name}")
    return db_trip


def update_trip(db: Session, trip_id: int, trip: TripUpdate) -> Optional[Trip]:
    db_trip = get_trip(db, trip_id)
    if not db_trip:
        return None

    _check_destination(db, trip.destination_id)

    # Lock the trip so no booking lands between the check and the write
    lock_trip(db, trip_id)
    committed = get_committed_participants(db, trip_id)
    if trip.max_participants < committed:
        db.rollback()
        raise CapacityExceeded(
            f"max_participants cannot be lower than the {committed} participants already booked"
        )

    for field, value in trip.model_dump().items():
        setattr(db_trip, field, value)

    db.commit()
    db.refresh(db_trip)

    log_service.log_info(db, f"Updated trip: {db_trip.name}")
    return db_trip


def update_trip_image(db: Session, trip_id: int, image_url: str) -> Optional[Trip]:
    db_trip = get_trip(db, trip_id)
    if not db_trip:
        return None

    db_trip.image_url = image_url
    db.commit()
    db.refresh(db_trip)

    log_service.log_info(db, f"Updated image for trip {trip_id}: {image_url}")
    return db_trip


def delete_trip(db: Session, trip_id: int) -> bool:
    # Locked so no booking lands between the count and the delete
    db_trip = lock_trip(db, trip_id)
    if not db_trip:
        db.rollback()
        return False

    # Any registration blocks the delete, whatever its status
    if get_registration_count_for_trip(db, trip_id) > 0:
        db.rollback()
        logger.info(f"Refusing to delete trip {trip_id}: it has registrations")
        raise TripHasRegistrations()

    name = db_trip.name
    db_trip.guides.clear()
    db.delete(db_trip)
    db.commit()

    log_service.log_info(db, f"Deleted trip: {name}")
    return True


def assign_guide(db: Session, trip_id: int, guide_id: int) -> bool:
    db_trip = get_trip(db, trip_id)
    guide = db.query(Guide).filter(Guide.id == guide_id).first()
    if not db_trip or not guide:
        return False

    if guide in db_trip.guides:
        return True

    db_trip.guides.append(guide)
    db.commit()

    log_service.log_info(db, f"Assigned guide {guide.name} to trip {db_trip.name}")
    return True


def remove_guide(db: Session, trip_id: int, guide_id: int) -> bool:
    db_trip = get_trip(db, trip_id)
    if not db_trip:
        return False

    guide = next((g for g in db_trip.guides if g.id == guide_id), None)
    if guide is None:
        return False

    db_trip.guides.remove(guide)
    db.commit()

    log_service.log_info(db, f"Removed guide from trip {trip_id}")
    return True
