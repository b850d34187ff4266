from sqlalchemy.orm import Session
from typing import List, Optional

from app.exceptions import DestinationHasTrips
from app.models.destination import Destination
from app.models.trip import Trip
from app.schemas.destination import DestinationCreate, DestinationUpdate
from app.services import log_service


def get_destination(db: Session, destination_id: int) -> Optional[Destination]:
    return db.query(Destination).filter(Destination.id == destination_id).first()


def get_destinations(db: Session) -> List[Destination]:
    return db.query(Destination).order_by(Destination.id).all()


def create_destination(db: Session, destination: DestinationCreate) -> Destination:
    db_destination = Destination(**destination.model_dump())
    db.add(db_destination)
    db.commit()
    db.refresh(db_destination)
    log_service.log_info(db, f"Created destination: {db_destination.name}")
    return db_destination


def update_destination(
    db: Session, destination_id: int, destination: DestinationUpdate
) -> Optional[Destination]:
    db_destination = get_destination(db, destination_id)
    if not db_destination:
        return None

    for field, value in destination.model_dump().items():
        setattr(db_destination, field, value)

    db.commit()
    db.refresh(db_destination)
    log_service.log_info(db, f"Updated destination: {db_destination.name}")
    return db_destination


def update_destination_image(
    db: Session, destination_id: int, image_url: str
) -> Optional[Destination]:
    db_destination = get_destination(db, destination_id)
    if not db_destination:
        return None

    db_destination.image_url = image_url
    db.commit()
    db.refresh(db_destination)
    log_service.log_info(
        db, f"Updated image for destination {destination_id}: {image_url}"
    )
    return db_destination


def delete_destination(db: Session, destination_id: int) -> bool:
    db_destination = get_destination(db, destination_id)
    if not db_destination:
        return False

    if db.query(Trip).filter(Trip.destination_id == destination_id).first():
        raise DestinationHasTrips()

    name = db_destination.name
    db.delete(db_destination)
    db.commit()
    log_service.log_info(db, f"Deleted destination: {name}")
    return True
