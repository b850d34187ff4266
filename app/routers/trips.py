from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import Dict, List, Optional

from app.crud import trip as crud
from app.crud.trip_registration import get_committed_participants_by_trip
from app.database import get_db
from app.exceptions import NotFound, TripNotFound
from app.models.trip import Trip
from app.schemas.guide import GuideResponse
from app.schemas.trip import TripCreate, TripImageUpdate, TripResponse, TripUpdate
from app.services.auth import require_capability
from app.utils.permissions import Caller, Capability

router = APIRouter()

manage_catalog = require_capability(Capability.MANAGE_CATALOG)


def trip_to_response(trip: Trip, committed: int) -> TripResponse:
    destination = trip.destination
    return TripResponse(
        id=trip.id,
        name=trip.name,
        description=trip.description or "",
        start_date=trip.start_date,
        end_date=trip.end_date,
        price=trip.price,
        # Fall back to the destination picture
        image_url=trip.image_url or (destination.image_url if destination else None),
        max_participants=trip.max_participants,
        destination_id=trip.destination_id,
        destination_name=destination.name if destination else "",
        country=destination.country if destination else "",
        city=destination.city if destination else "",
        guides=[GuideResponse.model_validate(g) for g in trip.guides],
        available_spots=trip.max_participants - committed,
    )


def trips_to_response(db: Session, trips: List[Trip]) -> List[TripResponse]:
    committed: Dict[int, int] = get_committed_participants_by_trip(
        db, [t.id for t in trips]
    )
    return [trip_to_response(t, committed.get(t.id, 0)) for t in trips]


def _single_response(db: Session, trip: Trip) -> TripResponse:
    return trips_to_response(db, [trip])[0]


@router.get("", response_model=List[TripResponse])
def read_trips(destination: Optional[int] = None, db: Session = Depends(get_db)):
    if destination is not None:
        trips = crud.get_trips_by_destination(db, destination)
    else:
        trips = crud.get_trips(db)
    return trips_to_response(db, trips)


@router.get("/search", response_model=List[TripResponse])
def search_trips(
    name: Optional[str] = None,
    description: Optional[str] = None,
    page: int = 1,
    count: int = 10,
    db: Session = Depends(get_db),
):
    trips = crud.search_trips(
        db, name=name, description=description, page=page, count=count
    )
    return trips_to_response(db, trips)


@router.get("/destination/{destination_id}", response_model=List[TripResponse])
def read_trips_by_destination(destination_id: int, db: Session = Depends(get_db)):
    return trips_to_response(db, crud.get_trips_by_destination(db, destination_id))


@router.get("/{trip_id}", response_model=TripResponse)
def read_trip(trip_id: int, db: Session = Depends(get_db)):
    trip = crud.get_trip(db, trip_id)
    if trip is None:
        raise TripNotFound()
    return _single_response(db, trip)


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
def create_trip(
    trip: TripCreate,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    created = crud.create_trip(db, trip)
    return _single_response(db, crud.get_trip(db, created.id))


@router.put("/{trip_id}", response_model=TripResponse)
def update_trip(
    trip_id: int,
    trip: TripUpdate,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    updated = crud.update_trip(db, trip_id, trip)
    if updated is None:
        raise TripNotFound()
    return _single_response(db, crud.get_trip(db, trip_id))


@router.put("/{trip_id}/image", response_model=TripResponse)
def update_trip_image(
    trip_id: int,
    image: TripImageUpdate,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    updated = crud.update_trip_image(db, trip_id, image.image_url)
    if updated is None:
        raise TripNotFound()
    return _single_response(db, crud.get_trip(db, trip_id))


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trip(
    trip_id: int,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    if not crud.delete_trip(db, trip_id):
        raise TripNotFound()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{trip_id}/guides/{guide_id}", status_code=status.HTTP_204_NO_CONTENT)
def assign_guide(
    trip_id: int,
    guide_id: int,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    if not crud.assign_guide(db, trip_id, guide_id):
        raise NotFound("Trip or guide not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{trip_id}/guides/{guide_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_guide(
    trip_id: int,
    guide_id: int,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    if not crud.remove_guide(db, trip_id, guide_id):
        raise NotFound("Trip or guide assignment not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
