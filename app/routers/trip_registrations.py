from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from app.crud import trip_registration as crud
from app.database import get_db
from app.enums.registration_status import RegistrationStatus
from app.exceptions import RegistrationNotFound
from app.models.trip_registration import TripRegistration
from app.schemas.trip_registration import (
    TripRegistrationCreate,
    TripRegistrationResponse,
    TripRegistrationStatusUpdate,
    TripRegistrationUpdate,
)
from app.services.auth import get_current_caller, require_capability
from app.utils.permissions import Caller, Capability, authorize, has_capability

router = APIRouter()


def registration_to_response(registration: TripRegistration) -> TripRegistrationResponse:
    trip = registration.trip
    destination = trip.destination if trip else None
    return TripRegistrationResponse(
        id=registration.id,
        user_id=registration.user_id,
        username=registration.user.username if registration.user else "",
        trip_id=registration.trip_id,
        trip_name=trip.name if trip else "",
        destination_name=destination.name if destination else "",
        start_date=trip.start_date if trip else None,
        end_date=trip.end_date if trip else None,
        registration_date=registration.registration_date,
        number_of_participants=registration.number_of_participants,
        total_price=registration.total_price,
        status=registration.status,
    )


def _get_owned_registration(
    db: Session, registration_id: int, caller: Caller
) -> TripRegistration:
    registration = crud.get_registration(db, registration_id)
    if registration is None:
        raise RegistrationNotFound()
    authorize(caller, Capability.ACT_ON_REGISTRATION, owner_id=registration.user_id)
    return registration


def _authorize_status_change(
    caller: Caller, current: str, new: RegistrationStatus
) -> None:
    # Owners may cancel their own booking; any other status change is for admins
    if new.value != current and new != RegistrationStatus.CANCELLED:
        authorize(caller, Capability.SET_REGISTRATION_STATUS)


@router.get("", response_model=List[TripRegistrationResponse])
def read_registrations(
    caller: Caller = Depends(require_capability(Capability.VIEW_ALL_REGISTRATIONS)),
    db: Session = Depends(get_db),
):
    return [registration_to_response(r) for r in crud.get_registrations(db)]


@router.get("/user/{user_id}", response_model=List[TripRegistrationResponse])
def read_registrations_by_user(
    user_id: int,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    authorize(caller, Capability.VIEW_USER_REGISTRATIONS, owner_id=user_id)
    return [
        registration_to_response(r) for r in crud.get_registrations_by_user(db, user_id)
    ]


@router.get("/trip/{trip_id}", response_model=List[TripRegistrationResponse])
def read_registrations_by_trip(
    trip_id: int,
    caller: Caller = Depends(require_capability(Capability.VIEW_ALL_REGISTRATIONS)),
    db: Session = Depends(get_db),
):
    return [
        registration_to_response(r) for r in crud.get_registrations_by_trip(db, trip_id)
    ]


@router.get("/{registration_id}", response_model=TripRegistrationResponse)
def read_registration(
    registration_id: int,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    return registration_to_response(_get_owned_registration(db, registration_id, caller))


@router.post(
    "", response_model=TripRegistrationResponse, status_code=status.HTTP_201_CREATED
)
def create_registration(
    registration: TripRegistrationCreate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    # Admins may book for someone else; everybody else books for themselves
    user_id = caller.user_id
    if registration.user_id is not None and has_capability(
        caller, Capability.BOOK_FOR_OTHERS
    ):
        user_id = registration.user_id

    created = crud.create_registration(
        db,
        trip_id=registration.trip_id,
        user_id=user_id,
        number_of_participants=registration.number_of_participants,
    )
    return registration_to_response(created)


@router.put("/{registration_id}", response_model=TripRegistrationResponse)
def update_registration(
    registration_id: int,
    registration: TripRegistrationUpdate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    existing = _get_owned_registration(db, registration_id, caller)
    _authorize_status_change(caller, existing.status, registration.status)

    updated = crud.update_registration(
        db,
        registration_id,
        number_of_participants=registration.number_of_participants,
        status=registration.status,
    )
    return registration_to_response(updated)


@router.patch("/{registration_id}/status", response_model=TripRegistrationResponse)
def update_registration_status(
    registration_id: int,
    body: TripRegistrationStatusUpdate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    existing = _get_owned_registration(db, registration_id, caller)
    _authorize_status_change(caller, existing.status, body.status)

    updated = crud.update_registration_status(db, registration_id, body.status)
    return registration_to_response(updated)


@router.delete("/{registration_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_registration(
    registration_id: int,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    _get_owned_registration(db, registration_id, caller)
    if not crud.delete_registration(db, registration_id):
        raise RegistrationNotFound()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
