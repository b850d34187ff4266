"""
Trip registrations and the capacity rule.

For every trip, the participants of its active (Pending or Confirmed)
registrations never add up to more than ``Trip.max_participants``.

Capacity is never stored; it is summed from the registration rows. To keep
two concurrent bookings from both passing the check, every write that adds
participants:

* locks the trip row first (``SELECT ... FOR UPDATE`` on backends that
  support it), which serialises bookings for the same trip, and
* performs the check inside the write itself, as a conditional
  ``INSERT ... SELECT ... WHERE`` or ``UPDATE ... WHERE``, so the sum is read
  by the same statement that writes the row.
"""
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
import logging

from sqlalchemy import (
    DateTime,
    Integer,
    Numeric,
    String,
    func,
    insert,
    literal,
    select,
    update,
)
from sqlalchemy.orm import Session, aliased, joinedload

from app.enums.registration_status import (
    ACTIVE_STATUSES,
    RegistrationStatus,
    can_transition,
)
from app.exceptions import (
    CapacityExceeded,
    InvalidStatusTransition,
    RegistrationNotFound,
    TripNotFound,
    UserNotFound,
    ValidationError,
)
from app.models.trip import Trip
from app.models.trip_registration import TripRegistration
from app.models.user import User
from app.services import log_service

logger = logging.getLogger(__name__)

registrations_table = TripRegistration.__table__

ACTIVE_STATUS_VALUES = [s.value for s in ACTIVE_STATUSES]


def _registration_query(db: Session):
    return db.query(TripRegistration).options(
        joinedload(TripRegistration.user),
        joinedload(TripRegistration.trip).joinedload(Trip.destination),
    )


def get_registration(db: Session, registration_id: int) -> Optional[TripRegistration]:
    return (
        _registration_query(db)
        .filter(TripRegistration.id == registration_id)
        .first()
    )


def get_registrations(db: Session) -> List[TripRegistration]:
    return _registration_query(db).order_by(TripRegistration.id).all()


def get_registrations_by_user(db: Session, user_id: int) -> List[TripRegistration]:
    return (
        _registration_query(db)
        .filter(TripRegistration.user_id == user_id)
        .order_by(TripRegistration.registration_date.desc(), TripRegistration.id)
        .all()
    )


def get_registrations_by_trip(db: Session, trip_id: int) -> List[TripRegistration]:
    return (
        _registration_query(db)
        .filter(TripRegistration.trip_id == trip_id)
        .order_by(TripRegistration.id)
        .all()
    )


def get_registration_count_for_trip(db: Session, trip_id: int) -> int:
    """Number of registration rows for a trip, cancelled ones included."""
    return (
        db.query(func.count(TripRegistration.id))
        .filter(TripRegistration.trip_id == trip_id)
        .scalar()
    )


def _committed_participants(trip_id: int, exclude_registration_id: Optional[int] = None):
    # Aliased so the subquery never correlates with an enclosing statement
    # on trip_registrations.
    other = aliased(TripRegistration)
    query = select(func.coalesce(func.sum(other.number_of_participants), 0)).where(
        other.trip_id == trip_id, other.status.in_(ACTIVE_STATUS_VALUES)
    )
    if exclude_registration_id is not None:
        query = query.where(other.id != exclude_registration_id)
    return query.scalar_subquery()


def get_committed_participants(
    db: Session, trip_id: int, exclude_registration_id: Optional[int] = None
) -> int:
    return db.execute(
        select(_committed_participants(trip_id, exclude_registration_id))
    ).scalar_one()


def get_committed_participants_by_trip(
    db: Session, trip_ids: Iterable[int]
) -> Dict[int, int]:
    trip_ids = list(trip_ids)
    if not trip_ids:
        return {}
    rows = (
        db.query(
            TripRegistration.trip_id,
            func.coalesce(func.sum(TripRegistration.number_of_participants), 0),
        )
        .filter(
            TripRegistration.trip_id.in_(trip_ids),
            TripRegistration.status.in_(ACTIVE_STATUS_VALUES),
        )
        .group_by(TripRegistration.trip_id)
        .all()
    )
    committed = {trip_id: 0 for trip_id in trip_ids}
    committed.update({trip_id: int(total) for trip_id, total in rows})
    return committed


def get_available_spots(db: Session, trip: Trip) -> int:
    return trip.max_participants - get_committed_participants(db, trip.id)


def lock_trip(db: Session, trip_id: int) -> Optional[Trip]:
    return (
        db.query(Trip)
        .filter(Trip.id == trip_id)
        .with_for_update()
        .populate_existing()
        .first()
    )


def _check_participants(number_of_participants: int) -> None:
    if number_of_participants < 1:
        raise ValidationError("Number of participants must be greater than 0")


def create_registration(
    db: Session, trip_id: int, user_id: int, number_of_participants: int
) -> TripRegistration:
    _check_participants(number_of_participants)

    if not db.query(User.id).filter(User.id == user_id).first():
        raise UserNotFound()

    trip = lock_trip(db, trip_id)
    if trip is None:
        db.rollback()
        raise TripNotFound()

    total_price = Decimal(trip.price) * number_of_participants
    committed = _committed_participants(trip_id)

    source = select(
        literal(user_id, Integer),
        literal(trip_id, Integer),
        literal(datetime.utcnow(), DateTime),
        literal(number_of_participants, Integer),
        literal(total_price, Numeric(10, 2)),
        literal(RegistrationStatus.PENDING.value, String(20)),
    ).where(
        Trip.id == trip_id,
        committed + number_of_participants <= Trip.max_participants,
    )
    stmt = (
        insert(registrations_table)
        .from_select(
            [
                "user_id",
                "trip_id",
                "registration_date",
                "number_of_participants",
                "total_price",
                "status",
            ],
            source,
        )
        .returning(registrations_table.c.id)
    )

    try:
        new_id = db.execute(stmt).scalar_one_or_none()
    except Exception:
        db.rollback()
        raise

    if new_id is None:
        db.rollback()
        logger.info(
            f"Trip {trip_id} cannot take {number_of_participants} more participants"
        )
        raise CapacityExceeded()

    db.commit()
    log_service.log_info(
        db, f"Created registration for trip {trip.name} by user {user_id}"
    )
    return get_registration(db, new_id)


def update_registration(
    db: Session,
    registration_id: int,
    number_of_participants: int,
    status: RegistrationStatus,
) -> TripRegistration:
    _check_participants(number_of_participants)

    registration = get_registration(db, registration_id)
    if registration is None:
        raise RegistrationNotFound()

    current_status = RegistrationStatus(registration.status)
    new_status = RegistrationStatus(status)
    if not can_transition(current_status, new_status):
        raise InvalidStatusTransition(
            f"Cannot change registration status from {current_status.value} to {new_status.value}"
        )

    if number_of_participants == registration.number_of_participants:
        # Status-only change: participant total is unchanged, no capacity check
        registration.status = new_status.value
        db.commit()
        log_service.log_info(db, f"Updated registration {registration_id}")
        return get_registration(db, registration_id)

    if current_status == RegistrationStatus.CANCELLED:
        raise ValidationError(
            "Cannot change the participants of a cancelled registration"
        )

    trip = lock_trip(db, registration.trip_id)
    if trip is None:
        db.rollback()
        raise TripNotFound()

    total_price = Decimal(trip.price) * number_of_participants
    stmt = update(registrations_table).where(
        registrations_table.c.id == registration_id
    )
    if new_status in ACTIVE_STATUSES:
        others = _committed_participants(
            trip.id, exclude_registration_id=registration_id
        )
        max_participants = (
            select(Trip.max_participants).where(Trip.id == trip.id).scalar_subquery()
        )
        stmt = stmt.where(others + number_of_participants <= max_participants)
    stmt = stmt.values(
        number_of_participants=number_of_participants,
        total_price=total_price,
        status=new_status.value,
    )

    try:
        result = db.execute(stmt)
    except Exception:
        db.rollback()
        raise

    if result.rowcount == 0:
        db.rollback()
        logger.info(
            f"Registration {registration_id} cannot grow to {number_of_participants} participants"
        )
        raise CapacityExceeded()

    db.commit()
    log_service.log_info(db, f"Updated registration {registration_id}")
    return get_registration(db, registration_id)


def update_registration_status(
    db: Session, registration_id: int, status: RegistrationStatus
) -> TripRegistration:
    registration = get_registration(db, registration_id)
    if registration is None:
        raise RegistrationNotFound()

    current_status = RegistrationStatus(registration.status)
    new_status = RegistrationStatus(status)
    if not can_transition(current_status, new_status):
        raise InvalidStatusTransition(
            f"Cannot change registration status from {current_status.value} to {new_status.value}"
        )

    registration.status = new_status.value
    db.commit()
    log_service.log_info(
        db, f"Updated registration {registration_id} status to {new_status.value}"
    )
    return get_registration(db, registration_id)


def delete_registration(db: Session, registration_id: int) -> bool:
    registration = (
        db.query(TripRegistration)
        .filter(TripRegistration.id == registration_id)
        .first()
    )
    if registration is None:
        return False

    db.delete(registration)
    db.commit()
    log_service.log_info(db, f"Deleted registration {registration_id}")
    return True
