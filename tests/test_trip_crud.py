"""
Trip repository: search matching and delete guards.
"""
import pytest
from sqlalchemy.orm import Session

from app.crud import trip as crud
from app.crud import trip_registration as registration_crud
from app.exceptions import TripHasRegistrations


def test_search_treats_wildcards_literally(db: Session, create_trip):
    create_trip(name="Glacier trek")
    create_trip(name="50% off cruise")
    create_trip(name="night_walk")

    assert [t.name for t in crud.search_trips(db, name="%")] == ["50% off cruise"]
    assert [t.name for t in crud.search_trips(db, name="_")] == ["night_walk"]
    assert [t.name for t in crud.search_trips(db, name="GLACIER")] == ["Glacier trek"]


def test_delete_trip_locks_before_counting(db: Session, sample_trip, monkeypatch):
    """
    Test: The trip row is locked before registrations are counted, so no
    booking can slip in between the check and the delete
    """
    calls = []
    real_lock = crud.lock_trip
    real_count = crud.get_registration_count_for_trip

    def lock(db, trip_id):
        calls.append("lock")
        return real_lock(db, trip_id)

    def count(db, trip_id):
        calls.append("count")
        return real_count(db, trip_id)

    monkeypatch.setattr(crud, "lock_trip", lock)
    monkeypatch.setattr(crud, "get_registration_count_for_trip", count)

    assert crud.delete_trip(db, sample_trip.id) is True
    assert calls == ["lock", "count"]
    assert crud.get_trip(db, sample_trip.id) is None


def test_delete_trip_with_booking_keeps_it(db: Session, sample_trip, sample_user):
    registration_crud.create_registration(db, sample_trip.id, sample_user.id, 1)

    with pytest.raises(TripHasRegistrations):
        crud.delete_trip(db, sample_trip.id)

    assert crud.get_trip(db, sample_trip.id) is not None
    assert crud.delete_trip(db, 9999) is False
