"""
Registration endpoints: owners act on their own bookings, admins on all.
"""
from app.crud import trip_registration as crud


def _book(client, headers, trip_id, participants=1, user_id=None):
    body = {"trip_id": trip_id, "number_of_participants": participants}
    if user_id is not None:
        body["user_id"] = user_id
    return client.post("/trip-registrations", json=body, headers=headers)


def test_book_a_trip(client, sample_trip, sample_user, user_headers):
    response = _book(client, user_headers, sample_trip.id, participants=2)

    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == sample_user.id
    assert body["username"] == "alice"
    assert body["trip_name"] == "Glacier trek"
    assert body["destination_name"] == "Patagonia"
    assert body["status"] == "Pending"
    assert float(body["total_price"]) == 200.0

    trip = client.get(f"/trips/{sample_trip.id}").json()
    assert trip["available_spots"] == 8


def test_booking_requires_login(client, sample_trip):
    assert _book(client, {}, sample_trip.id).status_code == 401


def test_booking_over_capacity(client, create_trip, user_headers, other_headers):
    trip = create_trip(max_participants=5)

    assert _book(client, user_headers, trip.id, participants=3).status_code == 201
    assert _book(client, other_headers, trip.id, participants=2).status_code == 201

    response = _book(client, user_headers, trip.id, participants=1)
    assert response.status_code == 409
    assert client.get(f"/trips/{trip.id}").json()["available_spots"] == 0


def test_user_cannot_book_for_someone_else(client, sample_trip, sample_user, other_user, user_headers):
    response = _book(client, user_headers, sample_trip.id, user_id=other_user.id)

    assert response.status_code == 201
    assert response.json()["user_id"] == sample_user.id


def test_admin_books_for_a_user(client, sample_trip, sample_user, admin_headers):
    response = _book(client, admin_headers, sample_trip.id, user_id=sample_user.id)

    assert response.status_code == 201
    assert response.json()["user_id"] == sample_user.id

    assert _book(client, admin_headers, sample_trip.id, user_id=9999).status_code == 404


def test_owner_or_admin_can_read(client, db, sample_trip, sample_user, user_headers, other_headers, admin_headers):
    registration = crud.create_registration(db, sample_trip.id, sample_user.id, 1)
    url = f"/trip-registrations/{registration.id}"

    assert client.get(url, headers=user_headers).status_code == 200
    assert client.get(url, headers=admin_headers).status_code == 200
    assert client.get(url, headers=other_headers).status_code == 403
    assert client.get("/trip-registrations/9999", headers=admin_headers).status_code == 404


def test_listing_permissions(client, db, sample_trip, sample_user, other_user, user_headers, admin_headers):
    crud.create_registration(db, sample_trip.id, sample_user.id, 1)
    crud.create_registration(db, sample_trip.id, other_user.id, 2)

    assert client.get("/trip-registrations", headers=user_headers).status_code == 403
    assert len(client.get("/trip-registrations", headers=admin_headers).json()) == 2

    mine = client.get(f"/trip-registrations/user/{sample_user.id}", headers=user_headers)
    assert [r["user_id"] for r in mine.json()] == [sample_user.id]

    theirs = client.get(f"/trip-registrations/user/{other_user.id}", headers=user_headers)
    assert theirs.status_code == 403

    by_trip = client.get(f"/trip-registrations/trip/{sample_trip.id}", headers=admin_headers)
    assert len(by_trip.json()) == 2
    assert client.get(f"/trip-registrations/trip/{sample_trip.id}", headers=user_headers).status_code == 403


def test_owner_updates_participants(client, db, create_trip, sample_user, other_user, user_headers):
    trip = create_trip(max_participants=10)
    mine = crud.create_registration(db, trip.id, sample_user.id, 4)
    crud.create_registration(db, trip.id, other_user.id, 5)
    url = f"/trip-registrations/{mine.id}"

    response = client.put(url, json={"number_of_participants": 5, "status": "Pending"}, headers=user_headers)
    assert response.status_code == 200
    assert response.json()["number_of_participants"] == 5

    response = client.put(url, json={"number_of_participants": 6, "status": "Pending"}, headers=user_headers)
    assert response.status_code == 409


def test_other_user_cannot_touch_registration(client, db, sample_trip, sample_user, other_headers):
    registration = crud.create_registration(db, sample_trip.id, sample_user.id, 1)
    url = f"/trip-registrations/{registration.id}"

    assert client.put(url, json={"number_of_participants": 2, "status": "Pending"}, headers=other_headers).status_code == 403
    assert client.patch(f"{url}/status", json={"status": "Cancelled"}, headers=other_headers).status_code == 403
    assert client.delete(url, headers=other_headers).status_code == 403


def test_owner_may_cancel_but_not_confirm(client, db, sample_trip, sample_user, user_headers, admin_headers):
    registration = crud.create_registration(db, sample_trip.id, sample_user.id, 2)
    url = f"/trip-registrations/{registration.id}/status"

    assert client.patch(url, json={"status": "Confirmed"}, headers=user_headers).status_code == 403

    response = client.patch(url, json={"status": "Confirmed"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "Confirmed"

    response = client.patch(url, json={"status": "Cancelled"}, headers=user_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "Cancelled"

    assert client.get(f"/trips/{sample_trip.id}").json()["available_spots"] == 10

    # Cancelled is final, even for admins
    response = client.patch(url, json={"status": "Pending"}, headers=admin_headers)
    assert response.status_code == 400


def test_unknown_status_rejected(client, db, sample_trip, sample_user, admin_headers):
    registration = crud.create_registration(db, sample_trip.id, sample_user.id, 1)

    response = client.patch(
        f"/trip-registrations/{registration.id}/status",
        json={"status": "Archived"},
        headers=admin_headers,
    )
    assert response.status_code == 422


def test_delete_registration(client, db, create_trip, sample_user, other_user, user_headers, other_headers):
    trip = create_trip(max_participants=2)
    registration = crud.create_registration(db, trip.id, sample_user.id, 2)
    url = f"/trip-registrations/{registration.id}"

    assert _book(client, other_headers, trip.id).status_code == 409

    assert client.delete(url, headers=user_headers).status_code == 204
    assert client.get(url, headers=user_headers).status_code == 404

    assert _book(client, other_headers, trip.id).status_code == 201
