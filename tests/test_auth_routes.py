"""
Registration, login and password change over HTTP.
"""
from app.models.log import Log
from app.models.user import User
from app.services.auth import decode_access_token


def _register(client, username="carol", email="carol@example.com", password="secret123"):
    return client.post(
        "/auth/register",
        json={
            "username": username,
            "email": email,
            "password": password,
            "confirm_password": password,
            "first_name": "Carol",
        },
    )


def test_register_then_login(client):
    response = _register(client)
    assert response.status_code == 201

    response = client.post(
        "/auth/login", json={"username": "carol", "password": "secret123"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "carol"
    assert body["is_admin"] is False
    assert body["token_type"] == "bearer"
    assert "expires_at" in body

    caller = decode_access_token(body["token"])
    assert caller.username == "carol"
    assert caller.is_admin is False


def test_register_never_creates_admin(client, db):
    response = client.post(
        "/auth/register",
        json={
            "username": "mallory",
            "email": "mallory@example.com",
            "password": "secret123",
            "confirm_password": "secret123",
            "is_admin": True,
        },
    )
    assert response.status_code == 201

    login = client.post("/auth/login", json={"username": "mallory", "password": "secret123"})
    assert login.json()["is_admin"] is False


def test_register_duplicate_username(client):
    assert _register(client).status_code == 201

    response = _register(client, email="other@example.com")
    assert response.status_code == 409
    assert response.json()["detail"] == "Username already exists"


def test_register_duplicate_email(client):
    assert _register(client).status_code == 201

    response = _register(client, username="carol2")
    assert response.status_code == 409
    assert response.json()["detail"] == "Email already exists"


def test_register_password_rules(client):
    response = _register(client, password="123")
    assert response.status_code == 422

    response = client.post(
        "/auth/register",
        json={
            "username": "dave",
            "email": "dave@example.com",
            "password": "secret123",
            "confirm_password": "secret124",
        },
    )
    assert response.status_code == 422


def test_login_does_not_reveal_which_part_was_wrong(client, db, sample_user):
    """
    Test: Unknown user and wrong password give the same answer
    """
    unknown = client.post("/auth/login", json={"username": "ghost", "password": "secret123"})
    wrong = client.post("/auth/login", json={"username": "alice", "password": "nope-nope"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()

    # Both attempts are recorded in the activity log
    assert db.query(Log).filter(Log.level == "Warning").count() == 2


def test_change_password(client, sample_user, user_headers):
    response = client.post(
        "/auth/change-password",
        headers=user_headers,
        json={
            "current_password": "secret123",
            "new_password": "brand-new-1",
            "confirm_new_password": "brand-new-1",
        },
    )
    assert response.status_code == 200

    old = client.post("/auth/login", json={"username": "alice", "password": "secret123"})
    new = client.post("/auth/login", json={"username": "alice", "password": "brand-new-1"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_change_password_wrong_current(client, sample_user, user_headers):
    response = client.post(
        "/auth/change-password",
        headers=user_headers,
        json={
            "current_password": "not-it",
            "new_password": "brand-new-1",
            "confirm_new_password": "brand-new-1",
        },
    )
    assert response.status_code == 400


def test_change_password_requires_token(client):
    response = client.post(
        "/auth/change-password",
        json={
            "current_password": "secret123",
            "new_password": "brand-new-1",
            "confirm_new_password": "brand-new-1",
        },
    )
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_current_user_and_profile(client, sample_user, user_headers):
    response = client.get("/users/current", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["full_name"] == "Alice Tester"

    response = client.put(
        "/users/profile",
        headers=user_headers,
        json={"email": "alice.new@example.com", "first_name": "Alicia", "last_name": None},
    )
    assert response.status_code == 200
    assert response.json()["email"] == "alice.new@example.com"
    assert response.json()["full_name"] == "Alicia"


def test_profile_email_taken(client, sample_user, other_user, user_headers):
    response = client.put(
        "/users/profile", headers=user_headers, json={"email": "bob@example.com"}
    )
    assert response.status_code == 409


def test_user_listing_is_admin_only(client, sample_user, user_headers, admin_headers):
    assert client.get("/users/all").status_code == 401
    assert client.get("/users/all", headers=user_headers).status_code == 403
    assert client.get(f"/users/{sample_user.id}", headers=user_headers).status_code == 403

    response = client.get("/users/all", headers=admin_headers)
    assert response.status_code == 200
    assert {u["username"] for u in response.json()} == {"alice", "admin"}

    assert client.get("/users/9999", headers=admin_headers).status_code == 404


def test_seeded_user_with_local_email_is_readable(client, db, headers_for):
    """
    Test: Rows created outside registration (like the seeded admin) are
    returned even when they would not pass the registration rules
    """
    admin = User(
        username="ad",
        email="admin@localhost",
        hashed_password="hashed",
        is_admin=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)

    response = client.get("/users/current", headers=headers_for(admin))
    assert response.status_code == 200
    assert response.json()["email"] == "admin@localhost"
    assert response.json()["full_name"] == "ad"

    assert client.get("/users/all", headers=headers_for(admin)).status_code == 200
