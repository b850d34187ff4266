"""
Shared pytest configuration
"""
import os

# Cheap hashing for tests; must be set before app.services.auth is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db

# Import every model so SQLAlchemy can resolve the relationships
from app.models.user import User
from app.models.destination import Destination
from app.models.guide import Guide
from app.models.trip import Trip
from app.models.trip_registration import TripRegistration
from app.models.log import Log
from app.services.auth import create_access_token, get_password_hash
from app.main import app


# In-memory database for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "secret123"


@pytest.fixture
def db():
    """Create the test database and drop it afterwards"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def override_get_db(db):
    """get_db override bound to the test session"""
    def _get_db():
        try:
            yield db
        finally:
            pass
    return _get_db


@pytest.fixture
def client(override_get_db):
    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_user(db, username, is_admin=False, password=PASSWORD):
    user = User(
        username=username,
        email=f"{username}@example.com",
        hashed_password=get_password_hash(password),
        first_name=username.capitalize(),
        last_name="Tester",
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def sample_user(db):
    """Regular user"""
    return make_user(db, "alice")


@pytest.fixture
def other_user(db):
    """A second regular user"""
    return make_user(db, "bob")


@pytest.fixture
def admin_user(db):
    """Administrator"""
    return make_user(db, "admin", is_admin=True)


@pytest.fixture
def user_headers(sample_user):
    return auth_headers(sample_user)


@pytest.fixture
def other_headers(other_user):
    return auth_headers(other_user)


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def sample_destination(db):
    destination = Destination(
        name="Patagonia",
        description="Glaciers and mountains",
        country="Argentina",
        city="El Calafate",
        image_url="https://example.com/patagonia.jpg",
    )
    db.add(destination)
    db.commit()
    db.refresh(destination)
    return destination


@pytest.fixture
def sample_guide(db):
    guide = Guide(
        name="Marta Ruiz",
        bio="Mountain guide",
        email="marta@example.com",
        years_of_experience=8,
    )
    db.add(guide)
    db.commit()
    db.refresh(guide)
    return guide


def make_trip(db, destination, max_participants=10, price="100.00", name="Glacier trek"):
    start = datetime(2030, 1, 10, 9, 0)
    trip = Trip(
        name=name,
        description="Three days on the ice",
        start_date=start,
        end_date=start + timedelta(days=3),
        price=Decimal(price),
        max_participants=max_participants,
        destination_id=destination.id,
    )
    db.add(trip)
    db.commit()
    db.refresh(trip)
    return trip


@pytest.fixture
def sample_trip(db, sample_destination):
    """Trip with room for 10 participants"""
    return make_trip(db, sample_destination)


@pytest.fixture
def create_user(db):
    def _create(username, is_admin=False):
        return make_user(db, username, is_admin=is_admin)
    return _create


@pytest.fixture
def create_trip(db, sample_destination):
    def _create(**kwargs):
        return make_trip(db, sample_destination, **kwargs)
    return _create


@pytest.fixture
def headers_for():
    return auth_headers
