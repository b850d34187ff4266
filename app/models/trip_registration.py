from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Numeric,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from datetime import datetime

from app.database import Base
from app.enums.registration_status import RegistrationStatus


class TripRegistration(Base):
    __tablename__ = "trip_registrations"
    __table_args__ = (
        CheckConstraint(
            "number_of_participants > 0",
            name="check_registration_participants_positive",
        ),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    registration_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    number_of_participants = Column(Integer, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(
        String(20), nullable=False, default=RegistrationStatus.PENDING.value
    )

    # Relationships
    user = relationship("app.models.user.User", back_populates="registrations")
    trip = relationship("app.models.trip.Trip", back_populates="registrations")
