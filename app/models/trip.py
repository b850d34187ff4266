from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Numeric,
    Table,
    CheckConstraint,
)
from sqlalchemy.orm import relationship

from app.database import Base

trip_guides = Table(
    "trip_guides",
    Base.metadata,
    Column("trip_id", Integer, ForeignKey("trips.id"), primary_key=True),
    Column("guide_id", Integer, ForeignKey("guides.id"), primary_key=True),
    extend_existing=True,
)


class Trip(Base):
    __tablename__ = "trips"
    __table_args__ = (
        CheckConstraint("price > 0", name="check_trip_price_positive"),
        CheckConstraint(
            "max_participants > 0", name="check_trip_max_participants_positive"
        ),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(500))
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(String(500))
    max_participants = Column(Integer, nullable=False)
    destination_id = Column(Integer, ForeignKey("destinations.id"), nullable=False)

    # Relationships
    destination = relationship(
        "app.models.destination.Destination", back_populates="trips"
    )
    guides = relationship(
        "app.models.guide.Guide", secondary=trip_guides, back_populates="trips"
    )
    registrations = relationship(
        "app.models.trip_registration.TripRegistration", back_populates="trip"
    )
