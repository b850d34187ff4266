from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.trip import trip_guides


class Guide(Base):
    __tablename__ = "guides"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    bio = Column(String(500))
    email = Column(String(100), nullable=False)
    phone = Column(String(20))
    image_url = Column(String(500))
    years_of_experience = Column(Integer)

    # Relationships
    trips = relationship(
        "app.models.trip.Trip", secondary=trip_guides, back_populates="guides"
    )
