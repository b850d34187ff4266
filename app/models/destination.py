from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base


class Destination(Base):
    __tablename__ = "destinations"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500))
    country = Column(String(100), nullable=False)
    city = Column(String(100), nullable=False)
    image_url = Column(String(500))

    # Relationships
    trips = relationship("app.models.trip.Trip", back_populates="destination")
