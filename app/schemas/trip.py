from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from app.schemas.guide import GuideResponse


class TripBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    start_date: datetime
    end_date: datetime
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = Field(None, max_length=500)
    max_participants: int = Field(..., ge=1)
    destination_id: int

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TripCreate(TripBase):
    guide_ids: List[int] = []


class TripUpdate(TripBase):
    pass


class TripImageUpdate(BaseModel):
    image_url: str = Field(..., min_length=1, max_length=500)


class TripResponse(BaseModel):
    id: int
    name: str
    description: str = ""
    start_date: datetime
    end_date: datetime
    price: Decimal
    image_url: Optional[str] = None
    max_participants: int
    destination_id: int
    destination_name: str = ""
    country: str = ""
    city: str = ""
    guides: List[GuideResponse] = []
    available_spots: int
