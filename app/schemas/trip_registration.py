from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.enums.registration_status import RegistrationStatus


class TripRegistrationCreate(BaseModel):
    trip_id: int
    # Only honoured for admins booking on behalf of someone else
    user_id: Optional[int] = None
    number_of_participants: int = Field(1, ge=1)


class TripRegistrationUpdate(BaseModel):
    number_of_participants: int = Field(..., ge=1)
    status: RegistrationStatus


class TripRegistrationStatusUpdate(BaseModel):
    status: RegistrationStatus


class TripRegistrationResponse(BaseModel):
    id: int
    user_id: int
    username: str = ""
    trip_id: int
    trip_name: str = ""
    destination_name: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    registration_date: datetime
    number_of_participants: int
    total_price: Decimal
    status: RegistrationStatus
