from pydantic import BaseModel, Field
from typing import Optional


class DestinationBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    country: str = Field(..., min_length=1, max_length=100)
    city: str = Field(..., min_length=1, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)


class DestinationCreate(DestinationBase):
    pass


class DestinationUpdate(DestinationBase):
    pass


class DestinationImageUpdate(BaseModel):
    image_url: str = Field(..., min_length=1, max_length=500)


class DestinationResponse(DestinationBase):
    id: int

    class Config:
        from_attributes = True
