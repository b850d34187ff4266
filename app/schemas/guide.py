from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional

DEFAULT_GUIDE_PROFILE_IMAGE = "/images/default-guide-profile.svg"


class GuideBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=20)
    image_url: Optional[str] = Field(None, max_length=500)
    years_of_experience: Optional[int] = Field(None, ge=0)


class GuideCreate(GuideBase):
    pass


class GuideUpdate(GuideBase):
    pass


class GuideResponse(GuideBase):
    id: int
    email: str

    @field_validator("image_url", mode="before")
    @classmethod
    def default_image(cls, v):
        return v or DEFAULT_GUIDE_PROFILE_IMAGE

    class Config:
        from_attributes = True
