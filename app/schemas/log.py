from pydantic import BaseModel
from datetime import datetime


class LogResponse(BaseModel):
    id: int
    timestamp: datetime
    level: str
    message: str

    class Config:
        from_attributes = True


class LogCount(BaseModel):
    count: int
