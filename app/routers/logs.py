from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.crud import log as crud
from app.database import get_db
from app.exceptions import ValidationError
from app.schemas.log import LogCount, LogResponse
from app.services.auth import require_capability
from app.utils.permissions import Caller, Capability

router = APIRouter()

view_logs = require_capability(Capability.VIEW_LOGS)


@router.get("/get/{count}", response_model=List[LogResponse])
def read_logs(
    count: int, caller: Caller = Depends(view_logs), db: Session = Depends(get_db)
):
    if count <= 0:
        raise ValidationError("Count must be greater than 0")
    return crud.get_logs(db, count)


@router.get("/count", response_model=LogCount)
def read_logs_count(caller: Caller = Depends(view_logs), db: Session = Depends(get_db)):
    return LogCount(count=crud.get_logs_count(db))
