from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from app.crud import guide as crud
from app.database import get_db
from app.exceptions import GuideNotFound
from app.schemas.guide import GuideCreate, GuideResponse, GuideUpdate
from app.services.auth import require_capability
from app.utils.permissions import Caller, Capability

router = APIRouter()

manage_catalog = require_capability(Capability.MANAGE_CATALOG)


@router.get("", response_model=List[GuideResponse])
def read_guides(db: Session = Depends(get_db)):
    return crud.get_guides(db)


@router.get("/trip/{trip_id}", response_model=List[GuideResponse])
def read_guides_by_trip(trip_id: int, db: Session = Depends(get_db)):
    return crud.get_guides_by_trip(db, trip_id)


@router.get("/{guide_id}", response_model=GuideResponse)
def read_guide(guide_id: int, db: Session = Depends(get_db)):
    guide = crud.get_guide(db, guide_id)
    if guide is None:
        raise GuideNotFound()
    return guide


@router.post("", response_model=GuideResponse, status_code=status.HTTP_201_CREATED)
def create_guide(
    guide: GuideCreate,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    return crud.create_guide(db, guide)


@router.put("/{guide_id}", response_model=GuideResponse)
def update_guide(
    guide_id: int,
    guide: GuideUpdate,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    updated = crud.update_guide(db, guide_id, guide)
    if updated is None:
        raise GuideNotFound()
    return updated


@router.delete("/{guide_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_guide(
    guide_id: int,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    if not crud.delete_guide(db, guide_id):
        raise GuideNotFound()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
