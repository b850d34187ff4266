from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from app.crud import destination as crud
from app.database import get_db
from app.exceptions import DestinationNotFound
from app.schemas.destination import (
    DestinationCreate,
    DestinationImageUpdate,
    DestinationResponse,
    DestinationUpdate,
)
from app.services.auth import require_capability
from app.utils.permissions import Caller, Capability

router = APIRouter()

manage_catalog = require_capability(Capability.MANAGE_CATALOG)


@router.get("", response_model=List[DestinationResponse])
def read_destinations(db: Session = Depends(get_db)):
    return crud.get_destinations(db)


@router.get("/{destination_id}", response_model=DestinationResponse)
def read_destination(destination_id: int, db: Session = Depends(get_db)):
    destination = crud.get_destination(db, destination_id)
    if destination is None:
        raise DestinationNotFound()
    return destination


@router.post(
    "", response_model=DestinationResponse, status_code=status.HTTP_201_CREATED
)
def create_destination(
    destination: DestinationCreate,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    return crud.create_destination(db, destination)


@router.put("/{destination_id}", response_model=DestinationResponse)
def update_destination(
    destination_id: int,
    destination: DestinationUpdate,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    updated = crud.update_destination(db, destination_id, destination)
    if updated is None:
        raise DestinationNotFound()
    return updated


@router.put("/{destination_id}/image", response_model=DestinationResponse)
def update_destination_image(
    destination_id: int,
    image: DestinationImageUpdate,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    updated = crud.update_destination_image(db, destination_id, image.image_url)
    if updated is None:
        raise DestinationNotFound()
    return updated


@router.delete("/{destination_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_destination(
    destination_id: int,
    caller: Caller = Depends(manage_catalog),
    db: Session = Depends(get_db),
):
    if not crud.delete_destination(db, destination_id):
        raise DestinationNotFound()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
