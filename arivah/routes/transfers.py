# ARIVAH/backend/arivah/routes/transfers.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from arivah.models import models as db_models
from arivah.schemas import schemas
from arivah.database import get_db
from arivah.auth import get_current_user
from arivah.services import records
from arivah.services.transfers_service import create_transfer, delete_transfer
from arivah.services.errors import NotFoundError, ValidationFailure

router = APIRouter(prefix="/transfers", tags=["transfers"])

@router.post("/", response_model=schemas.TransferWithLegs)
def post_transfer(
    transfer: schemas.TransferCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Record a transfer and its two transactions in one go"""
    try:
        return create_transfer(db, transfer.model_dump(), current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/", response_model=List[schemas.TransferOut])
def get_transfers(
    business_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Transfers touching the business on either side"""
    return records.get_transfers(db, business_id)

@router.get("/between", response_model=List[schemas.TransferOut])
def get_transfers_between(
    from_business_id: int,
    to_business_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.get_transfers_between(db, from_business_id, to_business_id, start_date, end_date)
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{transfer_id}", response_model=schemas.TransferWithLegs)
def get_transfer(
    transfer_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.get_transfer(db, transfer_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.delete("/{transfer_id}")
def remove_transfer(
    transfer_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Delete a transfer and both of its transactions"""
    try:
        delete_transfer(db, transfer_id, current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Transfer deleted"}
