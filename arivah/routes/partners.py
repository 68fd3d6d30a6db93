# ARIVAH/backend/arivah/routes/partners.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from datetime import date
from arivah.models import models as db_models
from arivah.schemas import schemas
from arivah.database import get_db
from arivah.auth import get_current_user
from arivah.services import records
from arivah.services.partners_service import update_partner, calculate_partner_shares
from arivah.services.errors import NotFoundError, ValidationFailure

router = APIRouter(prefix="/partners", tags=["partners"])

@router.post("/", response_model=schemas.PartnerOut)
def create_partner(
    partner: schemas.PartnerCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    return records.create_partner(db, partner.model_dump(), current_user)

@router.get("/", response_model=List[schemas.PartnerOut])
def get_partners(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    return records.get_partners(db)

@router.get("/shares", response_model=schemas.PartnerSharesOut)
def get_partner_shares(
    business_id: int,
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Each partner's cut of the business profit over the period"""
    try:
        return calculate_partner_shares(db, business_id, start_date, end_date)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{partner_id}", response_model=schemas.PartnerOut)
def get_partner(
    partner_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.get_partner(db, partner_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.put("/{partner_id}", response_model=schemas.PartnerOut)
def put_partner(
    partner_id: int,
    updates: schemas.PartnerUpdate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return update_partner(db, partner_id, updates.model_dump(exclude_unset=True), current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))
