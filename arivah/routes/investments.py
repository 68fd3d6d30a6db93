# ARIVAH/backend/arivah/routes/investments.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from arivah.models import models as db_models
from arivah.schemas import schemas
from arivah.database import get_db
from arivah.auth import get_current_user
from arivah.services import records
from arivah.services.investments_service import (
    settle_investment,
    get_investment_with_settlements,
    get_unsettled_investments
)
from arivah.services.errors import NotFoundError, ValidationFailure

router = APIRouter(prefix="/investments", tags=["investments"])

@router.post("/", response_model=schemas.InvestmentOut)
def create_investment(
    investment: schemas.InvestmentCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Record money put into a business by the current user"""
    try:
        return records.create_investment(db, investment.model_dump(), current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/", response_model=List[schemas.InvestmentOut])
def get_investments(
    user_id: Optional[int] = None,
    business_id: Optional[int] = None,
    is_settled: Optional[bool] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.get_investments(db, user_id, business_id, is_settled, start_date, end_date)
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/unsettled", response_model=schemas.UnsettledTotals)
def get_unsettled(
    user_id: Optional[int] = None,
    business_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Sum and count of investments not yet settled"""
    return get_unsettled_investments(db, user_id, business_id)

@router.get("/{investment_id}", response_model=schemas.InvestmentWithSettlements)
def get_investment(
    investment_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return get_investment_with_settlements(db, investment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.put("/{investment_id}", response_model=schemas.InvestmentOut)
def update_investment(
    investment_id: int,
    updates: schemas.InvestmentUpdate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.update_investment(db, investment_id, updates.model_dump(exclude_unset=True), current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.delete("/{investment_id}")
def delete_investment(
    investment_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        records.delete_investment(db, investment_id, current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Investment deleted"}

# ========== SETTLEMENT ==========

@router.post("/{investment_id}/settle", response_model=List[schemas.InvestmentSettlementOut])
def settle(
    investment_id: int,
    payload: schemas.InvestmentSettle,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """
    Split the investment between partners and mark it settled.
    The shares must add up to the investment amount.
    """
    try:
        return settle_investment(
            db,
            investment_id,
            [share.model_dump() for share in payload.shares],
            payload.settlement_date,
            current_user,
            payload.notes
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{investment_id}/settlements", response_model=List[schemas.InvestmentSettlementOut])
def get_settlements(
    investment_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.get_investment_settlements(db, investment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
