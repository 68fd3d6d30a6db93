# ARIVAH/backend/arivah/routes/profit_sharing.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from arivah.models import models as db_models
from arivah.schemas import schemas
from arivah.database import get_db
from arivah.auth import get_current_user
from arivah.services.partners_service import (
    record_profit_sharing,
    get_profit_sharing_logs,
    get_profit_sharing_log,
    update_profit_sharing_log,
    settle_profit_sharing_log
)
from arivah.services.errors import NotFoundError, ValidationFailure

router = APIRouter(prefix="/profit-sharing", tags=["profit-sharing"])

@router.post("/", response_model=List[schemas.ProfitSharingLogOut])
def create_profit_sharing(
    payload: schemas.ProfitSharingCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """
    Record how a period's profit was split between partners.
    Each entry's reinvested + cash payout must equal its share.
    """
    try:
        return record_profit_sharing(
            db,
            payload.business_id,
            payload.period_start_date,
            payload.period_end_date,
            payload.total_profit,
            [entry.model_dump() for entry in payload.entries],
            current_user,
            payload.note,
            payload.is_settled
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/", response_model=List[schemas.ProfitSharingLogOut])
def get_logs(
    business_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    return get_profit_sharing_logs(db, business_id)

@router.get("/{log_id}", response_model=schemas.ProfitSharingLogOut)
def get_log(
    log_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return get_profit_sharing_log(db, log_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.put("/{log_id}", response_model=schemas.ProfitSharingLogOut)
def update_log(
    log_id: int,
    updates: schemas.ProfitSharingUpdate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return update_profit_sharing_log(db, log_id, updates.model_dump(exclude_unset=True), current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/{log_id}/settle", response_model=schemas.ProfitSharingLogOut)
def settle_log(
    log_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return settle_profit_sharing_log(db, log_id, current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))
