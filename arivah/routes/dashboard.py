# ARIVAH/backend/arivah/routes/dashboard.py

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from arivah.database import get_db
from arivah.auth import get_current_user
from arivah.models import models as db_models
from arivah.schemas import schemas
from arivah.services.metrics_service import MetricsService
from arivah.services.errors import NotFoundError, ValidationFailure

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("/", response_model=schemas.ConsolidatedView)
def dashboard_summary(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Both businesses side by side plus their combined totals"""
    try:
        return MetricsService(db).get_dashboard_data(start_date, end_date)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/consolidated", response_model=schemas.ConsolidatedView)
def consolidated_view(
    business_ids: List[int] = Query(..., description="Businesses in display order"),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """
    Consolidated view over any businesses.
    Transfers are counted from each business to the ones listed after it.
    """
    try:
        return MetricsService(db).consolidate(business_ids, start_date, end_date)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))
