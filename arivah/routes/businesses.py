# ARIVAH/backend/arivah/routes/businesses.py

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from arivah.models import models as db_models
from arivah.schemas import schemas
from arivah.database import get_db
from arivah.auth import get_current_user
from arivah.constants import TOP_EXPENSE_CATEGORIES
from arivah.services import records
from arivah.services.metrics_service import MetricsService
from arivah.services.partners_service import set_business_partner
from arivah.services.errors import NotFoundError, ValidationFailure

router = APIRouter(prefix="/businesses", tags=["businesses"])

@router.post("/", response_model=schemas.BusinessOut)
def create_business(
    business: schemas.BusinessCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Create a business"""
    try:
        return records.create_business(db, business.model_dump(), current_user)
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/", response_model=List[schemas.BusinessOut])
def get_businesses(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """All businesses, by name"""
    return records.list_businesses(db)

@router.get("/by-name/{name}", response_model=schemas.BusinessOut)
def get_business_by_name(
    name: str,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.get_business_by_name(db, name)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/{business_id}", response_model=schemas.BusinessOut)
def get_business(
    business_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.get_business(db, business_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.put("/{business_id}", response_model=schemas.BusinessOut)
def update_business(
    business_id: int,
    updates: schemas.BusinessUpdate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.update_business(db, business_id, updates.model_dump(exclude_unset=True), current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

# ========== METRICS ==========

@router.get("/{business_id}/metrics", response_model=schemas.BusinessMetrics)
def get_business_metrics(
    business_id: int,
    start_date: Optional[date] = Query(None, description="Window start (inclusive)"),
    end_date: Optional[date] = Query(None, description="Window end (inclusive)"),
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Windowed revenue, expenses and net profit; all-time cash balance"""
    try:
        return MetricsService(db).compute_business_metrics(business_id, start_date, end_date)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{business_id}/monthly", response_model=List[schemas.MonthlyBreakdown])
def get_monthly_breakdown(
    business_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Revenue vs expense per month (chart data)"""
    try:
        return MetricsService(db).get_monthly_breakdown(business_id, start_date, end_date)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{business_id}/expense-categories", response_model=List[schemas.ExpenseCategoryAmount])
def get_expense_categories(
    business_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    limit: int = Query(TOP_EXPENSE_CATEGORIES, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Top expense categories (chart data)"""
    try:
        return MetricsService(db).get_expense_categories(business_id, start_date, end_date, limit)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

# ========== PARTNERS ==========

@router.get("/{business_id}/partners", response_model=List[schemas.BusinessPartnerOut])
def get_business_partners(
    business_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Partners of the business with their equity (no amounts)"""
    try:
        return [
            {"business_id": business_id, "partner": partner, "equity_percentage": equity}
            for partner, equity in records.get_business_partners(db, business_id)
        ]
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.put("/{business_id}/partners", response_model=schemas.BusinessPartnerOut)
def put_business_partner(
    business_id: int,
    payload: schemas.BusinessPartnerSet,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Attach a partner to the business or change their equity"""
    try:
        return set_business_partner(db, business_id, payload.partner_id, payload.equity_percentage, current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))
