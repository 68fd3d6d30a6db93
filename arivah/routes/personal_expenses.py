# ARIVAH/backend/arivah/routes/personal_expenses.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from arivah.models import models as db_models
from arivah.schemas import schemas
from arivah.database import get_db
from arivah.auth import get_current_user
from arivah.services import records
from arivah.services.personal_expenses_service import get_personal_expense_stats, mark_reimbursed
from arivah.services.errors import NotFoundError, ValidationFailure

router = APIRouter(prefix="/personal-expenses", tags=["personal-expenses"])

@router.post("/", response_model=schemas.PersonalExpenseOut)
def create_personal_expense(
    expense: schemas.PersonalExpenseCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Record an expense paid by the current user"""
    try:
        return records.create_personal_expense(db, expense.model_dump(), current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/", response_model=List[schemas.PersonalExpenseOut])
def get_personal_expenses(
    user_id: Optional[int] = None,
    business_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    category: Optional[str] = None,
    is_reimbursable: Optional[bool] = None,
    is_reimbursed: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.get_personal_expenses(
            db, user_id, business_id, start_date, end_date, category, is_reimbursable, is_reimbursed
        )
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/categories", response_model=List[str])
def get_categories(
    user_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    return records.get_personal_expense_categories(db, user_id)

@router.get("/stats", response_model=schemas.PersonalExpenseStats)
def get_stats(
    user_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Totals, top categories and the 6-month trend"""
    try:
        return get_personal_expense_stats(db, user_id, start_date, end_date)
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{expense_id}", response_model=schemas.PersonalExpenseOut)
def get_personal_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.get_personal_expense(db, expense_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.put("/{expense_id}", response_model=schemas.PersonalExpenseOut)
def update_personal_expense(
    expense_id: int,
    updates: schemas.PersonalExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.update_personal_expense(db, expense_id, updates.model_dump(exclude_unset=True), current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.delete("/{expense_id}")
def delete_personal_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        records.delete_personal_expense(db, expense_id, current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Personal expense deleted"}

@router.post("/{expense_id}/reimburse", response_model=schemas.PersonalExpenseOut)
def reimburse(
    expense_id: int,
    reimbursed_date: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Mark a reimbursable expense as paid back (defaults to today)"""
    try:
        return mark_reimbursed(db, expense_id, current_user, reimbursed_date)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))
