# ARIVAH/backend/arivah/routes/users.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from arivah.models import models as db_models
from arivah.schemas import schemas
from arivah.database import get_db
from arivah.auth import get_current_user
from arivah.services import records
from arivah.services.activity import get_users_with_stats
from arivah.services.errors import NotFoundError, ValidationFailure

router = APIRouter(prefix="/users", tags=["users"])

@router.post("/", response_model=schemas.UserOut)
def create_user(user: schemas.UserCreate, db: Session = Depends(get_db)):
    """Register a user (identity itself is managed upstream)"""
    try:
        return records.create_user(db, user.model_dump())
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/", response_model=List[schemas.UserOut])
def get_users(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    return records.get_users(db)

@router.get("/me", response_model=schemas.UserOut)
def get_me(current_user: db_models.User = Depends(get_current_user)):
    return current_user

@router.get("/stats", response_model=List[schemas.UserWithStats])
def get_users_stats(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Users with transaction/task counts and their latest activity"""
    return get_users_with_stats(db)

@router.get("/{user_id}", response_model=schemas.UserOut)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    try:
        return records.get_user(db, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
