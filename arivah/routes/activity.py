# ARIVAH/backend/arivah/routes/activity.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from arivah.models import models as db_models
from arivah.schemas import schemas
from arivah.database import get_db
from arivah.auth import get_current_user
from arivah.config import ACTIVITY_LOG_LIMIT
from arivah.services.activity import get_activity_logs

router = APIRouter(prefix="/activity", tags=["activity"])

@router.get("/", response_model=List[schemas.ActivityLogOut])
def list_activity(
    user_id: Optional[int] = None,
    limit: int = Query(ACTIVITY_LOG_LIMIT, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Activity log, newest first"""
    return get_activity_logs(db, user_id, limit)
