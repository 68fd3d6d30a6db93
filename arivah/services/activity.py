# ARIVAH/backend/arivah/services/activity.py : activity log (audit trail)

from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import Optional, Dict, Any, List
from datetime import date, datetime
from arivah.models import models
from arivah.config import ACTIVITY_LOG_LIMIT
from arivah.database import store_read
from arivah.constants import ACTIVITY_ACTIONS, ENTITY_TYPES, RECENT_ACTIVITY_PER_USER
import logging

logger = logging.getLogger(__name__)


def _jsonable(details: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Dates are stored as ISO strings in the JSON column"""
    if details is None:
        return None
    return {
        key: value.isoformat() if isinstance(value, (date, datetime)) else value
        for key, value in details.items()
    }


def log_activity(
    db: Session,
    user: models.User,
    action: str,
    entity_type: str,
    entity_id: Optional[int] = None,
    details: Optional[Dict[str, Any]] = None
) -> models.ActivityLog:
    """
    Add an activity row to the current session.

    The row is committed by the caller together with the change it describes,
    so a rolled back write leaves no activity behind.
    """
    if action not in ACTIVITY_ACTIONS or entity_type not in ENTITY_TYPES:
        raise ValueError(f"Unknown activity: {action} on {entity_type}")
    entry = models.ActivityLog(
        user_id=user.id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=_jsonable(details)
    )
    db.add(entry)
    logger.debug(f"📝 {action} {entity_type}#{entity_id} by user {user.id}")
    return entry


@store_read()
def get_activity_logs(db: Session, user_id: Optional[int] = None, limit: int = ACTIVITY_LOG_LIMIT) -> List[models.ActivityLog]:
    query = db.query(models.ActivityLog)
    if user_id:
        query = query.filter(models.ActivityLog.user_id == user_id)
    return query.order_by(models.ActivityLog.created_at.desc(), models.ActivityLog.id.desc()).limit(limit).all()


@store_read()
def get_users_with_stats(db: Session) -> List[Dict[str, Any]]:
    """Each user with their transaction count, task count and latest activity"""
    users = db.query(models.User).order_by(models.User.created_at.desc(), models.User.id.desc()).all()
    result = []
    for user in users:
        total_transactions = db.query(models.Transaction).filter(
            models.Transaction.created_by == user.id
        ).count()
        total_tasks = db.query(models.Task).filter(
            or_(models.Task.created_by == user.id, models.Task.assigned_to == user.id)
        ).count()
        result.append({
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "created_at": user.created_at,
            "total_transactions": total_transactions,
            "total_tasks": total_tasks,
            "recent_activity": get_activity_logs(db, user.id, limit=RECENT_ACTIVITY_PER_USER)
        })
    return result
