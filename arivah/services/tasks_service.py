# ARIVAH/backend/arivah/services/tasks_service.py

from sqlalchemy.orm import Session
from datetime import datetime
from typing import Dict, Any
from arivah.models import models
from arivah.database import atomic
from arivah.services import records
from arivah.services.activity import log_activity


def _check_references(db: Session, data: Dict[str, Any]):
    if data.get("business_id"):
        records.get_business(db, data["business_id"])
    if data.get("assigned_to"):
        records.get_user(db, data["assigned_to"])


def create_task(db: Session, data: Dict[str, Any], user: models.User) -> models.Task:
    _check_references(db, data)
    task = models.Task(**data, created_by=user.id)
    if task.status == "completed":
        task.completed_at = datetime.utcnow()
    with atomic(db):
        db.add(task)
        db.flush()
        log_activity(db, user, "created_task", "task", task.id, {"title": task.title})
    db.refresh(task)
    return task


def update_task(db: Session, task_id: int, updates: Dict[str, Any], user: models.User) -> models.Task:
    """Apply updates; completing a task stamps completed_at unless one is given"""
    task = records.get_task(db, task_id)
    _check_references(db, updates)

    status = updates.get("status")
    if status == "completed" and not updates.get("completed_at"):
        updates["completed_at"] = datetime.utcnow()

    if status == "completed":
        action = "completed_task"
    elif status == "cancelled":
        action = "cancelled_task"
    else:
        action = "updated_task"

    with atomic(db):
        for field, value in updates.items():
            setattr(task, field, value)
        log_activity(db, user, action, "task", task.id, updates)
    db.refresh(task)
    return task
