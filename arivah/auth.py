# ARIVAH/backend/arivah/auth.py

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session
from typing import Optional
from arivah.database import get_db, store_read
from arivah.models import models

def get_current_user(
    x_user_id: Optional[int] = Header(default=None),
    db: Session = Depends(get_db)
) -> models.User:
    """
    Acting user for the request.

    Sign-in happens upstream (the identity provider sets X-User-Id); here we
    only resolve the id to a known user for created_by stamping and the
    activity log.
    """
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    with store_read():
        user = db.get(models.User, x_user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user
