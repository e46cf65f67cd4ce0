# backend/app/api/deps.py
from __future__ import annotations

from fastapi import HTTPException
from sqlalchemy.orm import Session

from backend.app.models import User


def require_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
