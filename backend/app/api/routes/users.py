from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from backend.app.api.deps import require_user
from backend.app.db import get_db
from backend.app.models import User

router = APIRouter(prefix="/api/users", tags=["users"])


class UserCreateIn(BaseModel):
    name: str


class UserOut(BaseModel):
    user_id: int
    name: str


@router.post("", response_model=UserOut)
def create_user(payload: UserCreateIn, db: Session = Depends(get_db)):
    name = payload.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="name is required")

    user = User(name=name)
    db.add(user)
    db.commit()
    db.refresh(user)
    return UserOut(user_id=user.user_id, name=user.name)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = require_user(db, user_id)
    return UserOut(user_id=user.user_id, name=user.name)
