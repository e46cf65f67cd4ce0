from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.db import database_reachable, get_db

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    return {
        "ok": True,
        "db": database_reachable(db),
        "ts": datetime.now(timezone.utc).isoformat(),
    }
