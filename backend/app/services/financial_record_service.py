from __future__ import annotations

from typing import Any, Dict, List, Mapping

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.api.deps import require_user
from backend.app.models import FinancialRecord, utcnow
from backend.app.sheets.normalize import month_name

_CONFLICT_KEY = ["user_id", "year", "month_num"]


def _upsert_statement(db: Session, rows: List[Dict[str, Any]]):
    dialect = db.get_bind().dialect.name

    if dialect == "mysql":
        from sqlalchemy.dialects.mysql import insert as mysql_insert

        stmt = mysql_insert(FinancialRecord).values(rows)
        return stmt.on_duplicate_key_update(
            amount=stmt.inserted.amount,
            updated_at=stmt.inserted.updated_at,
        )

    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert as pg_insert

        stmt = pg_insert(FinancialRecord).values(rows)
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert as sqlite_insert

        stmt = sqlite_insert(FinancialRecord).values(rows)
    else:
        raise RuntimeError(f"financial record upsert is not supported on dialect {dialect!r}")

    return stmt.on_conflict_do_update(
        index_elements=_CONFLICT_KEY,
        set_={"amount": stmt.excluded.amount, "updated_at": stmt.excluded.updated_at},
    )


def upsert_financial_records(
    db: Session,
    *,
    user_id: int,
    year: int,
    records: Mapping[int, float],
) -> int:
    """
    Insert or update one row per (user_id, year, month).

    Re-running with the same records leaves the table unchanged apart from
    updated_at. Does not commit.
    """
    if not records:
        return 0

    now = utcnow()
    rows = [
        {
            "user_id": user_id,
            "year": year,
            "month_num": month_num,
            "amount": float(amount),
            "created_at": now,
            "updated_at": now,
        }
        for month_num, amount in records.items()
    ]
    db.execute(_upsert_statement(db, rows))
    return len(rows)


def list_financial_records(db: Session, *, user_id: int, year: int) -> List[FinancialRecord]:
    return list(
        db.execute(
            select(FinancialRecord)
            .where(FinancialRecord.user_id == user_id, FinancialRecord.year == year)
            .order_by(FinancialRecord.month_num.asc())
        ).scalars().all()
    )


def financial_report(db: Session, *, user_id: int, year: int) -> Dict[str, Any]:
    rows = list_financial_records(db, user_id=user_id, year=year)
    if not rows:
        raise HTTPException(status_code=404, detail="No data found for this user and year")

    user = require_user(db, user_id)
    return {
        "name": user.name,
        "year": year,
        "records": [
            {"month": month_name(r.month_num), "amount": float(r.amount)}
            for r in rows
        ],
    }
