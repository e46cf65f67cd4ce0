from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Integer,
    SmallInteger,
    String,
    UniqueConstraint,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db import Base


# -------------------------
# Helpers
# -------------------------

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# -------------------------
# Core models
# -------------------------

class User(Base):
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    financial_records = relationship(
        "FinancialRecord",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class FinancialRecord(Base):
    """
    One stored amount per (user, year, month).

    Imports write through an upsert on the unique key, so re-importing a sheet
    replaces amounts instead of duplicating rows.
    """
    __tablename__ = "financial_records"
    __table_args__ = (
        UniqueConstraint("user_id", "year", "month_num", name="uq_financial_records_user_year_month"),
        Index("ix_financial_records_user_year", "user_id", "year"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    year: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    month_num: Mapped[int] = mapped_column(SmallInteger, nullable=False)  # 1..12
    amount: Mapped[float] = mapped_column(Float, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="financial_records")
