from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Path, UploadFile
from pydantic import BaseModel
from sqlalchemy.orm import Session

from backend.app.api.config import ingest_settings_from_env, max_upload_bytes
from backend.app.db import get_db
from backend.app.services import financial_record_service, import_service

router = APIRouter(prefix="/api/finances", tags=["finances"])


class SkippedRowOut(BaseModel):
    row_index: int
    reason: str


class UploadOut(BaseModel):
    message: str
    months_stored: int
    rows_skipped: int
    skipped: List[SkippedRowOut] = []


class MonthAmountOut(BaseModel):
    month: str
    amount: float


class FinancialReportOut(BaseModel):
    name: str
    year: int
    records: List[MonthAmountOut]


@router.post("/upload/{user_id}/{year}", response_model=UploadOut)
def upload_financials(
    user_id: int = Path(..., ge=1),
    year: int = Path(..., ge=1900, le=9999),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    limit = max_upload_bytes()
    content = file.file.read(limit + 1)
    if len(content) > limit:
        raise HTTPException(status_code=413, detail=f"File exceeds the {limit} byte upload limit")

    return import_service.import_financial_upload(
        db,
        user_id=user_id,
        year=year,
        filename=file.filename,
        content=content,
        settings=ingest_settings_from_env(),
    )


@router.get("/{user_id}/{year}", response_model=FinancialReportOut)
def get_financials(
    user_id: int = Path(..., ge=1),
    year: int = Path(..., ge=1900, le=9999),
    db: Session = Depends(get_db),
):
    return financial_record_service.financial_report(db, user_id=user_id, year=year)
