from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from backend.app.api.deps import require_user
from backend.app.services.financial_record_service import upsert_financial_records
from backend.app.sheets.errors import HeaderNotFoundError, NoValidRowsError, WorkbookReadError
from backend.app.sheets.pipeline import IngestSettings, ingest_grid
from backend.app.sheets.workbook import LEGACY_EXTENSIONS, SUPPORTED_EXTENSIONS, file_extension, read_grid

logger = logging.getLogger(__name__)

HEADER_NOT_FOUND_MESSAGE = "Invalid Excel format. Could not find 'Month' and 'Amount' columns."
NO_VALID_ROWS_MESSAGE = "No valid rows found. Ensure Month and Amount contain valid values."
UNSUPPORTED_FILE_MESSAGE = "Only Excel (.xlsx/.xlsm) or CSV files are allowed"


def _reject(status_code: int, detail: str, **context: Any) -> HTTPException:
    logger.warning("Upload rejected (%s): %s %s", status_code, detail, context)
    return HTTPException(status_code=status_code, detail=detail)


def validate_upload_name(filename: Optional[str]) -> None:
    if not filename:
        raise _reject(400, "No file uploaded")

    ext = file_extension(filename)
    if ext in LEGACY_EXTENSIONS:
        raise _reject(400, "Legacy .xls workbooks are not supported; save the file as .xlsx", filename=filename)
    if ext not in SUPPORTED_EXTENSIONS:
        raise _reject(400, UNSUPPORTED_FILE_MESSAGE, filename=filename)


def import_financial_upload(
    db: Session,
    *,
    user_id: int,
    year: int,
    filename: str,
    content: bytes,
    settings: IngestSettings,
) -> Dict[str, Any]:
    """
    Read an uploaded sheet, normalize it and upsert the monthly amounts.

    The import is all-or-nothing at the sheet level: nothing is written unless
    the pipeline produced at least one record. Individual bad rows are skipped
    and reported back.
    """
    validate_upload_name(filename)

    require_user(db, user_id)

    try:
        grid = read_grid(filename, content)
    except WorkbookReadError as exc:
        raise _reject(400, f"Failed to read Excel: {exc}", filename=filename) from exc

    if not grid:
        raise _reject(400, "Empty worksheet", filename=filename)

    try:
        result = ingest_grid(grid, settings)
    except HeaderNotFoundError as exc:
        raise _reject(400, HEADER_NOT_FOUND_MESSAGE, filename=filename, scanned_rows=exc.scanned_rows) from exc
    except NoValidRowsError as exc:
        raise _reject(400, NO_VALID_ROWS_MESSAGE, filename=filename, rows_skipped=len(exc.skipped)) from exc

    stored = upsert_financial_records(db, user_id=user_id, year=year, records=result.records)
    db.commit()

    logger.info(
        "Imported %s: user_id=%s year=%s months_stored=%s rows_skipped=%s",
        filename,
        user_id,
        year,
        stored,
        len(result.skipped),
    )
    return {
        "message": "Data uploaded successfully",
        "months_stored": stored,
        "rows_skipped": len(result.skipped),
        "skipped": [{"row_index": s.row_index, "reason": s.reason} for s in result.skipped],
    }
