"""
Sheets - import failures.

Only sheet-level failures are raised. A cell that cannot be resolved is not an
error: the aggregator drops that row and records a SkippedRow instead.
"""

from __future__ import annotations

from typing import List, Literal, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from backend.app.sheets.aggregate import SkippedRow

Stage = Literal["reading", "locating_header", "aggregating"]
FailureReason = Literal["unreadable_workbook", "header_not_found", "no_valid_rows"]


class SheetIngestError(ValueError):
    reason: FailureReason = "unreadable_workbook"
    stage: Stage = "reading"


class WorkbookReadError(SheetIngestError):
    """
    The uploaded file could not be decoded into a grid (corrupt workbook,
    wrong encoding, no worksheet).
    """


class HeaderNotFoundError(SheetIngestError):
    reason: FailureReason = "header_not_found"
    stage: Stage = "locating_header"

    def __init__(self, scanned_rows: int):
        super().__init__(f"no row within the first {scanned_rows} rows has both a month and an amount label")
        self.scanned_rows = scanned_rows


class NoValidRowsError(SheetIngestError):
    reason: FailureReason = "no_valid_rows"
    stage: Stage = "aggregating"

    def __init__(self, skipped: Optional[List["SkippedRow"]] = None):
        skipped = list(skipped or [])
        super().__init__(f"header found but none of the data rows resolved ({len(skipped)} rows skipped)")
        self.skipped = skipped
