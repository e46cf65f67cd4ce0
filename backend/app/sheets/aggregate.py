"""
Sheets - record aggregation.

Walks the data rows below a located header and builds the month -> amount
record set for one import.

Design notes:
- A row whose month or amount does not resolve is dropped, never repaired.
  The drop is recorded as a SkippedRow so callers can report it.
- Later rows win: a second "March" row replaces the first one's amount.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple

from backend.app.sheets.errors import NoValidRowsError
from backend.app.sheets.header import HeaderLocation
from backend.app.sheets.normalize import parse_amount, resolve_month

SkipReason = Literal["month_unresolved", "amount_unresolved", "month_and_amount_unresolved"]

# month number (1..12) -> amount, in first-seen order
RecordSet = Dict[int, float]


@dataclass(frozen=True)
class NormalizedRecord:
    month_number: int
    amount: float


@dataclass(frozen=True)
class SkippedRow:
    row_index: int  # zero-based position in the grid, not in the data region
    reason: SkipReason


def _is_blank_row(row: Optional[Sequence[Any]]) -> bool:
    # spacer rows come back as [] from csv but as [None, None, ...] from openpyxl
    return not row or all(c is None or (isinstance(c, str) and not c.strip()) for c in row)


def _cell_at(row: Sequence[Any], column: int) -> Any:
    return row[column] if column < len(row) else None


def _skip_reason(month_ok: bool, amount_ok: bool) -> SkipReason:
    if not month_ok and not amount_ok:
        return "month_and_amount_unresolved"
    if not month_ok:
        return "month_unresolved"
    return "amount_unresolved"


def aggregate_records(
    grid: Sequence[Optional[Sequence[Any]]],
    header: HeaderLocation,
    *,
    dayfirst: bool = False,
) -> Tuple[RecordSet, List[SkippedRow]]:
    records: RecordSet = {}
    skipped: List[SkippedRow] = []

    for row_index in range(header.row_index + 1, len(grid)):
        row = grid[row_index]
        if _is_blank_row(row):
            continue

        month_idx = resolve_month(_cell_at(row, header.month_column), dayfirst=dayfirst)
        amount = parse_amount(_cell_at(row, header.amount_column))

        if month_idx is None or amount is None:
            skipped.append(SkippedRow(row_index=row_index, reason=_skip_reason(month_idx is not None, amount is not None)))
            continue

        records[month_idx + 1] = amount

    if not records:
        raise NoValidRowsError(skipped)
    return records, skipped


def as_normalized_records(records: RecordSet) -> List[NormalizedRecord]:
    return [NormalizedRecord(month_number=m, amount=a) for m, a in records.items()]
