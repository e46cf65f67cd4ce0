"""
Sheets - header detection.

Exports rarely start with the header: titles, report dates and blank lines come
first. We scan a bounded window of leading rows for the first row that names
both a month column and an amount column.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable, Optional, Sequence

from backend.app.sheets.cells import cell_text, to_cell
from backend.app.sheets.errors import HeaderNotFoundError

DEFAULT_SCAN_ROWS = 30

_WHITESPACE = re.compile(r"\s+")


def normalize_label(raw: Any) -> str:
    return _WHITESPACE.sub("", cell_text(to_cell(raw)).lower())


def _label_set(labels: Iterable[str]) -> FrozenSet[str]:
    return frozenset(filter(None, (normalize_label(label) for label in labels)))


@dataclass(frozen=True)
class HeaderVocabulary:
    """
    Column labels accepted for the month and amount columns.

    Labels are compared after lower-casing and removing all whitespace, so
    "Total Amount" matches a cell reading "total amount" or "TOTALAMOUNT".
    """
    month_labels: FrozenSet[str] = field(default_factory=lambda: frozenset({"month", "months"}))
    amount_labels: FrozenSet[str] = field(default_factory=lambda: frozenset({"amount", "value", "amt"}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "month_labels", _label_set(self.month_labels))
        object.__setattr__(self, "amount_labels", _label_set(self.amount_labels))
        if not self.month_labels or not self.amount_labels:
            raise ValueError("HeaderVocabulary needs at least one month label and one amount label")


DEFAULT_VOCABULARY = HeaderVocabulary()


@dataclass(frozen=True)
class HeaderLocation:
    row_index: int
    month_column: int
    amount_column: int


def _first_match(labels: Sequence[str], accepted: FrozenSet[str]) -> Optional[int]:
    for idx, label in enumerate(labels):
        if label in accepted:
            return idx
    return None


def locate_header(
    grid: Sequence[Optional[Sequence[Any]]],
    vocabulary: HeaderVocabulary = DEFAULT_VOCABULARY,
    scan_rows: int = DEFAULT_SCAN_ROWS,
) -> HeaderLocation:
    """
    Find the first row (within `scan_rows`) holding both a month and an amount
    label.

    Raises HeaderNotFoundError when no row in the window qualifies. Column
    positions are never guessed.
    """
    if scan_rows < 1:
        raise ValueError(f"scan_rows must be positive, got {scan_rows}")

    for row_index, row in enumerate(grid[:scan_rows]):
        labels = [normalize_label(c) for c in (row or ())]
        month_column = _first_match(labels, vocabulary.month_labels)
        amount_column = _first_match(labels, vocabulary.amount_labels)
        if month_column is not None and amount_column is not None:
            return HeaderLocation(row_index=row_index, month_column=month_column, amount_column=amount_column)

    raise HeaderNotFoundError(scanned_rows=min(len(grid), scan_rows))
