"""
Sheets - cell values.

Spreadsheet readers hand back whatever the file format stores: None, ints,
floats, Decimals, datetimes, bools, strings. `to_cell` turns that into one of
four explicit shapes so the normalizers never rely on implicit coercion.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Union


@dataclass(frozen=True)
class EmptyCell:
    pass


@dataclass(frozen=True)
class NumberCell:
    value: float


@dataclass(frozen=True)
class DateCell:
    value: date  # datetime is a date subclass


@dataclass(frozen=True)
class TextCell:
    value: str


Cell = Union[EmptyCell, NumberCell, DateCell, TextCell]

EMPTY = EmptyCell()


def to_cell(raw: Any) -> Cell:
    if raw is None:
        return EMPTY
    if isinstance(raw, (EmptyCell, NumberCell, DateCell, TextCell)):
        return raw
    # bool is an int subclass; TRUE/FALSE cells are labels, not numbers
    if isinstance(raw, bool):
        return TextCell(str(raw))
    if isinstance(raw, (int, float, Decimal)):
        try:
            return NumberCell(float(raw))
        except OverflowError:
            # ints past float range; the normalizers reject non-finite numbers
            return NumberCell(math.inf if raw > 0 else -math.inf)
    if isinstance(raw, (datetime, date)):
        return DateCell(raw)
    return TextCell(str(raw))


def cell_text(cell: Cell) -> str:
    """
    Render a cell the way a user would read it in the sheet.

    Integral numbers drop the trailing ".0" so that a numeric 3 and the text
    "3" look the same to label and month matching.
    """
    if isinstance(cell, EmptyCell):
        return ""
    if isinstance(cell, NumberCell):
        if cell.value.is_integer():
            return str(int(cell.value))
        return repr(cell.value)
    if isinstance(cell, DateCell):
        return cell.value.isoformat()
    return cell.value
