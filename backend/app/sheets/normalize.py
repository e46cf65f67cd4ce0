"""
Sheets - cell normalization.

Responsibility:
- Resolve a month cell to a 0-based month index (0 = January).
- Parse an amount cell into a float.

Design notes:
- This module must be PURE: no IO, no logging, no global state mutation.
- Both functions return None for "unresolved". Callers decide what to do with
  the row; nothing here guesses a value for input that matches no known shape.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from backend.app.sheets.cells import Cell, DateCell, EmptyCell, NumberCell, TextCell, to_cell

# -------------------------
# Month vocabulary
# -------------------------

MONTH_NAMES: List[str] = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

_FULL_MONTHS: Dict[str, int] = {name.lower(): idx for idx, name in enumerate(MONTH_NAMES)}

_MONTH_ABBREVIATIONS: Dict[str, int] = {
    "jan": 0,
    "feb": 1,
    "mar": 2,
    "apr": 3,
    "may": 4,
    "jun": 5,
    "jul": 6,
    "aug": 7,
    "sep": 8,
    "sept": 8,
    "oct": 9,
    "nov": 10,
    "dec": 11,
}

# Two defaults with different months (both 31 days long). If a parsed string
# yields different months under each, the month came from the default and the
# text never named one.
_PROBE_DEFAULTS = (datetime(2000, 1, 1), datetime(2000, 7, 1))

_SHORT_NUMBER = re.compile(r"^\d{1,2}$")
_AMOUNT_NOISE = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_DEGENERATE_AMOUNTS = {"", "-", ".", "-."}


def month_name(month_number: int) -> Optional[str]:
    """
    Calendar name for a 1-based month number, or None when out of range.
    """
    if 1 <= month_number <= 12:
        return MONTH_NAMES[month_number - 1]
    return None


# -------------------------
# Month resolution
# -------------------------

def _month_from_number(value: float) -> Optional[int]:
    if not math.isfinite(value) or not float(value).is_integer():
        return None
    n = int(value)
    if 1 <= n <= 12:
        return n - 1
    # some sheets already store a 0-based index
    if 0 <= n <= 11:
        return n
    return None


def _month_from_date_text(text: str, dayfirst: bool) -> Optional[int]:
    try:
        months = {
            date_parser.parse(text, default=default, dayfirst=dayfirst).month
            for default in _PROBE_DEFAULTS
        }
    except (ValueError, OverflowError):
        return None
    if len(months) != 1:
        return None
    return months.pop() - 1


def resolve_month(raw: Any, *, dayfirst: bool = False) -> Optional[int]:
    """
    Resolve a month cell to 0..11, or None.

    Order (first match wins):
    1. date/datetime cells -> their month
    2. numbers: 1..12 -> n-1, otherwise 0..11 as-is
    3. text that parses as a date naming a month ("2023-07-04", "4 Jul 2023")
    4. 1-2 digit text (after dropping "." and ","), using rule 2
    5. full month names, then abbreviations (jan..dec, sept)
    """
    cell: Cell = to_cell(raw)

    if isinstance(cell, EmptyCell):
        return None
    if isinstance(cell, DateCell):
        return cell.value.month - 1
    if isinstance(cell, NumberCell):
        return _month_from_number(cell.value)

    text = cell.value.strip().lower()
    if not text:
        return None

    from_date = _month_from_date_text(text, dayfirst)
    if from_date is not None:
        return from_date

    cleaned = text.replace(".", "").replace(",", "")
    if _SHORT_NUMBER.match(cleaned):
        return _month_from_number(float(cleaned))

    if cleaned in _FULL_MONTHS:
        return _FULL_MONTHS[cleaned]
    return _MONTH_ABBREVIATIONS.get(cleaned)


# -------------------------
# Amount parsing
# -------------------------

def parse_amount(raw: Any) -> Optional[float]:
    """
    Parse an amount cell into a finite float, or None.

    Text keeps only digits, "-" and "."; currency symbols, thousands
    separators and spaces fall away ("$1,234.50" -> 1234.5). The longest
    leading decimal literal of what remains is the value.
    """
    cell: Cell = to_cell(raw)

    if isinstance(cell, NumberCell):
        return cell.value if math.isfinite(cell.value) else None
    if not isinstance(cell, TextCell):
        # empty cells and date cells never carry an amount
        return None

    digits = _AMOUNT_NOISE.sub("", cell.value.strip())
    if digits in _DEGENERATE_AMOUNTS:
        return None

    match = _LEADING_NUMBER.match(digits)
    if not match:
        return None
    value = float(match.group(0))
    return value if math.isfinite(value) else None
