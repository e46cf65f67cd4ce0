"""
Sheets - workbook reader.

Responsibility:
- Decode an uploaded file into a grid (list of rows of raw cell values).
- Only the first worksheet is read.

Design notes:
- This is intentionally the "IO edge" of the import. Everything after it works
  on plain Python values.
- Workbooks are opened with data_only=True: formula cells yield the value
  Excel last cached, formulas are never evaluated here.
"""

from __future__ import annotations

import csv
import io
from pathlib import PurePath
from typing import Any, List
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from backend.app.sheets.errors import WorkbookReadError

Grid = List[List[Any]]

WORKBOOK_EXTENSIONS = (".xlsx", ".xlsm")
CSV_EXTENSIONS = (".csv",)
SUPPORTED_EXTENSIONS = WORKBOOK_EXTENSIONS + CSV_EXTENSIONS
LEGACY_EXTENSIONS = (".xls",)


# ElementTree's ParseError and lxml's XMLSyntaxError both derive from SyntaxError
_UNREADABLE_WORKBOOK = (InvalidFileException, BadZipFile, KeyError, OSError, ValueError, SyntaxError)


def file_extension(filename: str) -> str:
    return PurePath(filename or "").suffix.lower()


def _read_error(exc: Exception) -> WorkbookReadError:
    return WorkbookReadError(str(exc) or exc.__class__.__name__)


def read_xlsx_grid(content: bytes) -> Grid:
    try:
        wb = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except _UNREADABLE_WORKBOOK as exc:
        raise _read_error(exc) from exc

    try:
        if not wb.worksheets:
            raise WorkbookReadError("workbook has no worksheets")
        ws = wb.worksheets[0]
        # read-only sheets parse their XML lazily, while iterating
        return [list(row) for row in ws.iter_rows(values_only=True)]
    except WorkbookReadError:
        raise
    except _UNREADABLE_WORKBOOK as exc:
        raise _read_error(exc) from exc
    finally:
        wb.close()


def read_csv_grid(content: bytes) -> Grid:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise WorkbookReadError("CSV must be UTF-8 encoded") from exc

    try:
        return [row for row in csv.reader(io.StringIO(text, newline=""))]
    except csv.Error as exc:
        raise WorkbookReadError(f"CSV parse error: {exc}") from exc


def read_grid(filename: str, content: bytes) -> Grid:
    """
    Read the first sheet of an uploaded file.

    Raises:
        WorkbookReadError: unsupported extension or undecodable content
    """
    ext = file_extension(filename)
    if ext in WORKBOOK_EXTENSIONS:
        return read_xlsx_grid(content)
    if ext in CSV_EXTENSIONS:
        return read_csv_grid(content)
    raise WorkbookReadError(f"unsupported file type {ext or '(none)'!r}")
