"""Spreadsheet import: cell normalization, header detection, aggregation."""

from backend.app.sheets.errors import (  # noqa: F401
    HeaderNotFoundError,
    NoValidRowsError,
    SheetIngestError,
    WorkbookReadError,
)
from backend.app.sheets.header import HeaderLocation, HeaderVocabulary  # noqa: F401
from backend.app.sheets.pipeline import IngestionResult, IngestSettings, ingest_grid  # noqa: F401
