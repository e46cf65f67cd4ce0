"""
Sheets - ingestion pipeline.

Responsibility:
- Run header detection, then aggregation, over an already materialized grid.

Design notes:
- Stages run once, in order: locating_header -> aggregating -> done.
  A failure in a stage ends the run; there are no retries.
- No IO here. Reading the upload and persisting the result belong to the
  import service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Literal, Optional, Sequence

from backend.app.sheets.aggregate import (
    NormalizedRecord,
    RecordSet,
    SkippedRow,
    aggregate_records,
    as_normalized_records,
)
from backend.app.sheets.header import (
    DEFAULT_SCAN_ROWS,
    DEFAULT_VOCABULARY,
    HeaderLocation,
    HeaderVocabulary,
    locate_header,
)

PipelineStage = Literal["locating_header", "aggregating", "done"]


@dataclass(frozen=True)
class IngestSettings:
    vocabulary: HeaderVocabulary = field(default_factory=lambda: DEFAULT_VOCABULARY)
    scan_rows: int = DEFAULT_SCAN_ROWS
    dayfirst: bool = False


DEFAULT_SETTINGS = IngestSettings()


@dataclass(frozen=True)
class IngestionResult:
    """
    Successful outcome of one import.

    Invariants:
    - records is never empty (an empty import raises NoValidRowsError)
    - records has at most one entry per month
    """
    records: RecordSet
    header: HeaderLocation
    skipped: List[SkippedRow]
    stage: PipelineStage = "done"

    @property
    def normalized_records(self) -> List[NormalizedRecord]:
        return as_normalized_records(self.records)


def ingest_grid(
    grid: Sequence[Optional[Sequence[Any]]],
    settings: Optional[IngestSettings] = None,
) -> IngestionResult:
    """
    Normalize a worksheet grid into a month -> amount record set.

    Raises:
        HeaderNotFoundError: no month/amount header row in the scan window
        NoValidRowsError: a header was found but no data row resolved
    """
    settings = settings or DEFAULT_SETTINGS

    # locating_header
    header = locate_header(grid, vocabulary=settings.vocabulary, scan_rows=settings.scan_rows)

    # aggregating
    records, skipped = aggregate_records(grid, header, dayfirst=settings.dayfirst)

    return IngestionResult(records=records, header=header, skipped=skipped)
