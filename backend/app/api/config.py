from __future__ import annotations

import os

from backend.app.sheets.header import DEFAULT_SCAN_ROWS
from backend.app.sheets.pipeline import IngestSettings

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def _positive_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a positive integer, got {raw!r}.") from exc
    if value < 1:
        raise RuntimeError(f"{name} must be a positive integer, got {raw!r}.")
    return value


def header_scan_rows() -> int:
    return _positive_int_env("HEADER_SCAN_ROWS", DEFAULT_SCAN_ROWS)


def max_upload_bytes() -> int:
    return _positive_int_env("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)


def date_dayfirst() -> bool:
    return os.getenv("DATE_DAYFIRST") == "1"


def ingest_settings_from_env() -> IngestSettings:
    return IngestSettings(scan_rows=header_scan_rows(), dayfirst=date_dayfirst())
