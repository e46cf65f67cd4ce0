import pytest

from backend.app.sheets.aggregate import NormalizedRecord, SkippedRow, aggregate_records, as_normalized_records
from backend.app.sheets.errors import NoValidRowsError
from backend.app.sheets.header import HeaderLocation

HEADER = HeaderLocation(row_index=0, month_column=0, amount_column=1)


def test_aggregate_last_row_for_a_month_wins():
    grid = [
        ["Month", "Amount"],
        ["March", 100],
        ["Mar", 150],
    ]
    records, skipped = aggregate_records(grid, HEADER)
    assert records == {3: 150.0}
    assert skipped == []


def test_aggregate_bad_row_does_not_block_later_rows():
    grid = [
        ["Month", "Amount"],
        ["Jan", "not a number"],
        ["Feb", "$20"],
    ]
    records, skipped = aggregate_records(grid, HEADER)
    assert records == {2: 20.0}
    assert skipped == [SkippedRow(row_index=1, reason="amount_unresolved")]


def test_aggregate_records_skip_reasons():
    grid = [
        ["Month", "Amount"],
        ["Smarch", 5],
        ["??", "??"],
        ["Apr"],  # ragged row, amount cell missing
        ["May", 1],
    ]
    records, skipped = aggregate_records(grid, HEADER)
    assert records == {5: 1.0}
    assert [s.reason for s in skipped] == [
        "month_unresolved",
        "month_and_amount_unresolved",
        "amount_unresolved",
    ]
    assert [s.row_index for s in skipped] == [1, 2, 3]


def test_aggregate_ignores_empty_rows_and_rows_above_header():
    grid = [
        ["Jan", 999],
        ["Month", "Amount"],
        [],
        None,
        ["Jan", 1],
    ]
    header = HeaderLocation(row_index=1, month_column=0, amount_column=1)
    records, skipped = aggregate_records(grid, header)
    assert records == {1: 1.0}
    assert skipped == []


def test_aggregate_skips_blank_rows_without_diagnostics():
    grid = [
        ["Month", "Amount"],
        [None, None],
        ["", "  "],
        [None, "\t"],
        ["Feb", 2],
    ]
    records, skipped = aggregate_records(grid, HEADER)
    assert records == {2: 2.0}
    assert skipped == []


def test_aggregate_blank_rows_do_not_count_towards_no_valid_rows():
    with pytest.raises(NoValidRowsError) as exc_info:
        aggregate_records([["Month", "Amount"], [None, None], ["??", 1]], HEADER)
    assert exc_info.value.skipped == [SkippedRow(row_index=2, reason="month_unresolved")]


def test_aggregate_uses_header_columns():
    grid = [
        ["#", "Amount", "Notes", "Month"],
        [1, "10.5", "x", "2024-06-01"],
    ]
    header = HeaderLocation(row_index=0, month_column=3, amount_column=1)
    records, _ = aggregate_records(grid, header)
    assert records == {6: 10.5}


def test_aggregate_without_valid_rows_raises():
    grid = [
        ["Month", "Amount"],
        ["garbage", "N/A"],
    ]
    with pytest.raises(NoValidRowsError) as exc_info:
        aggregate_records(grid, HEADER)
    assert exc_info.value.reason == "no_valid_rows"
    assert exc_info.value.skipped == [SkippedRow(row_index=1, reason="month_and_amount_unresolved")]


def test_aggregate_header_as_last_row_raises():
    with pytest.raises(NoValidRowsError) as exc_info:
        aggregate_records([["Month", "Amount"]], HEADER)
    assert exc_info.value.skipped == []


def test_as_normalized_records_keeps_order():
    assert as_normalized_records({3: 1.0, 1: 2.0}) == [
        NormalizedRecord(month_number=3, amount=1.0),
        NormalizedRecord(month_number=1, amount=2.0),
    ]
