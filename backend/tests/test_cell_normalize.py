from datetime import date, datetime
from decimal import Decimal

import pytest

from backend.app.sheets.normalize import month_name, parse_amount, resolve_month


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("January", 0),
        ("jan", 0),
        ("  DECEMBER ", 11),
        ("Sept", 8),
        ("sep", 8),
        ("Sep.", 8),
        ("may", 4),
    ],
)
def test_resolve_month_names_and_abbreviations(raw, expected):
    assert resolve_month(raw) == expected


def test_resolve_month_date_cells_use_their_month():
    assert resolve_month(date(2023, 7, 4)) == 6
    assert resolve_month(datetime(2024, 12, 31, 23, 59)) == 11


@pytest.mark.parametrize(
    "raw, expected",
    [
        (1, 0),
        (12, 11),
        (12.0, 11),
        (Decimal("3"), 2),
        (0, 0),  # already 0-based
        (13, None),
        (-1, None),
        (2.5, None),
        (float("nan"), None),
    ],
)
def test_resolve_month_numeric_cells(raw, expected):
    assert resolve_month(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1", 0),
        ("01", 0),
        ("3", 2),
        ("12", 11),
        ("0", 0),
        ("13", None),
        ("7.", 6),
    ],
)
def test_resolve_month_numeric_text(raw, expected):
    assert resolve_month(raw) == expected


def test_resolve_month_date_strings():
    assert resolve_month("2023-07-04") == 6
    assert resolve_month("July 4, 2023") == 6
    assert resolve_month("4 Mar 2024") == 2


def test_resolve_month_dayfirst_controls_ambiguous_dates():
    assert resolve_month("04/07/2023") == 3
    assert resolve_month("04/07/2023", dayfirst=True) == 6


@pytest.mark.parametrize("raw", [None, "", "   ", "garbage", "N/A", "2023", "total", True, "Janvier", 10**400])
def test_resolve_month_rejects_unknown_input(raw):
    assert resolve_month(raw) is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("$1,234.50", 1234.50),
        ("  42 ", 42.0),
        (7.5, 7.5),
        (100, 100.0),
        (Decimal("19.99"), 19.99),
        ("-$5.25", -5.25),
        ("€ 1 234", 1234.0),
        ("5.", 5.0),
        ("-.5", -0.5),
        ("USD 0.00", 0.0),
    ],
)
def test_parse_amount_values(raw, expected):
    assert parse_amount(raw) == pytest.approx(expected)


@pytest.mark.parametrize(
    "raw",
    [None, "", "-", ".", "-.", "N/A", "--5", float("inf"), float("nan"), 10**400, -(10**400), date(2023, 7, 4), True],
)
def test_parse_amount_rejects_unparsable_input(raw):
    assert parse_amount(raw) is None


def test_month_name_round_trip_for_display():
    assert month_name(1) == "January"
    assert month_name(12) == "December"
    assert month_name(0) is None
    assert month_name(13) is None
