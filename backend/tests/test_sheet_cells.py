import math
from datetime import date, datetime
from decimal import Decimal

from backend.app.sheets.cells import (
    EMPTY,
    DateCell,
    EmptyCell,
    NumberCell,
    TextCell,
    cell_text,
    to_cell,
)


def test_to_cell_tags_each_raw_shape():
    assert to_cell(None) == EMPTY
    assert to_cell(3) == NumberCell(3.0)
    assert to_cell(Decimal("12.50")) == NumberCell(12.5)
    assert to_cell(datetime(2023, 7, 4, 9, 30)) == DateCell(datetime(2023, 7, 4, 9, 30))
    assert to_cell(date(2023, 7, 4)) == DateCell(date(2023, 7, 4))
    assert to_cell(" Jan ") == TextCell(" Jan ")


def test_to_cell_treats_booleans_as_text():
    assert to_cell(True) == TextCell("True")
    assert not isinstance(to_cell(False), NumberCell)


def test_to_cell_passes_through_existing_cells():
    cell = TextCell("March")
    assert to_cell(cell) is cell
    assert isinstance(to_cell(EmptyCell()), EmptyCell)


def test_cell_text_renders_integral_numbers_without_fraction():
    assert cell_text(NumberCell(3.0)) == "3"
    assert cell_text(NumberCell(2.5)) == "2.5"
    assert cell_text(EMPTY) == ""
    assert cell_text(DateCell(date(2024, 1, 31))) == "2024-01-31"


def test_to_cell_maps_ints_past_float_range_to_infinity():
    assert to_cell(10**400) == NumberCell(math.inf)
    assert to_cell(-(10**400)) == NumberCell(-math.inf)
    assert cell_text(to_cell(10**400)) == "inf"
