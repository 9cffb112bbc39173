import pytest

from xlsxcell.cell import CellType
from xlsxcell.col import EXCEL_2006_MAX_ROW_INDEX, Col
from xlsxcell.data_validation import CellDataValidation


def _drop(keys):
    dd = CellDataValidation(allow_blank=True)
    dd.set_drop_list(keys)
    return dd


def _ranges(col):
    return [(dd.min_row, dd.max_row) for dd in col.data_validation]


@pytest.mark.parametrize(
    "cell_type, expected",
    [
        (CellType.STRING, "@"),
        (CellType.NUMERIC, "0"),
        (CellType.BOOL, "general"),
        (CellType.INLINE, "@"),
        (CellType.ERROR, "general"),
        (CellType.DATE, "general"),
        (CellType.STRING_FORMULA, "@"),
    ],
)
def test_set_type(cell_type, expected):
    col = Col()
    col.set_type(cell_type)
    assert col.num_fmt == expected


def test_single_row_validation():
    col = Col()
    col.set_data_validation(_drop(["c1", "c2", "c3"]), 0, 0)
    assert _ranges(col) == [(0, 0)]


def test_validation_with_start_runs_to_end():
    col = Col()
    col.set_data_validation_with_start(_drop(["e1", "e2", "e3"]), 1)
    assert _ranges(col) == [(1, EXCEL_2006_MAX_ROW_INDEX)]


def test_nested_ranges_split_existing():
    col = Col()
    dd, dd1, dd2 = _drop(["1", "2", "4"]), _drop(["11", "22", "44"]), _drop(["111", "222", "444"])
    col.set_data_validation(dd, 2, 10)
    col.set_data_validation(dd1, 3, 4)
    col.set_data_validation(dd2, 5, 7)
    assert _ranges(col) == [(2, 2), (8, 10), (3, 4), (5, 7)]
    assert col.data_validation[0] is dd
    assert col.data_validation[1].formula1 == dd.formula1
    assert col.data_validation[2] is dd1
    assert col.data_validation[3] is dd2


def test_overlap_at_start_trims_existing():
    col = Col()
    col.set_data_validation(_drop(["1"]), 2, 10)
    col.set_data_validation(_drop(["11"]), 1, 2)
    assert _ranges(col) == [(3, 10), (1, 2)]


def test_partial_overlap_trims_existing():
    col = Col()
    col.set_data_validation(_drop(["1"]), 2, 10)
    col.set_data_validation(_drop(["11"]), 1, 5)
    assert _ranges(col) == [(6, 10), (1, 5)]


def test_covering_range_replaces_existing():
    col = Col()
    col.set_data_validation(_drop(["1"]), 2, 10)
    dd1 = _drop(["11"])
    col.set_data_validation(dd1, 1, 10)
    assert _ranges(col) == [(1, 10)]
    assert col.data_validation[0] is dd1


def test_disjoint_ranges_are_kept():
    col = Col()
    col.set_data_validation(_drop(["1"]), 10, 20)
    col.set_data_validation(_drop(["11"]), 2, 4)
    col.set_data_validation(_drop(["111"]), 21, 30)
    assert _ranges(col) == [(10, 20), (2, 4), (21, 30)]


def test_negative_end_reaches_max_row():
    col = Col()
    col.set_data_validation(_drop(["d", "d1", "d2"]), 3, 7)
    col.set_data_validation(_drop(["d", "d1", "d2"]), 3, EXCEL_2006_MAX_ROW_INDEX)
    assert _ranges(col) == [(3, EXCEL_2006_MAX_ROW_INDEX)]
    col.set_data_validation(_drop(["d", "d1", "d2"]), 4, -1)
    assert col.data_validation[-1].max_row == EXCEL_2006_MAX_ROW_INDEX
    assert _ranges(col) == [(3, 3), (4, EXCEL_2006_MAX_ROW_INDEX)]