import pytest

from xlsxcell.data_validation import (
    EXCEL_2006_MAX_ROW_INDEX,
    CellDataValidation,
    DataValidationError,
    DataValidationErrorStyle,
    DataValidationOperator,
    DataValidationType,
)


def test_messages_start_disabled_and_enable_when_set():
    dd = CellDataValidation(allow_blank=True)
    assert dd.show_error_message is False
    assert dd.show_input_message is False

    dd.set_error(DataValidationErrorStyle.STOP, "you got an error", "you got an error")
    assert dd.show_error_message is True
    assert dd.show_input_message is False
    assert dd.error_style == "stop"
    assert dd.error_title == "you got an error"

    dd.set_input("hello", "hello")
    assert dd.show_input_message is True
    assert dd.prompt_title == "hello"
    assert dd.prompt == "hello"


@pytest.mark.parametrize(
    "style, expected",
    [
        (DataValidationErrorStyle.STOP, "stop"),
        (DataValidationErrorStyle.WARNING, "warning"),
        (DataValidationErrorStyle.INFORMATION, "information"),
    ],
)
def test_error_styles(style, expected):
    dd = CellDataValidation()
    dd.set_error(style, "t", "m")
    assert dd.error_style == expected


def test_in_file_list_formula():
    dd = CellDataValidation(allow_blank=True)
    dd.set_in_file_list("Sheet ' 2", 2, 1, 3, 10)
    assert dd.formula1 == "'Sheet '' 2'!$C$2:$D$11"
    assert dd.type == "list"


def test_in_file_list_to_end_of_column():
    dd = CellDataValidation()
    dd.set_in_file_list("Data", 0, 0, 27, -1)
    assert dd.formula1 == f"'Data'!$A$1:$AB${EXCEL_2006_MAX_ROW_INDEX + 1}"


def test_drop_list():
    dd = CellDataValidation(allow_blank=True)
    dd.set_drop_list(["a1", "a2", "a3"])
    assert dd.formula1 == '"a1,a2,a3"'
    assert dd.type == "list"


def test_drop_list_too_long():
    dd = CellDataValidation()
    with pytest.raises(DataValidationError, match="0-255 characters"):
        dd.set_drop_list(["x" * 256])
    assert dd.formula1 == ""


def test_drop_list_at_limit():
    dd = CellDataValidation()
    dd.set_drop_list(["x" * 255])
    assert len(dd.formula1) == 257


def test_range_between_swaps_bounds():
    dd = CellDataValidation(allow_blank=True)
    dd.set_range(15, 4, DataValidationType.TEXT_LENGTH, DataValidationOperator.BETWEEN)
    assert (dd.formula1, dd.formula2) == ("4", "15")
    assert dd.type == "textLength"
    assert dd.operator == "between"


def test_range_not_between_keeps_ordered_bounds():
    dd = CellDataValidation()
    dd.set_range(10, 50, DataValidationType.WHOLE, DataValidationOperator.NOT_BETWEEN)
    assert (dd.formula1, dd.formula2) == ("10", "50")
    assert dd.type == "whole"
    assert dd.operator == "notBetween"


@pytest.mark.parametrize(
    "operator, name",
    [
        (DataValidationOperator.EQUAL, "equal"),
        (DataValidationOperator.GREATER_THAN_OR_EQUAL, "greaterThanOrEqual"),
        (DataValidationOperator.GREATER_THAN, "greaterThan"),
        (DataValidationOperator.LESS_THAN, "lessThan"),
        (DataValidationOperator.LESS_THAN_OR_EQUAL, "lessThanOrEqual"),
        (DataValidationOperator.NOT_EQUAL, "notEqual"),
    ],
)
def test_range_other_operators_do_not_swap(operator, name):
    dd = CellDataValidation()
    dd.set_range(10, 1, DataValidationType.WHOLE, operator)
    assert (dd.formula1, dd.formula2) == ("10", "1")
    assert dd.operator == name


@pytest.mark.parametrize(
    "vtype, name",
    [
        (DataValidationType.NONE, "none"),
        (DataValidationType.CUSTOM, "custom"),
        (DataValidationType.DATE, "date"),
        (DataValidationType.DECIMAL, "decimal"),
        (DataValidationType.TIME, "time"),
    ],
)
def test_range_types(vtype, name):
    dd = CellDataValidation()
    dd.set_range(1, 2, vtype, DataValidationOperator.EQUAL)
    assert dd.type == name