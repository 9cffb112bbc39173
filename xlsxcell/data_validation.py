"""Data validation rules attached to cells and columns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

EXCEL_2006_MAX_ROW_COUNT = 1048576
EXCEL_2006_MAX_ROW_INDEX = EXCEL_2006_MAX_ROW_COUNT - 1

# 255 characters plus the two surrounding quotes.
DATA_VALIDATION_FORMULA_MAX_LEN = 257

EXTERNAL_SHEET_BANG_CHAR = "!"
CELL_RANGE_CHAR = ":"


class DataValidationError(ValueError):
    """Raised when a data validation rule cannot be built."""


class DataValidationType(IntEnum):
    """The kind of value a validation rule accepts."""

    NONE = 1
    CUSTOM = 2
    DATE = 3
    DECIMAL = 4
    LIST = 5
    TEXT_LENGTH = 6
    TIME = 7
    WHOLE = 8


class DataValidationErrorStyle(IntEnum):
    """How the spreadsheet reacts to a value that fails validation."""

    STOP = 1
    WARNING = 2
    INFORMATION = 3


class DataValidationOperator(IntEnum):
    """The comparison a range validation applies."""

    BETWEEN = 1
    EQUAL = 2
    GREATER_THAN = 3
    GREATER_THAN_OR_EQUAL = 4
    LESS_THAN = 5
    LESS_THAN_OR_EQUAL = 6
    NOT_BETWEEN = 7
    NOT_EQUAL = 8


_TYPE_NAMES = {
    DataValidationType.NONE: "none",
    DataValidationType.CUSTOM: "custom",
    DataValidationType.DATE: "date",
    DataValidationType.DECIMAL: "decimal",
    DataValidationType.LIST: "list",
    DataValidationType.TEXT_LENGTH: "textLength",
    DataValidationType.TIME: "time",
    DataValidationType.WHOLE: "whole",
}

_OPERATOR_NAMES = {
    DataValidationOperator.BETWEEN: "between",
    DataValidationOperator.EQUAL: "equal",
    DataValidationOperator.GREATER_THAN: "greaterThan",
    DataValidationOperator.GREATER_THAN_OR_EQUAL: "greaterThanOrEqual",
    DataValidationOperator.LESS_THAN: "lessThan",
    DataValidationOperator.LESS_THAN_OR_EQUAL: "lessThanOrEqual",
    DataValidationOperator.NOT_BETWEEN: "notBetween",
    DataValidationOperator.NOT_EQUAL: "notEqual",
}

_ERROR_STYLE_NAMES = {
    DataValidationErrorStyle.STOP: "stop",
    DataValidationErrorStyle.WARNING: "warning",
    DataValidationErrorStyle.INFORMATION: "information",
}


def _column_letters(col: int) -> str:
    if col < 0:
        raise ValueError(f"column index must not be negative, got {col}")
    letters = ""
    n = col + 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def _fixed_cell_reference(x: int, y: int) -> str:
    """Absolute reference such as "$C$2" for zero-based column x and row y."""
    if y < 0:
        raise ValueError(f"row index must not be negative, got {y}")
    return f"${_column_letters(x)}${y + 1}"


@dataclass
class CellDataValidation:
    """A validation rule for a cell or a range of rows in a column."""

    allow_blank: bool = False
    show_input_message: bool = False
    show_error_message: bool = False
    error_style: Optional[str] = None
    error_title: Optional[str] = None
    error: Optional[str] = None
    prompt_title: Optional[str] = None
    prompt: Optional[str] = None
    type: str = ""
    operator: str = ""
    formula1: str = ""
    formula2: str = ""
    sqref: str = ""
    min_row: int = 0
    max_row: int = 0

    def set_error(
        self,
        style: DataValidationErrorStyle,
        title: Optional[str],
        msg: Optional[str],
    ) -> None:
        """Show an error message of the given style when validation fails."""
        self.show_error_message = True
        self.error = msg
        self.error_title = title
        self.error_style = _ERROR_STYLE_NAMES.get(style, "stop")

    def set_input(self, title: Optional[str], msg: Optional[str]) -> None:
        """Show a prompt when the cell is selected."""
        self.show_input_message = True
        self.prompt_title = title
        self.prompt = msg

    def set_drop_list(self, keys: list[str]) -> None:
        """Restrict values to a fixed list offered as a drop-down."""
        formula = '"' + ",".join(keys) + '"'
        if len(formula.encode("utf-8")) > DATA_VALIDATION_FORMULA_MAX_LEN:
            raise DataValidationError("data validation must be 0-255 characters")
        self.formula1 = formula
        self.type = _TYPE_NAMES[DataValidationType.LIST]

    def set_in_file_list(self, sheet: str, x1: int, y1: int, x2: int, y2: int) -> None:
        """Restrict values to those found in a range of another sheet.

        A negative ``y2`` extends the range to the last row.
        """
        start = _fixed_cell_reference(x1, y1)
        if y2 < 0:
            y2 = EXCEL_2006_MAX_ROW_INDEX
        end = _fixed_cell_reference(x2, y2)
        quoted = sheet.replace("'", "''")
        self.formula1 = (
            f"'{quoted}'" + EXTERNAL_SHEET_BANG_CHAR + start + CELL_RANGE_CHAR + end
        )
        self.type = _TYPE_NAMES[DataValidationType.LIST]

    def set_range(
        self,
        f1: int,
        f2: int,
        t: DataValidationType,
        o: DataValidationOperator,
    ) -> None:
        """Compare values against one or two integer bounds."""
        formula1, formula2 = str(int(f1)), str(int(f2))
        if o in (DataValidationOperator.BETWEEN, DataValidationOperator.NOT_BETWEEN) and f1 > f2:
            formula1, formula2 = formula2, formula1
        self.formula1 = formula1
        self.formula2 = formula2
        self.type = _TYPE_NAMES.get(t, "")
        self.operator = _OPERATOR_NAMES.get(o, "")