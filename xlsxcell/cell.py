"""Spreadsheet cells: typed values, formulas and number-format display."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from decimal import Decimal
from enum import IntEnum
from typing import Any, Optional

from .date import time_from_excel_time, time_to_excel_time
from .format_code import GENERAL, NumberFormatError, ParsedNumberFormat, parse_full_number_format_string
from .formatting import general_numeric_scientific, format_value

DEFAULT_DATE_FORMAT = "mm-dd-yy"
DEFAULT_DATE_TIME_FORMAT = "m/d/yy h:mm"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class CellType(IntEnum):
    """The storage type of a cell's value."""

    STRING = 0
    # A formula whose result is a string; numeric and boolean formulas use those types.
    STRING_FORMULA = 1
    NUMERIC = 2
    BOOL = 3
    # Saved as shared strings, as the spreadsheet application does.
    INLINE = 4
    ERROR = 5
    # ISO 8601 date text; its value is shown as is.
    DATE = 6


@dataclass(frozen=True)
class DateTimeOptions:
    """How a datetime is stored: the zone its wall clock is taken in and the display format."""

    location: tzinfo = timezone.utc
    excel_time_format: str = DEFAULT_DATE_FORMAT


DEFAULT_DATE_OPTIONS = DateTimeOptions(timezone.utc, DEFAULT_DATE_FORMAT)
DEFAULT_DATE_TIME_OPTIONS = DateTimeOptions(timezone.utc, DEFAULT_DATE_TIME_FORMAT)


def _parse_float(text: str) -> float:
    """Parse a number strictly: no surrounding spaces, underscores or non-ASCII digits."""
    if text == "" or text != text.strip() or "_" in text or not text.isascii():
        raise ValueError(f"could not parse {text!r} as a number")
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"could not parse {text!r} as a number") from None


def _format_float(f: float) -> str:
    """Shortest fixed-point text that reads back as the same float."""
    if math.isnan(f):
        return "NaN"
    if math.isinf(f):
        return "+Inf" if f > 0 else "-Inf"
    return format(Decimal(repr(f)).normalize(), "f")


def _display(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_display(item) for item in value) + "]"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def fallback_to(cell_type: Optional[CellType], cell_data: str, fallback: CellType) -> CellType:
    """Keep ``cell_type`` when the data fits it, otherwise use ``fallback``."""
    if cell_type == CellType.NUMERIC:
        try:
            _parse_float(cell_data)
        except ValueError:
            return fallback
        return cell_type
    return fallback


@dataclass(eq=False)
class Cell:
    """One cell of a row: its raw value, type, number format and formula."""

    row: Any = None
    value: str = ""
    num_fmt: str = ""
    date1904: bool = False
    hidden: bool = False
    h_merge: int = 0
    v_merge: int = 0
    cell_type: CellType = CellType.STRING
    data_validation: Any = None
    _formula: str = field(default="", init=False, repr=False)
    _parsed: Optional[ParsedNumberFormat] = field(default=None, init=False, repr=False)

    @property
    def formula(self) -> str:
        """The cell's formula, or "" if it has none."""
        return self._formula

    def merge(self, hcells: int, vcells: int) -> None:
        """Merge with the given number of cells to the right and below."""
        self.h_merge = hcells
        self.v_merge = vcells

    def set_string(self, s: str) -> None:
        self.value = s
        self._formula = ""
        self.cell_type = CellType.STRING

    def __str__(self) -> str:
        """The formatted value, or the raw text if formatting fails."""
        try:
            return self.formatted_value()
        except NumberFormatError as exc:
            return getattr(exc, "value", self.value)

    def set_float(self, n: float) -> None:
        self.set_value(float(n))

    def _number_format(self) -> ParsedNumberFormat:
        # num_fmt is public and may change at any time; re-parse when it does.
        if self._parsed is None or self._parsed.num_fmt != self.num_fmt:
            self._parsed = parse_full_number_format_string(self.num_fmt)
        return self._parsed

    def is_time(self) -> bool:
        """Report whether the number format is a date or time format."""
        return self._number_format().is_time_format

    def get_time(self, date1904: bool) -> datetime:
        """The value read as a serial date number."""
        return time_from_excel_time(self.as_float(), date1904)

    def set_float_with_format(self, n: float, format: str) -> None:
        self.set_value(float(n))
        self.num_fmt = format
        self._formula = ""

    def set_format(self, format: str) -> None:
        self.num_fmt = format

    def set_date(self, t: datetime) -> None:
        self.set_date_with_options(t, DEFAULT_DATE_OPTIONS)

    def set_date_time(self, t: datetime) -> None:
        self.set_date_with_options(t, DEFAULT_DATE_TIME_OPTIONS)

    def set_date_with_options(self, t: datetime, options: DateTimeOptions) -> None:
        """Store ``t`` as its wall-clock time in ``options.location``, to the second."""
        if t.tzinfo is None:
            t = t.replace(tzinfo=timezone.utc)
        offset = t.astimezone(options.location).utcoffset()
        utc = t.astimezone(timezone.utc).replace(microsecond=0)
        if offset is not None:
            utc = utc + offset
        self.set_date_time_with_format(
            time_to_excel_time(utc, self.date1904), options.excel_time_format
        )

    def set_date_time_with_format(self, n: float, format: str) -> None:
        self.value = _format_float(float(n))
        self.num_fmt = format
        self._formula = ""
        self.cell_type = CellType.NUMERIC

    def as_float(self) -> float:
        """The value as a float; ValueError if it is not a number."""
        return _parse_float(self.value)

    def set_int64(self, n: int) -> None:
        self.set_value(int(n))

    def as_int64(self) -> int:
        """The value as a 64-bit integer; ValueError if it is not one."""
        if not _INT_PATTERN.fullmatch(self.value):
            raise ValueError(f"could not parse {self.value!r} as an integer")
        number = int(self.value)
        if not _INT64_MIN <= number <= _INT64_MAX:
            raise ValueError(f"value {self.value!r} out of 64-bit range")
        return number

    def general_numeric(self) -> str:
        """The value as the General format shows it, with exponent notation."""
        return general_numeric_scientific(self.value, True)

    def general_numeric_without_scientific(self) -> str:
        """The value as a plain number, never in exponent notation."""
        return general_numeric_scientific(self.value, False)

    def set_int(self, n: int) -> None:
        self.set_value(int(n))

    def set_value(self, n: Any) -> None:
        """Store a value of any kind, choosing the cell type from it."""
        if isinstance(n, datetime):
            self.set_date_time(n)
        elif isinstance(n, bool):
            self.set_string(_display(n))
        elif isinstance(n, int):
            self._set_numeric(str(n))
        elif isinstance(n, float):
            self._set_numeric(_format_float(n))
        elif isinstance(n, str):
            self.set_string(n)
        elif isinstance(n, (bytes, bytearray)):
            self.set_string(bytes(n).decode("utf-8", errors="replace"))
        elif n is None:
            self.set_string("")
        else:
            self.set_string(_display(n))

    def _set_numeric(self, s: str) -> None:
        self.value = s
        self.num_fmt = GENERAL
        self._formula = ""
        self.cell_type = CellType.NUMERIC

    def as_int(self) -> int:
        """The value read as a float and truncated to an integer."""
        f = self.as_float()
        if math.isnan(f) or math.isinf(f):
            raise ValueError(f"value {self.value!r} has no integer form")
        return int(f)

    def set_bool(self, b: bool) -> None:
        self.value = "1" if b else "0"
        self.cell_type = CellType.BOOL

    def as_bool(self) -> bool:
        """Truth of the value, according to the cell type."""
        if self.cell_type == CellType.BOOL:
            return self.value == "1"
        if self.cell_type == CellType.NUMERIC:
            return self.value != "0"
        return self.value != ""

    def set_formula(self, formula: str) -> None:
        self._formula = formula
        self.cell_type = CellType.NUMERIC

    def set_string_formula(self, formula: str) -> None:
        self._formula = formula
        self.cell_type = CellType.STRING_FORMULA

    def formatted_value(self) -> str:
        """The value rendered through the number format.

        Raises NumberFormatError when the value or format cannot be applied;
        its ``value`` attribute holds the text to show instead.
        """
        parsed = self._number_format()
        try:
            result = format_value(parsed, self)
        except NumberFormatError as exc:
            if parsed.parse_error is None:
                raise
            result = getattr(exc, "value", self.value)
        if parsed.parse_error is not None:
            err = NumberFormatError(str(parsed.parse_error))
            err.value = result  # type: ignore[attr-defined]
            raise err from parsed.parse_error
        return result

    def set_data_validation(self, dd: Any) -> None:
        self.data_validation = dd