"""Rendering of cell values through parsed number format codes."""

from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from .date import time_from_excel_time
from .format_code import (
    GENERAL,
    TEXT,
    FormatOptions,
    NumberFormatError,
    ParsedNumberFormat,
    is_12_hour_time,
)

MAX_NON_SCIENTIFIC_NUMBER = 1e11
MIN_NON_SCIENTIFIC_NUMBER = 1e-9
_SMALLEST_NONZERO_FLOAT = 5e-324

# Cell type codes, in the order of the cell type enumeration.
_STRING = 0
_STRING_FORMULA = 1
_NUMERIC = 2
_BOOL = 3
_INLINE = 4
_ERROR = 5
_DATE = 6

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Spreadsheet time codes rewritten into layout tokens, applied once each, in order.
_TIME_REPLACEMENTS = (
    ("yyyy", "2006"),
    ("yy", "06"),
    ("mmmm", "%%%%"),
    ("dddd", "&&&&"),
    ("dd", "02"),
    ("d", "2"),
    ("mmm", "Jan"),
    ("mmss", "0405"),
    ("ss", "05"),
    ("mm:", "04:"),
    (":mm", ":04"),
    ("mm", "01"),
    ("am/pm", "pm"),
    ("m/", "1/"),
    ("%%%%", "January"),
    ("&&&&", "Monday"),
)

_FIXED_DECIMALS = {
    "0": 0, "#,##0": 0,
    "0.0": 1, "#,##0.0": 1,
    "0.00": 2, "#,##0.00": 2,
    "0.000": 3, "#,##0.000": 3,
    "0.0000": 4, "#,##0.0000": 4,
}
_SCIENTIFIC_FORMATS = ("0.00e+00", "##0.0e+0")


def _error(message: str, value: str) -> NumberFormatError:
    """Build an error that carries the unformatted text in ``value``."""
    err = NumberFormatError(message)
    err.value = value  # type: ignore[attr-defined]
    return err


def _parse_float(text: str) -> float:
    if text != text.strip() or "_" in text or text == "":
        raise _error(f"could not parse {text!r} as a number", text)
    try:
        return float(text)
    except ValueError:
        raise _error(f"could not parse {text!r} as a number", text) from None


def _cell_kind(cell: Any) -> Any:
    kind = cell.cell_type
    return getattr(kind, "value", kind)


def format_value(parsed: ParsedNumberFormat, cell: Any) -> str:
    """Return the display text of ``cell`` under ``parsed``.

    ``cell`` needs ``cell_type``, ``value`` and ``date1904`` attributes.
    Errors are raised as NumberFormatError whose ``value`` attribute holds
    the raw text that should be shown instead.
    """
    kind = _cell_kind(cell)
    if kind == _ERROR:
        # Error cells show their text (#NAME?, #DIV/0! ...) whatever the format.
        return cell.value
    if kind == _BOOL:
        if cell.value == "0":
            return "FALSE"
        if cell.value == "1":
            return "TRUE"
        raise _error("invalid value in bool cell", cell.value)
    if kind in (_STRING, _INLINE, _STRING_FORMULA):
        text: Optional[FormatOptions] = parsed.text_format
        reduced = text.reduced_format_string if text is not None else GENERAL
        if reduced == GENERAL:
            return cell.value
        assert text is not None
        if reduced == TEXT:
            return text.prefix + cell.value + text.suffix
        if reduced == "":
            # Without "@" the value itself is not shown, only the literals.
            return text.prefix + text.suffix
        raise _error("invalid or unsupported format, unsupported string format", cell.value)
    if kind == _DATE:
        return cell.value
    if kind == _NUMERIC:
        return format_numeric_cell(parsed, cell)
    raise _error("unknown cell type", cell.value)


def format_numeric_cell(parsed: ParsedNumberFormat, cell: Any) -> str:
    """Format a numeric cell's value with the section matching its sign."""
    raw = cell.value.strip()
    if raw == "":
        return ""
    if parsed.is_time_format:
        return format_time(parsed, raw, cell.date1904)

    number = _parse_float(raw)
    if number > 0:
        options = parsed.positive_format
    elif number < 0:
        # A dedicated negative section carries its own sign or parentheses.
        if parsed.negative_format_expects_positive:
            number = abs(number)
        options = parsed.negative_format
    else:
        options = parsed.zero_format
    assert options is not None

    if options.show_percent:
        number = 100 * number

    reduced = options.reduced_format_string
    if reduced == GENERAL:
        try:
            return general_numeric_scientific(cell.value, True)
        except NumberFormatError:
            return raw
    if reduced == TEXT:
        formatted = cell.value
    elif reduced in _FIXED_DECIMALS:
        formatted = f"{number:.{_FIXED_DECIMALS[reduced]}f}"
    elif reduced in _SCIENTIFIC_FORMATS:
        formatted = f"{number:e}"
    elif reduced == "":
        formatted = ""
    else:
        return raw
    return options.prefix + formatted + options.suffix


def _special_float(f: float) -> Optional[str]:
    if math.isnan(f):
        return "NaN"
    if math.isinf(f):
        return "+Inf" if f > 0 else "-Inf"
    return None


def _shortest_fixed(f: float) -> str:
    special = _special_float(f)
    if special is not None:
        return special
    return format(Decimal(repr(f)).normalize(), "f")


def _shortest_scientific(f: float) -> str:
    special = _special_float(f)
    if special is not None:
        return special
    sign, digits, exponent = Decimal(repr(f)).normalize().as_tuple()
    assert isinstance(exponent, int)
    exp10 = exponent + len(digits) - 1
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(d) for d in digits[1:])
    exp_sign = "+" if exp10 >= 0 else "-"
    return f"{'-' if sign else ''}{mantissa}E{exp_sign}{abs(exp10):02d}"


def general_numeric_scientific(value: str, allow_scientific: bool) -> str:
    """Render a number the way the General format shows it.

    With ``allow_scientific`` numbers below 1e-9 or from 1e11 upward in
    magnitude switch to exponent notation.
    """
    if value.strip() == "":
        return ""
    f = _parse_float(value)
    if allow_scientific:
        magnitude = abs(f)
        if (
            _SMALLEST_NONZERO_FLOAT <= magnitude < MIN_NON_SCIENTIFIC_NUMBER
            or magnitude >= MAX_NON_SCIENTIFIC_NUMBER
        ):
            return _shortest_scientific(f)
    return _shortest_fixed(f)


def _to_layout(fmt: str, hour: int) -> str:
    if is_12_hour_time(fmt):
        fmt = fmt.replace("hh", "03", 1).replace("h", "3", 1)
    else:
        fmt = fmt.replace("hh", "15", 1).replace("h", "15", 1)
    for code, token in _TIME_REPLACEMENTS:
        fmt = fmt.replace(code, token, 1)
    # An optional (bracketed) hour disappears when it is zero.
    if hour < 1:
        fmt = fmt.replace("]:", "]", 1)
        for token in ("[03]", "[3]", "[15]"):
            fmt = fmt.replace(token, "", 1)
    else:
        fmt = fmt.replace("[3]", "3", 1).replace("[15]", "15", 1)
    return fmt


def _starts_lower(text: str) -> bool:
    return bool(text) and "a" <= text[0] <= "z"


def _is_digit_at(text: str, i: int) -> bool:
    return i < len(text) and "0" <= text[i] <= "9"


_ZERO_TOKENS = ("zero_month", "zero_day", "zero_hour12", "zero_minute", "zero_second", "year")


def _match_token(layout: str, i: int) -> Optional[tuple[str, int]]:
    """Identify the layout token starting at ``i`` as (kind, length)."""
    rest = layout[i:]
    c = rest[0]
    if c == "J":
        if rest.startswith("January"):
            return "long_month", 7
        if rest.startswith("Jan") and not _starts_lower(rest[3:]):
            return "month", 3
    elif c == "M":
        if rest.startswith("Monday"):
            return "long_weekday", 6
        if rest.startswith("Mon") and not _starts_lower(rest[3:]):
            return "weekday", 3
        if rest.startswith("MST"):
            return "tz_name", 3
    elif c == "0":
        if len(rest) >= 2 and "1" <= rest[1] <= "6":
            return _ZERO_TOKENS[int(rest[1]) - 1], 2
    elif c == "1":
        if rest.startswith("15"):
            return "hour", 2
        return "num_month", 1
    elif c == "2":
        if rest.startswith("2006"):
            return "long_year", 4
        return "day", 1
    elif c == "_":
        # "_2006" is a literal underscore followed by the year.
        if rest.startswith("_2") and not rest.startswith("_2006"):
            return "under_day", 2
    elif c == "3":
        return "hour12", 1
    elif c == "4":
        return "minute", 1
    elif c == "5":
        return "second", 1
    elif c == "P":
        if rest.startswith("PM"):
            return "PM", 2
    elif c == "p":
        if rest.startswith("pm"):
            return "pm", 2
    elif c == "-":
        for token in ("-070000", "-07:00:00", "-0700", "-07:00", "-07"):
            if rest.startswith(token):
                return "num_tz", len(token)
    elif c == "Z":
        for token in ("Z070000", "Z07:00:00", "Z0700", "Z07:00", "Z07"):
            if rest.startswith(token):
                return "iso_tz", len(token)
    elif c == ".":
        if len(rest) >= 2 and rest[1] in "09":
            digit = rest[1]
            j = 1
            while j < len(rest) and rest[j] == digit:
                j += 1
            if not _is_digit_at(rest, j):
                return ("frac0" if digit == "0" else "frac9"), j
    return None


def _render_token(kind: str, text: str, t: datetime) -> str:
    hour12 = t.hour % 12 or 12
    nanos = f"{t.microsecond * 1000:09d}"
    if kind == "long_month":
        return _MONTHS[t.month - 1]
    if kind == "month":
        return _MONTHS[t.month - 1][:3]
    if kind == "long_weekday":
        return _WEEKDAYS[t.weekday()]
    if kind == "weekday":
        return _WEEKDAYS[t.weekday()][:3]
    if kind == "tz_name":
        return "UTC"
    if kind == "num_tz":
        return "+" + "".join("0" if ch.isdigit() else ch for ch in text[1:])
    if kind == "iso_tz":
        return "Z"
    if kind == "num_month":
        return str(t.month)
    if kind == "zero_month":
        return f"{t.month:02d}"
    if kind == "day":
        return str(t.day)
    if kind == "zero_day":
        return f"{t.day:02d}"
    if kind == "under_day":
        return f"{t.day:2d}"
    if kind == "long_year":
        return f"{t.year:04d}"
    if kind == "year":
        return f"{t.year % 100:02d}"
    if kind == "hour":
        return f"{t.hour:02d}"
    if kind == "hour12":
        return str(hour12)
    if kind == "zero_hour12":
        return f"{hour12:02d}"
    if kind == "minute":
        return str(t.minute)
    if kind == "zero_minute":
        return f"{t.minute:02d}"
    if kind == "second":
        return str(t.second)
    if kind == "zero_second":
        return f"{t.second:02d}"
    if kind == "PM":
        return "PM" if t.hour >= 12 else "AM"
    if kind == "pm":
        return "pm" if t.hour >= 12 else "am"
    if kind == "frac0":
        return "." + nanos.ljust(len(text) - 1, "0")[: len(text) - 1]
    if kind == "frac9":
        digits = nanos[: len(text) - 1].rstrip("0")
        return "." + digits if digits else ""
    raise AssertionError(f"unhandled layout token {kind}")


def _render_layout(layout: str, t: datetime) -> str:
    out: list[str] = []
    i = 0
    while i < len(layout):
        match = _match_token(layout, i)
        if match is None:
            out.append(layout[i])
            i += 1
            continue
        kind, length = match
        out.append(_render_token(kind, layout[i:i + length], t))
        i += length
    return "".join(out)


def format_time(parsed: ParsedNumberFormat, value: str, date1904: bool) -> str:
    """Render a serial date number with the date/time format in ``parsed``."""
    moment = time_from_excel_time(_parse_float(value), date1904)
    return _render_layout(_to_layout(parsed.num_fmt, moment.hour), moment)