"""Parsing of spreadsheet number format codes into their sections and options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

GENERAL = "general"
TEXT = "@"


class NumberFormatError(ValueError):
    """Raised when a number format code cannot be parsed."""


@dataclass(frozen=True)
class FormatOptions:
    """One section of a number format code, split into its parts."""

    full_format_string: str = ""
    reduced_format_string: str = ""
    prefix: str = ""
    suffix: str = ""
    show_percent: bool = False
    is_time_format: bool = False


FALLBACK_ERROR_FORMAT = FormatOptions(
    full_format_string=GENERAL,
    reduced_format_string=GENERAL,
)


@dataclass(frozen=True)
class ParsedNumberFormat:
    """A full number format code parsed into positive, negative, zero and text sections.

    ``parse_error`` holds the problem met while parsing, if any; the affected
    sections then fall back to the general format.
    """

    num_fmt: str
    is_time_format: bool = False
    negative_format_expects_positive: bool = False
    positive_format: Optional[FormatOptions] = None
    negative_format: Optional[FormatOptions] = None
    zero_format: Optional[FormatOptions] = None
    text_format: Optional[FormatOptions] = None
    parse_error: Optional[NumberFormatError] = None


# Order matters: the two-character forms must be tried before the single ones.
FORMATTING_CHARACTERS = (
    "0/", "#/", "?/", "E-", "E+", "e-", "e+", "0", "#", "?", ".", ",", "@", "*",
)

TIME_FORMAT_CHARACTERS = (
    "m", "d", "yy", "h", "m", "AM/PM", "A/P", "am/pm", "a/p", "r", "g", "e",
    "b1", "b2", "[hh]", "[h]", "[mm]", "[m]",
    "s.0000", "s.000", "s.00", "s.0", "s",
    "[ss].0000", "[ss].000", "[ss].00", "[ss].0", "[ss]",
    "[s].0000", "[s].000", "[s].00", "[s].0", "[s]",
)

_LITERAL_CHARACTERS = frozenset("$-+/()!^&'~{}<>=: ")


def _general_options() -> FormatOptions:
    return FormatOptions(full_format_string=GENERAL, reduced_format_string=GENERAL)


def compare_format_string(fmt1: str, fmt2: str) -> bool:
    """Compare format codes, treating "" and any casing of "general" as equal."""
    if fmt1 == fmt2:
        return True
    if fmt1 == "" or fmt1.casefold() == GENERAL:
        fmt1 = GENERAL
    if fmt2 == "" or fmt2.casefold() == GENERAL:
        fmt2 = GENERAL
    return fmt1 == fmt2


def parse_full_number_format_string(num_fmt: str) -> ParsedNumberFormat:
    """Parse a whole format code; errors are recorded rather than raised."""
    if is_time_format(num_fmt):
        # Time formats have a single section and leave text untouched.
        return ParsedNumberFormat(
            num_fmt=num_fmt,
            is_time_format=True,
            text_format=_general_options(),
        )

    parse_error: Optional[NumberFormatError] = None
    options: list[FormatOptions] = []
    try:
        sections = split_format_on_semicolon(num_fmt)
    except NumberFormatError as exc:
        options.append(FALLBACK_ERROR_FORMAT)
        parse_error = exc
    else:
        for section in sections:
            try:
                options.append(parse_number_format_section(section))
            except NumberFormatError as exc:
                options.append(FALLBACK_ERROR_FORMAT)
                parse_error = exc

    if len(options) > 4:
        options = [FALLBACK_ERROR_FORMAT]
        parse_error = NumberFormatError("invalid number format, too many format sections")

    if len(options) == 1:
        only = options[0]
        text = only if "@" in only.full_format_string else _general_options()
        return ParsedNumberFormat(
            num_fmt=num_fmt,
            positive_format=only,
            negative_format=only,
            zero_format=only,
            text_format=text,
            parse_error=parse_error,
        )
    if len(options) == 2:
        positive, negative = options
        return ParsedNumberFormat(
            num_fmt=num_fmt,
            negative_format_expects_positive=True,
            positive_format=positive,
            negative_format=negative,
            zero_format=positive,
            text_format=_general_options(),
            parse_error=parse_error,
        )
    if len(options) == 3:
        positive, negative, zero = options
        return ParsedNumberFormat(
            num_fmt=num_fmt,
            negative_format_expects_positive=True,
            positive_format=positive,
            negative_format=negative,
            zero_format=zero,
            text_format=_general_options(),
            parse_error=parse_error,
        )
    positive, negative, zero, text = options
    return ParsedNumberFormat(
        num_fmt=num_fmt,
        negative_format_expects_positive=True,
        positive_format=positive,
        negative_format=negative,
        zero_format=zero,
        text_format=text,
        parse_error=parse_error,
    )


def split_format_on_semicolon(format: str) -> list[str]:
    """Split a format code into sections, ignoring escaped and quoted semicolons."""
    sections: list[str] = []
    start = 0
    i = 0
    while i < len(format):
        ch = format[i]
        if ch == ";":
            sections.append(format[start:i])
            start = i + 1
        elif ch == "\\":
            i += 1
        elif ch == '"':
            end = format.find('"', i + 1)
            if end == -1:
                raise NumberFormatError("invalid format string, unmatched double quote")
            i = end
        i += 1
    sections.append(format[start:])
    return sections


def parse_number_format_section(full_format: str) -> FormatOptions:
    """Parse one section into prefix, number-format core, suffix and percent flag."""
    reduced = full_format.strip()
    if compare_format_string(reduced, GENERAL):
        return _general_options()

    prefix, reduced, percent1 = parse_literals(reduced)
    reduced, suffix_format = split_format_and_suffix_format(reduced)
    suffix, remaining, percent2 = parse_literals(suffix_format)
    if remaining:
        # Literals interleaved with number symbols are not supported.
        raise NumberFormatError("invalid or unsupported format string")

    return FormatOptions(
        full_format_string=full_format,
        reduced_format_string=reduced,
        prefix=prefix,
        suffix=suffix,
        show_percent=percent1 or percent2,
        is_time_format=False,
    )


def _formatting_prefix(text: str) -> Optional[str]:
    return next((special for special in FORMATTING_CHARACTERS if text.startswith(special)), None)


def split_format_and_suffix_format(format: str) -> tuple[str, str]:
    """Split off the leading run of number-formatting symbols from the rest."""
    i = 0
    while i < len(format):
        special = _formatting_prefix(format[i:])
        if special is None:
            break
        i += len(special)
    return format[:i], format[i:]


def parse_literals(format: str) -> tuple[str, str, bool]:
    """Collect literal text up to the first number-formatting symbol.

    Returns the literal text, the rest of the format starting at the first
    formatting symbol (or "" if none), and whether a percent sign was seen.
    """
    prefix = ""
    show_percent = False
    i = 0
    n = len(format)
    while i < n:
        ch = format[i]
        if ch == "\\":
            if i + 1 < n:
                i += 1
                prefix += format[i]
        elif ch == "_":
            if i + 1 < n:
                i += 1
        elif ch == "*":
            # Fill-repeat has no meaning without a cell width.
            pass
        elif ch == '"':
            end = format.find('"', i + 1)
            if end == -1:
                raise NumberFormatError("invalid formatting code, unmatched double quote")
            prefix += format[i + 1:end]
            i = end
        elif ch == "%":
            show_percent = True
            prefix += "%"
        elif ch == "[":
            bracket = format.find("]", i)
            if bracket == -1:
                raise NumberFormatError("invalid formatting code, invalid brackets")
            # Currency annotations look like [$<symbol>-<locale>].
            if n - i > 2 and format[i + 1] == "$":
                dash = format.find("-", i)
                if dash != -1 and dash < bracket:
                    prefix += format[i + 2:dash]
                else:
                    raise NumberFormatError(
                        "invalid formatting code, invalid currency annotation"
                    )
            i = bracket
        elif ch in _LITERAL_CHARACTERS:
            prefix += ch
        else:
            if _formatting_prefix(format[i:]) is not None:
                return prefix, format[i:], show_percent
            raise NumberFormatError(
                "invalid formatting code: unsupported or unescaped characters"
            )
        i += 1
    return prefix, "", show_percent


def is_time_format(format: str) -> bool:
    """Report whether a format code contains date or time symbols."""
    found = False
    i = 0
    n = len(format)
    while i < n:
        ch = format[i]
        if ch in ("\\", "_"):
            if i + 1 < n:
                i += 1
        elif ch == "*":
            pass
        elif ch == '"':
            end = format.find('"', i + 1)
            if end == -1:
                return False
            i = end
        elif ch in _LITERAL_CHARACTERS or ch == ",":
            pass
        else:
            rest = format[i:]
            special = next((s for s in TIME_FORMAT_CHARACTERS if rest.startswith(s)), None)
            if special is not None:
                found = True
                i += len(special)
                continue
            if ch == "[":
                bracket = format.find("]", i)
                if bracket == -1:
                    return False
                i = bracket + 1
                continue
            return False
        i += 1
    return found


def is_12_hour_time(format: str) -> bool:
    """Report whether a time format code uses a 12-hour clock."""
    return any(marker in format for marker in ("am/pm", "AM/PM", "a/p", "A/P"))