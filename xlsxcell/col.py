"""Column settings: width, visibility, default format and validation rules."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Optional

from .cell import CellType
from .data_validation import (
    EXCEL_2006_MAX_ROW_COUNT,
    EXCEL_2006_MAX_ROW_INDEX,
    CellDataValidation,
)
from .format_code import GENERAL, TEXT

COL_WIDTH = 9.5
INT_FORMAT = "0"

__all__ = [
    "COL_WIDTH",
    "EXCEL_2006_MAX_ROW_COUNT",
    "EXCEL_2006_MAX_ROW_INDEX",
    "Col",
]

_TYPE_FORMATS = {
    CellType.STRING: TEXT,
    CellType.NUMERIC: INT_FORMAT,
    CellType.BOOL: GENERAL,
    CellType.INLINE: TEXT,
    CellType.ERROR: GENERAL,
    # Date-typed storage is not supported; dates are numbers with a date format.
    CellType.DATE: GENERAL,
    CellType.STRING_FORMULA: TEXT,
}


@dataclass(eq=False)
class Col:
    """A span of columns sharing width, style, format and validation rules."""

    min: int = 0
    max: int = 0
    hidden: bool = False
    width: float = 0.0
    collapsed: bool = False
    outline_level: int = 0
    num_fmt: str = ""
    style: Any = None
    data_validation: list[CellDataValidation] = field(default_factory=list)
    default_cell_type: Optional[CellType] = None

    def set_type(self, cell_type: CellType) -> None:
        """Choose the column's number format from a cell type."""
        if cell_type in _TYPE_FORMATS:
            self.num_fmt = _TYPE_FORMATS[cell_type]

    def set_data_validation(self, dd: CellDataValidation, start: int, end: int) -> None:
        """Apply ``dd`` to zero-based rows ``start`` to ``end``; negative ``end`` means to the last row.

        Existing rules overlapping the new range are trimmed, split or dropped.
        """
        if end < 0:
            end = EXCEL_2006_MAX_ROW_INDEX
        dd.min_row = start
        dd.max_row = end

        kept: list[CellDataValidation] = []
        for item in self.data_validation:
            if item.max_row < dd.min_row or item.min_row > dd.max_row:
                kept.append(item)
            elif dd.min_row <= item.min_row and dd.max_row >= item.max_row:
                continue
            elif dd.min_row >= item.min_row:
                tail = dataclasses.replace(item)
                if dd.min_row > item.min_row:
                    item.max_row = dd.min_row - 1
                    kept.append(item)
                if dd.max_row < tail.max_row:
                    tail.min_row = dd.max_row + 1
                    kept.append(tail)
            else:
                item.min_row = dd.max_row + 1
                kept.append(item)
        kept.append(dd)
        self.data_validation = kept

    def set_data_validation_with_start(self, dd: CellDataValidation, start: int) -> None:
        """Apply ``dd`` from zero-based row ``start`` to the end of the column."""
        self.set_data_validation(dd, start, -1)