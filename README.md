# xlsxcell

Cell values, number formats, dates and data validation as used by the XLSX
spreadsheet format, built on the standard library alone.

## Modules

- `xlsxcell.cell` – `CellType`, `DateTimeOptions` and the `Cell` class: store
  strings, integers, floats, booleans, formulas and datetimes
  (`set_string`, `set_int`, `set_float`, `set_bool`, `set_formula`,
  `set_date`, `set_value`, ...), read them back (`as_float`, `as_int`,
  `as_int64`, `as_bool`, `get_time`), and render the value through its number
  format with `formatted_value()`. `fallback_to()` picks a cell type for a
  piece of data.
- `xlsxcell.format_code` – parsing of number format codes such as `0.00`,
  `#,##0 ;(#,##0)`, `[$€-409]0`, `0;(0);"zero";@` into `ParsedNumberFormat`
  and `FormatOptions`; `is_time_format()` and `is_12_hour_time()` detect
  date and time codes.
- `xlsxcell.formatting` – `format_value()` applies a parsed format to a cell,
  `general_numeric_scientific()` follows the "General" rules for switching to
  exponent notation (below 1e-9 and from 1e11 upward), and `format_time()`
  renders date and time codes.
- `xlsxcell.date` – conversion between `datetime` values and serial date
  numbers in the 1900 and 1904 date systems (`time_to_excel_time`,
  `time_from_excel_time`).
- `xlsxcell.data_validation` – `CellDataValidation` with drop-down lists,
  in-file list references, numeric ranges, prompts and error messages.
- `xlsxcell.col` – `Col`, column settings and per-column validation rules
  over row ranges, where a new rule trims, splits or replaces the rules it
  overlaps.
- `xlsxcell.hsl` – `HSL` and conversion between RGB and HSL coordinates.

## Installation

```
pip install xlsxcell
```

## Examples

```python
from xlsxcell.cell import Cell

cell = Cell()
cell.set_float_with_format(37947.7500001, "0.00")
cell.formatted_value()          # "37947.75"

cell.set_format("dd/mm/yyyy hh:mm:ss")
cell.formatted_value()          # "22/11/2003 18:00:00"

cell.set_float(-37947.7500001)  # resets the format to "general"
cell.set_format("#,##0 ;(#,##0)")
cell.formatted_value()          # "(37948)"
```

Storing a number (`set_int`, `set_float`, `set_value`) resets the cell's
number format to `general`, so set the format afterwards or use
`set_float_with_format`.

When a value or format cannot be applied, `formatted_value()` raises
`xlsxcell.format_code.NumberFormatError` (a `ValueError`); its `value`
attribute holds the text to show instead. `str(cell)` returns that text
rather than raising.

Dates:

```python
from datetime import datetime, timezone
from xlsxcell.date import time_from_excel_time, time_to_excel_time

time_to_excel_time(datetime(2018, 6, 18, tzinfo=timezone.utc), False)  # 43269.0
time_from_excel_time(39813.0, True)  # 2013-01-01 00:00:00+00:00
```

Data validation:

```python
from xlsxcell.data_validation import CellDataValidation
from xlsxcell.col import Col

dv = CellDataValidation(allow_blank=True)
dv.set_drop_list(["a1", "a2", "a3"])
dv.set_input("Pick one", "Choose a value from the list")

col = Col()
col.set_data_validation_with_start(dv, 1)
```

`set_drop_list` raises `DataValidationError` when the joined list is longer
than 255 characters.

## What it does not do

This package works on single cells, columns and validation rules in memory.
It does not read or write `.xlsx` files, and has no workbooks, sheets, rows
or cell styles; `Cell.row` and `Col.style` are plain attributes that it does
not interpret.

## Running the tests

```
pip install -e ".[test]"
pytest
```