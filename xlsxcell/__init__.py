"""Cell values, number formats, dates, colours and data validation for XLSX spreadsheets."""

__version__ = "0.1.0"

__all__ = ["cell", "col", "data_validation", "date", "format_code", "formatting", "hsl"]