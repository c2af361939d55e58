from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.raw_table import RawRow, RawTable

"""Spreadsheet reader: .xlsx -> RawTable.

The registry export keeps its header on the first row of the first sheet.
Cells are rendered to display strings the way a spreadsheet shows them
(dates as dd/mm/yyyy, whole numbers without a trailing ".0") while the native
value is kept alongside for the date resolver.

pandas' NA coercion is disabled: strings such as "NA" or "None" are names or
unit labels here, not missing values.
"""

__all__ = [
    "ExcelReadError",
    "read_excel_file",
    "to_raw_table",
    "read_raw_table",
    "format_cell",
]

DISPLAY_DATE_FMT = "%d/%m/%Y"


class ExcelReadError(Exception):
    """Raised when a workbook cannot be opened or parsed."""


def read_excel_file(path: Path, sheet: str | int = 0) -> pd.DataFrame:
    """Read one sheet header-less, returning the raw DataFrame.

    Parameters
    ----------
    path: workbook path
    sheet: sheet name or position (first sheet by default)
    """
    try:
        with pd.ExcelFile(path) as xls:
            return xls.parse(sheet, header=None, keep_default_na=False, na_values=[])
    except Exception as e:  # openpyxl also raises zip / xml errors for corrupt files
        raise ExcelReadError(f"cannot read '{path}': {e}") from e


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def format_cell(value: Any) -> str:
    """Display string for a native cell value."""
    if _is_blank(value):
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime(DISPLAY_DATE_FMT)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def to_raw_table(df: pd.DataFrame) -> RawTable:
    """First row becomes the header, later non-blank rows the data rows."""
    if df.shape[0] == 0:
        return RawTable(headers=())
    header_values = df.iloc[0].tolist()
    headers = tuple(format_cell(v) for v in header_values)
    rows: list[RawRow] = []
    for _, raw in df.iloc[1:].iterrows():
        values = raw.tolist()
        if all(_is_blank(v) for v in values):
            continue
        native = tuple(None if _is_blank(v) else v for v in values)
        rows.append(RawRow(cells=tuple(format_cell(v) for v in values), values=native))
    return RawTable(headers=headers, rows=tuple(rows))


def read_raw_table(path: Path) -> RawTable:
    return to_raw_table(read_excel_file(path))
