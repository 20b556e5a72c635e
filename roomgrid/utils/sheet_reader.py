from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from roomgrid.utils.normalize import to_str

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
CSV_SUFFIXES = {".csv"}

HEADER_MARKERS = ("SCHEDULE", "DAYS")
HEADER_SEARCH_ROWS = 30


class SheetReadError(ValueError):
    pass


def _header_name(v) -> str:
    # header cells keep their exact spelling, e.g. "UNITS " and " UNIT"
    if isinstance(v, str):
        return v
    if v is None or pd.isna(v):
        return ""
    return str(v)


def find_header_row(df_raw: pd.DataFrame) -> int:
    for i in range(min(HEADER_SEARCH_ROWS, len(df_raw))):
        cells = {to_str(c).upper() for c in df_raw.iloc[i].tolist()}
        if all(marker in cells for marker in HEADER_MARKERS):
            return i
    return 0


def frame_to_rows(df_raw: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Header-less frame -> list of {column: cell}; empty cells and empty rows dropped.
    """
    if df_raw.empty:
        return []
    header_i = find_header_row(df_raw)
    header = [_header_name(c) for c in df_raw.iloc[header_i].tolist()]

    rows = []
    for values in df_raw.iloc[header_i + 1:].itertuples(index=False, name=None):
        row = {}
        for col, v in zip(header, values):
            if not col or col in row or to_str(v) == "":
                continue
            row[col] = v
        if row:
            rows.append(row)
    return rows


def pick_sheet(sheets: Dict[str, pd.DataFrame], sheet_name: str) -> pd.DataFrame:
    for name, df in sheets.items():
        if str(name).upper() == sheet_name.upper():
            return df
    return next(iter(sheets.values()))


def read_rows(content: bytes, filename: str, sheet_name: str = "DATABASE") -> List[Dict[str, Any]]:
    suffix = Path(filename or "").suffix.lower()
    try:
        if suffix in CSV_SUFFIXES:
            df_raw = pd.read_csv(BytesIO(content), header=None, dtype=str, keep_default_na=False)
        elif suffix in EXCEL_SUFFIXES:
            sheets = pd.read_excel(BytesIO(content), sheet_name=None, header=None, keep_default_na=False)
            if not sheets:
                return []
            df_raw = pick_sheet(sheets, sheet_name)
        else:
            raise SheetReadError(f"Unsupported file type: {suffix or filename!r}")
    except SheetReadError:
        raise
    except Exception as e:
        raise SheetReadError(f"Cannot read {filename!r}: {e}") from e
    return frame_to_rows(df_raw)


def read_rows_from_url(url: str) -> List[Dict[str, Any]]:
    """Published spreadsheet CSV (e.g. Google Sheets `output=csv`)."""
    try:
        df_raw = pd.read_csv(url, header=None, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        return []
    return frame_to_rows(df_raw)
