import io
import os
from typing import Any, Dict, List

import pandas as pd

from core.errors import SpreadsheetError, UnsupportedFileType

CSV_EXTENSIONS = {"csv"}
EXCEL_EXTENSIONS = {"xls", "xlsx"}
ALLOWED_EXTENSIONS = CSV_EXTENSIONS | EXCEL_EXTENSIONS


def file_extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lower().lstrip(".")


def read_rows(filename: str, content: bytes) -> List[Dict[str, Any]]:
    """
    Parse an uploaded CSV or Excel file into header-keyed rows.

    Every cell is read as text and blank cells become "", so column positions
    stay stable from row to row. Only the first sheet of a workbook is read.
    """
    ext = file_extension(filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise UnsupportedFileType(filename)

    try:
        if ext in CSV_EXTENSIONS:
            df = pd.read_csv(
                io.BytesIO(content),
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        else:
            df = pd.read_excel(io.BytesIO(content), sheet_name=0, dtype=str)
    except pd.errors.EmptyDataError:
        return []
    except Exception as e:
        raise SpreadsheetError(str(e)) from e

    df.columns = [str(c).strip() for c in df.columns]
    rows: List[Dict[str, Any]] = []
    for record in df.to_dict(orient="records"):
        rows.append({
            key: "" if pd.isna(value) else value
            for key, value in record.items()
        })
    return rows
