"""
Workbook decoding: uploaded bytes → list of (sheet name, cell grid).
"""
from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pandas as pd

from academy_analytics.config import CSV_EXTENSIONS, WORKBOOK_EXTENSIONS
from academy_analytics.data.errors import DecodeError

Sheet = tuple[str, list[list]]


def supported_extension(filename: str) -> bool:
    name = filename.lower()
    return name.endswith(WORKBOOK_EXTENSIONS) or name.endswith(CSV_EXTENSIONS)


def _frame_to_rows(df: pd.DataFrame) -> list[list]:
    """Cell grid with NaN replaced by None so blank cells read as empty."""
    df = df.astype(object)
    return df.where(df.notna(), None).values.tolist()


def _csv_width(data: bytes) -> int:
    """Upper bound on fields per line, so title lines shorter than the header still parse."""
    lines = data.decode("utf-8", errors="replace").splitlines()
    return max((line.count(",") + 1 for line in lines), default=1)


def read_workbook(data: bytes, filename: str = "") -> list[Sheet]:
    """Decode every sheet of an uploaded spreadsheet, in workbook order.

    CSV files become a single sheet named "CSV". Blank rows are preserved because an
    empty first cell ends the monthly block.
    """
    if not data:
        raise DecodeError("Uploaded file is empty")

    try:
        if filename.lower().endswith(CSV_EXTENSIONS):
            df = pd.read_csv(
                BytesIO(data), header=None, names=list(range(_csv_width(data))),
                dtype=object, skip_blank_lines=False,
            )
            return [("CSV", _frame_to_rows(df))]

        frames = pd.read_excel(BytesIO(data), sheet_name=None, header=None, dtype=object)
    except Exception as exc:
        raise DecodeError(f"Could not read '{filename or 'upload'}' as a spreadsheet: {exc}") from exc

    return [(str(name), _frame_to_rows(df)) for name, df in frames.items()]


def read_path(path: Path) -> list[Sheet]:
    """Decode a spreadsheet from disk."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise DecodeError(f"Could not open {path}: {exc}") from exc
    return read_workbook(data, path.name)
