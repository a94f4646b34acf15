"""
Tabular record parser — sheets of raw cells → validated, chronologically sorted TimeSeries.

Layouts vary between exports: the header may sit a few rows down, the period may be a
combined "Year-Month" key or separate Year/Month columns, and most sheets end with an
annual summary block that must never be read as monthly data.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from academy_analytics.config import (
    AMOUNT_FIELDS, COUNT_FIELDS, HEADER_SCAN_ROWS, REQUIRED_HEADER,
    SKIP_MARKERS, STOP_MARKERS, STOP_PREFIXES,
)
from academy_analytics.data.errors import NoDataFound
from academy_analytics.data.loader import Sheet, read_workbook
from academy_analytics.data.normalize import (
    cell_text, is_canonical_month, month_from_name, split_year_month,
    to_amount, to_count, to_number, valid_year,
)
from academy_analytics.data.schemas import ColumnMap, MonthlyRecord, TimeSeries


class RowAction(str, Enum):
    STOP = "stop"        # start of the trailing summary block
    SKIP = "skip"        # stray repeated header
    ACCEPT = "accept"
    REJECT = "reject"    # failed validation, dropped silently


@dataclass(frozen=True)
class RowResult:
    action: RowAction
    record: Optional[MonthlyRecord] = None


# ---------------------------------------------------------------------------
# Header detection
# ---------------------------------------------------------------------------

def find_header(rows: list[list]) -> Optional[int]:
    """Index of the first row (within the scan window) containing "Total Students"."""
    for i, row in enumerate(rows[:HEADER_SCAN_ROWS]):
        if any(cell_text(c) == REQUIRED_HEADER for c in row):
            return i
    return None


# ---------------------------------------------------------------------------
# Row classification
# ---------------------------------------------------------------------------

def _extract_period(row: list, columns: ColumnMap) -> tuple[Optional[str], Optional[str]]:
    if columns.has("year_month"):
        year, month = split_year_month(columns.cell(row, "year_month"))
        if year is not None:
            return year, month
    if columns.has("year") and columns.has("month"):
        return cell_text(columns.cell(row, "year")), month_from_name(columns.cell(row, "month"))
    return None, None


def build_record(row: list, columns: ColumnMap) -> Optional[MonthlyRecord]:
    """Validated record for a data row, or None when the row breaks a record invariant."""
    year, month = _extract_period(row, columns)
    if year is None or not valid_year(year) or not is_canonical_month(month):
        return None

    students = to_number(columns.cell(row, "total_students"))
    if students is None or int(round(students)) <= 0:
        return None

    counts = {name: to_count(columns.cell(row, name)) for name in COUNT_FIELDS}
    amounts = {name: to_amount(columns.cell(row, name)) for name in AMOUNT_FIELDS}
    return MonthlyRecord(year=year, month=month, total_students=int(round(students)), **counts, **amounts)


def classify_row(row: list, columns: ColumnMap) -> RowResult:
    first = cell_text(row[0]).upper() if row else ""
    if first in STOP_MARKERS or first.startswith(STOP_PREFIXES):
        return RowResult(RowAction.STOP)
    if first in SKIP_MARKERS:
        return RowResult(RowAction.SKIP)

    record = build_record(row, columns)
    if record is None:
        return RowResult(RowAction.REJECT)
    return RowResult(RowAction.ACCEPT, record)


# ---------------------------------------------------------------------------
# Sheets
# ---------------------------------------------------------------------------

def parse_sheet(rows: list[list]) -> list[MonthlyRecord]:
    """Accepted records of one sheet in source order; [] when the sheet has no usable header."""
    header_idx = find_header(rows)
    if header_idx is None:
        return []

    columns = ColumnMap.from_header(rows[header_idx])
    if not columns.has("total_students"):
        return []

    records: list[MonthlyRecord] = []
    for row in rows[header_idx + 1:]:
        result = classify_row(row, columns)
        if result.action == RowAction.STOP:
            break
        if result.action == RowAction.ACCEPT:
            records.append(result.record)
    return records


def parse_sheets(sheets: Iterable[Sheet]) -> TimeSeries:
    """Commit to the first sheet yielding at least one record; later sheets are not read."""
    for name, rows in sheets:
        records = parse_sheet(rows)
        if records:
            return TimeSeries.from_records(records, source=name)
    raise NoDataFound("No sheet has a 'Total Students' header followed by valid monthly rows")


def parse_workbook(data: bytes, filename: str = "") -> TimeSeries:
    """Decode and parse an uploaded spreadsheet. Raises DecodeError or NoDataFound."""
    return parse_sheets(read_workbook(data, filename))
