"""
Cell normalization: text, numbers, years and months from raw spreadsheet cells.
"""
from __future__ import annotations

import datetime as dt
import math
import re
from typing import Optional

from academy_analytics.config import FULL_MONTH_NAMES, MONTHS, MONTH_INDEX

_YEAR_RE = re.compile(r"^\d{4}$")
_CURRENCY_RE = re.compile(r"[₹$,\s]")


# ---------------------------------------------------------------------------
# Text & numbers
# ---------------------------------------------------------------------------

def _is_nan(value) -> bool:
    return isinstance(value, float) and math.isnan(value)


def cell_text(value) -> str:
    """Trimmed text of a cell. Empty/NaN cells are ""; integral floats drop the ".0"."""
    if value is None or _is_nan(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def to_number(value) -> Optional[float]:
    """Parse a numeric cell, tolerating currency symbols and thousands separators."""
    if value is None or isinstance(value, bool) or _is_nan(value):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = _CURRENCY_RE.sub("", str(value))
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return None if math.isnan(number) or math.isinf(number) else number


def to_count(value) -> int:
    """Non-negative integer count; missing, non-numeric or negative cells become 0."""
    number = to_number(value)
    if number is None or number < 0:
        return 0
    return int(round(number))


def to_amount(value) -> float:
    """Non-negative amount; missing, non-numeric or negative cells become 0."""
    number = to_number(value)
    if number is None or number < 0:
        return 0.0
    return number


# ---------------------------------------------------------------------------
# Years & months
# ---------------------------------------------------------------------------

def valid_year(year: str) -> bool:
    return bool(_YEAR_RE.match(year))


def month_from_number(value) -> Optional[str]:
    """1-12 → canonical abbreviation by position."""
    number = to_number(value)
    if number is None or not number.is_integer() or not 1 <= number <= 12:
        return None
    return MONTHS[int(number) - 1]


def month_from_name(value) -> Optional[str]:
    """Full month name (any case) → abbreviation; otherwise best-effort first three letters."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return month_from_number(value)
    text = cell_text(value)
    if not text:
        return None
    abbr = FULL_MONTH_NAMES.get(text.lower())
    if abbr:
        return abbr
    if text.isdigit():
        return month_from_number(text)
    return text[:3].capitalize()


def split_year_month(value) -> tuple[Optional[str], Optional[str]]:
    """Combined "2023-04" key → ("2023", "Apr"). Date cells give their own year and month.

    Returns (None, None) when the cell is not a combined key, so callers can fall back
    to separate Year/Month columns.
    """
    if isinstance(value, (dt.date, dt.datetime)):
        return f"{value.year:04d}", MONTHS[value.month - 1]
    text = cell_text(value)
    if "-" not in text:
        return None, None
    year, _, month = text.partition("-")
    return year.strip(), month_from_number(month.strip())


def is_canonical_month(month: Optional[str]) -> bool:
    return month in MONTH_INDEX
