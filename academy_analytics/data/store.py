"""
DataStore — holds the working TimeSeries for the current session.

Each upload replaces the series wholesale. The swap is a single reference assignment,
so a reader sees either the previous series or the new one, never a mix.
"""
from __future__ import annotations

from pathlib import Path

from academy_analytics.data.loader import read_path
from academy_analytics.data.parser import parse_sheets, parse_workbook
from academy_analytics.data.schemas import TimeSeries


class DataStore:
    """In-memory working series with period accessors."""

    def __init__(self) -> None:
        self.series: TimeSeries = TimeSeries()
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def replace(self, series: TimeSeries) -> TimeSeries:
        """Swap in a freshly parsed series; returns the previous one."""
        previous, self.series = self.series, series
        self._loaded = True
        print(f"  Loaded {len(series):,} monthly records from sheet '{series.source}' ({series.date_range()})")
        return previous

    def load_bytes(self, data: bytes, filename: str = "") -> "DataStore":
        """Parse an uploaded spreadsheet and replace the series. Raises IngestError."""
        self.replace(parse_workbook(data, filename))
        return self

    def load_path(self, path: Path) -> "DataStore":
        """Parse a spreadsheet from disk and replace the series. Raises IngestError."""
        print(f"Loading records from {path}...")
        self.replace(parse_sheets(read_path(path)))
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def row_count(self) -> int:
        return len(self.series)

    def date_range(self) -> str:
        return self.series.date_range()

    def periods_available(self) -> list[dict]:
        """{year, month, year_month} per record, chronological. Duplicate months repeat."""
        return [
            {"year": int(r.year), "month": r.month, "year_month": r.year_month}
            for r in self.series
        ]

    def years(self) -> list[str]:
        return self.series.years()
