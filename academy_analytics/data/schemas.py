"""
Record schemas: selectable fields, monthly records, and the time series.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

import numpy as np
import pandas as pd

from academy_analytics.config import MONTH_INDEX, RECOGNIZED_COLUMNS
from academy_analytics.data.normalize import cell_text


class Field(str, Enum):
    TOTAL_STUDENTS = "total_students"
    MALE = "male"
    FEMALE = "female"
    INTERESTED = "interested"
    OFFERED = "offered"
    DROPPED = "dropped"
    JAVA_FS = "java_fs"
    PYTHON_FS = "python_fs"
    TOTAL_PAID = "total_paid"
    TOTAL_PENDING = "total_pending"

    @property
    def label(self) -> str:
        return _FIELD_LABELS[self]

    @property
    def is_currency(self) -> bool:
        return self in (Field.TOTAL_PAID, Field.TOTAL_PENDING)

    @classmethod
    def parse(cls, name: str) -> "Field":
        """Accept either the field value ("total_paid") or its enum name ("TOTAL_PAID")."""
        try:
            return cls(name)
        except ValueError:
            try:
                return cls[name.upper()]
            except KeyError:
                raise ValueError(f"Unknown field: {name}") from None


_FIELD_LABELS = {
    Field.TOTAL_STUDENTS: "Total Students",
    Field.MALE: "Male",
    Field.FEMALE: "Female",
    Field.INTERESTED: "Interested",
    Field.OFFERED: "Placements Offered",
    Field.DROPPED: "Dropped",
    Field.JAVA_FS: "Java Full Stack",
    Field.PYTHON_FS: "Python Full Stack",
    Field.TOTAL_PAID: "Revenue Collected",
    Field.TOTAL_PENDING: "Revenue Pending",
}


@dataclass(frozen=True)
class MonthlyRecord:
    """One validated observation for a single (year, month)."""
    year: str
    month: str                       # canonical 3-letter abbreviation
    total_students: int
    male: int = 0
    female: int = 0
    interested: int = 0
    offered: int = 0
    dropped: int = 0
    java_fs: int = 0
    python_fs: int = 0
    total_paid: float = 0.0
    total_pending: float = 0.0

    @property
    def year_month(self) -> str:
        return f"{self.year}-{self.month}"

    @property
    def month_index(self) -> int:
        return MONTH_INDEX[self.month]

    @property
    def sort_key(self) -> tuple[int, int]:
        return int(self.year), self.month_index

    def value(self, fld: Field) -> float:
        return getattr(self, fld.value)


@dataclass(frozen=True)
class ColumnMap:
    """Per-sheet resolution of the recognized column catalog.

    Every field in the catalog has an entry; absent columns map to None.
    """
    indices: dict[str, Optional[int]] = field(default_factory=dict)

    @classmethod
    def from_header(cls, header: list) -> "ColumnMap":
        cells = [cell_text(c) for c in header]
        indices: dict[str, Optional[int]] = {}
        for name, labels in RECOGNIZED_COLUMNS:
            indices[name] = next((i for i, c in enumerate(cells) if c in labels), None)
        return cls(indices)

    def has(self, name: str) -> bool:
        return self.indices.get(name) is not None

    def cell(self, row: list, name: str):
        """Raw cell for a field, or None when the column is absent or the row is short."""
        idx = self.indices.get(name)
        if idx is None or idx >= len(row):
            return None
        return row[idx]


@dataclass(frozen=True)
class TimeSeries:
    """Chronologically ordered monthly records produced by one parse."""
    records: tuple[MonthlyRecord, ...] = ()
    source: str = ""                 # sheet the records came from

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[MonthlyRecord]:
        return iter(self.records)

    def __getitem__(self, i: int) -> MonthlyRecord:
        return self.records[i]

    @property
    def is_empty(self) -> bool:
        return not self.records

    def values(self, fld: Field) -> np.ndarray:
        """Field values in stored (chronological) order."""
        return np.array([r.value(fld) for r in self.records], dtype=float)

    def keys(self) -> list[str]:
        return [r.year_month for r in self.records]

    def years(self) -> list[str]:
        return sorted({r.year for r in self.records})

    def date_range(self) -> str:
        if self.is_empty:
            return "N/A"
        return f"{self.records[0].year_month} to {self.records[-1].year_month}"

    def to_frame(self) -> pd.DataFrame:
        """One row per record, with year_month and month_index columns."""
        columns = ["year", "month", "year_month", "month_index"] + [f.value for f in Field]
        if self.is_empty:
            return pd.DataFrame(columns=columns)
        rows = []
        for r in self.records:
            row = {"year": r.year, "month": r.month, "year_month": r.year_month, "month_index": r.month_index}
            for f in Field:
                row[f.value] = r.value(f)
            rows.append(row)
        return pd.DataFrame(rows, columns=columns)

    @classmethod
    def from_records(cls, records, source: str = "") -> "TimeSeries":
        """Sort by (year, canonical month index); stable, so duplicates keep source order."""
        return cls(tuple(sorted(records, key=lambda r: r.sort_key)), source)

