"""
Shared fixtures: in-memory workbooks and synthetic monthly series.
"""
from io import BytesIO

import pytest
from openpyxl import Workbook

from academy_analytics.config import MONTHS
from academy_analytics.data.schemas import Field, MonthlyRecord, TimeSeries

HEADER = [
    "Year", "Month", "Total Students", "Male", "Female", "Interested", "Offered",
    "Dropped", "Java Full Stack", "Python Full Stack", "Total Paid (₹)", "Total Pending (₹)",
]


def make_workbook(sheets):
    """Build .xlsx bytes from [(sheet_name, rows), ...]."""
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets:
        ws = wb.create_sheet(name)
        for row in rows:
            ws.append(row)
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def data_row(year, month, students, **overrides):
    """A split-column row matching HEADER."""
    values = {
        "male": students // 2, "female": students - students // 2, "interested": students + 5,
        "offered": students // 3, "dropped": 1, "java_fs": students // 2,
        "python_fs": students - students // 2, "total_paid": students * 1000, "total_pending": 500,
    }
    values.update(overrides)
    return [year, month, students, values["male"], values["female"], values["interested"],
            values["offered"], values["dropped"], values["java_fs"], values["python_fs"],
            values["total_paid"], values["total_pending"]]


def series_of(values, field=Field.TOTAL_STUDENTS, start_year=2023):
    """Consecutive monthly records carrying `values` in `field`."""
    records = []
    for i, v in enumerate(values):
        year = str(start_year + i // 12)
        month = MONTHS[i % 12]
        kwargs = {"total_students": 10}
        if field == Field.TOTAL_STUDENTS:
            kwargs["total_students"] = v
        else:
            kwargs[field.value] = v
        records.append(MonthlyRecord(year=year, month=month, **kwargs))
    return TimeSeries(tuple(records), source="test")


@pytest.fixture
def sample_rows():
    """Title rows, header at index 2, three months out of order, then an annual TOTAL block."""
    return [
        ["Institute Monthly Report"],
        ["Generated for the admissions office"],
        HEADER,
        data_row(2023, "March", 30),
        data_row(2023, "January", 10),
        data_row(2023, "February", 20),
        ["TOTAL", None, 60, 30, 30, 75, 19, 3, 30, 30, 60000, 1500],
        data_row(2023, "April", 999),
    ]


@pytest.fixture
def sample_workbook(sample_rows):
    return make_workbook([("Monthly", sample_rows)])


@pytest.fixture
def year_series():
    """Two full years of steadily growing enrollment."""
    return series_of([20 + 2 * i for i in range(24)])
