"""Spreadsheet decoding, record parsing, and the in-memory working series."""
from .errors import IngestError, DecodeError, NoDataFound
from .loader import read_workbook, read_path
from .parser import parse_sheets, parse_workbook
from .schemas import Field, MonthlyRecord, TimeSeries
from .store import DataStore
