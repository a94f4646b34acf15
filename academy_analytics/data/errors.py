"""
Ingestion failures. Both are final: the cause is the data, not a transient fault.
"""
from __future__ import annotations


class IngestError(Exception):
    """Base class for upload/parse failures."""


class DecodeError(IngestError):
    """The bytes could not be read as a spreadsheet."""


class NoDataFound(IngestError):
    """The spreadsheet decoded, but no sheet yielded a header and a valid row."""
