"""
Upload endpoint: one spreadsheet in, working series replaced.

Reading the upload is the only await; decoding and parsing run synchronously after it.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from academy_analytics.config import MAX_UPLOAD_BYTES
from academy_analytics.data.errors import DecodeError, NoDataFound
from academy_analytics.data.loader import supported_extension
from academy_analytics.data.parser import parse_workbook
from academy_analytics.data.store import DataStore
from academy_analytics.api.dependencies import get_store_or_empty
from academy_analytics.api.response_models import UploadResponse

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload", response_model=UploadResponse)
async def upload_workbook(
    file: UploadFile = File(...),
    store: DataStore = Depends(get_store_or_empty),
):
    """Parse an uploaded workbook and swap it in as the working series."""
    if not file.filename:
        raise HTTPException(400, "Missing filename")
    if not supported_extension(file.filename):
        raise HTTPException(400, f"Only .xlsx, .xlsm or .csv files are accepted (got '{file.filename}')")

    content = await file.read()
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(413, f"File exceeds {MAX_UPLOAD_BYTES // (1024 * 1024)} MB limit")

    try:
        series = parse_workbook(content, file.filename)
    except DecodeError as exc:
        raise HTTPException(400, f"Could not read spreadsheet: {exc}")
    except NoDataFound as exc:
        raise HTTPException(400, f"No data found: {exc}")

    store.replace(series)
    return UploadResponse(
        status="loaded",
        filename=file.filename,
        sheet=series.source,
        records=len(series),
        date_range=series.date_range(),
    )
