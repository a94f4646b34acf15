"""
FastAPI dependencies — DataStore singleton, field, horizon and window parsing.
"""
from __future__ import annotations

from fastapi import HTTPException, Query

from academy_analytics.config import DEFAULT_HORIZON, DEFAULT_WINDOW, MAX_HORIZON
from academy_analytics.data.store import DataStore
from academy_analytics.data.schemas import Field

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None


def set_store(store: DataStore) -> None:
    global _store
    _store = store


def get_store() -> DataStore:
    if _store is None or not _store.is_loaded:
        raise HTTPException(503, "No data loaded yet — upload a spreadsheet first")
    return _store


def get_store_or_empty() -> DataStore:
    """Return the store even if it has no data (for health/upload/query endpoints)."""
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


# ---------------------------------------------------------------------------
# Parameter parsing
# ---------------------------------------------------------------------------

def parse_field(name: str) -> Field:
    try:
        return Field.parse(name)
    except ValueError:
        raise HTTPException(400, f"Invalid field: {name}. Valid: {[f.value for f in Field]}")


def parse_horizon(
    horizon: int = Query(DEFAULT_HORIZON, description=f"Months ahead (1-{MAX_HORIZON})"),
) -> int:
    if not 1 <= horizon <= MAX_HORIZON:
        raise HTTPException(400, f"horizon must be between 1 and {MAX_HORIZON}")
    return horizon


def parse_window(
    window: int = Query(DEFAULT_WINDOW, description="Trailing window size in months"),
) -> int:
    if window < 1:
        raise HTTPException(400, "window must be at least 1")
    return window
