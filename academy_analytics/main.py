"""
Academy Analytics — FastAPI app factory with optional startup workbook loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from academy_analytics.data.store import DataStore
from academy_analytics.data.errors import IngestError
from academy_analytics.api.dependencies import set_store
from academy_analytics.api.router_meta import router as meta_router
from academy_analytics.api.router_upload import router as upload_router
from academy_analytics.api.router_analytics import router as analytics_router
from academy_analytics.api.router_query import router as query_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the store; preload ACADEMY_WORKBOOK when it is set."""
    from academy_analytics.config import STARTUP_WORKBOOK

    store = DataStore()
    print(f"  ACADEMY_WORKBOOK = {STARTUP_WORKBOOK or '(not set)'}")
    if STARTUP_WORKBOOK is not None:
        try:
            store.load_path(STARTUP_WORKBOOK)
        except IngestError as exc:
            print(f"  Warning: startup workbook not loaded: {exc}")
    set_store(store)

    if store.row_count() > 0:
        print(f"\nAcademy Analytics ready — {store.row_count():,} months, {store.date_range()}\n")
    else:
        print("\nAcademy Analytics ready — no data yet. Upload a spreadsheet via /api/upload.\n")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Academy Analytics API",
        description="Monthly enrollment, placement and revenue forecasting",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(upload_router)
    app.include_router(analytics_router)
    app.include_router(query_router)
    return app


app = create_app()
