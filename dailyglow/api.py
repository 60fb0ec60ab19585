# -*- coding: utf-8 -*-
"""
Daily Glow journal API

Profile, day logs (weight, meals, exercise, skincare, medication), date
navigation, trend summaries and AI suggestions over one local JSON document.
"""

from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .journal.api import router as journal_router
from .journal.session import JournalStore, open_default_store
from .suggest.api import router as suggest_router
from .suggest.service import SuggestionService


def create_app(journal: JournalStore | None = None, suggestions: SuggestionService | None = None) -> FastAPI:
    app = FastAPI(
        title="Daily Glow",
        description="Personal health journal: weight, meals, exercise, skincare and medication",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # The single store instance; routers reach it through request.app.state.
    app.state.journal = journal or open_default_store()
    app.state.suggestions = suggestions or SuggestionService()

    app.include_router(journal_router)
    app.include_router(suggest_router)

    @app.get("/api/health")
    def health() -> dict:
        return {"status": "ok", "store": str(app.state.journal.storage.path)}

    return app


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    host = os.environ.get("DAILYGLOW_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("DAILYGLOW_PORT") or os.environ.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("dailyglow.api:create_app", host=host, port=port, reload=False, factory=True)
