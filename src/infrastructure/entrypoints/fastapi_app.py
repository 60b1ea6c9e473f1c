"""
FastAPI entry point, local and container server.

This module is the Composition Root for HTTP runs: it reads Settings, builds
the single InMemoryAnalyticsStore shared by every request and passes it to
the routes via create_router().

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import logging

from dotenv import load_dotenv
from fastapi import FastAPI

load_dotenv()

from src.infrastructure.config.settings import Settings
from src.infrastructure.entrypoints.route_registry import create_router
from src.infrastructure.storage.in_memory_analytics_store import InMemoryAnalyticsStore

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def create_app(settings: Settings) -> FastAPI:
    """Wire a fresh store and the API routes into a new FastAPI app."""
    store = InMemoryAnalyticsStore(tz=settings.tz)
    app = FastAPI(title="Symbol Price Analytics API")
    app.include_router(create_router(store, settings))

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


# ---------------------------------------------------------------------------
# Composition Root, wire all dependencies once at startup
# ---------------------------------------------------------------------------
_settings = Settings.from_env()
logging.basicConfig(level=_settings.log_level, format=LOG_FORMAT)

app = create_app(_settings)
