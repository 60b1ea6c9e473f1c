# ============================================================
# IMPORTS
# ============================================================

from datetime import timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.infrastructure.config.settings import Settings
from src.infrastructure.entrypoints.route_registry import create_router
from src.infrastructure.storage.in_memory_analytics_store import InMemoryAnalyticsStore

# 2022-01-01 04:00:00 UTC
JAN_1_TS = 1641009600000
HOUR_MS = 3_600_000
DAY_MS = 24 * HOUR_MS


# ============================================================
# HELPERS
# ============================================================

def make_batch(symbol: str, rows) -> bytes:
    """
    Build an upload body from (timestamp, price) rows.
    """
    lines = ["timestamp,symbol,price"]
    lines += [f"{ts},{symbol},{price}" for ts, price in rows]
    return ("\n".join(lines) + "\n").encode("utf-8")


# ============================================================
# PYTEST FIXTURES
# ============================================================

@pytest.fixture
def settings():
    return Settings(allowed_symbols=frozenset({"btc", "doge", "eth", "ltc", "xrp"}))


@pytest.fixture
def store():
    return InMemoryAnalyticsStore(tz=timezone.utc)


@pytest.fixture
def client(store, settings):
    """
    TestClient over a bare app that shares the `store` fixture.
    """
    app = FastAPI()
    app.include_router(create_router(store, settings))
    return TestClient(app)
