"""
Infrastructure adapter: process-local dictionaries → IAnalyticsStore.

Holds the per-symbol summaries and the day-grouped point index. A single
RLock guards both maps so every operation is atomic with respect to the
others; FastAPI runs sync handlers on a thread pool and shares one instance.
Nothing here survives a restart.
"""

import threading
from datetime import date, datetime, timedelta, timezone, tzinfo
from functools import cmp_to_key
from typing import Optional

from src.domain.entities.price_point import PricePoint
from src.domain.entities.symbol_summary import SymbolSummary, normalized_range
from src.domain.ports.analytics_store_port import IAnalyticsStore, SummaryComparator

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class InMemoryAnalyticsStore(IAnalyticsStore):
    """Thread-safe in-memory summaries plus a date → symbol → points index."""

    # used when a bucket exists but holds no points; yields -1.0, which never wins
    _EMPTY_MIN_PRICE = 1.0
    _EMPTY_MAX_PRICE = 0.0

    def __init__(self, tz: tzinfo = timezone.utc) -> None:
        """
        Args:
            tz: Time zone used to turn point timestamps into calendar days.
        """
        self._tz = tz
        self._lock = threading.RLock()
        self._summaries: dict[str, SymbolSummary] = {}
        self._points_by_day: dict[date, dict[str, set[PricePoint]]] = {}

    # ------------------------------------------------------------------
    # IAnalyticsStore interface
    # ------------------------------------------------------------------

    def record_summary(self, summary: SymbolSummary) -> None:
        with self._lock:
            self._summaries[summary.symbol] = summary

    def record_point(self, point: PricePoint) -> None:
        day = self.day_for(point.timestamp)
        with self._lock:
            by_symbol = self._points_by_day.setdefault(day, {})
            by_symbol.setdefault(point.symbol, set()).add(point)

    def sorted_symbols(self, comparator: SummaryComparator) -> list[str]:
        with self._lock:
            summaries = list(self._summaries.values())
        return [s.symbol for s in sorted(summaries, key=cmp_to_key(comparator))]

    def summary_for(self, symbol: str) -> Optional[SymbolSummary]:
        with self._lock:
            return self._summaries.get(symbol)

    def best_mover_for_date(self, day: date) -> Optional[str]:
        """Return the symbol whose prices moved most on *day*.

        A symbol must strictly beat the running best, which starts at 0, so
        ties keep the symbol seen first and a day of flat prices yields None.
        """
        with self._lock:
            buckets = {
                symbol: [p.price for p in points]
                for symbol, points in self._points_by_day.get(day, {}).items()
            }

        best_symbol: Optional[str] = None
        best_range = 0.0
        for symbol, prices in buckets.items():
            low = min(prices, default=self._EMPTY_MIN_PRICE)
            high = max(prices, default=self._EMPTY_MAX_PRICE)
            day_range = normalized_range(low, high)
            if day_range > best_range:
                best_symbol = symbol
                best_range = day_range
        return best_symbol

    def points_for(self, day: date, symbol: str) -> frozenset[PricePoint]:
        with self._lock:
            return frozenset(self._points_by_day.get(day, {}).get(symbol, ()))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def day_for(self, timestamp: int) -> date:
        """Calendar day of an epoch-millis *timestamp* in the store's time zone.

        Timestamps beyond the datetime range map to date.min or date.max.
        """
        try:
            return (_EPOCH + timedelta(milliseconds=timestamp)).astimezone(self._tz).date()
        except (OverflowError, ValueError):
            return date.max if timestamp > 0 else date.min
