"""
Port (interface) for the analytics store.
Infrastructure adapters (e.g. InMemoryAnalyticsStore) must implement this interface.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Callable, Iterable, Optional

from src.domain.entities.price_point import PricePoint
from src.domain.entities.symbol_summary import SymbolSummary

SummaryComparator = Callable[[SymbolSummary, SymbolSummary], int]


class IAnalyticsStore(ABC):
    @abstractmethod
    def record_summary(self, summary: SymbolSummary) -> None:
        """Insert or replace the summary stored for ``summary.symbol``."""
        ...

    @abstractmethod
    def record_point(self, point: PricePoint) -> None:
        """Add a point to its day bucket. Exact duplicates are ignored."""
        ...

    def record_points(self, points: Iterable[PricePoint]) -> None:
        for point in points:
            self.record_point(point)

    @abstractmethod
    def sorted_symbols(self, comparator: SummaryComparator) -> list[str]:
        """Return every summarized symbol ordered by *comparator*."""
        ...

    @abstractmethod
    def summary_for(self, symbol: str) -> Optional[SymbolSummary]:
        """Return the summary for an exact symbol key, or None."""
        ...

    @abstractmethod
    def best_mover_for_date(self, day: date) -> Optional[str]:
        """Return the symbol with the greatest normalized range on *day*, or None."""
        ...

    @abstractmethod
    def points_for(self, day: date, symbol: str) -> frozenset[PricePoint]:
        """Return a copy of the point set stored for *symbol* on *day*."""
        ...
