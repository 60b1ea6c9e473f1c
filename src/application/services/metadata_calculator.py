"""
Application service: reduce a symbol's points to a SymbolSummary.
Depends only on Domain entities and exceptions, no infrastructure imports.

The min and max reductions are independent of the chronological sort, so they
run as two executor tasks while the sort happens on the calling thread.
"""

from concurrent.futures import ThreadPoolExecutor
from operator import attrgetter
from typing import Optional, Sequence

from src.domain.entities.price_point import PricePoint
from src.domain.entities.symbol_summary import SymbolSummary, normalized_range
from src.domain.exceptions import NullInputError


def _min_price(points: Sequence[PricePoint]) -> float:
    return min(point.price for point in points)


def _max_price(points: Sequence[PricePoint]) -> float:
    return max(point.price for point in points)


def calculate_summary(symbol: str, points: Optional[Sequence[PricePoint]]) -> SymbolSummary:
    """Compute oldest/newest/min/max prices and the normalized range.

    Raises:
        NullInputError: if *points* is None.
        ValueError:     if *points* is empty.
        Any exception raised by the min/max tasks is re-raised unchanged.
    """
    if points is None:
        raise NullInputError(f"No price points supplied for symbol {symbol!r}")
    if not points:
        raise ValueError(f"Cannot summarize symbol {symbol!r} without price points")

    with ThreadPoolExecutor(max_workers=2) as executor:
        min_task = executor.submit(_min_price, points)
        max_task = executor.submit(_max_price, points)

        # sorted() is stable: equal timestamps keep upload order
        chronological = sorted(points, key=attrgetter("timestamp"))
        min_price = min_task.result()
        max_price = max_task.result()

    return SymbolSummary(
        symbol=symbol,
        oldest_price=chronological[0].price,
        newest_price=chronological[-1].price,
        min_price=min_price,
        max_price=max_price,
        normalized_range=normalized_range(min_price, max_price),
    )
