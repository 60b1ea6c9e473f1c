"""
Domain entity for the per-symbol price summary.
Zero external dependencies, pure Python dataclass only.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class SymbolSummary:
    symbol: str
    oldest_price: float
    newest_price: float
    min_price: float
    max_price: float
    normalized_range: float


def normalized_range(min_price: float, max_price: float) -> float:
    """Return ``(max_price - min_price) / min_price``.

    A zero *min_price* follows IEEE-754 division instead of raising
    ZeroDivisionError: a positive spread gives ``inf``, a zero spread ``nan``.
    """
    spread = max_price - min_price
    if min_price == 0:
        if spread == 0 or math.isnan(spread):
            return math.nan
        return math.copysign(math.inf, spread)
    return spread / min_price
