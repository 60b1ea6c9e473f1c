"""
Domain entity for a single parsed price observation.
Zero external dependencies, pure Python dataclass only.
Frozen so instances are hashable and can be deduplicated in sets.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PricePoint:
    timestamp: int
    symbol: str
    price: float
