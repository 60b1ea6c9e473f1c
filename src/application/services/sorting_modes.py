"""
Registry of named sorting modes for the symbol ranking query.
Depends only on Domain entities, ports and exceptions.

A mode is just a comparator over SymbolSummary; new modes are added with
register_sorting_mode() and become available to every caller by name.
"""

import math

from src.domain.entities.symbol_summary import SymbolSummary
from src.domain.exceptions import UnknownSortingModeError
from src.domain.ports.analytics_store_port import SummaryComparator


def _compare_floats(left: float, right: float) -> int:
    """Total ordering over floats where NaN sorts above every other value."""
    left_nan, right_nan = math.isnan(left), math.isnan(right)
    if left_nan or right_nan:
        return int(left_nan) - int(right_nan)
    return (left > right) - (left < right)


def normalized_range_desc(left: SymbolSummary, right: SymbolSummary) -> int:
    return -_compare_floats(left.normalized_range, right.normalized_range)


SORTING_MODES: dict[str, SummaryComparator] = {
    "normalized_desc": normalized_range_desc,
}


def available_sorting_modes() -> list[str]:
    return sorted(SORTING_MODES)


def register_sorting_mode(name: str, comparator: SummaryComparator) -> None:
    SORTING_MODES[name.lower()] = comparator


def resolve_sorting_mode(name: str) -> SummaryComparator:
    """Look up a comparator by case-insensitive *name*.

    Raises:
        UnknownSortingModeError: listing every registered mode name.
    """
    try:
        return SORTING_MODES[name.lower()]
    except KeyError:
        raise UnknownSortingModeError(name, available_sorting_modes()) from None
