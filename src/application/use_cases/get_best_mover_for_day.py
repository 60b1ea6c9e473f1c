"""
Use-case: find the symbol with the highest normalized range on a calendar day.
Depends only on Domain ports and entities, no infrastructure imports.
"""

import re
from datetime import date

from src.domain.entities.outcome import Outcome
from src.domain.ports.analytics_store_port import IAnalyticsStore

# date.fromisoformat alone also accepts compact and week-date forms
ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_calendar_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string.

    Raises:
        ValueError: for any other shape or an impossible date.
    """
    if not ISO_DATE_PATTERN.fullmatch(value):
        raise ValueError(f"Expected YYYY-MM-DD, got {value!r}")
    return date.fromisoformat(value)


class GetBestMoverForDayUseCase:
    def __init__(self, store: IAnalyticsStore) -> None:
        self._store = store

    def execute(self, day: str) -> Outcome[str]:
        """Return the best-moving symbol for *day*.

        Returns:
            ValidationError for a malformed date, NotFound when no symbol
            moved on that day, else Success with the symbol name.
        """
        try:
            parsed_day = parse_calendar_date(day)
        except ValueError:
            return Outcome.validation_error(f"Error while parsing provided date: {day}")

        symbol = self._store.best_mover_for_date(parsed_day)
        if symbol is None:
            return Outcome.not_found(f"No symbol data registered for date: {day}")
        return Outcome.success(symbol)
