"""
Use-case: list stored symbols ordered by a named sorting mode.
Depends only on Domain ports and entities plus application services.
"""

from src.application.services.sorting_modes import resolve_sorting_mode
from src.domain.entities.outcome import Outcome
from src.domain.exceptions import UnknownSortingModeError
from src.domain.ports.analytics_store_port import IAnalyticsStore


class GetSortedSymbolsUseCase:
    def __init__(self, store: IAnalyticsStore) -> None:
        self._store = store

    def execute(self, sorting_mode: str) -> Outcome[list[str]]:
        """Return symbols sorted by *sorting_mode* (case-insensitive).

        Returns:
            ValidationError listing the valid modes for an unknown name,
            NotFound when nothing has been ingested yet, else Success.
        """
        try:
            comparator = resolve_sorting_mode(sorting_mode)
        except UnknownSortingModeError as exc:
            return Outcome.validation_error(str(exc))

        symbols = self._store.sorted_symbols(comparator)
        if not symbols:
            return Outcome.not_found("There are no symbols added")
        return Outcome.success(symbols)
