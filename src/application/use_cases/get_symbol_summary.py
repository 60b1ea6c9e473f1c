"""
Use-case: look up the stored summary for one symbol.
Depends only on Domain ports and entities, no infrastructure imports.
"""

from src.domain.entities.outcome import Outcome
from src.domain.entities.symbol_summary import SymbolSummary
from src.domain.ports.analytics_store_port import IAnalyticsStore


class GetSymbolSummaryUseCase:
    def __init__(self, store: IAnalyticsStore) -> None:
        self._store = store

    def execute(self, symbol: str) -> Outcome[SymbolSummary]:
        summary = self._store.summary_for(symbol.lower())
        if summary is None:
            return Outcome.not_found(f"Nothing was found for symbol {symbol}")
        return Outcome.success(summary)
