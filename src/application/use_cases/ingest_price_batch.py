"""
Use-case: validate an uploaded price batch, summarize it and store it.
Depends only on Domain ports and entities plus application services.

Validation runs cheapest-first (content, filename, allow-list, lines) and any
failure rejects the whole batch before the store is touched.
"""

import logging
import re
from typing import Iterable, Optional

from src.application.services.metadata_calculator import calculate_summary
from src.application.services.record_parser import parse_price_batch
from src.domain.entities.outcome import Outcome
from src.domain.entities.symbol_summary import SymbolSummary
from src.domain.exceptions import RecordValidationError
from src.domain.ports.analytics_store_port import IAnalyticsStore

logger = logging.getLogger(__name__)

FILENAME_PATTERN = re.compile(r"[A-Za-z0-9]+_values\.csv")

EMPTY_FILE_MSG = "File is empty"
WRONG_FILENAME_MSG = "Wrong file name format. Right format is: SYMBOL_values.csv"
NOT_UTF8_MSG = "File is not valid UTF-8 text"
NO_DATA_MSG = "No data was retrieved from file. Please check the file."
PROCESSING_FAILED_MSG = (
    "Error while processing uploaded file. Please refer to logs for more information"
)


class IngestPriceBatchUseCase:
    def __init__(self, store: IAnalyticsStore, allowed_symbols: Iterable[str]) -> None:
        self._store = store
        self._allowed_symbols = frozenset(s.lower() for s in allowed_symbols)

    def execute(self, filename: Optional[str], content: bytes) -> Outcome[SymbolSummary]:
        """Ingest one ``<SYMBOL>_values.csv`` batch.

        Args:
            filename: Original upload filename; the symbol is taken from it.
            content:  Raw file bytes, UTF-8 encoded.

        Returns:
            Success with the new SymbolSummary, ValidationError for any caller
            mistake, or ComputationFailure when nothing usable was parsed or
            the summary could not be computed.
        """
        if not content:
            return self._reject(filename, EMPTY_FILE_MSG)
        if filename is None or not FILENAME_PATTERN.fullmatch(filename):
            return self._reject(filename, WRONG_FILENAME_MSG)

        symbol = filename.split("_", 1)[0].lower()
        if symbol not in self._allowed_symbols:
            return self._reject(filename, f"Currently symbol {symbol} is not allowed")

        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError:
            return self._reject(filename, NOT_UTF8_MSG)

        try:
            points = parse_price_batch(text, symbol)
        except RecordValidationError as exc:
            return self._reject(filename, str(exc))

        if not points:
            logger.warning("Upload %s contained no price records", filename)
            return Outcome.computation_failure(NO_DATA_MSG)

        try:
            summary = calculate_summary(symbol, points)
        except Exception:
            logger.exception("Failed to compute summary for %s from %s", symbol, filename)
            return Outcome.computation_failure(PROCESSING_FAILED_MSG)

        self._store.record_summary(summary)
        self._store.record_points(points)
        logger.info("Ingested %d price points for %s", len(points), symbol)
        return Outcome.success(summary)

    @staticmethod
    def _reject(filename: Optional[str], message: str) -> Outcome[SymbolSummary]:
        logger.warning("Rejected upload %r: %s", filename, message)
        return Outcome.validation_error(message)
