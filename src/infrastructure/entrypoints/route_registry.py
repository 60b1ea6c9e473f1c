"""
FastAPI route wrappers, Infrastructure entrypoint.

HTTP concerns (status codes, the ErrorMsg header, response models) must NOT
appear in the application or domain layers. This module binds each use-case
to a route and translates its Outcome into a response:

    SUCCESS             -> 200 with a JSON body
    VALIDATION_ERROR    -> 400
    NOT_FOUND           -> 204, no body
    COMPUTATION_FAILURE -> 500

Every non-200 response carries the message in the ErrorMsg header.
"""

import logging
from typing import Callable, TypeVar

from fastapi import APIRouter, File, HTTPException, Response, UploadFile
from pydantic import BaseModel

from src.application.use_cases.get_best_mover_for_day import GetBestMoverForDayUseCase
from src.application.use_cases.get_sorted_symbols import GetSortedSymbolsUseCase
from src.application.use_cases.get_symbol_summary import GetSymbolSummaryUseCase
from src.application.use_cases.ingest_price_batch import (
    PROCESSING_FAILED_MSG,
    IngestPriceBatchUseCase,
)
from src.domain.entities.outcome import Outcome, OutcomeKind
from src.domain.entities.symbol_summary import SymbolSummary
from src.domain.ports.analytics_store_port import IAnalyticsStore
from src.infrastructure.config.settings import Settings

logger = logging.getLogger(__name__)

ERR_HEADER_NAME = "ErrorMsg"

T = TypeVar("T")
R = TypeVar("R")


class SymbolSummaryResponse(BaseModel):
    symbol: str
    oldest_price: float
    newest_price: float
    min_price: float
    max_price: float
    normalized_range: float

    @classmethod
    def from_entity(cls, summary: SymbolSummary) -> "SymbolSummaryResponse":
        return cls(
            symbol=summary.symbol,
            oldest_price=summary.oldest_price,
            newest_price=summary.newest_price,
            min_price=summary.min_price,
            max_price=summary.max_price,
            normalized_range=summary.normalized_range,
        )


class SymbolMetadataResponse(BaseModel):
    oldest_price: float
    newest_price: float
    min_price: float
    max_price: float


class BestMoverResponse(BaseModel):
    date: str
    symbol: str


def _render(outcome: Outcome[T], to_body: Callable[[T], R]) -> R | Response:
    if outcome.kind is OutcomeKind.SUCCESS:
        return to_body(outcome.payload)
    headers = {ERR_HEADER_NAME: outcome.message or ""}
    if outcome.kind is OutcomeKind.NOT_FOUND:
        return Response(status_code=204, headers=headers)
    status = 400 if outcome.kind is OutcomeKind.VALIDATION_ERROR else 500
    raise HTTPException(status_code=status, detail=outcome.message, headers=headers)


def create_router(store: IAnalyticsStore, settings: Settings) -> APIRouter:
    """Build the /api/cryptos router with injected use-case dependencies.

    Args:
        store:    IAnalyticsStore shared by every request.
        settings: Provides the ingestion allow-list.

    Returns:
        APIRouter ready to be included in a FastAPI app.
    """
    ingest_uc = IngestPriceBatchUseCase(store, settings.allowed_symbols)
    sorted_uc = GetSortedSymbolsUseCase(store)
    summary_uc = GetSymbolSummaryUseCase(store)
    best_mover_uc = GetBestMoverForDayUseCase(store)

    router = APIRouter(prefix="/api/cryptos")

    @router.post("/upload", response_model=SymbolSummaryResponse)
    def upload_file(file: UploadFile = File(...)):
        """Ingest a SYMBOL_values.csv file and return the recomputed summary."""
        try:
            content = file.file.read()
        except Exception:
            logger.exception("Failed to read uploaded file %r", file.filename)
            return _render(Outcome.computation_failure(PROCESSING_FAILED_MSG), None)
        outcome = ingest_uc.execute(file.filename, content)
        return _render(outcome, SymbolSummaryResponse.from_entity)

    @router.get("/sorted/{sorting_mode}", response_model=list[str])
    def get_sorted_symbols(sorting_mode: str):
        """Return known symbols ordered by *sorting_mode* (case ignored)."""
        return _render(sorted_uc.execute(sorting_mode), list)

    @router.get("/metadata/{symbol}", response_model=SymbolMetadataResponse)
    def get_symbol_metadata(symbol: str):
        """Return oldest, newest, min and max prices for *symbol*."""
        return _render(
            summary_uc.execute(symbol),
            lambda s: SymbolMetadataResponse(
                oldest_price=s.oldest_price,
                newest_price=s.newest_price,
                min_price=s.min_price,
                max_price=s.max_price,
            ),
        )

    @router.get("/highestNormalizedForDay/{day}", response_model=BestMoverResponse)
    def get_highest_normalized_for_day(day: str):
        """Return the symbol with the highest normalized range on *day* (YYYY-MM-DD)."""
        return _render(
            best_mover_uc.execute(day),
            lambda symbol: BestMoverResponse(date=day, symbol=symbol),
        )

    return router
