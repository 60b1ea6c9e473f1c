"""
CLI entry point: ingest a directory of price files and print a ranking.

This script is a Composition Root of its own: it builds a fresh
InMemoryAnalyticsStore, pushes every ``*_values.csv`` file through the same
IngestPriceBatchUseCase the HTTP upload uses, then prints the
normalized_desc ranking with each symbol's summary.

Run:
    python -m src.infrastructure.entrypoints.csv_report data/prices
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from src.application.use_cases.get_sorted_symbols import GetSortedSymbolsUseCase
from src.application.use_cases.get_symbol_summary import GetSymbolSummaryUseCase
from src.application.use_cases.ingest_price_batch import IngestPriceBatchUseCase
from src.infrastructure.config.settings import Settings
from src.infrastructure.storage.in_memory_analytics_store import InMemoryAnalyticsStore

RANKING_MODE = "normalized_desc"


def run_report(directory: Path, settings: Settings) -> int:
    """Ingest every price file in *directory* and print the report.

    Returns:
        Process exit code: 0 when every file was ingested, 1 otherwise.
    """
    store = InMemoryAnalyticsStore(tz=settings.tz)
    ingest_uc = IngestPriceBatchUseCase(store, settings.allowed_symbols)

    files = sorted(directory.glob("*_values.csv"))
    if not files:
        print(f"No *_values.csv files found in '{directory}'.")
        return 1

    failures = 0
    for path in files:
        outcome = ingest_uc.execute(path.name, path.read_bytes())
        if outcome.ok:
            print(f"{path.name}: ingested")
        else:
            failures += 1
            print(f"{path.name}: {outcome.kind.value}: {outcome.message}")

    ranking = GetSortedSymbolsUseCase(store).execute(RANKING_MODE)
    if ranking.ok:
        summary_uc = GetSymbolSummaryUseCase(store)
        print(f"\nRanking by {RANKING_MODE}:")
        for position, symbol in enumerate(ranking.payload, start=1):
            s = summary_uc.execute(symbol).payload
            print(
                f"{position:>2}. {symbol:<6} range={s.normalized_range:.4f} "
                f"oldest={s.oldest_price} newest={s.newest_price} "
                f"min={s.min_price} max={s.max_price}"
            )
    else:
        print(f"\n{ranking.message}")

    return 1 if failures else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Rank symbols from *_values.csv price files.")
    parser.add_argument("directory", type=Path, help="Directory containing price files")
    args = parser.parse_args(argv)

    load_dotenv()
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)
    return run_report(args.directory, settings)


if __name__ == "__main__":
    sys.exit(main())
