import pytest

from src.application.use_cases import ingest_price_batch
from src.application.use_cases.get_best_mover_for_day import (
    GetBestMoverForDayUseCase,
    parse_calendar_date,
)
from src.application.use_cases.get_sorted_symbols import GetSortedSymbolsUseCase
from src.application.use_cases.get_symbol_summary import GetSymbolSummaryUseCase
from src.application.use_cases.ingest_price_batch import (
    EMPTY_FILE_MSG,
    NO_DATA_MSG,
    PROCESSING_FAILED_MSG,
    WRONG_FILENAME_MSG,
    IngestPriceBatchUseCase,
)
from src.domain.entities.outcome import OutcomeKind

from conftest import HOUR_MS, JAN_1_TS, make_batch


@pytest.fixture
def ingest(store, settings):
    return IngestPriceBatchUseCase(store, settings.allowed_symbols)


# ============================================================
# ingest
# ============================================================

def test_ingest_stores_summary_and_points(ingest, store):
    outcome = ingest.execute("BTC_values.csv", make_batch("BTC", [(JAN_1_TS, 46813.21)]))

    assert outcome.ok
    assert outcome.payload.symbol == "btc"
    assert store.summary_for("btc") == outcome.payload
    assert len(store.points_for(store.day_for(JAN_1_TS), "btc")) == 1


def test_reingesting_same_batch_is_idempotent(ingest, store):
    body = make_batch("eth", [(JAN_1_TS, 10.0), (JAN_1_TS + HOUR_MS, 12.0)])

    first = ingest.execute("ETH_values.csv", body)
    second = ingest.execute("ETH_values.csv", body)

    assert first.payload == second.payload
    assert len(store.points_for(store.day_for(JAN_1_TS), "eth")) == 2


def test_latest_batch_replaces_summary(ingest, store):
    ingest.execute("ltc_values.csv", make_batch("ltc", [(JAN_1_TS, 10.0), (JAN_1_TS + 1, 20.0)]))
    ingest.execute("ltc_values.csv", make_batch("ltc", [(JAN_1_TS + 2, 50.0)]))

    summary = store.summary_for("ltc")
    assert summary.min_price == summary.max_price == 50.0
    assert summary.normalized_range == 0.0


@pytest.mark.parametrize(
    "filename, content, message",
    [
        ("BTC_values.csv", b"", EMPTY_FILE_MSG),
        (None, b"x", WRONG_FILENAME_MSG),
        ("abraKadabra", b"x", WRONG_FILENAME_MSG),
        ("BTC_values.csv.bak", b"x", WRONG_FILENAME_MSG),
        ("B_TC_values.csv", b"x", WRONG_FILENAME_MSG),
        ("abraKadabra_values.csv", b"x", "Currently symbol abrakadabra is not allowed"),
        ("BTC_values.csv", b"timestamp\n\xff\xfe", "File is not valid UTF-8 text"),
    ],
)
def test_ingest_rejects_bad_uploads(ingest, store, filename, content, message):
    outcome = ingest.execute(filename, content)

    assert outcome.kind is OutcomeKind.VALIDATION_ERROR
    assert outcome.message == message
    assert store.sorted_symbols(lambda a, b: 0) == []


def test_ingest_rejects_symbol_mismatch_without_partial_writes(ingest, store):
    body = make_batch("BTC", [(JAN_1_TS, 1.0)]) + b"1641013200000,ETH,46813.21\n"

    outcome = ingest.execute("BTC_values.csv", body)

    assert outcome.kind is OutcomeKind.VALIDATION_ERROR
    assert outcome.message == "Expected symbol btc, but got eth"
    assert store.summary_for("btc") is None
    assert store.points_for(store.day_for(JAN_1_TS), "btc") == frozenset()


@pytest.mark.parametrize("row", ["16410960000o,BTC,46813.21", "1641009600000,BTC,46i13.21"])
def test_ingest_rejects_malformed_numbers(ingest, row):
    outcome = ingest.execute("BTC_values.csv", f"timestamp,symbol,price\n{row}\n".encode())

    assert outcome.kind is OutcomeKind.VALIDATION_ERROR
    assert "wrong number" in outcome.message


def test_header_only_upload_is_a_processing_failure(ingest):
    outcome = ingest.execute("XRP_values.csv", b"timestamp,symbol,price\n")

    assert outcome.kind is OutcomeKind.COMPUTATION_FAILURE
    assert outcome.message == NO_DATA_MSG


def test_summary_failure_is_logged_and_reported(ingest, store, monkeypatch, caplog):
    def broken(symbol, points):
        raise RuntimeError("executor died")

    monkeypatch.setattr(ingest_price_batch, "calculate_summary", broken)

    outcome = ingest.execute("BTC_values.csv", make_batch("btc", [(JAN_1_TS, 1.0)]))

    assert outcome.kind is OutcomeKind.COMPUTATION_FAILURE
    assert outcome.message == PROCESSING_FAILED_MSG
    assert store.summary_for("btc") is None
    assert any(r.levelname == "ERROR" and r.exc_info for r in caplog.records)


# ============================================================
# queries
# ============================================================

def test_sorted_symbols_outcomes(ingest, store):
    use_case = GetSortedSymbolsUseCase(store)

    assert use_case.execute("normalized_desc").kind is OutcomeKind.NOT_FOUND

    ingest.execute("BTC_values.csv", make_batch("btc", [(JAN_1_TS, 100.0), (JAN_1_TS + 1, 150.0)]))
    ingest.execute("ETH_values.csv", make_batch("eth", [(JAN_1_TS, 100.0), (JAN_1_TS + 1, 300.0)]))

    outcome = use_case.execute("NORMALIZED_DESC")
    assert outcome.ok
    assert outcome.payload == ["eth", "btc"]


def test_unknown_sorting_mode_lists_valid_names(store):
    outcome = GetSortedSymbolsUseCase(store).execute("abra-kadabra")

    assert outcome.kind is OutcomeKind.VALIDATION_ERROR
    assert "abra-kadabra" in outcome.message
    assert "normalized_desc" in outcome.message


def test_symbol_summary_lookup_ignores_case(ingest, store):
    ingest.execute("DOGE_values.csv", make_batch("doge", [(JAN_1_TS, 0.17)]))
    use_case = GetSymbolSummaryUseCase(store)

    assert use_case.execute("DoGe").payload.oldest_price == 0.17

    missing = use_case.execute("abraKadabra")
    assert missing.kind is OutcomeKind.NOT_FOUND
    assert missing.message == "Nothing was found for symbol abraKadabra"


def test_best_mover_outcomes(ingest, store):
    ingest.execute("BTC_values.csv", make_batch("btc", [(JAN_1_TS, 100.0), (JAN_1_TS + 1, 110.0)]))
    use_case = GetBestMoverForDayUseCase(store)

    assert use_case.execute("2022-01-01").payload == "btc"

    empty = use_case.execute("2099-01-01")
    assert empty.kind is OutcomeKind.NOT_FOUND
    assert empty.message == "No symbol data registered for date: 2099-01-01"

    bad = use_case.execute("22-01-5")
    assert bad.kind is OutcomeKind.VALIDATION_ERROR
    assert bad.message == "Error while parsing provided date: 22-01-5"


@pytest.mark.parametrize("value", ["22-01-5", "20220105", "2022-1-05", "2022-02-30", "2022-W01-1", ""])
def test_parse_calendar_date_is_strict(value):
    with pytest.raises(ValueError):
        parse_calendar_date(value)


def test_out_of_range_timestamp_leaves_previous_batch_untouched(ingest, store):
    ingest.execute("BTC_values.csv", make_batch("btc", [(JAN_1_TS, 5.0)]))
    before_summary = store.summary_for("btc")
    before_points = store.points_for(store.day_for(JAN_1_TS), "btc")

    outcome = ingest.execute(
        "BTC_values.csv",
        make_batch("btc", [(JAN_1_TS + 1, 1.0), (300000000000000, 2.0)]),
    )

    assert outcome.kind is OutcomeKind.VALIDATION_ERROR
    assert "out of range" in outcome.message
    assert store.summary_for("btc") == before_summary
    assert store.points_for(store.day_for(JAN_1_TS), "btc") == before_points
