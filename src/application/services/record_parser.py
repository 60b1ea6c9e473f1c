"""
Application service: parse one uploaded batch into PricePoint entities.
Depends only on Domain entities and exceptions, no infrastructure imports.

Batch format:
    timestamp,symbol,price          <- header, always skipped
    1641009600000,BTC,46813.21      <- epoch millis, symbol, price

No quoting or escaping is supported. The whole batch is rejected on the first
bad line so a partially valid upload is never ingested.
"""

import re
from datetime import datetime, timedelta, timezone

from src.domain.entities.price_point import PricePoint
from src.domain.exceptions import MalformedNumberError, MalformedRecordError, SymbolMismatchError

FIELD_SEPARATOR = ","
FIELDS_PER_RECORD = 3

# only LF, CRLF and CR end a line, unlike str.splitlines()
LINE_BREAK = re.compile(r"\r\n|\r|\n")

TIMESTAMP_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
PRICE_PATTERN = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)
# a day of margin on both ends keeps every time zone's local date representable
MIN_TIMESTAMP_MS = (datetime(1, 1, 2, tzinfo=timezone.utc) - _EPOCH) // _ONE_MS
MAX_TIMESTAMP_MS = (datetime(9999, 12, 30, tzinfo=timezone.utc) - _EPOCH) // _ONE_MS


def _read_lines(content: str) -> list[str]:
    lines = LINE_BREAK.split(content)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _split_fields(line: str) -> list[str]:
    """Split on commas, dropping trailing empty fields (``"1,btc,2.0,"`` has 3)."""
    fields = line.split(FIELD_SEPARATOR)
    while len(fields) > 1 and fields[-1] == "":
        fields.pop()
    return fields


def _parse_timestamp(raw: str, line_no: int) -> int:
    if not TIMESTAMP_PATTERN.fullmatch(raw):
        raise MalformedNumberError(f"Line {line_no}: wrong number provided for timestamp {raw!r}")
    timestamp = int(raw)
    if not MIN_TIMESTAMP_MS <= timestamp <= MAX_TIMESTAMP_MS:
        raise MalformedNumberError(f"Line {line_no}: timestamp {raw} is out of range")
    return timestamp


def _parse_price(raw: str, line_no: int) -> float:
    if not PRICE_PATTERN.fullmatch(raw):
        raise MalformedNumberError(f"Line {line_no}: wrong number provided for price {raw!r}")
    return float(raw)


def parse_price_batch(content: str, expected_symbol: str) -> list[PricePoint]:
    """Parse *content* and return its points in file order.

    Args:
        content:         Decoded batch text, header line included.
        expected_symbol: Symbol every record must carry (case-insensitive).

    Raises:
        MalformedRecordError: a line does not have exactly three fields.
        MalformedNumberError: timestamp or price is not a plain ASCII number,
                              or the timestamp falls outside years 1-9999.
        SymbolMismatchError:  a record names a different symbol.
    """
    symbol = expected_symbol.lower()
    points: list[PricePoint] = []
    # line 1 is the header
    for line_no, line in enumerate(_read_lines(content)[1:], start=2):
        fields = _split_fields(line)
        if len(fields) != FIELDS_PER_RECORD:
            raise MalformedRecordError(
                f"Line {line_no}: expected {FIELDS_PER_RECORD} fields, got {len(fields)}"
            )
        raw_timestamp, raw_symbol, raw_price = fields
        timestamp = _parse_timestamp(raw_timestamp, line_no)
        price = _parse_price(raw_price, line_no)

        parsed_symbol = raw_symbol.lower()
        if parsed_symbol != symbol:
            raise SymbolMismatchError(symbol, parsed_symbol)

        points.append(PricePoint(timestamp=timestamp, symbol=symbol, price=price))
    return points
