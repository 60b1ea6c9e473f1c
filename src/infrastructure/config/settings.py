"""
Environment-driven configuration for the analytics service.

Read once by each Composition Root (FastAPI app, CSV report CLI) after
load_dotenv(), then passed down explicitly; nothing else reads os.environ.
"""

import os
from dataclasses import dataclass
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_ALLOWED_SYMBOLS = ("btc", "doge", "eth", "ltc", "xrp")


def _parse_symbols(raw: str) -> frozenset[str]:
    return frozenset(s.strip().lower() for s in raw.split(",") if s.strip())


def _load_time_zone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone: {name!r}") from exc


@dataclass(frozen=True)
class Settings:
    allowed_symbols: frozenset[str] = frozenset(DEFAULT_ALLOWED_SYMBOLS)
    time_zone: str = "UTC"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        _load_time_zone(self.time_zone)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ALLOWED_SYMBOLS, ANALYTICS_TIME_ZONE and LOG_LEVEL.

        Raises:
            ValueError: if ANALYTICS_TIME_ZONE is not a known IANA zone.
        """
        return cls(
            allowed_symbols=_parse_symbols(
                os.environ.get("ALLOWED_SYMBOLS", ",".join(DEFAULT_ALLOWED_SYMBOLS))
            ),
            time_zone=os.environ.get("ANALYTICS_TIME_ZONE", "UTC"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def tz(self) -> tzinfo:
        return _load_time_zone(self.time_zone)
