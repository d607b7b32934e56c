"""Period presets → upstream query parameters.

The UI offers a handful of fixed time-range presets. Each maps to an
(interval, range) pair understood by the chart provider; ``custom``
additionally carries explicit epoch-second bounds.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

import pandas as pd

from backend.app.core.errors import InvalidRequest
from backend.app.logging_config import get_logger

logger = get_logger("ranges")


class Period(str, Enum):
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"
    H1 = "1h"
    D1 = "1d"
    D5 = "5d"
    MO1 = "1mo"
    CUSTOM = "custom"


CUSTOM_RANGE = "custom"

# period -> (interval, range)
PERIOD_MAP: dict[Period, tuple[str, str]] = {
    Period.M5: ("5m", "1d"),
    Period.M15: ("15m", "1d"),
    Period.M30: ("30m", "1d"),
    Period.H1: ("60m", "1d"),
    Period.D1: ("1d", "5d"),
    Period.D5: ("1d", "1mo"),
    Period.MO1: ("1d", "1mo"),
    Period.CUSTOM: ("1d", CUSTOM_RANGE),
}

# Unrecognised presets fall back to daily candles over one month
DEFAULT_QUERY = ("1d", "1mo")


@dataclass(frozen=True)
class QueryParameters:
    interval: str
    range: str
    period1: int | None = None
    period2: int | None = None

    @property
    def is_custom(self) -> bool:
        return self.range == CUSTOM_RANGE

    def to_params(self) -> dict:
        """Query string for the chart endpoint.

        Explicit bounds replace the lookback span upstream, so ``range`` is
        only sent for the preset periods.
        """
        if self.is_custom:
            return {
                "interval": self.interval,
                "period1": self.period1,
                "period2": self.period2,
            }
        return {"interval": self.interval, "range": self.range}


def parse_period(value: str | None) -> Period | None:
    """Parse a period preset. Unrecognised values return None (default range)."""
    if value is None or not value.strip():
        raise InvalidRequest("Missing symbol or period")
    try:
        return Period(value.strip())
    except ValueError:
        logger.warning("unknown_period", period=value, interval=DEFAULT_QUERY[0], range=DEFAULT_QUERY[1])
        return None


def parse_bound(value: str | datetime, field: str) -> datetime:
    """Parse a strict ISO-8601 date/datetime. Naive values are taken as UTC."""
    try:
        if isinstance(value, datetime):
            ts = pd.Timestamp(value)
        else:
            ts = pd.Timestamp(datetime.fromisoformat(value.strip()))
    except (ValueError, TypeError, AttributeError):
        raise InvalidRequest(f"Invalid '{field}' date: {value}")
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts.tz_convert("UTC").to_pydatetime()


def to_epoch_seconds(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return math.floor(dt.timestamp())


def resolve_query(
    period: Period | None,
    from_: str | datetime | None = None,
    to: str | datetime | None = None,
) -> QueryParameters:
    if period is None:
        return QueryParameters(*DEFAULT_QUERY)

    interval, rng = PERIOD_MAP[period]
    if period is not Period.CUSTOM:
        return QueryParameters(interval=interval, range=rng)

    if not from_ or not to:
        raise InvalidRequest("Missing date range for custom period")

    start = parse_bound(from_, "from")
    end = parse_bound(to, "to")
    if start > end:
        raise InvalidRequest("'from' must not be after 'to'")

    return QueryParameters(
        interval=interval,
        range=rng,
        period1=to_epoch_seconds(start),
        period2=to_epoch_seconds(end),
    )


def list_periods() -> list[dict]:
    return [
        {
            "period": p.value,
            "interval": interval,
            "range": rng,
            "requires_bounds": p is Period.CUSTOM,
        }
        for p, (interval, rng) in PERIOD_MAP.items()
    ]
