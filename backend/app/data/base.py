"""Abstract chart data adapter — every upstream price provider implements this."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

import pandas as pd

from backend.app.core.ranges import QueryParameters

OHLC_COLUMNS = ["date", "open", "high", "low", "close"]


@dataclass
class Candle:
    date: datetime
    open: float | None
    high: float | None
    low: float | None
    close: float | None

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
        }


def candles_from_frame(df: pd.DataFrame) -> list[Candle]:
    """Convert an OHLC frame to candles; NaN prices become None."""
    candles = []
    for row in df.itertuples(index=False):
        candles.append(Candle(
            date=row.date.to_pydatetime(),
            open=None if pd.isna(row.open) else float(row.open),
            high=None if pd.isna(row.high) else float(row.high),
            low=None if pd.isna(row.low) else float(row.low),
            close=None if pd.isna(row.close) else float(row.close),
        ))
    return candles


class ChartDataAdapter(ABC):
    """
    Unified interface for a chart data provider.

    Each adapter owns its HTTP client for the lifetime of one request:
    ``connect()`` before fetching, ``disconnect()`` when done.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Adapter identifier (e.g., 'yahoo')."""
        ...

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the HTTP client."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the HTTP client."""
        ...

    @abstractmethod
    async def fetch_ohlcv(self, symbol: str, query: QueryParameters) -> pd.DataFrame:
        """
        Fetch OHLC candles for one symbol.

        Returns:
            DataFrame with columns [date, open, high, low, close], ascending
            by date with unique dates.
        """
        ...
