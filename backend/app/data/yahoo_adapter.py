"""Yahoo Finance chart adapter — equity OHLC history from the public v8 chart API."""

import urllib.parse

import httpx
import pandas as pd

from backend.app.config import get_settings
from backend.app.core.errors import NoData, UpstreamError
from backend.app.core.ranges import QueryParameters
from backend.app.data.base import OHLC_COLUMNS, ChartDataAdapter
from backend.app.logging_config import get_logger

logger = get_logger("yahoo")

CHART_PATH = "/v8/finance/chart/{symbol}"

PRICE_FIELDS = ("open", "high", "low", "close")


def raise_for_chart_error(payload: dict) -> None:
    """Raise UpstreamError if the payload carries a provider error object."""
    chart = payload.get("chart") if isinstance(payload, dict) else None
    if not isinstance(chart, dict):
        return
    error = chart.get("error")
    if not error:
        return
    if isinstance(error, dict):
        description = error.get("description") or error.get("code")
    else:
        description = str(error)
    raise UpstreamError(details=description or "Unknown upstream error")


def normalize_chart(payload: dict) -> pd.DataFrame:
    """
    Zip the chart payload's parallel arrays into an OHLC frame.

    Yahoo returns ``timestamp`` (epoch seconds) alongside
    ``indicators.quote[0].{open,high,low,close}``; all must be present and
    of equal length. Yahoo omits ``timestamp`` entirely when the requested
    window holds no points, so a missing or empty timestamp array is NoData.

    Returns:
        DataFrame with columns [date, open, high, low, close], ascending by
        date, one row per date (last occurrence wins).
    """
    chart = payload.get("chart") if isinstance(payload, dict) else None
    if not isinstance(chart, dict):
        raise UpstreamError(details="Malformed chart response: missing 'chart'")

    result = chart.get("result")
    if not result or not isinstance(result[0], dict):
        raise UpstreamError(details="Malformed chart response: missing 'result'")
    r = result[0]

    timestamps = r.get("timestamp") or []
    if not isinstance(timestamps, list):
        raise UpstreamError(details="Malformed chart response: 'timestamp' is not an array")
    if not timestamps:
        raise NoData("No data available for the specified period")

    quotes = (r.get("indicators") or {}).get("quote") or []
    if not quotes or not isinstance(quotes[0], dict):
        raise UpstreamError(details="Malformed chart response: missing 'indicators.quote'")
    quote = quotes[0]

    columns = {}
    for field in PRICE_FIELDS:
        values = quote.get(field)
        if not isinstance(values, list):
            raise UpstreamError(details=f"Malformed chart response: missing '{field}' array")
        if len(values) != len(timestamps):
            raise UpstreamError(
                details=f"Malformed chart response: '{field}' has {len(values)} points, "
                f"expected {len(timestamps)}"
            )
        columns[field] = values

    try:
        df = pd.DataFrame({
            "date": pd.to_datetime(pd.Series(timestamps, dtype="int64"), unit="s", utc=True),
            **{field: pd.to_numeric(pd.Series(values, dtype="object")) for field, values in columns.items()},
        })
    except (ValueError, TypeError) as e:
        raise UpstreamError(details=f"Malformed chart response: {e}") from e

    df = (
        df[OHLC_COLUMNS]
        .sort_values("date", kind="stable")
        .drop_duplicates("date", keep="last")
        .reset_index(drop=True)
    )
    return df


class YahooChartAdapter(ChartDataAdapter):
    """Fetches equity OHLC history from the Yahoo Finance chart endpoint."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        settings = get_settings()
        self._base_url = settings.yahoo_base_url.rstrip("/")
        self._user_agent = settings.yahoo_user_agent
        self._timeout = settings.upstream_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return "yahoo"

    async def connect(self) -> None:
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            headers={"User-Agent": self._user_agent},
            transport=self._transport,
        )
        logger.debug("connected", adapter=self.name)

    async def disconnect(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def chart_url(self, symbol: str) -> str:
        encoded = urllib.parse.quote(symbol, safe="")
        return self._base_url + CHART_PATH.format(symbol=encoded)

    async def fetch_ohlcv(self, symbol: str, query: QueryParameters) -> pd.DataFrame:
        if not self._client:
            await self.connect()

        symbol = symbol.strip().upper()
        params = query.to_params()

        try:
            resp = await self._client.get(self.chart_url(symbol), params=params)
        except httpx.TimeoutException as e:
            logger.warning("yahoo_timeout", symbol=symbol, timeout=self._timeout)
            raise UpstreamError(details=f"Upstream request timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            logger.warning("yahoo_request_failed", symbol=symbol, error=str(e))
            raise UpstreamError(details=f"Upstream request failed: {e}") from e

        try:
            payload = resp.json()
        except ValueError as e:
            logger.warning("yahoo_invalid_json", symbol=symbol, status=resp.status_code)
            raise UpstreamError(details=f"Upstream returned a non-JSON response (HTTP {resp.status_code})") from e

        raise_for_chart_error(payload)
        if resp.is_error:
            logger.warning("yahoo_http_error", symbol=symbol, status=resp.status_code)
            raise UpstreamError(details=f"Upstream returned HTTP {resp.status_code}")

        df = normalize_chart(payload)
        logger.info("yahoo_fetched", symbol=symbol, interval=query.interval, range=query.range, rows=len(df))
        return df
