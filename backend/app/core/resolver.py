"""Resolve a (symbol, period) request into a time-ordered list of candles."""

from datetime import datetime

from backend.app.core.errors import InvalidRequest
from backend.app.core.ranges import parse_period, resolve_query
from backend.app.data.base import Candle, ChartDataAdapter, candles_from_frame
from backend.app.data.yahoo_adapter import YahooChartAdapter
from backend.app.logging_config import get_logger

logger = get_logger("resolver")


async def resolve(
    symbol: str | None,
    period: str | None,
    from_: str | datetime | None = None,
    to: str | datetime | None = None,
    adapter: ChartDataAdapter | None = None,
) -> list[Candle]:
    """
    Fetch OHLC history for ``symbol`` over the preset ``period``.

    Validates the request, maps the period to upstream query parameters,
    performs exactly one upstream fetch and returns candles ascending by
    date. Nothing is cached.

    Raises:
        InvalidRequest: symbol/period missing, unknown period, or a custom
            period without valid ``from``/``to`` bounds.
        NoData: the provider returned zero data points.
        UpstreamError: provider error payload, malformed data, or a
            network failure.
    """
    if symbol is None or not symbol.strip() or period is None or not period.strip():
        raise InvalidRequest("Missing symbol or period")

    query = resolve_query(parse_period(period), from_, to)
    logger.info("fetching_stock_data", symbol=symbol, period=period, **query.to_params())

    adapter = adapter or YahooChartAdapter()
    await adapter.connect()
    try:
        df = await adapter.fetch_ohlcv(symbol, query)
    finally:
        await adapter.disconnect()

    candles = candles_from_frame(df)
    logger.info("stock_data_received", symbol=symbol, period=period, rows=len(candles))
    return candles
