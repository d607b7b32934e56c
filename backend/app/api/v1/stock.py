"""Stock price endpoints — OHLC history for charting."""

from fastapi import APIRouter, Depends, Query

from backend.app.api.deps import get_chart_adapter
from backend.app.core.ranges import list_periods
from backend.app.core.resolver import resolve
from backend.app.data.base import ChartDataAdapter
from backend.app.schemas.ohlcv import ErrorResponse, OHLCRecordResponse, PeriodInfo

router = APIRouter(prefix="/stock", tags=["stock"])


@router.get(
    "",
    response_model=list[OHLCRecordResponse],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_stock_data(
    symbol: str | None = Query(None, description="Ticker symbol, e.g. AAPL"),
    period: str | None = Query(None, description="Preset: 5m,15m,30m,1h,1d,5d,1mo,custom"),
    from_: str | None = Query(None, alias="from", description="ISO-8601 start (custom only)"),
    to: str | None = Query(None, description="ISO-8601 end (custom only)"),
    adapter: ChartDataAdapter = Depends(get_chart_adapter),
):
    """
    Get OHLC history for a symbol, ascending by date.

    Example:
        GET /api/v1/stock?symbol=AAPL&period=1d
    """
    candles = await resolve(symbol, period, from_, to, adapter=adapter)
    return [c.to_dict() for c in candles]


@router.get("/periods", response_model=list[PeriodInfo])
async def get_periods():
    """Supported period presets and the upstream parameters they map to."""
    return list_periods()
