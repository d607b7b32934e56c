"""Shared API dependencies."""

from backend.app.data.base import ChartDataAdapter
from backend.app.data.yahoo_adapter import YahooChartAdapter


def get_chart_adapter() -> ChartDataAdapter:
    """One adapter per request; the resolver connects and disconnects it."""
    return YahooChartAdapter()
