"""Shared test fixtures."""

import httpx
import pytest

from backend.app.config import get_settings
from backend.app.data.yahoo_adapter import YahooChartAdapter
from backend.app.main import create_app

# 2024-01-02 14:30 UTC (US market open), then one point per day
BASE_TS = 1704205800
DAY = 86400


def make_chart_payload(
    timestamps: list,
    opens: list,
    highs: list,
    lows: list,
    closes: list,
    symbol: str = "AAPL",
) -> dict:
    """Build a Yahoo v8 chart response body."""
    return {
        "chart": {
            "result": [
                {
                    "meta": {"symbol": symbol, "currency": "USD", "dataGranularity": "1d"},
                    "timestamp": timestamps,
                    "indicators": {
                        "quote": [
                            {
                                "open": opens,
                                "high": highs,
                                "low": lows,
                                "close": closes,
                                "volume": [1_000_000] * len(timestamps),
                            }
                        ]
                    },
                }
            ],
            "error": None,
        }
    }


def make_error_payload(code: str, description: str) -> dict:
    return {"chart": {"result": None, "error": {"code": code, "description": description}}}


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def aapl_payload() -> dict:
    """Five aligned daily AAPL points."""
    return make_chart_payload(
        timestamps=[BASE_TS + i * DAY for i in range(5)],
        opens=[187.15, 184.22, 182.15, 181.99, 182.09],
        highs=[188.44, 185.88, 183.09, 182.76, 185.60],
        lows=[183.89, 183.43, 180.88, 180.17, 181.50],
        closes=[185.64, 184.25, 181.91, 181.18, 185.56],
    )


@pytest.fixture
def upstream():
    """
    Factory for a Yahoo adapter backed by httpx.MockTransport.

    Returns (adapter, requests) where ``requests`` collects every outbound
    httpx.Request the adapter sent.
    """

    def _make(body=None, status_code: int = 200, exc: Exception | None = None, text: str | None = None):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if exc is not None:
                raise exc
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=body)

        adapter = YahooChartAdapter(transport=httpx.MockTransport(handler))
        return adapter, requests

    return _make


@pytest.fixture
def chart_payload():
    return make_chart_payload


@pytest.fixture
def error_payload():
    return make_error_payload
