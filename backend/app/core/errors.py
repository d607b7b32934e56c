"""Error taxonomy for stock data requests.

Each error carries the HTTP status it is surfaced with, so the API layer
can translate any of them into a JSON error body without a lookup table.
"""


class StockDataError(Exception):
    """Base exception for all stock data errors."""

    status_code: int = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class InvalidRequest(StockDataError):
    """Raised when the caller's parameters are missing or malformed."""

    status_code = 400


class NoData(StockDataError):
    """Raised when a valid request yields zero data points."""

    status_code = 404


class UpstreamError(StockDataError):
    """Raised on provider failure, malformed payload, or network failure."""

    status_code = 500

    def __init__(self, *, details: str | None = None, message: str = "Failed to fetch stock data"):
        super().__init__(message, details)
