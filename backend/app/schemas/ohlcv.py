"""Pydantic schemas for OHLC data."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_serializer


class OHLCRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    open: float | None
    high: float | None
    low: float | None
    close: float | None

    @field_serializer("date")
    def serialize_date(self, value: datetime) -> str:
        # Millisecond precision with a Z suffix, as JavaScript's toISOString()
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        utc = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
        return utc.replace("+00:00", "Z")


class PeriodInfo(BaseModel):
    period: str
    interval: str
    range: str
    requires_bounds: bool


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
