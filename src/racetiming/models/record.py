"""Timing read model."""

from __future__ import annotations

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class TimingPoint(str, Enum):
    """Logical meaning of a single read."""

    START = "START"
    FINISH = "FINISH"


class TimingRecord(BaseModel):
    """One physical read from a timing device."""

    model_config = ConfigDict(frozen=True)

    invalid: bool = False
    id: str = ""
    device_id: str = ""
    bib_number: str
    transponder: str = ""
    time: float
    contest_name: str = ""
    timing_point: TimingPoint
    order_id: str = ""
    hits: int | None = None
    rssi: int | None = None
    utc_time: datetime | None = None

    @field_validator("utc_time")
    @classmethod
    def _as_utc(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @property
    def utc_date(self) -> date | None:
        """UTC calendar date of the read, or None if the timestamp is missing."""
        if self.utc_time is None:
            return None
        return self.utc_time.date()
