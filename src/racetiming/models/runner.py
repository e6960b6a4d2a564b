"""Live runner tracking model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


def calculate_duration(start_ms: int | None, end_ms: int | None) -> float | None:
    """Elapsed seconds between two epoch-millisecond stamps, or None if either is missing."""
    if start_ms is None or end_ms is None:
        return None
    return (end_ms - start_ms) / 1000


class Runner(BaseModel):
    """A named entry in the runner store with server-side start and end stamps."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | None = None
    name: str
    start_time: int | None = Field(default=None, alias="startTime")
    end_time: int | None = Field(default=None, alias="endtime")

    @property
    def is_active(self) -> bool:
        """True while the runner has no end time."""
        return self.end_time is None

    @property
    def duration(self) -> float | None:
        """Elapsed seconds from start to end, or None while running."""
        return calculate_duration(self.start_time, self.end_time)
