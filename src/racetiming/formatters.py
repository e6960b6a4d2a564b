"""Formatting helpers for printing analysis results."""

from __future__ import annotations

import math
from datetime import UTC, datetime

from racetiming.models.attempt import AttemptStatus

STATUS_LABELS: dict[AttemptStatus, str] = {
    AttemptStatus.COMPLETED: "Completed",
    AttemptStatus.DNF: "DNF",
    AttemptStatus.INVALID_TOO_FAST: "Too fast",
    AttemptStatus.INVALID_TOO_SLOW: "Too slow",
}


def format_race_time(seconds: float | None) -> str:
    """Format seconds as MM:SS.cc (truncated), or 'N/A' if None."""
    if seconds is None:
        return "N/A"
    minutes = math.floor(seconds / 60)
    secs = math.floor(seconds % 60)
    hundredths = math.floor((seconds % 1) * 100)
    return f"{minutes:02d}:{secs:02d}.{hundredths:02d}"


def format_clock_time(value: datetime | None) -> str:
    """Format a read's UTC timestamp as a wall-clock string, or 'N/A' if None."""
    if value is None:
        return "N/A"
    return value.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S")


def format_status(status: AttemptStatus) -> str:
    return STATUS_LABELS[status]


def format_consistency(score: float) -> str:
    """Format a consistency score as a whole percentage."""
    return f"{score:.0f}%"
