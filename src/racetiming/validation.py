"""Duration-based classification of race attempts."""

from __future__ import annotations

from collections.abc import Iterable

from racetiming.config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from racetiming.models.attempt import AttemptStatus, RaceAttempt


def classify_duration(
    duration: float | None,
    config: AnalysisConfig = DEFAULT_ANALYSIS_CONFIG,
) -> AttemptStatus:
    """Map a duration onto a status using the configured plausibility bounds."""
    if duration is None:
        return AttemptStatus.DNF
    if duration < config.min_reasonable_race_time:
        return AttemptStatus.INVALID_TOO_FAST
    if duration > config.max_reasonable_race_time:
        return AttemptStatus.INVALID_TOO_SLOW
    return AttemptStatus.COMPLETED


def validate_race_durations(
    attempts: Iterable[RaceAttempt],
    config: AnalysisConfig = DEFAULT_ANALYSIS_CONFIG,
) -> list[RaceAttempt]:
    """Return copies of *attempts* with the status recomputed from the duration alone."""
    return [
        attempt.model_copy(update={"status": classify_duration(attempt.duration, config)})
        for attempt in attempts
    ]
