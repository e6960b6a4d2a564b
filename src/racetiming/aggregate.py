"""Per-participant statistics over validated attempts."""

from __future__ import annotations

import statistics
from collections.abc import Iterable, Sequence

from racetiming._logging import log_stage
from racetiming.models.attempt import AttemptStatus, RaceAttempt
from racetiming.models.summary import ParticipantSummary

# Relative spread (stdev / mean) at which the score reaches zero, in percent.
ZERO_SCORE_VARIATION_PERCENT = 20.0


def consistency_score(durations: Sequence[float]) -> float:
    """Score 0-100 from the population stdev of *durations* relative to their mean.

    Fewer than two durations score 100. A spread of 20% of the mean or more
    scores 0.
    """
    if len(durations) < 2:
        return 100.0
    average = statistics.mean(durations)
    if average <= 0:
        return 0.0
    variation_percent = statistics.pstdev(durations) / average * 100
    score = 100.0 - variation_percent * (100.0 / ZERO_SCORE_VARIATION_PERCENT)
    return min(100.0, max(0.0, score))


def summarise_participant(bib_number: str, attempts: Sequence[RaceAttempt]) -> ParticipantSummary:
    """Build the summary for one bib from its attempts."""
    completed = tuple(a for a in attempts if a.status is AttemptStatus.COMPLETED)
    dnf_count = sum(1 for a in attempts if a.status is AttemptStatus.DNF)
    durations = [a.duration for a in completed if a.duration is not None]

    return ParticipantSummary(
        bib_number=bib_number,
        completed_races=completed,
        dnf_count=dnf_count,
        best_time=min(durations, default=None),
        average_time=statistics.mean(durations) if durations else None,
        consistency_score=consistency_score(durations),
    )


def _best_time_key(summary: ParticipantSummary) -> tuple[bool, float]:
    return (summary.best_time is None, summary.best_time or 0.0)


@log_stage
def generate_participant_summaries(attempts: Iterable[RaceAttempt]) -> list[ParticipantSummary]:
    """Summarise every bib, fastest best time first and bibs without one last."""
    groups: dict[str, list[RaceAttempt]] = {}
    for attempt in attempts:
        groups.setdefault(attempt.bib_number, []).append(attempt)

    summaries = [summarise_participant(bib, group) for bib, group in groups.items()]
    return sorted(summaries, key=_best_time_key)
