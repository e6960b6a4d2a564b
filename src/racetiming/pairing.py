"""Pair START and FINISH reads into race attempts.

Within a session each bib is paired on its own. The sequential strategy
runs first; if it yields more than one completed attempt for the bib the
result is treated as ambiguous and the proximity strategy is used instead.

Finishes left without a start become orphan attempts: the start is assumed
to have been missed about a minute before the finish.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from enum import Enum

from racetiming._logging import log_stage
from racetiming.config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from racetiming.models.attempt import AttemptStatus, RaceAttempt
from racetiming.models.record import TimingPoint, TimingRecord
from racetiming.models.session import Session
from racetiming.validation import validate_race_durations

logger = logging.getLogger(__name__)

ORPHAN_ASSUMED_DURATION = 60.0


class PairingStrategy(str, Enum):
    """Available ways of matching starts to finishes."""

    SEQUENTIAL = "sequential"
    PROXIMITY = "proximity"


def _by_time(record: TimingRecord) -> float:
    return record.time


def _start_attempt(
    start: TimingRecord, finish: TimingRecord | None, session_id: str,
) -> RaceAttempt:
    if finish is None:
        return RaceAttempt(
            bib_number=start.bib_number,
            start_time=start.time,
            status=AttemptStatus.DNF,
            session_id=session_id,
        )
    return RaceAttempt(
        bib_number=start.bib_number,
        start_time=start.time,
        finish_time=finish.time,
        duration=finish.time - start.time,
        status=AttemptStatus.COMPLETED,
        session_id=session_id,
    )


def orphan_attempt(finish: TimingRecord, session_id: str) -> RaceAttempt:
    """Synthetic attempt for a finish that has no start to pair with."""
    return RaceAttempt(
        bib_number=finish.bib_number,
        start_time=finish.time - ORPHAN_ASSUMED_DURATION,
        finish_time=finish.time,
        duration=ORPHAN_ASSUMED_DURATION,
        status=AttemptStatus.INVALID_TOO_FAST,
        session_id=session_id,
    )


def sequential_pairing(
    starts: Sequence[TimingRecord],
    finishes: Sequence[TimingRecord],
    session_id: str,
) -> list[RaceAttempt]:
    """Walk starts in time order with one forward-only cursor over the finishes.

    Each start takes the next finish strictly after it. Finishes the cursor
    passes over on the way are never revisited; they become orphans along
    with any finishes left after the last start.
    """
    sorted_starts = sorted(starts, key=_by_time)
    sorted_finishes = sorted(finishes, key=_by_time)

    attempts: list[RaceAttempt] = []
    skipped: list[TimingRecord] = []
    cursor = 0

    for start in sorted_starts:
        matched: TimingRecord | None = None
        while cursor < len(sorted_finishes):
            finish = sorted_finishes[cursor]
            cursor += 1
            if finish.time > start.time:
                matched = finish
                break
            skipped.append(finish)
        attempts.append(_start_attempt(start, matched, session_id))

    unconsumed = skipped + sorted_finishes[cursor:]
    attempts.extend(orphan_attempt(finish, session_id) for finish in unconsumed)
    return attempts


def proximity_pairing(
    starts: Sequence[TimingRecord],
    finishes: Sequence[TimingRecord],
    session_id: str,
) -> list[RaceAttempt]:
    """Give each start, in time order, the closest still-available finish after it."""
    pool = sorted(finishes, key=_by_time)
    attempts: list[RaceAttempt] = []

    for start in sorted(starts, key=_by_time):
        candidates = [
            (finish.time - start.time, index)
            for index, finish in enumerate(pool)
            if finish.time > start.time
        ]
        matched = pool.pop(min(candidates)[1]) if candidates else None
        attempts.append(_start_attempt(start, matched, session_id))

    attempts.extend(orphan_attempt(finish, session_id) for finish in pool)
    return attempts


_STRATEGIES: dict[
    PairingStrategy,
    Callable[[Sequence[TimingRecord], Sequence[TimingRecord], str], list[RaceAttempt]],
] = {
    PairingStrategy.SEQUENTIAL: sequential_pairing,
    PairingStrategy.PROXIMITY: proximity_pairing,
}


def pair_records(
    starts: Sequence[TimingRecord],
    finishes: Sequence[TimingRecord],
    session_id: str,
    strategy: PairingStrategy = PairingStrategy.SEQUENTIAL,
) -> list[RaceAttempt]:
    """Pair with the named strategy."""
    return _STRATEGIES[strategy](starts, finishes, session_id)


def has_ambiguous_pairs(attempts: Iterable[RaceAttempt]) -> bool:
    """True if any bib has more than one completed attempt."""
    completed = Counter(
        a.bib_number for a in attempts if a.status is AttemptStatus.COMPLETED
    )
    return any(count > 1 for count in completed.values())


def pair_bib(
    starts: Sequence[TimingRecord],
    finishes: Sequence[TimingRecord],
    session_id: str,
) -> tuple[PairingStrategy, list[RaceAttempt]]:
    """Pair one bib's reads, falling back to proximity pairing when ambiguous."""
    attempts = pair_records(starts, finishes, session_id, PairingStrategy.SEQUENTIAL)
    if not has_ambiguous_pairs(attempts):
        return PairingStrategy.SEQUENTIAL, attempts
    return PairingStrategy.PROXIMITY, pair_records(
        starts, finishes, session_id, PairingStrategy.PROXIMITY,
    )


def group_by_bib(records: Iterable[TimingRecord]) -> dict[str, list[TimingRecord]]:
    """Group reads by bib, keeping first-encounter order of bibs and of reads."""
    groups: dict[str, list[TimingRecord]] = {}
    for record in records:
        groups.setdefault(record.bib_number, []).append(record)
    return groups


@log_stage
def pair_starts_and_finishes(
    session: Session,
    config: AnalysisConfig = DEFAULT_ANALYSIS_CONFIG,
) -> list[RaceAttempt]:
    """Build validated attempts for every bib in *session*."""
    attempts: list[RaceAttempt] = []

    for bib, records in group_by_bib(session.records).items():
        starts = [r for r in records if r.timing_point is TimingPoint.START]
        finishes = [r for r in records if r.timing_point is TimingPoint.FINISH]

        strategy, bib_attempts = pair_bib(starts, finishes, session.id)
        logger.debug(
            "pairing: session=%s bib=%s strategy=%s starts=%d finishes=%d",
            session.id, bib, strategy.value, len(starts), len(finishes),
        )
        attempts.extend(validate_race_durations(bib_attempts, config))

    return attempts
