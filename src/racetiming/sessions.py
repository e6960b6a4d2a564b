"""Split a stream of reads into race sessions."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from racetiming._logging import log_stage
from racetiming.config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from racetiming.models.record import TimingRecord
from racetiming.models.session import Session

logger = logging.getLogger(__name__)


def is_session_boundary(
    previous: TimingRecord,
    current: TimingRecord,
    contest_name: str,
    config: AnalysisConfig = DEFAULT_ANALYSIS_CONFIG,
) -> bool:
    """True if *current* must open a new session after *previous*.

    A session ends on a gap longer than ``session_gap_threshold``, on a
    change of contest relative to the open session, or when the UTC
    calendar date changes between consecutive reads.
    """
    return (
        current.time - previous.time > config.session_gap_threshold
        or current.contest_name != contest_name
        or current.utc_date != previous.utc_date
    )


def _build_session(number: int, group: list[TimingRecord]) -> Session:
    return Session(
        id=f"session_{number}",
        name=f"Session {number}",
        start_time=group[0].time,
        end_time=group[-1].time,
        contest_name=group[0].contest_name,
        records=tuple(group),
    )


@log_stage
def detect_sessions(
    records: Iterable[TimingRecord],
    config: AnalysisConfig = DEFAULT_ANALYSIS_CONFIG,
) -> list[Session]:
    """Partition reads, in time order, into contiguous sessions numbered from 1."""
    ordered = sorted(records, key=lambda r: r.time)
    if not ordered:
        return []

    groups: list[list[TimingRecord]] = []
    current = [ordered[0]]
    for previous, record in zip(ordered, ordered[1:]):
        if is_session_boundary(previous, record, current[0].contest_name, config):
            groups.append(current)
            current = [record]
        else:
            current.append(record)
    groups.append(current)

    sessions = [_build_session(n, group) for n, group in enumerate(groups, start=1)]
    logger.debug("sessions: detected=%d from=%d records", len(sessions), len(ordered))
    return sessions
