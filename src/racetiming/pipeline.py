"""End-to-end analysis of a timing export."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from racetiming._logging import log_stage
from racetiming.aggregate import generate_participant_summaries
from racetiming.config import AnalysisConfig
from racetiming.dedup import remove_duplicates
from racetiming.models.attempt import RaceAttempt
from racetiming.models.session import Session
from racetiming.models.summary import ParticipantSummary
from racetiming.pairing import pair_starts_and_finishes
from racetiming.parser import parse_records
from racetiming.sessions import detect_sessions


@dataclass(frozen=True)
class AnalysisResult:
    """Sessions, attempts and summaries of one run.

    Unpacks as ``sessions, attempts, summaries = result``.
    """

    sessions: list[Session]
    attempts: list[RaceAttempt]
    summaries: list[ParticipantSummary]

    def __iter__(self) -> Iterator[list]:
        return iter((self.sessions, self.attempts, self.summaries))

    def attempts_for_session(self, session_id: str) -> list[RaceAttempt]:
        """Attempts belonging to one session, in pairing order."""
        return [a for a in self.attempts if a.session_id == session_id]

    def summary_for(self, bib_number: str) -> ParticipantSummary | None:
        """Summary of one bib, or None if the bib has no attempts."""
        return next((s for s in self.summaries if s.bib_number == bib_number), None)


@log_stage
def analyze_race_data(text: str, config: AnalysisConfig | None = None) -> AnalysisResult:
    """Parse, deduplicate, segment, pair, validate and summarise one export."""
    if config is None:
        config = AnalysisConfig()

    records = parse_records(text)
    unique_records = remove_duplicates(records, config)
    sessions = detect_sessions(unique_records, config)

    attempts: list[RaceAttempt] = []
    for session in sessions:
        attempts.extend(pair_starts_and_finishes(session, config))

    summaries = generate_participant_summaries(attempts)
    return AnalysisResult(sessions=sessions, attempts=attempts, summaries=summaries)
