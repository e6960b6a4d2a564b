"""racetiming data models."""

from racetiming.models.attempt import AttemptStatus, RaceAttempt
from racetiming.models.record import TimingPoint, TimingRecord
from racetiming.models.runner import Runner, calculate_duration
from racetiming.models.session import Session
from racetiming.models.summary import ParticipantSummary

__all__ = [
    "AttemptStatus",
    "ParticipantSummary",
    "RaceAttempt",
    "Runner",
    "Session",
    "TimingPoint",
    "TimingRecord",
    "calculate_duration",
]
