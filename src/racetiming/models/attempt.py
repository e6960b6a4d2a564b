"""Race attempt model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class AttemptStatus(str, Enum):
    """Classification of a reconstructed attempt."""

    COMPLETED = "COMPLETED"
    DNF = "DNF"
    INVALID_TOO_FAST = "INVALID_TOO_FAST"
    INVALID_TOO_SLOW = "INVALID_TOO_SLOW"


class RaceAttempt(BaseModel):
    """One participant's start to finish pairing within a session."""

    model_config = ConfigDict(frozen=True)

    bib_number: str
    start_time: float
    finish_time: float | None = None
    duration: float | None = None
    status: AttemptStatus
    session_id: str

    @property
    def is_finished(self) -> bool:
        """True when a finish read was attached to this attempt."""
        return self.finish_time is not None
