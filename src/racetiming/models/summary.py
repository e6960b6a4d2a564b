"""Per-participant summary model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from racetiming.models.attempt import RaceAttempt


class ParticipantSummary(BaseModel):
    """Aggregate statistics over all attempts of one bib."""

    model_config = ConfigDict(frozen=True)

    bib_number: str
    completed_races: tuple[RaceAttempt, ...] = ()
    dnf_count: int = 0
    best_time: float | None = None
    average_time: float | None = None
    consistency_score: float = Field(default=100.0, ge=0.0, le=100.0)

    @property
    def completed_count(self) -> int:
        return len(self.completed_races)
