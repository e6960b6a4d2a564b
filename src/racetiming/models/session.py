"""Race session model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from racetiming.models.record import TimingRecord


class Session(BaseModel):
    """A contiguous run of reads forming one logical race window."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    start_time: float
    end_time: float
    contest_name: str
    records: tuple[TimingRecord, ...] = ()

    @property
    def record_count(self) -> int:
        return len(self.records)
