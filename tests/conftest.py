"""Shared test fixtures and sample timing exports."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from racetiming.config import get_logging_settings, get_settings
from racetiming.models.record import TimingPoint, TimingRecord

HEADER = (
    "RD_Invalid,RD_ID,RD_DeviceID,RD_Bib,RD_Transponder,RD_Time,Contest.Name,"
    "RD_TimingPoint,RD_OrderID,RD_Hits,RD_RSSI,RD_UTCTime"
)

RACE_DAY = datetime(2024, 5, 1, 10, 0, 0, tzinfo=UTC)


def _make_row(
    bib: str,
    timing_point: str,
    time: float | str,
    contest: str = "Sprint",
    invalid: str = "0",
    utc_time: str = "2024-05-01T10:00:00",
    hits: str = "3",
    rssi: str = "-61",
    record_id: str = "1",
    device_id: str = "DEV-1",
) -> str:
    return ",".join([
        invalid, record_id, device_id, bib, f"TX{bib}", str(time), contest,
        timing_point, "7", hits, rssi, utc_time,
    ])


def _build_csv(*rows: str) -> str:
    return "\n".join([HEADER, *rows])


def _make_record(
    bib: str,
    timing_point: TimingPoint | str,
    time: float,
    contest: str = "Sprint",
    utc_time: datetime | None = RACE_DAY,
) -> TimingRecord:
    return TimingRecord(
        bib_number=bib,
        timing_point=TimingPoint(timing_point),
        time=time,
        contest_name=contest,
        utc_time=utc_time,
    )


SAMPLE_EXPORT = _build_csv(
    _make_row("101", "START", 1000.0),
    _make_row("101", "START", 1000.2),
    _make_row("102", "START", 1005.0),
    _make_row("101", "FINISH", 1062.5),
    _make_row("102", "FINISH", 1070.0),
    _make_row("103", "START", 1010.0),
    _make_row("101", "START", 1200.0),
    _make_row("101", "FINISH", 1258.0),
    _make_row("104", "FINISH", 1100.0, invalid="1"),
    _make_row("105", "LAP", 1100.0),
    "0,99,DEV-1,106,TX106",
    _make_row("101", "START", 5000.0, contest="Final"),
    _make_row("101", "FINISH", 5055.0, contest="Final"),
    _make_row("102", "START", 5001.0, contest="Final"),
    _make_row("102", "FINISH", 5500.0, contest="Final"),
)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached per process; tests that patch the environment need a fresh read."""
    get_settings.cache_clear()
    get_logging_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_logging_settings.cache_clear()


@pytest.fixture
def make_row():
    """Factory fixture for creating export lines."""
    return _make_row


@pytest.fixture
def build_csv():
    """Factory fixture for joining export lines under the header."""
    return _build_csv


@pytest.fixture
def make_record():
    """Factory fixture for creating TimingRecord values."""
    return _make_record


@pytest.fixture
def sample_export() -> str:
    return SAMPLE_EXPORT
