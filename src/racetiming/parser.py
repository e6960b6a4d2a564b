"""Parse exported timing tables into :class:`TimingRecord` values.

The export is a fixed 12-column comma-separated layout with one header
line::

    invalid, id, device_id, bib_number, transponder, time, contest_name,
    timing_point, order_id, hits, rssi, utc_time

Quoting is not supported. Rows that are short, flagged invalid by the
sensor, missing a bib, carrying an unknown timing point or an unreadable
time are dropped; parsing never fails on row-level defects.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime

from racetiming._logging import log_stage
from racetiming.models.record import TimingPoint, TimingRecord

logger = logging.getLogger(__name__)

DELIMITER = ","
COLUMN_COUNT = 12

_LEADING_INT_RE = re.compile(r"^[+-]?\d+")
_TIMING_POINTS = {tp.value for tp in TimingPoint}


def _parse_float(value: str) -> float | None:
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_int(value: str) -> int | None:
    """Parse the leading integer of *value* ('-65dBm' -> -65), or None."""
    match = _LEADING_INT_RE.match(value)
    return int(match.group()) if match else None


def _parse_timestamp(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def parse_line(line: str) -> TimingRecord | None:
    """Parse one data line, returning None for rows that must be skipped."""
    columns = [c.strip() for c in line.split(DELIMITER)]
    if len(columns) < COLUMN_COUNT:
        return None

    invalid = columns[0] == "1"
    bib_number = columns[3]
    timing_point = columns[7].upper()
    time = _parse_float(columns[5])

    if invalid or not bib_number or timing_point not in _TIMING_POINTS or time is None:
        return None

    return TimingRecord(
        invalid=invalid,
        id=columns[1],
        device_id=columns[2],
        bib_number=bib_number,
        transponder=columns[4],
        time=time,
        contest_name=columns[6],
        timing_point=TimingPoint(timing_point),
        order_id=columns[8],
        hits=_parse_int(columns[9]),
        rssi=_parse_int(columns[10]),
        utc_time=_parse_timestamp(columns[11]),
    )


@log_stage
def parse_records(text: str) -> list[TimingRecord]:
    """Parse a whole export; the first line is treated as the header."""
    records: list[TimingRecord] = []
    dropped = 0

    for raw in text.split("\n")[1:]:
        line = raw.strip()
        if not line:
            continue
        record = parse_line(line)
        if record is None:
            dropped += 1
            continue
        records.append(record)

    logger.debug("parse: kept=%d dropped=%d", len(records), dropped)
    return records
