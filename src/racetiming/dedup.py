"""Suppress repeated reads of the same bib at the same timing point."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from racetiming._logging import log_stage
from racetiming.config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from racetiming.models.record import TimingRecord

logger = logging.getLogger(__name__)


def _dedup_key(record: TimingRecord) -> tuple[str, str, float]:
    return (record.bib_number, record.timing_point.value, record.time)


def _is_duplicate(kept: TimingRecord, record: TimingRecord, threshold: float) -> bool:
    return (
        record.bib_number == kept.bib_number
        and record.timing_point == kept.timing_point
        and abs(record.time - kept.time) < threshold
    )


@log_stage
def remove_duplicates(
    records: Iterable[TimingRecord],
    config: AnalysisConfig = DEFAULT_ANALYSIS_CONFIG,
) -> list[TimingRecord]:
    """Drop reads closer than ``duplicate_threshold`` to the last kept read of the same key.

    Records are sorted by (bib, timing point, time) and walked once. Each
    record is compared with the most recently kept one only, so a long run
    of reads drifting slowly apart keeps one read per threshold span rather
    than collapsing into a single read.
    """
    ordered = sorted(records, key=_dedup_key)
    kept: list[TimingRecord] = []

    for record in ordered:
        if kept and _is_duplicate(kept[-1], record, config.duplicate_threshold):
            continue
        kept.append(record)

    logger.debug("dedup: kept=%d from=%d (thr=%.2f)", len(kept), len(ordered), config.duplicate_threshold)
    return kept
