"""Tests for the export parser."""

from __future__ import annotations

from datetime import UTC, datetime

from racetiming.models.record import TimingPoint
from racetiming.parser import parse_line, parse_records


class TestParseLine:
    def test_full_row(self, make_row) -> None:
        record = parse_line(make_row("42", "start", 12.5, hits="4", rssi="-70", record_id="9"))
        assert record is not None
        assert record.bib_number == "42"
        assert record.timing_point is TimingPoint.START
        assert record.time == 12.5
        assert record.contest_name == "Sprint"
        assert record.id == "9"
        assert record.device_id == "DEV-1"
        assert record.transponder == "TX42"
        assert record.order_id == "7"
        assert record.hits == 4
        assert record.rssi == -70
        assert record.utc_time == datetime(2024, 5, 1, 10, 0, 0, tzinfo=UTC)
        assert record.invalid is False

    def test_fields_are_trimmed(self) -> None:
        line = " 0 , 1 , D , 7 , T , 3.25 , Heat A , finish , 1 , 2 , -50 , 2024-05-01 09:00:00 "
        record = parse_line(line)
        assert record is not None
        assert record.bib_number == "7"
        assert record.contest_name == "Heat A"
        assert record.timing_point is TimingPoint.FINISH
        assert record.time == 3.25

    def test_short_row_skipped(self) -> None:
        assert parse_line("0,1,D,7,T,3.25,Heat,START,1,2,-50") is None

    def test_extra_columns_tolerated(self, make_row) -> None:
        assert parse_line(make_row("1", "START", 1.0) + ",extra") is not None

    def test_sensor_invalid_skipped(self, make_row) -> None:
        assert parse_line(make_row("1", "START", 1.0, invalid="1")) is None

    def test_empty_bib_skipped(self, make_row) -> None:
        assert parse_line(make_row("  ", "START", 1.0)) is None

    def test_unknown_timing_point_skipped(self, make_row) -> None:
        assert parse_line(make_row("1", "SPLIT", 1.0)) is None

    def test_unreadable_time_skipped(self, make_row) -> None:
        assert parse_line(make_row("1", "START", "abc")) is None
        assert parse_line(make_row("1", "START", "nan")) is None

    def test_leading_integer_metadata(self, make_row) -> None:
        record = parse_line(make_row("1", "START", 1.0, hits="x", rssi="-65dBm"))
        assert record is not None
        assert record.hits is None
        assert record.rssi == -65

    def test_unreadable_utc_time_kept_as_none(self, make_row) -> None:
        record = parse_line(make_row("1", "START", 1.0, utc_time="yesterday"))
        assert record is not None
        assert record.utc_time is None

    def test_offset_timestamp_normalised_to_utc(self, make_row) -> None:
        record = parse_line(make_row("1", "START", 1.0, utc_time="2024-05-02T01:30:00+02:00"))
        assert record is not None
        assert record.utc_time == datetime(2024, 5, 1, 23, 30, tzinfo=UTC)
        assert str(record.utc_date) == "2024-05-01"


class TestParseRecords:
    def test_header_ignored(self, make_row, build_csv) -> None:
        records = parse_records(build_csv(make_row("1", "START", 1.0)))
        assert len(records) == 1

    def test_blank_lines_and_crlf(self, make_row) -> None:
        text = "header\r\n" + make_row("1", "START", 1.0) + "\r\n\r\n   \r\n" + make_row("1", "FINISH", 9.0) + "\r\n"
        records = parse_records(text)
        assert [r.timing_point for r in records] == [TimingPoint.START, TimingPoint.FINISH]

    def test_only_newline_ends_a_row(self, make_row, build_csv) -> None:
        for separator in ("\u2028", "\x0c", "\x1e", "\x85"):
            records = parse_records(build_csv(make_row("7", "START", 10.0, contest=f"Heat{separator}A")))
            assert len(records) == 1
            assert records[0].contest_name == f"Heat{separator}A"

    def test_empty_input(self) -> None:
        assert parse_records("") == []
        assert parse_records("header only") == []

    def test_sample_export_filters_defects(self, sample_export) -> None:
        records = parse_records(sample_export)
        assert len(records) == 12
        assert all(r.timing_point in (TimingPoint.START, TimingPoint.FINISH) for r in records)
        assert all(r.bib_number for r in records)
        assert not any(r.invalid for r in records)

    def test_preserves_input_order(self, make_row, build_csv) -> None:
        records = parse_records(build_csv(
            make_row("2", "FINISH", 50.0),
            make_row("1", "START", 10.0),
        ))
        assert [r.bib_number for r in records] == ["2", "1"]
