"""
Tests for claim_mapper/utils/date_utils.py: date parsing chain and UTC anchoring.
"""

from datetime import UTC, date, datetime

from claim_mapper.utils.date_utils import parse_date, parse_iso_datetime_date, to_utc_midnight


class TestParseIsoDatetimeDate:

    def test_keeps_written_date(self):
        assert parse_iso_datetime_date("2024-01-15T23:30:00-08:00") == date(2024, 1, 15)

    def test_bare_date_not_matched(self):
        assert parse_iso_datetime_date("2024-01-15") is None

    def test_bad_time_rejected(self):
        assert parse_iso_datetime_date("2024-01-15T99:00") is None


class TestParseDate:

    def test_iso(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    def test_us(self):
        assert parse_date("1/5/2024") == date(2024, 1, 5)

    def test_surrounding_whitespace(self):
        assert parse_date(" 2024-01-15 ") == date(2024, 1, 15)

    def test_default_on_no_match(self):
        assert parse_date("January 5, 2024", default=date(1970, 1, 1)) == date(1970, 1, 1)

    def test_impossible_date_not_retried(self):
        assert parse_date("2024-02-30") is None

    def test_compact_form_rejected(self):
        assert parse_date("20240115") is None

    def test_empty(self):
        assert parse_date("") is None


class TestToUtcMidnight:

    def test_anchors_at_midnight(self):
        result = to_utc_midnight(date(2024, 1, 15))
        assert result == datetime(2024, 1, 15, 0, 0, tzinfo=UTC)
        assert result.tzinfo is UTC
