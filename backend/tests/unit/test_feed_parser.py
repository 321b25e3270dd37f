"""
Unit Tests: Feed Parser
Tests for CSV splitting and row normalization of the queue_times.csv feed.
"""

import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime

from importer.feed_parser import (
    Reading,
    split_feed_line,
    split_feed_rows,
    normalize_row,
    parse_feed,
    _parse_feed_timestamp,
    _parse_wait_minutes,
    _parse_open_flag
)


class TestSplitFeedLine:
    """Tests for split_feed_line()."""

    def test_plain_fields(self):
        assert split_feed_line("a,b,c") == ["a", "b", "c"]

    def test_strips_whitespace(self):
        assert split_feed_line("  a , b ,c  ") == ["a", "b", "c"]

    def test_quoted_comma_is_not_a_separator(self):
        """Commas inside a double-quoted span belong to the field."""
        fields = split_feed_line('2025-02-02T09:00:00,"Pirates, of the Caribbean",15,9:00,true')

        assert fields == ["2025-02-02T09:00:00", "Pirates, of the Caribbean", "15", "9:00", "true"]

    def test_strips_enclosing_quotes(self):
        assert split_feed_line('"a","b"') == ["a", "b"]

    def test_quotes_then_whitespace(self):
        """Whitespace is stripped before the enclosing quotes."""
        assert split_feed_line(' "Dumbo" ,x') == ["Dumbo", "x"]

    def test_empty_fields_kept(self):
        assert split_feed_line("a,,c") == ["a", "", "c"]

    def test_odd_quotes_do_not_raise(self):
        """Malformed quoting yields some fields rather than an error."""
        fields = split_feed_line('a,"b,c')
        assert isinstance(fields, list)
        assert len(fields) >= 1


class TestSplitFeedRows:
    """Tests for split_feed_rows()."""

    def test_discards_header(self, feed_header):
        rows = split_feed_rows(f"{feed_header}\n2025-02-02T09:00:00,Dumbo,5,9:00,true")

        assert rows == [["2025-02-02T09:00:00", "Dumbo", "5", "9:00", "true"]]

    def test_header_only_yields_no_rows(self, header_only_feed_text):
        assert split_feed_rows(header_only_feed_text) == []

    def test_empty_text_yields_no_rows(self):
        assert split_feed_rows("") == []

    def test_none_text_yields_no_rows(self):
        assert split_feed_rows(None) == []

    def test_trailing_newline_ignored(self, feed_header):
        rows = split_feed_rows(f"{feed_header}\n2025-02-02T09:00:00,Dumbo,5,9:00,true\n")
        assert len(rows) == 1

    def test_crlf_line_endings(self, feed_header):
        text = f"{feed_header}\r\n2025-02-02T09:00:00,Dumbo,5,9:00,true\r\n2025-02-02T10:00:00,Dumbo,10,10:00,true"
        rows = split_feed_rows(text)

        assert len(rows) == 2
        assert rows[0][4] == "true"

    @pytest.mark.parametrize("separator", ["\u2028", "\x0c", "\x85"])
    def test_only_newlines_end_a_row(self, feed_header, separator):
        rows = split_feed_rows(f"{feed_header}\n2025-02-02T10:00:00,Dumbo{separator}Flying Elephant,5,x,true")

        assert len(rows) == 1
        assert rows[0][1] == f"Dumbo{separator}Flying Elephant"

    def test_blank_lines_skipped(self, feed_header):
        text = f"{feed_header}\n2025-02-02T09:00:00,Dumbo,5,9:00,true\n\n   \n2025-02-02T10:00:00,Dumbo,10,10:00,true"
        assert len(split_feed_rows(text)) == 2


class TestParseWaitMinutes:
    """Tests for _parse_wait_minutes()."""

    @pytest.mark.parametrize("value, expected", [
        ("45", 45),
        (" 7 ", 7),
        ("12.5", 12),
        ("30min", 30),
        ("0", 0),
    ])
    def test_leading_integer(self, value, expected):
        assert _parse_wait_minutes(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", None, "min30"])
    def test_non_numeric_defaults_to_zero(self, value):
        assert _parse_wait_minutes(value) == 0

    def test_negative_clamped_to_zero(self):
        assert _parse_wait_minutes("-5") == 0


class TestParseOpenFlag:
    """Tests for _parse_open_flag()."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "True", " true "])
    def test_true_values(self, value):
        assert _parse_open_flag(value) is True

    @pytest.mark.parametrize("value", ["false", "", "yes", "1", "truthy", None])
    def test_everything_else_is_closed(self, value):
        assert _parse_open_flag(value) is False


class TestParseFeedTimestamp:
    """Tests for _parse_feed_timestamp()."""

    def test_iso_with_t_separator(self):
        assert _parse_feed_timestamp("2025-02-02T09:00:00") == datetime(2025, 2, 2, 9, 0, 0)

    def test_iso_with_space_separator(self):
        assert _parse_feed_timestamp("2025-02-02 09:05:30") == datetime(2025, 2, 2, 9, 5, 30)

    def test_fractional_seconds(self):
        result = _parse_feed_timestamp("2025-02-02T09:00:00.644")
        assert result.microsecond == 644000

    def test_z_suffix_converted_to_naive_utc(self):
        result = _parse_feed_timestamp("2025-02-02T09:00:00Z")

        assert result == datetime(2025, 2, 2, 9, 0, 0)
        assert result.tzinfo is None

    def test_offset_converted_to_naive_utc(self):
        result = _parse_feed_timestamp("2025-02-02T10:00:00+01:00")

        assert result == datetime(2025, 2, 2, 9, 0, 0)
        assert result.tzinfo is None

    def test_slash_format(self):
        assert _parse_feed_timestamp("2025/02/02 09:00") == datetime(2025, 2, 2, 9, 0)

    @pytest.mark.parametrize("value", ["", None, "not a date", "2025-13-45T99:00:00"])
    def test_invalid_returns_none(self, value):
        assert _parse_feed_timestamp(value) is None

    def test_utc_conversion_out_of_range_returns_none(self):
        assert _parse_feed_timestamp("0001-01-01T00:30:00+01:00") is None


class TestNormalizeRow:
    """Tests for normalize_row() / Reading.from_row()."""

    def test_full_row(self):
        reading = normalize_row(["2025-02-02T09:00:00", " Space Mountain ", "10", "9:00", "true"])

        assert reading.ride_key == "Space Mountain"
        assert reading.wait_minutes == 10
        assert reading.last_update == "9:00"
        assert reading.is_open is True
        assert reading.adjusted_timestamp == datetime(2025, 2, 2, 10, 0, 0)
        assert reading.hour_of_day == 10

    def test_adds_exactly_one_hour_across_midnight(self):
        reading = normalize_row(["2025-02-02T23:30:00", "Dumbo", "5", "", "true"])

        assert reading.adjusted_timestamp == datetime(2025, 2, 3, 0, 30, 0)
        assert reading.hour_of_day == 0

    def test_non_numeric_wait_defaults_to_zero(self):
        reading = normalize_row(["2025-02-02T09:00:00", "Dumbo", "abc", "9:00", "true"])
        assert reading.wait_minutes == 0

    def test_invalid_timestamp_marker(self):
        reading = normalize_row(["yesterday-ish", "Dumbo", "5", "", "true"])

        assert reading.adjusted_timestamp is None
        assert reading.hour_of_day is None
        assert reading.has_valid_timestamp is False

    def test_offset_overflow_is_invalid_marker(self):
        reading = normalize_row(["9999-12-31T23:30:00", "Dumbo", "5", "", "true"])

        assert reading.adjusted_timestamp is None
        assert reading.wait_minutes == 5

    def test_short_row_padded(self):
        reading = normalize_row(["2025-02-02T09:00:00", "Dumbo"])

        assert reading.ride_key == "Dumbo"
        assert reading.wait_minutes == 0
        assert reading.last_update == ""
        assert reading.is_open is False

    def test_extra_fields_ignored(self):
        reading = normalize_row(["2025-02-02T09:00:00", "Dumbo", "5", "9:00", "true", "extra"])
        assert reading.is_open is True

    def test_last_update_passthrough(self):
        reading = normalize_row(["2025-02-02T09:00:00", "Dumbo", "5", "  9h00 CET ", "true"])
        assert reading.last_update == "  9h00 CET "

    def test_ride_key_case_sensitive(self):
        a = normalize_row(["2025-02-02T09:00:00", "dumbo", "5", "", "true"])
        b = normalize_row(["2025-02-02T09:00:00", "Dumbo", "5", "", "true"])
        assert a.ride_key != b.ride_key

    def test_reading_is_frozen(self):
        reading = Reading.from_row(["2025-02-02T09:00:00", "Dumbo", "5", "", "true"])
        with pytest.raises(FrozenInstanceError):
            reading.wait_minutes = 99


class TestParseFeed:
    """Tests for parse_feed()."""

    def test_preserves_row_order(self, sample_feed_text):
        readings = parse_feed(sample_feed_text)

        assert len(readings) == 6
        assert [r.ride_key for r in readings[:2]] == ["Space Mountain", "Big Thunder Mountain"]

    def test_quoted_ride_name_unquoted(self, sample_feed_text):
        readings = parse_feed(sample_feed_text)
        assert readings[1].ride_key == "Big Thunder Mountain"
