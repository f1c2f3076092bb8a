"""
Tests for chain timestamp utilities.

Verifies nanosecond truncation, the zero-time sentinel, and that malformed
input never raises.
"""

from datetime import datetime, timezone

import pytest

from govupgrade.utils.time import (
    ZERO_TIME,
    format_chain_timestamp,
    is_zero_time,
    parse_chain_timestamp,
)


class TestParseChainTimestamp:
    """Test parse_chain_timestamp function."""

    def test_nanosecond_precision_truncated(self):
        result = parse_chain_timestamp("2025-03-01T10:00:00.123456789Z")
        assert result == datetime(2025, 3, 1, 10, 0, 0, 123456, tzinfo=timezone.utc)

    def test_short_fraction(self):
        result = parse_chain_timestamp("2025-03-01T10:00:00.5Z")
        assert result.microsecond == 500000

    def test_offset_converted_to_utc(self):
        result = parse_chain_timestamp("2025-03-01T12:00:00+02:00")
        assert result == datetime(2025, 3, 1, 10, 0, 0, tzinfo=timezone.utc)

    def test_naive_assumed_utc(self):
        assert parse_chain_timestamp("2025-03-01T10:00:00").tzinfo == timezone.utc

    @pytest.mark.parametrize("value", [None, "", "yesterday", "2025-13-01T00:00:00Z", 1700000000])
    def test_malformed(self, value):
        assert parse_chain_timestamp(value) is None


class TestZeroTime:
    """Test the zero-value timestamp sentinel."""

    def test_zero_time(self):
        assert is_zero_time("0001-01-01T00:00:00Z") is True
        assert parse_chain_timestamp("0001-01-01T00:00:00Z") == ZERO_TIME

    def test_real_time(self):
        assert is_zero_time("2025-06-01T00:00:00Z") is False

    def test_unparseable_is_not_zero(self):
        assert is_zero_time("") is False
        assert is_zero_time("garbage") is False


class TestFormatChainTimestamp:
    """Test display formatting."""

    def test_format(self):
        assert format_chain_timestamp("2025-03-10T08:15:42.517389Z") == "2025-03-10 08:15:42 UTC"

    def test_unparseable_returned_unchanged(self):
        assert format_chain_timestamp("soon") == "soon"
        assert format_chain_timestamp(None) == ""
