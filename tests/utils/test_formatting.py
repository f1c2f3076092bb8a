"""Tests for display formatting helpers."""

import pytest

from govupgrade.data.models import ProposalStatus
from govupgrade.utils.formatting import (
    format_block_height,
    format_micro_amount,
    format_proposal_status,
)


class TestFormatProposalStatus:
    """Test status display names."""

    def test_enum_member(self):
        assert format_proposal_status(ProposalStatus.VOTING_PERIOD) == "voting period"

    def test_raw_string(self):
        assert format_proposal_status("PROPOSAL_STATUS_PASSED") == "passed"


class TestFormatBlockHeight:
    """Test height display."""

    def test_thousands_separators(self):
        assert format_block_height("1250000") == "1,250,000"
        assert format_block_height("18446744073709551616") == "18,446,744,073,709,551,616"

    def test_malformed_returned_as_is(self):
        assert format_block_height("n/a") == "n/a"
        assert format_block_height(None) == ""


class TestFormatMicroAmount:
    """Test micro-denomination conversion with integer arithmetic."""

    @pytest.mark.parametrize("amount, expected", [
        ("0", "0"),
        ("1", "0"),
        ("5000", "0.01"),
        ("1000000", "1"),
        ("1234500000", "1,234.5"),
        ("1234567890", "1,234.57"),
        ("999999999", "1,000"),
        ("42000000000000000000", "42,000,000,000,000"),
    ])
    def test_conversion(self, amount, expected):
        assert format_micro_amount(amount) == expected

    @pytest.mark.parametrize("amount", [None, "", "-5", "1.5", "lots"])
    def test_malformed(self, amount):
        assert format_micro_amount(amount) == "0"

    def test_exponent_and_digits(self):
        assert format_micro_amount("123456789", exponent=3, max_fraction_digits=3) == "123,456.789"
        assert format_micro_amount("1", exponent=0) == "1"
