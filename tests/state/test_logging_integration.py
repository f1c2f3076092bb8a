"""Tests for logging integration in the execution resolver and chain reads."""

from unittest.mock import Mock, patch

import pytest

from govupgrade.chain.reads import guarded_read
from govupgrade.data.models import ProposalStatus
from govupgrade.logging.config import log_execution_resolution, log_read_failure
from govupgrade.state.machine import determine_execution_status

from builders import FakeChainReader, make_proposal, upgrade_message


class TestExecutionResolutionLogging:
    """Every resolved status is logged once with its trigger."""

    @pytest.mark.asyncio
    async def test_executed_resolution_logged(self, fake_reader):
        proposal = make_proposal(messages=(upgrade_message(),))

        with patch("govupgrade.state.machine.log_execution_resolution") as mock_log:
            await determine_execution_status(proposal, "50", fake_reader)

        mock_log.assert_called_once()
        kwargs = mock_log.call_args.kwargs
        assert kwargs["proposal_id"] == "7"
        assert kwargs["status"] == "executed"
        assert kwargs["trigger"] == "block_time_found"
        assert kwargs["context"]["executed_at"] == "2025-03-10T08:15:42.517389Z"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reader_kwargs, status, expected_trigger", [
        ({}, ProposalStatus.REJECTED, "proposal_not_passed"),
        ({"current_height": RuntimeError("down")}, ProposalStatus.PASSED, "current_height_unavailable"),
        ({"current_height": "x"}, ProposalStatus.PASSED, "invalid_height"),
        ({"current_height": "10"}, ProposalStatus.PASSED, "height_not_reached"),
        ({"current_height": "100"}, ProposalStatus.PASSED, "block_unavailable"),
    ])
    async def test_trigger_per_rule(self, reader_kwargs, status, expected_trigger):
        reader = FakeChainReader(**reader_kwargs)
        proposal = make_proposal(status=status, messages=(upgrade_message(),))

        with patch("govupgrade.state.machine.log_execution_resolution") as mock_log:
            await determine_execution_status(proposal, "50", reader)

        assert mock_log.call_args.kwargs["trigger"] == expected_trigger

    def test_helper_binds_standard_fields(self):
        """The helper binds id, status and trigger before logging."""
        logger = Mock()
        bound = logger.bind.return_value

        log_execution_resolution(logger, "7", "pending", "height_not_reached", {"plan_height": "150"})

        logger.bind.assert_called_once_with(
            proposal_id="7",
            execution_status="pending",
            trigger="height_not_reached",
        )
        bound.bind.assert_called_once_with(context={"plan_height": "150"})
        bound.bind.return_value.info.assert_called_once_with("Execution status resolved")


class TestReadFailureLogging:
    """Collaborator failures are logged as warnings and never re-raised."""

    @pytest.mark.asyncio
    async def test_failed_read_logged(self):
        reader = FakeChainReader(bonded_tokens=ConnectionError("refused"))

        with patch("govupgrade.chain.reads.log_read_failure") as mock_log:
            result = await guarded_read("staking_pool", reader.fetch_staking_pool)

        assert result.success is False
        mock_log.assert_called_once()
        assert mock_log.call_args.args[1] == "staking_pool"
        assert isinstance(mock_log.call_args.args[2], ConnectionError)

    @pytest.mark.asyncio
    async def test_successful_read_not_logged(self):
        reader = FakeChainReader()

        with patch("govupgrade.chain.reads.log_read_failure") as mock_log:
            result = await guarded_read("current_height", reader.fetch_current_height)

        assert result.success is True
        mock_log.assert_not_called()

    def test_helper_logs_warning_with_error_type(self):
        logger = Mock()

        log_read_failure(logger, "block_at_height", LookupError("no block"))

        logger.bind.assert_called_once_with(
            read_name="block_at_height",
            error="no block",
            error_type="LookupError",
        )
        logger.bind.return_value.warning.assert_called_once_with("Chain read failed")
