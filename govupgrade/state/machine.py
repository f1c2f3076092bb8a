"""
Upgrade execution state machine.

Rules, evaluated in order:

1. Proposal not PASSED -> not_executed. No chain reads.
2. Read the current height.
   - read fails -> not_executed (current height unknown)
   - either height not an integer -> unknown
   - plan height <= current height -> read the block at plan height:
       header time present -> executed at that time
       no header time -> unknown
       read fails -> unknown
   - plan height > current height -> pending

At most two reads happen, both only for PASSED proposals. Every read failure
ends in one of the states above.
"""

from ..chain.reader import ChainReader
from ..chain.reads import extract_block_time, guarded_read
from ..data.models import Proposal, ProposalStatus
from ..data.validators import parse_decimal_integer
from ..logging.config import get_execution_logger, log_execution_resolution
from .models import ExecutionInfo, ExecutionStatus, ResolutionTrigger

execution_logger = get_execution_logger(__name__)


def _resolved(proposal: Proposal, info: ExecutionInfo, trigger: ResolutionTrigger) -> ExecutionInfo:
    log_execution_resolution(
        execution_logger,
        proposal_id=proposal.id,
        status=info.status.value,
        trigger=trigger.value,
        context={
            "plan_height": info.plan_height,
            "current_height": info.current_height,
            "executed_at": info.executed_at,
        }
    )
    return info


def not_an_upgrade() -> ExecutionInfo:
    """Neutral status reported for proposals without an upgrade plan height."""
    return ExecutionInfo(
        status=ExecutionStatus.NOT_EXECUTED,
        message="Not an upgrade proposal",
        plan_height="0",
    )


async def determine_execution_status(proposal: Proposal,
                                     plan_height: str,
                                     reader: ChainReader) -> ExecutionInfo:
    """
    Determine whether and when the upgrade at plan_height executed.

    Args:
        proposal: Proposal whose status gates the reads
        plan_height: Target height of the upgrade plan
        reader: Chain collaborator for the height and block reads

    Returns:
        ExecutionInfo; never raises on collaborator or parse failures
    """
    # 1) Proposal not passed
    if proposal.status is not ProposalStatus.PASSED:
        return _resolved(proposal, ExecutionInfo(
            status=ExecutionStatus.NOT_EXECUTED,
            message=(
                f"Not executed (proposal status: {proposal.status.short_name}; "
                f"target height {plan_height})"
            ),
            plan_height=plan_height,
        ), ResolutionTrigger.PROPOSAL_NOT_PASSED)

    # 2) Current chain height
    height_read = await guarded_read("current_height", reader.fetch_current_height)
    if not height_read.success:
        return _resolved(proposal, ExecutionInfo(
            status=ExecutionStatus.NOT_EXECUTED,
            message=f"Not executed (target height {plan_height}; current height unknown)",
            plan_height=plan_height,
            current_height=None,
        ), ResolutionTrigger.CURRENT_HEIGHT_UNAVAILABLE)

    current_height = None if height_read.value is None else str(height_read.value)
    plan_height_num = parse_decimal_integer(plan_height)
    current_height_num = parse_decimal_integer(current_height)

    if plan_height_num is None or current_height_num is None:
        return _resolved(proposal, ExecutionInfo(
            status=ExecutionStatus.UNKNOWN,
            message="Unknown (invalid height values)",
            plan_height=plan_height,
            current_height=current_height,
        ), ResolutionTrigger.INVALID_HEIGHT)

    # 2a) Plan height reached: the header time of that block is the execution time
    if plan_height_num <= current_height_num:
        block_read = await guarded_read("block_at_height", reader.fetch_block_at_height, plan_height)
        if not block_read.success:
            return _resolved(proposal, ExecutionInfo(
                status=ExecutionStatus.UNKNOWN,
                message="Unknown (block not available)",
                plan_height=plan_height,
                current_height=current_height,
            ), ResolutionTrigger.BLOCK_UNAVAILABLE)

        executed_at = extract_block_time(block_read.value)
        if executed_at is None:
            return _resolved(proposal, ExecutionInfo(
                status=ExecutionStatus.UNKNOWN,
                message="Unknown (block data not available)",
                plan_height=plan_height,
                current_height=current_height,
            ), ResolutionTrigger.BLOCK_TIME_MISSING)

        return _resolved(proposal, ExecutionInfo(
            status=ExecutionStatus.EXECUTED,
            message=f"Executed at block {plan_height}",
            plan_height=plan_height,
            executed_at=executed_at,
            current_height=current_height,
        ), ResolutionTrigger.BLOCK_TIME_FOUND)

    # 2b) Plan height not reached yet
    return _resolved(proposal, ExecutionInfo(
        status=ExecutionStatus.PENDING,
        message=f"Not executed (target height {plan_height}; current height {current_height})",
        plan_height=plan_height,
        current_height=current_height,
    ), ResolutionTrigger.HEIGHT_NOT_REACHED)
