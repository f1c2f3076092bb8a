"""Result models produced by the proposal analysis engine."""

from dataclasses import dataclass
from typing import Any, Optional

from ..data.models import ParsedPlanInfo, Proposal, UpgradePlan
from ..state.models import ExecutionInfo


@dataclass(frozen=True)
class VotingSummary:
    """Vote buckets and derived turnout; every value is a decimal string."""
    yes_count: str
    no_count: str
    abstain_count: str
    no_with_veto_count: str
    total_voting_power: str
    bonded_tokens: str
    turnout_percent: str                            # "N/A" when bonded tokens unknown

    def to_dict(self) -> dict[str, str]:
        """Serialize to a JSON-ready mapping."""
        return {
            "yes_count": self.yes_count,
            "no_count": self.no_count,
            "abstain_count": self.abstain_count,
            "no_with_veto_count": self.no_with_veto_count,
            "total_voting_power": self.total_voting_power,
            "bonded_tokens": self.bonded_tokens,
            "turnout_percent": self.turnout_percent,
        }


@dataclass(frozen=True)
class UpgradeProposalData:
    """Complete analysis of one proposal."""

    proposal: Proposal
    is_upgrade_proposal: bool
    execution: ExecutionInfo
    voting: VotingSummary

    # Upgrade details (None for non-upgrade proposals)
    plan: Optional[UpgradePlan] = None
    authority: Optional[str] = None
    message_type: Optional[str] = None
    parsed_plan_info: Optional[ParsedPlanInfo] = None
    binary_version: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize for a presentation layer.

        Heights, counts and token amounts stay strings so nothing downstream
        can lose precision.
        """
        plan = None
        if self.plan is not None:
            plan = {
                "name": self.plan.name,
                "height": self.plan.height,
                "time": self.plan.time,
                "info": self.plan.info,
                "is_height_triggered": self.plan.is_height_triggered,
            }

        parsed_info = None
        if self.parsed_plan_info is not None:
            parsed_info = {
                "binaries": dict(self.parsed_plan_info.binaries) if self.parsed_plan_info.binaries is not None else None,
                "version": self.parsed_plan_info.version,
                "binary": self.parsed_plan_info.binary,
            }

        return {
            "proposal_id": self.proposal.id,
            "proposal_status": self.proposal.status.value,
            "title": self.proposal.title,
            "proposer": self.proposal.proposer,
            "submit_time": self.proposal.submit_time,
            "deposit_end_time": self.proposal.deposit_end_time,
            "voting_start_time": self.proposal.voting_start_time,
            "voting_end_time": self.proposal.voting_end_time,
            "is_upgrade_proposal": self.is_upgrade_proposal,
            "authority": self.authority,
            "message_type": self.message_type,
            "plan": plan,
            "parsed_plan_info": parsed_info,
            "binary_version": self.binary_version,
            "execution": self.execution.to_dict(),
            "voting": self.voting.to_dict(),
        }
