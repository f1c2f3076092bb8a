"""
Main proposal analysis coordinator.

Combines classification, plan metadata parsing, the tally engine and the
execution state machine into one immutable result per proposal.
"""

import asyncio
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from .chain.reader import ChainReader
from .config.defaults import EngineConfig
from .config.loader import ConfigLoader
from .data.models import Proposal
from .data.parsers import parse_proposal
from .errors import DataQualityError
from .logging.config import get_logger
from .models.analysis import UpgradeProposalData
from .proposals.classifier import (
    count_upgrade_messages,
    extract_upgrade_plan,
    get_upgrade_message,
)
from .proposals.metadata import extract_binary_version, parse_plan_info
from .state.machine import determine_execution_status, not_an_upgrade
from .state.models import ExecutionInfo
from .tally.calculator import build_voting_summary
from .utils.formatting import format_micro_amount

logger = get_logger(__name__)


class UpgradeProposalAnalyzer:
    """
    Analyzes governance proposals against live chain data.

    Pipeline per proposal:
    Classifier → Metadata Parser → (Execution Resolver ∥ Tally Engine) → Result

    The analyzer keeps no per-proposal state; concurrent calls are safe.
    """

    def __init__(
        self,
        reader: ChainReader,
        config: Optional[EngineConfig] = None,
        config_dir: Optional[Path] = None,
        network_id: Optional[str] = None,
    ) -> None:
        """
        Initialize the analyzer.

        Args:
            reader: Collaborator serving height, block and staking pool reads
            config: Ready-made configuration; loaded from config_dir if omitted
            config_dir: Directory holding networks.yaml
            network_id: Network whose overrides apply when loading configuration
        """
        self.logger = logger
        self.reader = reader

        if config is None:
            config = ConfigLoader.create(config_dir).load(network_id)
        self.config = config

    async def build_upgrade_proposal_data(self, proposal: Proposal) -> UpgradeProposalData:
        """
        Analyze one proposal.

        The voting summary is built for every proposal. Execution status is
        resolved only for upgrade proposals whose plan has a height.
        """
        cfg = self.config

        upgrade_message = get_upgrade_message(proposal, cfg.classifier)
        is_upgrade = upgrade_message is not None
        plan = extract_upgrade_plan(proposal, cfg.classifier)
        parsed_plan_info = parse_plan_info(plan.info, cfg.metadata) if plan and plan.info else None
        binary_version = extract_binary_version(plan, proposal.title, cfg.metadata) if plan else None

        if is_upgrade:
            upgrade_count = count_upgrade_messages(proposal, cfg.classifier)
            if upgrade_count > 1:
                self.logger.warning(
                    "Proposal has several upgrade messages, analyzing the first",
                    proposal_id=proposal.id,
                    upgrade_message_count=upgrade_count,
                )

        if is_upgrade and plan is not None and plan.height:
            execution_task = determine_execution_status(proposal, plan.height, self.reader)
        else:
            execution_task = self._not_an_upgrade()

        execution, voting = await asyncio.gather(
            execution_task,
            build_voting_summary(proposal, self.reader, cfg.tally),
        )

        self.logger.info(
            "Proposal analyzed",
            proposal_id=proposal.id,
            is_upgrade_proposal=is_upgrade,
            execution_status=execution.status.value,
            turnout_percent=voting.turnout_percent,
        )

        return UpgradeProposalData(
            proposal=proposal,
            is_upgrade_proposal=is_upgrade,
            execution=execution,
            voting=voting,
            plan=plan,
            authority=upgrade_message.authority if upgrade_message else None,
            message_type=upgrade_message.type_url if upgrade_message else None,
            parsed_plan_info=parsed_plan_info,
            binary_version=binary_version,
        )

    async def analyze_many(self, proposals: Iterable[Proposal]) -> list[UpgradeProposalData]:
        """Analyze several proposals concurrently, preserving input order."""
        return list(await asyncio.gather(
            *(self.build_upgrade_proposal_data(p) for p in proposals)
        ))

    async def analyze_raw_proposal(self, raw: Mapping[str, Any]) -> Optional[UpgradeProposalData]:
        """
        Parse a gov/v1 proposal record and analyze it.

        Returns:
            The analysis, or None if the record cannot form a Proposal
        """
        try:
            proposal = parse_proposal(raw)
        except DataQualityError as e:
            self.logger.warning(
                "Skipping malformed proposal record",
                error=str(e),
                error_type=type(e).__name__,
                context=e.context,
            )
            return None

        return await self.build_upgrade_proposal_data(proposal)

    def format_token_amount(self, amount: Optional[str]) -> str:
        """Format a micro-denomination amount in display units, e.g. "1,500 VNA"."""
        chain = self.config.chain
        return f"{format_micro_amount(amount, chain.denom_exponent)} {chain.display_denom}"

    async def _not_an_upgrade(self) -> ExecutionInfo:
        return not_an_upgrade()


async def build_upgrade_proposal_data(
    proposal: Proposal,
    reader: ChainReader,
    config: Optional[EngineConfig] = None,
) -> UpgradeProposalData:
    """Analyze one proposal with a throwaway analyzer."""
    analyzer = UpgradeProposalAnalyzer(reader, config=config)
    return await analyzer.build_upgrade_proposal_data(proposal)
