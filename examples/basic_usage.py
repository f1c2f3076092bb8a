#!/usr/bin/env python3
"""
Basic Usage Example - Governance Upgrade Proposal Analysis

This script demonstrates the basic usage of the analysis engine against a
simulated chain. It shows how to:
- Implement the ChainReader collaborator
- Load network configuration and configure logging
- Analyze raw gov/v1 proposal records
- Format the results for display

Run: python examples/basic_usage.py
"""

import asyncio
import json
from typing import Any, Dict

from govupgrade.config.loader import ConfigLoader
from govupgrade.data.parsers import parse_proposals_response
from govupgrade.engine import UpgradeProposalAnalyzer
from govupgrade.errors import ChainReadError
from govupgrade.logging import configure_logging
from govupgrade.models.analysis import UpgradeProposalData
from govupgrade.utils.formatting import format_block_height, format_proposal_status
from govupgrade.utils.time import format_chain_timestamp

RELEASES = "https://github.com/verana-labs/verana-blockchain/releases/download"
UPGRADE_TYPE = "/cosmos.upgrade.v1beta1.MsgSoftwareUpgrade"


class SimulatedChain:
    """ChainReader serving a fixed chain height and a handful of blocks."""

    def __init__(self, height: int, block_times: Dict[int, str], bonded_tokens: str):
        self.height = height
        self.block_times = block_times
        self.bonded_tokens = bonded_tokens

    async def fetch_current_height(self) -> str:
        return str(self.height)

    async def fetch_block_at_height(self, height: str) -> Dict[str, Any]:
        block_time = self.block_times.get(int(height))
        if block_time is None:
            raise ChainReadError(f"block {height} pruned", read_name="block_at_height")
        return {"result": {"block": {"header": {"height": height, "time": block_time}}}}

    async def fetch_staking_pool(self) -> str:
        return self.bonded_tokens


def create_upgrade_record(proposal_id: str, status: str, version: str, height: str,
                          yes_count: str) -> Dict[str, Any]:
    """Create a gov/v1 software upgrade proposal record."""
    info = {
        "binaries": {
            # Release assets that repeat the version tag in the filename
            "linux/amd64": f"{RELEASES}/{version}/veranad-{version}-linux-amd64",
            "darwin/arm64": f"{RELEASES}/{version}/veranad-{version}-darwin-arm64",
        }
    }
    return {
        "id": proposal_id,
        "status": status,
        "title": f"Upgrade to {version}",
        "proposer": "verana1proposer",
        "submit_time": "2025-03-01T10:00:00.123456789Z",
        "voting_end_time": "2025-03-04T10:00:00.123456789Z",
        "messages": [{
            "@type": UPGRADE_TYPE,
            "authority": "verana10d07y265gmmuvt4z0w9aw880jnsr700jvss730",
            "plan": {
                "name": version,
                "height": height,
                "time": "0001-01-01T00:00:00Z",
                "info": json.dumps(info),
            },
        }],
        "final_tally_result": {
            "yes_count": yes_count,
            "no_count": "1500000000000",
            "abstain_count": "250000000000",
            "no_with_veto_count": "",
        },
    }


def create_text_record(proposal_id: str) -> Dict[str, Any]:
    """Create a proposal record without an upgrade message."""
    return {
        "id": proposal_id,
        "status": "PROPOSAL_STATUS_VOTING_PERIOD",
        "title": "Community pool spend",
        "messages": [{"@type": "/cosmos.distribution.v1beta1.MsgCommunityPoolSpend"}],
        "final_tally_result": {"yes_count": "90000000000"},
    }


def print_analysis(analyzer: UpgradeProposalAnalyzer, data: UpgradeProposalData) -> None:
    """Print one analysis result."""
    proposal = data.proposal
    print(f"📜 Proposal #{proposal.id}: {proposal.title}")
    print(f"  Status: {format_proposal_status(proposal.status)}")
    print(f"  Voting ends: {format_chain_timestamp(proposal.voting_end_time)}")

    if data.is_upgrade_proposal and data.plan is not None:
        print(f"  Version: {data.binary_version or 'N/A'}")
        print(f"  Plan height: {format_block_height(data.plan.height)}")
        if data.parsed_plan_info and data.parsed_plan_info.binaries:
            for platform, url in data.parsed_plan_info.binaries.items():
                print(f"    {platform}: {url}")

    execution = data.execution
    print(f"  Execution: {execution.status.value} - {execution.message}")
    if execution.executed_at:
        print(f"    Executed at: {format_chain_timestamp(execution.executed_at)}")

    voting = data.voting
    print(f"  Yes: {analyzer.format_token_amount(voting.yes_count)}")
    print(f"  Total voted: {analyzer.format_token_amount(voting.total_voting_power)}")
    print(f"  Bonded: {analyzer.format_token_amount(voting.bonded_tokens)}")
    print(f"  Turnout: {voting.turnout_percent}%")
    print("-" * 50)


async def main() -> None:
    """Run the basic usage demonstration."""
    config = ConfigLoader.create().load("verana-testnet")
    configure_logging(level=config.logging.level, format_json=config.logging.format_json)

    chain = SimulatedChain(
        height=1_300_000,
        block_times={1_250_000: "2025-03-20T12:00:07.123456789Z"},
        bonded_tokens="250000000000000",
    )
    analyzer = UpgradeProposalAnalyzer(chain, config=config)

    response = {
        "proposals": [
            create_upgrade_record("12", "PROPOSAL_STATUS_PASSED", "v0.9-dev.7", "1250000", "120000000000000"),
            create_upgrade_record("15", "PROPOSAL_STATUS_PASSED", "v0.9-dev.8", "1400000", "98000000000000"),
            create_upgrade_record("16", "PROPOSAL_STATUS_REJECTED", "v1.0.0-rc.1", "1500000", "1000000"),
            create_text_record("17"),
        ]
    }

    print("🚀 Analyzing governance proposals")
    print("=" * 50)

    proposals = parse_proposals_response(response)
    results = await analyzer.analyze_many(proposals)
    for data in results:
        print_analysis(analyzer, data)

    print("📦 JSON output for proposal #12:")
    print(json.dumps(results[0].to_dict(), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
