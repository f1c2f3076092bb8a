"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Dict

import pytest

from builders import AUTHORITY, RELEASE_BASE, UPGRADE_TYPE, FakeChainReader, rpc_block


@pytest.fixture
def fake_reader() -> FakeChainReader:
    """Reader whose chain is at height 100 with a block at 50."""
    return FakeChainReader(
        current_height="100",
        blocks={"50": rpc_block("2025-03-10T08:15:42.517389Z")},
        bonded_tokens="1000000",
    )


@pytest.fixture
def sample_proposal_record() -> Dict[str, Any]:
    """Raw gov/v1 proposal record for a passed software upgrade."""
    return {
        "id": "12",
        "messages": [
            {
                "@type": UPGRADE_TYPE,
                "authority": AUTHORITY,
                "plan": {
                    "name": "v0.9-dev.7",
                    "time": "0001-01-01T00:00:00Z",
                    "height": "1250000",
                    "info": json.dumps({
                        "binaries": {
                            "linux/amd64": f"{RELEASE_BASE}/v0.9-dev.7/veranad-v0.9-dev.7-linux-amd64",
                            "linux/arm64": f"{RELEASE_BASE}/v0.9-dev.7/veranad-v0.9-dev.7-linux-arm64",
                        }
                    }),
                    "upgraded_client_state": None,
                },
            }
        ],
        "status": "PROPOSAL_STATUS_PASSED",
        "final_tally_result": {
            "yes_count": "42000000000000000000",
            "abstain_count": "0",
            "no_count": "1000000",
            "no_with_veto_count": "",
        },
        "submit_time": "2025-03-01T10:00:00.123456789Z",
        "deposit_end_time": "2025-03-03T10:00:00Z",
        "total_deposit": [{"denom": "uvna", "amount": "10000000"}],
        "voting_start_time": "2025-03-01T10:00:00.123456789Z",
        "voting_end_time": "2025-03-04T10:00:00.123456789Z",
        "metadata": "",
        "title": "Upgrade to v0.9-dev.7",
        "summary": "Software upgrade",
        "proposer": "verana1proposer",
        "expedited": False,
        "failed_reason": "",
    }
