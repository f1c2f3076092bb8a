"""Unit tests for the proposal analysis coordinator."""

import json

import pytest

from govupgrade.config.defaults import ChainParams, get_default_config
from govupgrade.data.models import ProposalMessage, ProposalStatus, TallyResult
from govupgrade.engine import UpgradeProposalAnalyzer, build_upgrade_proposal_data
from govupgrade.state.models import ExecutionStatus

from builders import (
    RELEASE_BASE,
    FakeChainReader,
    binaries_info,
    make_proposal,
    rpc_block,
    upgrade_message,
)


@pytest.fixture
def analyzer(fake_reader) -> UpgradeProposalAnalyzer:
    return UpgradeProposalAnalyzer(fake_reader, config=get_default_config())


class TestUpgradeProposalAnalyzer:
    """Test suite for the UpgradeProposalAnalyzer class."""

    def test_loads_default_config_from_repository(self, fake_reader):
        """Without an explicit config the repository's config directory is used."""
        analyzer = UpgradeProposalAnalyzer(fake_reader, network_id="verana-testnet")
        assert analyzer.config.metadata.binary_name == "veranad"
        assert analyzer.config.chain.display_denom == "VNA"

    @pytest.mark.asyncio
    async def test_executed_upgrade(self, analyzer, fake_reader):
        info = binaries_info(linux_amd64=f"{RELEASE_BASE}/v0.9-dev.7/veranad-v0.9-dev.7-linux-amd64")
        proposal = make_proposal(
            messages=(upgrade_message(name="v0.9", height="50", info=info),),
            tally=TallyResult(yes_count="500000", no_count="100000"),
        )

        data = await analyzer.build_upgrade_proposal_data(proposal)

        assert data.is_upgrade_proposal is True
        assert data.execution.status is ExecutionStatus.EXECUTED
        assert data.execution.executed_at == "2025-03-10T08:15:42.517389Z"
        assert data.voting.total_voting_power == "600000"
        assert data.voting.turnout_percent == "60.00"
        assert data.plan.height == "50"
        assert data.parsed_plan_info.binaries == {
            "linux/amd64": f"{RELEASE_BASE}/v0.9-dev.7/veranad-linux-amd64",
        }
        assert data.binary_version == "v0.9-dev.7"
        assert data.message_type == "/cosmos.upgrade.v1beta1.MsgSoftwareUpgrade"
        assert data.authority.startswith("verana1")
        assert sorted(fake_reader.read_names()) == ["block_at_height", "current_height", "staking_pool"]

    @pytest.mark.asyncio
    async def test_non_upgrade_proposal(self, analyzer, fake_reader):
        """Non-upgrade proposals get a neutral status and still a voting summary."""
        spend = ProposalMessage(type_url="/cosmos.distribution.v1beta1.MsgCommunityPoolSpend")
        proposal = make_proposal(messages=(spend,), tally=TallyResult(yes_count="10"))

        data = await analyzer.build_upgrade_proposal_data(proposal)

        assert data.is_upgrade_proposal is False
        assert data.execution.status is ExecutionStatus.NOT_EXECUTED
        assert data.execution.message == "Not an upgrade proposal"
        assert data.execution.plan_height == "0"
        assert data.plan is None
        assert data.binary_version is None
        assert data.authority is None
        assert data.voting.total_voting_power == "10"
        assert fake_reader.read_names() == ["staking_pool"]

    @pytest.mark.asyncio
    async def test_upgrade_without_plan_height(self, analyzer, fake_reader):
        """A time-scheduled plan with no height is not resolved against the chain."""
        proposal = make_proposal(messages=(upgrade_message(height="", time="2025-06-01T00:00:00Z"),))

        data = await analyzer.build_upgrade_proposal_data(proposal)

        assert data.is_upgrade_proposal is True
        assert data.execution.message == "Not an upgrade proposal"
        assert data.plan.is_height_triggered is False
        assert "current_height" not in fake_reader.read_names()

    @pytest.mark.asyncio
    async def test_rejected_upgrade_reads_only_pool(self, analyzer, fake_reader):
        proposal = make_proposal(status=ProposalStatus.REJECTED, messages=(upgrade_message(),))

        data = await analyzer.build_upgrade_proposal_data(proposal)

        assert data.execution.status is ExecutionStatus.NOT_EXECUTED
        assert fake_reader.read_names() == ["staking_pool"]

    @pytest.mark.asyncio
    async def test_all_reads_failing(self):
        """Collaborator failures surface as states, never as exceptions."""
        reader = FakeChainReader(
            current_height=ConnectionError("down"),
            bonded_tokens=ConnectionError("down"),
        )
        analyzer = UpgradeProposalAnalyzer(reader, config=get_default_config())
        proposal = make_proposal(messages=(upgrade_message(),), tally=TallyResult(yes_count="1"))

        data = await analyzer.build_upgrade_proposal_data(proposal)

        assert data.execution.status is ExecutionStatus.NOT_EXECUTED
        assert data.execution.current_height is None
        assert data.voting.bonded_tokens == "0"
        assert data.voting.turnout_percent == "N/A"

    @pytest.mark.asyncio
    async def test_first_upgrade_message_analyzed(self, analyzer):
        proposal = make_proposal(messages=(
            upgrade_message(name="v1.0.0", height="50"),
            upgrade_message(name="v2.0.0", height="500"),
        ))

        data = await analyzer.build_upgrade_proposal_data(proposal)

        assert data.plan.name == "v1.0.0"
        assert data.execution.status is ExecutionStatus.EXECUTED

    @pytest.mark.asyncio
    async def test_analyze_many_preserves_order(self, fake_reader):
        fake_reader.blocks["60"] = rpc_block("2025-03-11T00:00:00Z")
        analyzer = UpgradeProposalAnalyzer(fake_reader, config=get_default_config())
        proposals = [
            make_proposal(proposal_id="1", messages=(upgrade_message(height="60"),)),
            make_proposal(proposal_id="2", messages=(upgrade_message(height="500"),)),
            make_proposal(proposal_id="3"),
        ]

        results = await analyzer.analyze_many(proposals)

        assert [r.proposal.id for r in results] == ["1", "2", "3"]
        assert [r.execution.status for r in results] == [
            ExecutionStatus.EXECUTED,
            ExecutionStatus.PENDING,
            ExecutionStatus.NOT_EXECUTED,
        ]

    @pytest.mark.asyncio
    async def test_analyze_many_empty(self, analyzer):
        assert await analyzer.analyze_many([]) == []

    @pytest.mark.asyncio
    async def test_analyze_raw_proposal(self, sample_proposal_record):
        reader = FakeChainReader(current_height="1300000", blocks={
            "1250000": rpc_block("2025-03-20T12:00:00Z"),
        }, bonded_tokens="84000000000000000000")
        analyzer = UpgradeProposalAnalyzer(reader, config=get_default_config())

        data = await analyzer.analyze_raw_proposal(sample_proposal_record)

        assert data is not None
        assert data.proposal.id == "12"
        assert data.execution.status is ExecutionStatus.EXECUTED
        assert data.execution.executed_at == "2025-03-20T12:00:00Z"
        assert data.voting.no_with_veto_count == "0"
        assert data.voting.total_voting_power == "42000000000001000000"
        assert data.voting.turnout_percent == "50.00"
        assert data.binary_version == "v0.9-dev.7"
        assert data.parsed_plan_info.binaries["linux/arm64"] == f"{RELEASE_BASE}/v0.9-dev.7/veranad-linux-arm64"

    @pytest.mark.asyncio
    async def test_analyze_raw_proposal_malformed(self, analyzer, fake_reader, sample_proposal_record):
        """Records that cannot form a proposal are skipped."""
        del sample_proposal_record["status"]
        assert await analyzer.analyze_raw_proposal(sample_proposal_record) is None

        sample_proposal_record["status"] = "PROPOSAL_STATUS_PASSED"
        sample_proposal_record["final_tally_result"]["yes_count"] = "1.5"
        assert await analyzer.analyze_raw_proposal(sample_proposal_record) is None
        assert fake_reader.calls == []

    def test_format_token_amount(self, fake_reader):
        analyzer = UpgradeProposalAnalyzer(fake_reader, config=get_default_config())
        assert analyzer.format_token_amount("1500000000") == "1,500 VNA"
        assert analyzer.format_token_amount("1234567") == "1.23 VNA"
        assert analyzer.format_token_amount(None) == "0 VNA"

    def test_format_token_amount_custom_denom(self, fake_reader):
        config = get_default_config()
        config = type(config)(
            classifier=config.classifier,
            metadata=config.metadata,
            tally=config.tally,
            chain=ChainParams(display_denom="ATOM", denom_exponent=6),
            logging=config.logging,
        )
        analyzer = UpgradeProposalAnalyzer(fake_reader, config=config)
        assert analyzer.format_token_amount("2500000") == "2.5 ATOM"


class TestUpgradeProposalDataSerialization:
    """Test to_dict output for presentation layers."""

    @pytest.mark.asyncio
    async def test_to_dict_is_json_ready(self, analyzer):
        proposal = make_proposal(
            messages=(upgrade_message(height="150"),),
            tally=TallyResult(yes_count="18446744073709551616"),
            title="Upgrade to v0.9-dev.7",
        )

        data = await analyzer.build_upgrade_proposal_data(proposal)
        payload = data.to_dict()

        assert json.loads(json.dumps(payload)) == payload
        assert payload["proposal_id"] == "7"
        assert payload["proposal_status"] == "PROPOSAL_STATUS_PASSED"
        assert payload["execution"]["status"] == "pending"
        assert payload["execution"]["current_height"] == "100"
        assert payload["voting"]["yes_count"] == "18446744073709551616"
        assert payload["plan"]["is_height_triggered"] is True
        assert payload["parsed_plan_info"] is None
        assert payload["binary_version"] == "v0.9-dev.7"


class TestModuleLevelEntryPoint:
    """Test the one-shot helper."""

    @pytest.mark.asyncio
    async def test_build_upgrade_proposal_data(self, fake_reader):
        proposal = make_proposal(messages=(upgrade_message(),))

        data = await build_upgrade_proposal_data(proposal, fake_reader, get_default_config())

        assert data.execution.status is ExecutionStatus.EXECUTED
