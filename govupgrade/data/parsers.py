"""
Governance query parsers for converting raw proposal records to models.

This module handles the Cosmos SDK gov/v1 proposal JSON shape (and the
gov/v1beta1 tally key names) with proper type conversion and error handling.
"""

from typing import Any, Mapping, Optional

from ..errors import MalformedDataError, MissingDataError
from .models import Proposal, ProposalMessage, ProposalStatus, TallyResult

# gov/v1 key -> gov/v1beta1 key
_LEGACY_TALLY_KEYS = {
    "yes_count": "yes",
    "no_count": "no",
    "abstain_count": "abstain",
    "no_with_veto_count": "no_with_veto",
}


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_message(raw: Mapping[str, Any]) -> ProposalMessage:
    """
    Parse one proposal message.

    Expected format:
    {
        "@type": "/cosmos.upgrade.v1beta1.MsgSoftwareUpgrade",
        "authority": "verana10d07y265gmmuvt4z0w9aw880jnsr700j...",
        "plan": {"name": "v0.9", "height": "1200000", "time": "...", "info": "{...}"}
    }

    Raises:
        MalformedDataError: If the message is not a mapping
    """
    if not isinstance(raw, Mapping):
        raise MalformedDataError(
            "Proposal message must be an object",
            raw_data=repr(raw)[:200],
            expected_format="object with '@type'",
        )

    plan = raw.get("plan")
    authority = raw.get("authority")

    return ProposalMessage(
        type_url=_as_str(raw.get("@type")),
        authority=_as_str(authority) if authority is not None else None,
        plan=plan if isinstance(plan, Mapping) else None,
        payload=dict(raw),
    )


def parse_tally(raw: Optional[Mapping[str, Any]]) -> TallyResult:
    """
    Parse a tally result, accepting gov/v1 and gov/v1beta1 key names.

    Missing buckets default to "0".

    Raises:
        MalformedDataError: If a bucket is not a non-negative decimal integer
    """
    if raw is None:
        return TallyResult()
    if not isinstance(raw, Mapping):
        raise MalformedDataError(
            "Tally result must be an object",
            raw_data=repr(raw)[:200],
            expected_format="object with *_count fields",
        )

    counts = {}
    for key, legacy_key in _LEGACY_TALLY_KEYS.items():
        value = raw.get(key)
        if value is None:
            value = raw.get(legacy_key)
        counts[key] = value

    return TallyResult(**counts)


def parse_proposal(raw: Mapping[str, Any]) -> Proposal:
    """
    Parse a gov/v1 proposal record into a Proposal.

    Args:
        raw: One entry of the /cosmos/gov/v1/proposals response

    Returns:
        Proposal with normalized tally and ordered messages

    Raises:
        MissingDataError: If id or status is missing
        MalformedDataError: If a field has the wrong shape or value
    """
    if not isinstance(raw, Mapping):
        raise MalformedDataError(
            "Proposal record must be an object",
            raw_data=repr(raw)[:200],
            expected_format="gov/v1 proposal object",
        )

    proposal_id = raw.get("id", raw.get("proposal_id"))
    if proposal_id is None or proposal_id == "":
        raise MissingDataError("Proposal record has no id", data_type="proposal")

    status = raw.get("status")
    if not status:
        raise MissingDataError(
            "Proposal record has no status",
            data_type="proposal",
            context={"proposal_id": _as_str(proposal_id)},
        )

    raw_messages = raw.get("messages") or []
    if not isinstance(raw_messages, list):
        raise MalformedDataError(
            "Proposal messages must be a list",
            raw_data=repr(raw_messages)[:200],
            expected_format="list of message objects",
            context={"proposal_id": _as_str(proposal_id)},
        )

    return Proposal(
        id=_as_str(proposal_id),
        status=ProposalStatus.from_raw(status),
        messages=tuple(parse_message(m) for m in raw_messages),
        tally=parse_tally(raw.get("final_tally_result")),
        submit_time=_as_str(raw.get("submit_time")),
        deposit_end_time=_as_str(raw.get("deposit_end_time")),
        voting_start_time=_as_str(raw.get("voting_start_time")),
        voting_end_time=_as_str(raw.get("voting_end_time")),
        proposer=_as_str(raw.get("proposer")),
        title=_as_str(raw.get("title")),
        summary=_as_str(raw.get("summary")),
        metadata=_as_str(raw.get("metadata")),
    )


def parse_proposals_response(payload: Mapping[str, Any]) -> list[Proposal]:
    """
    Parse a /cosmos/gov/v1/proposals response body.

    Raises:
        MalformedDataError: If the payload has no proposals list
    """
    proposals = payload.get("proposals") if isinstance(payload, Mapping) else None
    if not isinstance(proposals, list):
        raise MalformedDataError(
            "Proposals response must contain a 'proposals' list",
            raw_data=repr(payload)[:200],
            expected_format="{'proposals': [...]}",
        )
    return [parse_proposal(p) for p in proposals]
