"""
Proposal message classification.

A proposal is an upgrade proposal when any of its messages is a software
upgrade message. Only the first such message is analyzed.
"""

from typing import Any, Optional

from ..config.defaults import ClassifierParams
from ..data.models import MessageKind, Proposal, ProposalMessage, UpgradePlan

_DEFAULT_PARAMS = ClassifierParams()


def message_kind(message: ProposalMessage,
                 params: ClassifierParams = _DEFAULT_PARAMS) -> MessageKind:
    """
    Resolve the kind of a proposal message from its type tag.

    A tag equal to the canonical upgrade type, or containing the upgrade
    marker, is a software upgrade. Tags outside the known set are
    UNRECOGNIZED.
    """
    type_url = message.type_url or ""

    if type_url == params.upgrade_message_type or params.upgrade_message_marker in type_url:
        return MessageKind.SOFTWARE_UPGRADE
    if type_url == params.cancel_upgrade_message_type:
        return MessageKind.CANCEL_UPGRADE
    if type_url == params.legacy_content_message_type:
        return MessageKind.EXEC_LEGACY_CONTENT
    return MessageKind.UNRECOGNIZED


def is_upgrade_proposal(proposal: Proposal,
                        params: ClassifierParams = _DEFAULT_PARAMS) -> bool:
    """Check if any message of the proposal is a software upgrade."""
    return any(
        message_kind(msg, params) is MessageKind.SOFTWARE_UPGRADE
        for msg in proposal.messages
    )


def count_upgrade_messages(proposal: Proposal,
                           params: ClassifierParams = _DEFAULT_PARAMS) -> int:
    """Number of software upgrade messages carried by the proposal."""
    return sum(
        1 for msg in proposal.messages
        if message_kind(msg, params) is MessageKind.SOFTWARE_UPGRADE
    )


def get_upgrade_message(proposal: Proposal,
                        params: ClassifierParams = _DEFAULT_PARAMS) -> Optional[ProposalMessage]:
    """Get the first software upgrade message, or None."""
    for msg in proposal.messages:
        if message_kind(msg, params) is MessageKind.SOFTWARE_UPGRADE:
            return msg
    return None


def _plan_field(plan: dict[str, Any], name: str) -> str:
    value = plan.get(name)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def extract_upgrade_plan(proposal: Proposal,
                         params: ClassifierParams = _DEFAULT_PARAMS) -> Optional[UpgradePlan]:
    """
    Extract the upgrade plan from the first upgrade message.

    Absent plan fields default to "". Returns None when there is no upgrade
    message or the message carries no plan.
    """
    upgrade_message = get_upgrade_message(proposal, params)
    if upgrade_message is None or not upgrade_message.plan:
        return None

    plan = upgrade_message.plan
    return UpgradePlan(
        name=_plan_field(plan, "name"),
        height=_plan_field(plan, "height"),
        time=_plan_field(plan, "time"),
        info=_plan_field(plan, "info"),
        upgraded_client_state=plan.get("upgraded_client_state"),
    )
