"""
Canonical data models for governance proposals.

This module defines immutable data structures that represent governance
proposals after adaptation from the chain's query format. Vote counts and
heights stay decimal strings; arithmetic on them happens in the tally engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from ..errors import MalformedDataError
from ..utils.time import is_zero_time
from .validators import normalize_count


class ProposalStatus(str, Enum):
    """Governance proposal states as reported by the chain."""
    UNSPECIFIED = "PROPOSAL_STATUS_UNSPECIFIED"
    DEPOSIT_PERIOD = "PROPOSAL_STATUS_DEPOSIT_PERIOD"
    VOTING_PERIOD = "PROPOSAL_STATUS_VOTING_PERIOD"
    PASSED = "PROPOSAL_STATUS_PASSED"
    REJECTED = "PROPOSAL_STATUS_REJECTED"
    FAILED = "PROPOSAL_STATUS_FAILED"

    @property
    def short_name(self) -> str:
        """Status without the PROPOSAL_STATUS_ prefix, e.g. REJECTED."""
        return self.value.replace("PROPOSAL_STATUS_", "")

    @classmethod
    def from_raw(cls, value: Any) -> "ProposalStatus":
        """Resolve a raw status string (or enum member)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise MalformedDataError(
                f"Unknown proposal status: {value!r}",
                raw_data=repr(value),
                expected_format="PROPOSAL_STATUS_*",
            ) from None


class MessageKind(str, Enum):
    """Known proposal message kinds, with an explicit fall-through."""
    SOFTWARE_UPGRADE = "software_upgrade"
    CANCEL_UPGRADE = "cancel_upgrade"
    EXEC_LEGACY_CONTENT = "exec_legacy_content"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ProposalMessage:
    """A tagged proposal message."""
    type_url: str                                   # The '@type' tag
    authority: Optional[str] = None
    plan: Optional[Mapping[str, Any]] = None        # Raw upgrade plan payload
    payload: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TallyResult:
    """Final (or current) vote tally; every bucket is a decimal string."""
    yes_count: str = "0"
    no_count: str = "0"
    abstain_count: str = "0"
    no_with_veto_count: str = "0"

    def __post_init__(self):
        """Normalize missing buckets to "0" and reject malformed ones."""
        for name in ("yes_count", "no_count", "abstain_count", "no_with_veto_count"):
            object.__setattr__(self, name, normalize_count(getattr(self, name), name))

    def buckets(self) -> tuple[str, str, str, str]:
        """All four buckets in canonical order."""
        return (self.yes_count, self.no_count, self.abstain_count, self.no_with_veto_count)


@dataclass(frozen=True)
class Proposal:
    """Governance proposal as delivered by the governance query surface."""

    id: str
    status: ProposalStatus
    messages: tuple[ProposalMessage, ...] = ()
    tally: TallyResult = field(default_factory=TallyResult)

    # Lifecycle timestamps (ISO-8601, empty when not reached)
    submit_time: str = ""
    deposit_end_time: str = ""
    voting_start_time: str = ""
    voting_end_time: str = ""

    proposer: str = ""
    title: str = ""
    summary: str = ""
    metadata: str = ""

    def __post_init__(self):
        """Coerce status to the enum and messages to a tuple."""
        object.__setattr__(self, "status", ProposalStatus.from_raw(self.status))
        object.__setattr__(self, "messages", tuple(self.messages or ()))
        object.__setattr__(self, "id", str(self.id))


@dataclass(frozen=True)
class UpgradePlan:
    """Software upgrade plan embedded in an upgrade message."""
    name: str
    height: str                                     # Decimal string, "" if absent
    time: str                                       # ISO-8601, may be the zero sentinel
    info: str                                       # Free-form, usually JSON
    upgraded_client_state: Optional[Any] = None

    @property
    def is_height_triggered(self) -> bool:
        """True when the plan is scheduled by height rather than by time."""
        return not self.time or is_zero_time(self.time)


@dataclass(frozen=True)
class ParsedPlanInfo:
    """Structured view of a plan's info field."""
    binaries: Optional[dict[str, str]] = None       # Platform key -> normalized URL
    version: Optional[str] = None
    binary: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict)
