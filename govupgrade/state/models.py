"""
Execution status data models.

Immutable result structures produced by the execution resolver.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ExecutionStatus(str, Enum):
    """Whether a scheduled upgrade took effect on chain."""
    EXECUTED = "executed"
    PENDING = "pending"
    NOT_EXECUTED = "not_executed"
    UNKNOWN = "unknown"


class ResolutionTrigger(str, Enum):
    """Rule of the execution state machine that produced a status."""
    PROPOSAL_NOT_PASSED = "proposal_not_passed"
    CURRENT_HEIGHT_UNAVAILABLE = "current_height_unavailable"
    INVALID_HEIGHT = "invalid_height"
    BLOCK_TIME_FOUND = "block_time_found"
    BLOCK_TIME_MISSING = "block_time_missing"
    BLOCK_UNAVAILABLE = "block_unavailable"
    HEIGHT_NOT_REACHED = "height_not_reached"


@dataclass(frozen=True)
class ExecutionInfo:
    """Execution status of an upgrade plan."""

    status: ExecutionStatus
    message: str                                    # Human-readable explanation
    plan_height: str

    executed_at: Optional[str] = None               # Header time of the block at plan height
    current_height: Optional[str] = None            # Observed chain height, if read

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready mapping."""
        return {
            "status": self.status.value,
            "message": self.message,
            "plan_height": self.plan_height,
            "executed_at": self.executed_at,
            "current_height": self.current_height,
        }
