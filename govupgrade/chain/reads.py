"""
Result-typed wrappers around collaborator reads.

A collaborator read never raises past this module: every exception becomes
a failed ReadResult that the engine maps into one of its defined states.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Mapping, Optional, TypeVar

from ..logging.config import get_chain_logger, log_read_failure

logger = get_chain_logger(__name__)

T = TypeVar("T")

# Candidate locations of the header timestamp in a block record
_BLOCK_TIME_PATHS = (
    ("result", "block", "header", "time"),      # CometBFT RPC /block
    ("block", "header", "time"),                # Cosmos REST / RPC result body
    ("sdk_block", "header", "time"),            # Cosmos REST, SDK >= 0.47
    ("header", "time"),
)


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """Outcome of one collaborator read."""
    read_name: str
    value: Optional[T] = None
    success: bool = True
    error_msg: Optional[str] = None

    @classmethod
    def ok(cls, read_name: str, value: T) -> "ReadResult[T]":
        """Create successful result with the read value."""
        return cls(read_name=read_name, value=value, success=True)

    @classmethod
    def failure(cls, read_name: str, error_msg: str) -> "ReadResult[T]":
        """Create failed result."""
        return cls(read_name=read_name, success=False, error_msg=error_msg)


async def guarded_read(
    read_name: str,
    read: Callable[..., Awaitable[T]],
    *args: Any,
) -> ReadResult[T]:
    """
    Await a collaborator read and capture its outcome.

    Args:
        read_name: Name used in logs and in the result
        read: Collaborator coroutine function
        *args: Arguments for the read

    Returns:
        ReadResult.ok with the value, or ReadResult.failure if the read raised
    """
    try:
        value = await read(*args)
    except Exception as e:
        log_read_failure(logger, read_name, e, context={"args": [str(a) for a in args]} if args else None)
        return ReadResult.failure(read_name, f"{type(e).__name__}: {e}")

    return ReadResult.ok(read_name, value)


def extract_block_time(block: Any) -> Optional[str]:
    """
    Find the header timestamp in a block record.

    Returns:
        The timestamp string exactly as recorded, or None if absent
    """
    if not isinstance(block, Mapping):
        return None

    for path in _BLOCK_TIME_PATHS:
        node: Any = block
        for key in path:
            if not isinstance(node, Mapping):
                node = None
                break
            node = node.get(key)
        if isinstance(node, str) and node:
            return node

    return None
