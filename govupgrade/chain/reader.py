"""Collaborator protocol for the three chain reads the engine performs."""

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class ChainReader(Protocol):
    """
    Source of live chain data, implemented outside the engine.

    Implementations may raise any exception on failure (ChainReadError is
    provided for the purpose); timeouts and retries are their concern.
    """

    async def fetch_current_height(self) -> str:
        """Latest block height as a decimal-integer string."""
        ...

    async def fetch_block_at_height(self, height: str) -> Mapping[str, Any]:
        """Block record at the given height, carrying a header timestamp."""
        ...

    async def fetch_staking_pool(self) -> str:
        """Total bonded tokens as a decimal-integer string."""
        ...
