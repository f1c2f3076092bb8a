"""
Collaborator failure classification for external chain reads.

Chain readers may raise ChainReadError (or any other exception); the read
boundary converts either into a failed ReadResult.
"""

from typing import Optional, Dict, Any


class ChainReadError(Exception):
    """A chain query (height, block, staking pool) could not be served."""

    def __init__(self, message: str, read_name: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.read_name = read_name
        self.context = context or {}
        self.recoverable = True
