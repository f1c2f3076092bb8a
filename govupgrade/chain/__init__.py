"""
External chain read boundary.

Defines the collaborator protocol the engine reads through and the
success/failure wrapper every read is folded into.
"""

from .reader import ChainReader
from .reads import ReadResult, extract_block_time, guarded_read

__all__ = ["ChainReader", "ReadResult", "extract_block_time", "guarded_read"]
