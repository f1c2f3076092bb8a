"""
govupgrade - Governance Upgrade Proposal Analysis Engine

Analyzes on-chain governance proposals, with a focus on software-upgrade
proposals: upgrade execution status, exact vote tallies and turnout, and
upgrade metadata carried in the plan info payload.
"""

__version__ = "0.1.0"
__author__ = "govupgrade Team"
