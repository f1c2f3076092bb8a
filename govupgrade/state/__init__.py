"""
Upgrade execution state machine.

Resolves whether a passed upgrade proposal's plan took effect on chain:
executed, pending, not_executed or unknown.
"""
