"""
Utility functions module.

Timestamp handling for chain-produced ISO-8601 values and display
formatting helpers for statuses, heights and token amounts.

Time Semantics:
- Chain timestamps are carried as the exact strings the chain returned
- Parsing to datetime is only done for comparisons and display
- The zero timestamp 0001-01-01T00:00:00Z means "not time-triggered"
"""
