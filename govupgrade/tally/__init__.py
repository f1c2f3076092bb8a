"""Precision-safe vote tally and turnout calculation."""

from .calculator import (
    build_voting_summary,
    calculate_total_voting_power,
    calculate_turnout_percent,
    safe_big_int_add,
)

__all__ = [
    "build_voting_summary",
    "calculate_total_voting_power",
    "calculate_turnout_percent",
    "safe_big_int_add",
]
