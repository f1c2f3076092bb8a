"""Upgrade proposal classification and plan metadata parsing."""

from .classifier import (
    count_upgrade_messages,
    extract_upgrade_plan,
    get_upgrade_message,
    is_upgrade_proposal,
    message_kind,
)
from .metadata import extract_binary_version, fix_binary_url, parse_plan_info

__all__ = [
    "count_upgrade_messages",
    "extract_upgrade_plan",
    "get_upgrade_message",
    "is_upgrade_proposal",
    "message_kind",
    "extract_binary_version",
    "fix_binary_url",
    "parse_plan_info",
]
