"""
Validation helpers for decimal-integer strings carried by governance records.

Token amounts, vote counts and heights arrive as base-10 strings that can
exceed 64-bit range. They are only ever converted to Python int.
"""

import re
from typing import Any, Optional

from ..errors import MalformedDataError

_DECIMAL_INTEGER = re.compile(r"[0-9]+", re.ASCII)


def is_decimal_integer(value: Any) -> bool:
    """Check that a value is a non-negative base-10 integer string."""
    return isinstance(value, str) and _DECIMAL_INTEGER.fullmatch(value) is not None


def parse_decimal_integer(value: Any) -> Optional[int]:
    """
    Convert a non-negative decimal-integer string to int.

    Returns:
        The integer value, or None if the string is not a decimal integer
    """
    if not is_decimal_integer(value):
        return None
    return int(value)


def normalize_count(value: Any, field_name: str) -> str:
    """
    Normalize a count field: missing or empty becomes "0".

    Raises:
        MalformedDataError: If the value is present but not a decimal integer
    """
    if value is None or value == "":
        return "0"

    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return str(value)

    if not is_decimal_integer(value):
        raise MalformedDataError(
            f"Invalid {field_name}: expected a non-negative decimal integer",
            raw_data=repr(value),
            expected_format="decimal integer string",
            context={"field": field_name},
        )

    # Drop leading zeros so equal amounts compare equal as strings
    return str(int(value))
