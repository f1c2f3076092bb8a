"""
Display formatting for proposal statuses, heights and token amounts.

Token amounts are converted from micro-denomination with integer
arithmetic only, so large supplies format exactly.
"""

from typing import Optional, Union

from ..data.validators import parse_decimal_integer


def format_proposal_status(status: Union[str, object]) -> str:
    """
    Format a proposal status for display.

    PROPOSAL_STATUS_VOTING_PERIOD -> "voting period"
    """
    value = getattr(status, "value", status)
    return str(value).replace("PROPOSAL_STATUS_", "").lower().replace("_", " ")


def format_block_height(height: Optional[str]) -> str:
    """Format a block height with thousands separators; malformed input is returned as-is."""
    parsed = parse_decimal_integer(height)
    if parsed is None:
        return height or ""
    return f"{parsed:,}"


def format_micro_amount(amount: Optional[str],
                        exponent: int = 6,
                        max_fraction_digits: int = 2) -> str:
    """
    Convert a micro-denomination amount to display units.

    Args:
        amount: Decimal-integer string in micro units (e.g. uvna)
        exponent: Decimal places between micro and display units
        max_fraction_digits: Fraction digits kept after half-up rounding

    Returns:
        Amount with thousands separators and trailing fraction zeros
        dropped, e.g. "1,234.5"; "0" for missing or malformed input
    """
    value = parse_decimal_integer(amount)
    if value is None:
        return "0"

    digits = min(max_fraction_digits, exponent)
    divisor = 10 ** (exponent - digits)
    rounded = (value + divisor // 2) // divisor
    whole, fraction = divmod(rounded, 10 ** digits)

    text = f"{whole:,}"
    if digits and fraction:
        text += "." + f"{fraction:0{digits}d}".rstrip("0")
    return text
