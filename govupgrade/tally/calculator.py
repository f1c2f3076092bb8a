"""
Vote tally calculations on arbitrary-precision integers.

Vote counts and bonded token totals are micro-denomination amounts that
routinely exceed 2^63. They are summed and divided as Python ints only;
turnout is computed in fixed point and formatted without floats.
"""

from typing import Optional

from ..chain.reader import ChainReader
from ..chain.reads import guarded_read
from ..config.defaults import TallyParams
from ..data.models import Proposal, TallyResult
from ..data.validators import is_decimal_integer, parse_decimal_integer
from ..errors import MalformedDataError
from ..logging.config import get_logger
from ..models.analysis import VotingSummary

logger = get_logger(__name__)

_DEFAULT_PARAMS = TallyParams()


def safe_big_int_add(*values: Optional[str]) -> int:
    """
    Sum decimal-integer strings; missing or empty values count as 0.

    Raises:
        MalformedDataError: If a value is not a non-negative decimal integer
    """
    total = 0
    for value in values:
        if value is None or value == "":
            continue
        parsed = parse_decimal_integer(value)
        if parsed is None:
            raise MalformedDataError(
                "Vote count is not a decimal integer",
                raw_data=repr(value),
                expected_format="decimal integer string",
            )
        total += parsed
    return total


def calculate_total_voting_power(tally: TallyResult) -> str:
    """totalVotingPower = yes + no + abstain + no_with_veto, as a decimal string."""
    return str(safe_big_int_add(*tally.buckets()))


def _format_fixed_point(scaled: int, scale_digits: int, decimals: int) -> str:
    """Round a value held as scaled / 10^scale_digits half-up to `decimals` places."""
    divisor = 10 ** (scale_digits - decimals)
    rounded = (scaled + divisor // 2) // divisor
    if decimals == 0:
        return str(rounded)
    integer_part, fraction = divmod(rounded, 10 ** decimals)
    return f"{integer_part}.{fraction:0{decimals}d}"


def calculate_turnout_percent(total_voting_power: Optional[str],
                              bonded_tokens: Optional[str],
                              params: TallyParams = _DEFAULT_PARAMS) -> str:
    """
    turnoutPercent = 100 * totalVotingPower / bondedTokens.

    The quotient is taken on integers scaled by 10^scale_exponent, which
    keeps six digits of a percentage. Output has 2 decimals at >= 10%,
    3 at >= 1% and 4 below.

    Returns:
        Formatted percentage, or "N/A" if bonded tokens are absent, zero or
        either value is malformed
    """
    if not bonded_tokens or bonded_tokens == "0":
        return params.unavailable

    voting_power = parse_decimal_integer(total_voting_power or "0")
    bonded = parse_decimal_integer(bonded_tokens)
    if voting_power is None or bonded is None or bonded == 0:
        return params.unavailable

    # Percentage digits carried past the decimal point
    scale_digits = params.scale_exponent - 2
    turnout_scaled = (voting_power * 10 ** params.scale_exponent) // bonded

    one_percent = 10 ** scale_digits
    if turnout_scaled >= params.two_decimals_at_pct * one_percent:
        decimals = 2
    elif turnout_scaled >= params.three_decimals_at_pct * one_percent:
        decimals = 3
    else:
        decimals = 4

    return _format_fixed_point(turnout_scaled, scale_digits, decimals)


async def build_voting_summary(proposal: Proposal,
                               reader: ChainReader,
                               params: TallyParams = _DEFAULT_PARAMS) -> VotingSummary:
    """
    Build the voting summary, reading bonded tokens from the staking pool.

    A failed or empty staking pool read leaves bonded tokens at "0", so
    turnout is reported as "N/A".
    """
    tally = proposal.tally
    total_voting_power = calculate_total_voting_power(tally)

    bonded_tokens = "0"
    pool = await guarded_read("staking_pool", reader.fetch_staking_pool)
    if pool.success and pool.value:
        if is_decimal_integer(str(pool.value)):
            bonded_tokens = str(pool.value)
        else:
            logger.warning(
                "Staking pool returned a malformed bonded token amount",
                proposal_id=proposal.id,
                bonded_tokens=repr(pool.value),
            )

    turnout_percent = calculate_turnout_percent(total_voting_power, bonded_tokens, params)

    logger.debug(
        "Voting summary built",
        proposal_id=proposal.id,
        total_voting_power=total_voting_power,
        bonded_tokens=bonded_tokens,
        turnout_percent=turnout_percent,
    )

    return VotingSummary(
        yes_count=tally.yes_count,
        no_count=tally.no_count,
        abstain_count=tally.abstain_count,
        no_with_veto_count=tally.no_with_veto_count,
        total_voting_power=total_voting_power,
        bonded_tokens=bonded_tokens,
        turnout_percent=turnout_percent,
    )
