"""
Decimal Parsing

DESIGN DECISION: Every number the user types goes through parse_decimal.
Malformed input is never an error in this app; it simply counts as zero,
and the validation message shows the user that the totals do not add up.

Parsing follows the browser's parseFloat: leading whitespace is skipped and
the longest leading decimal literal is used, so "12abc" reads as 12.
"""

import math
import re
from typing import Union

_LEADING_DECIMAL = re.compile(
    r"""
    [+-]?
    (?: \d+ (?: \.\d* )? | \.\d+ )
    (?: [eE] [+-]? \d+ )?
    """,
    re.VERBOSE,
)


def parse_decimal(value: Union[str, int, float, None]) -> float:
    """
    Parse a user-entered decimal, defaulting to 0.0.

    Args:
        value: Text from a form field, or an already numeric value.

    Returns:
        The parsed finite float, or 0.0 for empty, non-numeric,
        NaN or infinite input.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_DECIMAL.match(str(value).lstrip())
        if match is None:
            return 0.0
        number = float(match.group(0))

    if not math.isfinite(number):
        return 0.0
    return number
