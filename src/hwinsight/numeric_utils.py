"""
Numeric helpers shared by value presentation and the zoom controller.
"""

import math
from typing import Union


def round_half_up(value: float, digits: int = 0) -> Union[int, float]:
    """
    Round ``value`` to ``digits`` decimals, halves rounding toward +infinity.

    Built-in ``round`` rounds halves to even (``round(0.125, 2) == 0.12``);
    chart values and domains round halves up (``0.13``) instead.

    Args:
        value: Number to round
        digits: Decimal places to keep

    Returns:
        An int when ``digits`` is 0, otherwise a float
    """
    if digits == 0:
        return math.floor(value + 0.5)
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale
