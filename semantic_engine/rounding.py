# rounding.py
# Half-up rounding for every published number.
# Ties go toward +infinity: 62.5 -> 63, 2.5 -> 3, -2.5 -> -2. Builtin round()
# sends ties to the even neighbour and would move scores and cost lines.

import math


def round_half_up(value: float, ndigits: int = 0):
    """int when ndigits is 0, float otherwise."""
    if not ndigits:
        return int(math.floor(value + 0.5))
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor
