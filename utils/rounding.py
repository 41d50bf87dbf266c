"""
utils/rounding.py — Integer rounding used across the pipeline
==============================================================
Python's built-in `round()` rounds halves to the nearest *even* integer
(66.5 → 66).  Treatment values must round halves *up* (66.5 → 67), the
way a browser's `Math.round` does, so every "round to nearest integer"
in the project goes through `round_half_up`.
"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going towards +∞."""
    return int(math.floor(value + 0.5))
