from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round .5 upwards (2.5 -> 3), unlike the built-in banker's ``round``."""
    return int(math.floor(value + 0.5))


def percentage(part: float, whole: float) -> int:
    return round_half_up(part / whole * 100)
