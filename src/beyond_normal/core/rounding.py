"""
Load rounding and load formatting.

round_load() rounds half away from zero (227.5 → 230 at a 5 lb increment,
−227.5 → −230), matching how plates are loaded in practice.  Python's
built-in round() uses banker's rounding and is deliberately not used here.
"""

import math

from .config import FALLBACK_INCREMENT


def usable_increment(increment: float) -> float:
    if math.isfinite(increment) and increment > 0:
        return increment
    return FALLBACK_INCREMENT


def round_half_away(x: float) -> float:
    """Round to the nearest integer, ties away from zero."""
    return math.copysign(math.floor(abs(x) + 0.5), x)


def round_load(x: float, increment: float) -> float:
    """
    Round x to the nearest multiple of increment.

    Falls back to a 0.5 increment when increment is non-finite or not
    positive.  Non-finite x is returned unchanged.

    Args:
        x: Raw weight
        increment: Rounding increment (e.g. 5.0 or 2.5)

    Returns:
        Rounded weight
    """
    if not math.isfinite(x):
        return x
    inc = usable_increment(increment)
    return round_half_away(x / inc) * inc


def int_or_1dp(x: float) -> str:
    """215 -> "215", 215.5 -> "215.5"."""
    if round_half_away(x) == x:
        return f"{x:.0f}"
    return f"{x:.1f}"


def plate_list(plates: list[float]) -> str:
    """Per-side plate list for display, e.g. "45, 10, 2.5"."""
    return ", ".join(
        str(int(p)) if float(p).is_integer() else f"{p:.1f}"
        for p in plates
    )
