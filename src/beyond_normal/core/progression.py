"""
Training max progression between cycles.

Two strategies:

  classic  next = current + bump           (5 upper / 10 lower; estimate ignored)
  auto     target = round(e1RM × auto_percent / 100)
           next   = current + clamp(target − current, 0, cap)
                                            (cap 10 upper / 20 lower)

Auto never lowers the training max and leaves it unchanged when no usable
estimate exists.
"""

import math
from typing import Callable, Iterable, Mapping, TypeVar

from .config import (
    AUTO_CAP,
    AUTO_TM_PERCENT_DEFAULT,
    AUTO_TM_PERCENT_MAX,
    AUTO_TM_PERCENT_MIN,
    CLASSIC_BUMP,
    lift_class,
)
from .models import LiftClass, ProgressionStyle
from .rounding import round_load

E = TypeVar("E")


def clamp_auto_percent(auto_percent: float) -> float:
    """Keep auto_percent inside 80–95 (default 90 when unusable)."""
    if not math.isfinite(auto_percent):
        return float(AUTO_TM_PERCENT_DEFAULT)
    return float(max(AUTO_TM_PERCENT_MIN, min(AUTO_TM_PERCENT_MAX, auto_percent)))


def next_training_max(
    current: float,
    latest_amrap_e1rm: float | None,
    style: ProgressionStyle,
    klass: LiftClass,
    auto_percent: float = AUTO_TM_PERCENT_DEFAULT,
    round_to: float = 1.0,
    bumps: Mapping[str, float] = CLASSIC_BUMP,
    caps: Mapping[str, float] = AUTO_CAP,
) -> float:
    """
    Compute next cycle's training max.

    Args:
        current: Current training max
        latest_amrap_e1rm: Latest AMRAP-estimated 1RM (None if absent)
        style: "classic" or "auto"
        klass: "upper" or "lower"
        auto_percent: Fraction of e1RM (in percent) targeted by auto
        round_to: Increment used to round the auto target
        bumps: Per-class classic increments
        caps: Per-class auto caps

    Returns:
        Next training max
    """
    if style == "classic":
        return current + bumps[klass]

    if latest_amrap_e1rm is None or not math.isfinite(latest_amrap_e1rm) or latest_amrap_e1rm <= 0:
        return current

    target_tm = round_load(latest_amrap_e1rm * clamp_auto_percent(auto_percent) / 100.0, round_to)
    delta = max(0.0, min(caps[klass], target_tm - current))
    return current + delta


def best_estimate_by_lift(
    entries: Iterable[E],
    lift_of: Callable[[E], str],
    e1rm_of: Callable[[E], float],
) -> dict[str, float]:
    """Highest positive estimate per lift among caller-supplied entries."""
    best: dict[str, float] = {}
    for e in entries:
        value = e1rm_of(e)
        if not math.isfinite(value) or value <= 0:
            continue
        lift = lift_of(e)
        best[lift] = max(best.get(lift, 0.0), value)
    return best


def advance_training_maxes(
    training_maxes: Mapping[str, float],
    entries: Iterable[E],
    style: ProgressionStyle,
    lift_of: Callable[[E], str],
    e1rm_of: Callable[[E], float],
    auto_percent: float = AUTO_TM_PERCENT_DEFAULT,
    round_to: float = 1.0,
    bumps: Mapping[str, float] = CLASSIC_BUMP,
    caps: Mapping[str, float] = AUTO_CAP,
) -> dict[str, float]:
    """
    Apply next_training_max to every lift at the end of a cycle.

    ``entries`` should be the history of the cycle just finished; the best
    estimate per lift feeds the auto strategy.
    """
    best = best_estimate_by_lift(entries, lift_of, e1rm_of)
    return {
        lift: next_training_max(
            current,
            best.get(lift),
            style,
            lift_class(lift),
            auto_percent=auto_percent,
            round_to=round_to,
            bumps=bumps,
            caps=caps,
        )
        for lift, current in training_maxes.items()
    }
