"""
Warm-up ramp from the bar to today's first working set.

The ramp is short: the bar ×10 plus at most three touches, every weight
rounded, de-duplicated after rounding and strictly below the target.

Banding by span (target − starting point):

  span ≤ 85      → midpoint + a high touch near 90% of target
  span 86–110    → low / middle / high from the touchpoint ladder
  span > 110     → the touchpoint ladder in order, cut to fit the 4-step cap

Reps per non-bar step come from the weight/target ratio:

  < 50% → 8,  50–70% → 5,  70–82% → 3,  82–92% → 2,  ≥ 92% → 1
"""

import math

from .config import (
    DEADLIFT_PLATE_START,
    DEADLIFT_PLATE_START_THRESHOLD,
    WARMUP_BAR_REPS,
    WARMUP_FILLER_REPS,
    WARMUP_HIGH_TOUCH,
    WARMUP_LIGHT_SPAN,
    WARMUP_MAX_STEPS,
    WARMUP_MEDIUM_SPAN,
    WARMUP_REP_BANDS,
    WARMUP_SPARSE_SPAN,
    WARMUP_TOP_REPS,
    WARMUP_TOUCHPOINTS,
)
from .models import WarmupStep
from .rounding import round_load, usable_increment

_MOVEMENT_SUGGESTIONS: dict[str, str] = {
    "squat": "5 min easy bodyweight squats / hip hinges",
    "deadlift": "5 min kettlebell swings / RDL pattern",
    "bench": "5 min pushups / banded push-aparts",
    "row": "5 min band rows / scap retractions",
    "press": "5 min band shoulder series / light DB press",
}


def suggested_movement(lift: str) -> str:
    """General warm-up suggestion to do before touching the bar."""
    return _MOVEMENT_SUGGESTIONS.get(lift.lower(), "5 min easy general movement")


def starting_point(target: float, bar: float, lift: str) -> float:
    """
    First weight of the ramp.

    Deadlifts at or above two plates start at 135 so the bar sits at
    standard plate height; everything else starts at the bar.
    """
    if lift.lower() == "deadlift" and math.isfinite(target) and target >= DEADLIFT_PLATE_START_THRESHOLD:
        return DEADLIFT_PLATE_START
    return bar


def warmup_reps(weight: float, target: float) -> int:
    """Reps for a non-bar warm-up step by its fraction of the target."""
    ratio = weight / target
    for upper, reps in WARMUP_REP_BANDS:
        if ratio < upper:
            return reps
    return WARMUP_TOP_REPS


def _interior_touches(target: float, start: float, round_to: float) -> list[float]:
    """Candidate weights strictly between start and target, after rounding."""

    def r(x: float) -> float:
        return round_load(x, round_to)

    span = target - start

    if span <= WARMUP_LIGHT_SPAN:
        mid = r((start + target) / 2.0)
        high = r(target * WARMUP_HIGH_TOUCH)
        if high == mid:
            high = mid - usable_increment(round_to)
        raw = [mid, high]
    else:
        raw = [r(target * pct) for pct in WARMUP_TOUCHPOINTS]

    candidates = sorted({w for w in raw if start < w < target})

    if span <= WARMUP_MEDIUM_SPAN:
        if len(candidates) > 3:
            candidates = [candidates[0], candidates[len(candidates) // 2], candidates[-1]]
        return candidates
    # Large spans keep the ladder in order, cut to what fits after the bar
    return candidates[: WARMUP_MAX_STEPS - 1]


def build_warmup_plan(
    target: float,
    bar: float,
    round_to: float,
    lift: str = "squat",
) -> list[WarmupStep]:
    """
    Build an ascending warm-up ramp ending just below target.

    Args:
        target: First working-set weight for today
        bar: Configured bar weight
        round_to: Rounding increment
        lift: Lift name; only "deadlift" changes the starting point

    Returns:
        Steps with strictly increasing weights, all below target, the first
        being the starting point ×10, at most four in total.  Invalid input
        yields a single starting-point step.
    """
    start = starting_point(target, bar, lift)

    if not (math.isfinite(target) and math.isfinite(start)) or target <= start:
        return [WarmupStep(start, WARMUP_BAR_REPS)]

    steps = [WarmupStep(start, WARMUP_BAR_REPS)]
    for w in _interior_touches(target, start, round_to):
        if w > steps[-1].weight:
            steps.append(WarmupStep(w, warmup_reps(w, target)))

    if len(steps) == 1 and target - start >= WARMUP_SPARSE_SPAN:
        mid = round_load((start + target) / 2.0, round_to)
        if steps[0].weight < mid < target:
            steps.append(WarmupStep(mid, WARMUP_FILLER_REPS))

    return steps[:WARMUP_MAX_STEPS]
