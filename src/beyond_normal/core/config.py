"""
Configuration constants for the 5/3/1 load engine.

All adjustable parameters are centralized here for easy tuning.
Weights are unit-agnostic; the defaults assume pounds.
"""

from typing import Final

# =============================================================================
# BAR, ROUNDING AND PLATES
# =============================================================================

DEFAULT_BAR_WEIGHT: Final[float] = 45.0
DEFAULT_SSB_BAR_WEIGHT: Final[float] = 65.0  # Safety squat bar used for good mornings
DEFAULT_ROUND_TO: Final[float] = 5.0
FALLBACK_INCREMENT: Final[float] = 0.5  # Used when the configured increment is unusable

# Denominations available per side, heaviest first
DEFAULT_PLATE_INVENTORY: Final[tuple[float, ...]] = (45.0, 35.0, 25.0, 10.0, 5.0, 2.5)

PLATE_EPSILON: Final[float] = 1e-9  # Absorbs float noise in the greedy loop
PLATE_GUARD_PER_DENOMINATION: Final[int] = 200

# =============================================================================
# WARM-UP RAMP
# =============================================================================

WARMUP_MAX_STEPS: Final[int] = 4  # Bar included
WARMUP_BAR_REPS: Final[int] = 10
WARMUP_TOUCHPOINTS: Final[tuple[float, ...]] = (0.40, 0.55, 0.70, 0.80, 0.90)
WARMUP_HIGH_TOUCH: Final[float] = 0.90

WARMUP_LIGHT_SPAN: Final[float] = 85.0  # span <= this: midpoint + high touch
WARMUP_MEDIUM_SPAN: Final[float] = 110.0  # span <= this: low/middle/high
WARMUP_SPARSE_SPAN: Final[float] = 20.0  # Single-step ramps at or above this get a midpoint
WARMUP_FILLER_REPS: Final[int] = 3

# Deadlifts pulled from the floor start with standard-height plates
DEADLIFT_PLATE_START: Final[float] = 135.0
DEADLIFT_PLATE_START_THRESHOLD: Final[float] = 225.0

# (upper bound of weight/target ratio, reps); last band is open-ended
WARMUP_REP_BANDS: Final[tuple[tuple[float, int], ...]] = (
    (0.50, 8),
    (0.70, 5),
    (0.82, 3),
    (0.92, 2),
)
WARMUP_TOP_REPS: Final[int] = 1

# =============================================================================
# ONE-REP-MAX ESTIMATION
# =============================================================================

SOFT_WARN_REPS: Final[int] = 11  # At or above: low confidence
HARD_CAP_REPS: Final[int] = 15  # Above: refuse or cap
BRZYCKI_MAX_REPS: Final[int] = 36  # Keeps 37 - reps away from zero
PR_MARGIN: Final[float] = 0.5  # Minimum improvement that counts as a PR

# =============================================================================
# TRAINING MAX PROGRESSION
# =============================================================================

CLASSIC_BUMP: Final[dict[str, float]] = {"upper": 5.0, "lower": 10.0}
AUTO_CAP: Final[dict[str, float]] = {"upper": 10.0, "lower": 20.0}

AUTO_TM_PERCENT_DEFAULT: Final[int] = 90
AUTO_TM_PERCENT_MIN: Final[int] = 80
AUTO_TM_PERCENT_MAX: Final[int] = 95

PROGRESSION_STYLES: Final[tuple[str, ...]] = ("classic", "auto")

# =============================================================================
# BORING BUT BIG
# =============================================================================

BBB_PERCENT_DEFAULT: Final[float] = 0.50
BBB_PERCENT_MIN: Final[float] = 0.40
BBB_PERCENT_MAX: Final[float] = 0.70
BBB_SETS: Final[int] = 5
BBB_REPS: Final[int] = 10

# =============================================================================
# JOKER SETS
# =============================================================================

JOKER_TRIPLE_START: Final[float] = 0.95
JOKER_SINGLE_START: Final[float] = 1.00
JOKER_TRIPLE_STEP_DEFAULT: Final[float] = 0.05
JOKER_SINGLE_STEP_DEFAULT: Final[float] = 0.10
JOKER_MAX_OVER_TM_DEFAULT: Final[float] = 0.10
JOKER_HARD_CEILING: Final[float] = 1.20  # Never above 120% TM
JOKER_EPSILON: Final[float] = 1e-9
JOKER_MAX_RUNGS: Final[int] = 25  # Iteration guard for tiny steps
JOKER_STEP_MIN: Final[float] = 0.01  # Settings bounds for a step
JOKER_STEP_MAX: Final[float] = 0.20

# =============================================================================
# LIFTS
# =============================================================================

LIFT_CLASSES: Final[dict[str, str]] = {
    "squat": "lower",
    "deadlift": "lower",
    "bench": "upper",
    "press": "upper",
    "row": "upper",
}

DEFAULT_TRAINING_MAXES: Final[dict[str, float]] = {
    "squat": 315.0,
    "bench": 225.0,
    "deadlift": 405.0,
    "row": 185.0,
    "press": 135.0,
}

# =============================================================================
# ASSISTANCE LOADING
# =============================================================================

DB_RDL_FRACTION: Final[float] = 0.14  # Per hand, of deadlift TM
DB_RDL_FLOOR: Final[float] = 20.0
SSB_GOOD_MORNING_FRACTION: Final[float] = 0.30  # Of deadlift TM


def lift_class(lift: str) -> str:
    """
    Return "upper" or "lower" for a lift name.

    Unknown lifts are treated as upper body, which gets the smaller bump and cap.
    """
    return LIFT_CLASSES.get(lift.lower(), "upper")
