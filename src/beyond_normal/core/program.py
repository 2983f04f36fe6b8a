"""
5/3/1 week templates and set prescriptions.

week_scheme() is total over the integers: anything other than 2, 3 or 4
falls back to the week-1 (5s) template.
"""

import math

from .config import (
    BBB_PERCENT_DEFAULT,
    BBB_PERCENT_MAX,
    BBB_PERCENT_MIN,
    BBB_REPS,
    BBB_SETS,
    DB_RDL_FLOOR,
    DB_RDL_FRACTION,
    DEFAULT_ROUND_TO,
    SSB_GOOD_MORNING_FRACTION,
)
from .models import SetPrescription, SetScheme, WeekKind, WeekScheme
from .rounding import round_load

WEEK_SCHEMES: dict[int, WeekScheme] = {
    1: WeekScheme(
        main=(SetScheme(0.65, 5), SetScheme(0.75, 5), SetScheme(0.85, 5, amrap=True)),
        show_bbb=True,
        top_line="85% × 5+",
    ),
    2: WeekScheme(
        main=(SetScheme(0.70, 3), SetScheme(0.80, 3), SetScheme(0.90, 3, amrap=True)),
        show_bbb=True,
        top_line="90% × 3+",
    ),
    3: WeekScheme(
        main=(SetScheme(0.75, 5), SetScheme(0.85, 3), SetScheme(0.95, 1, amrap=True)),
        show_bbb=True,
        top_line="95% × 1+",
    ),
    4: WeekScheme(
        main=(SetScheme(0.40, 5), SetScheme(0.50, 5), SetScheme(0.60, 5)),
        show_bbb=False,
        top_line="Deload: 60% × 5",
    ),
}

_WEEK_KINDS: dict[int, WeekKind] = {1: "five", 2: "three", 3: "one", 4: "deload"}


def week_scheme(week: int) -> WeekScheme:
    """Main-lift template for a program week (unknown weeks → week 1)."""
    return WEEK_SCHEMES.get(week, WEEK_SCHEMES[1])


def week_kind(week: int) -> WeekKind:
    """Map a program week to its kind (unknown weeks → "five")."""
    return _WEEK_KINDS.get(week, "five")


def main_sets(training_max: float, week: int, round_to: float = DEFAULT_ROUND_TO) -> list[SetPrescription]:
    """
    Prescribe the three main-lift sets for a week.

    Weights are round_load(TM × pct); AMRAP sets are labelled "N+".
    """
    scheme = week_scheme(week)
    return [
        SetPrescription(
            kind="main",
            percent_of_tm=s.pct,
            reps=s.reps,
            weight=round_load(training_max * s.pct, round_to),
            label=f"{s.reps}+" if s.amrap else str(s.reps),
        )
        for s in scheme.main
    ]


def clamp_bbb_percent(bbb_percent: float) -> float:
    if not math.isfinite(bbb_percent):
        return BBB_PERCENT_DEFAULT
    return max(BBB_PERCENT_MIN, min(BBB_PERCENT_MAX, bbb_percent))


def bbb_sets(
    training_max: float,
    bbb_percent: float = BBB_PERCENT_DEFAULT,
    round_to: float = DEFAULT_ROUND_TO,
) -> list[SetPrescription]:
    """Boring But Big: 5×10 at a fixed fraction of TM (clamped to 40–70%)."""
    pct = clamp_bbb_percent(bbb_percent)
    weight = round_load(training_max * pct, round_to)
    return [
        SetPrescription(kind="bbb", percent_of_tm=pct, reps=BBB_REPS, weight=weight, label="BBB")
        for _ in range(BBB_SETS)
    ]


def session_sets(
    training_max: float,
    week: int,
    bbb_percent: float = BBB_PERCENT_DEFAULT,
    round_to: float = DEFAULT_ROUND_TO,
) -> list[SetPrescription]:
    """Main sets plus the BBB block when the week includes assistance work."""
    sets = main_sets(training_max, week, round_to)
    if week_scheme(week).show_bbb:
        sets.extend(bbb_sets(training_max, bbb_percent, round_to))
    return sets


def recommended_db_rdl_per_hand(deadlift_tm: float, round_to: float = DEFAULT_ROUND_TO) -> float:
    """Per-hand dumbbell RDL load: ~14% of deadlift TM, never below 20."""
    return max(DB_RDL_FLOOR, round_load(deadlift_tm * DB_RDL_FRACTION, round_to))


def recommended_ssb_good_morning(
    deadlift_tm: float,
    bar_weight: float,
    round_to: float = DEFAULT_ROUND_TO,
) -> float:
    """Safety-squat-bar good morning: ~30% of deadlift TM, never below the bar."""
    return max(bar_weight, round_load(deadlift_tm * SSB_GOOD_MORNING_FRACTION, round_to))


def deadlift_assistance(
    deadlift_tm: float,
    ssb_bar_weight: float,
    round_to: float = DEFAULT_ROUND_TO,
) -> list[SetPrescription]:
    """Assistance prescriptions derived from the deadlift TM."""
    rdl = recommended_db_rdl_per_hand(deadlift_tm, round_to)
    gm = recommended_ssb_good_morning(deadlift_tm, ssb_bar_weight, round_to)
    return [
        SetPrescription(
            kind="assistance",
            percent_of_tm=DB_RDL_FRACTION,
            reps=10,
            weight=rdl,
            label="DB RDL (per hand)",
        ),
        SetPrescription(
            kind="assistance",
            percent_of_tm=SSB_GOOD_MORNING_FRACTION,
            reps=10,
            weight=gm,
            label="SSB Good Morning",
        ),
    ]
