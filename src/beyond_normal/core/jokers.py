"""
Joker set ladders.

The full ladder is always computed; callers reveal it one rung at a time
with next_joker().

  5s week   → no jokers
  3s week   → triples from 95% TM, +triple_step_pct per rung
  1s week   → singles from 100% TM, +single_step_pct per rung

Rungs stop at min(1 + max_over_tm_pct, 1.20) of TM, and a ladder
never has more than JOKER_MAX_RUNGS rungs.
"""

import math

from .config import (
    DEFAULT_ROUND_TO,
    JOKER_EPSILON,
    JOKER_HARD_CEILING,
    JOKER_MAX_RUNGS,
    JOKER_SINGLE_START,
    JOKER_TRIPLE_START,
)
from .models import JokerParams, SetPrescription, WeekKind
from .rounding import round_load


def _ladder_percents(start: float, step: float, ceiling: float) -> list[float]:
    if start > ceiling + JOKER_EPSILON:
        return []
    if not math.isfinite(step) or step <= 0:
        return [start]
    pcts: list[float] = []
    p = start
    while p <= ceiling + JOKER_EPSILON and len(pcts) < JOKER_MAX_RUNGS:
        pcts.append(p)
        p += step
    return pcts


def generate_jokers(
    training_max: float,
    week: WeekKind,
    params: JokerParams,
) -> list[SetPrescription]:
    """
    Generate the full joker ladder for a week.

    Args:
        training_max: Current training max
        week: Week kind; "five" and "deload" produce no jokers
        params: Step sizes, cap over TM and rounding increment

    Returns:
        Joker prescriptions in ascending order
    """
    round_to = params.round_to if params.round_to > 0 else DEFAULT_ROUND_TO
    ceiling = min(1.0 + params.max_over_tm_pct, JOKER_HARD_CEILING)

    if week == "three":
        pcts = _ladder_percents(JOKER_TRIPLE_START, params.triple_step_pct, ceiling)
        make = SetPrescription.joker_triple
    elif week == "one":
        pcts = _ladder_percents(JOKER_SINGLE_START, params.single_step_pct, ceiling)
        make = SetPrescription.joker_single
    else:
        return []

    return [make(pct, round_load(training_max * pct, round_to)) for pct in pcts]


def next_joker(
    training_max: float,
    week: WeekKind,
    params: JokerParams,
    after: list[SetPrescription],
) -> SetPrescription | None:
    """
    Return the rung following the last one performed.

    With nothing performed yet the first rung is returned.  None means the
    ladder is exhausted or the last performed set is not on this ladder.
    """
    ladder = generate_jokers(training_max, week, params)
    if not after:
        return ladder[0] if ladder else None

    last = after[-1]
    for i, rung in enumerate(ladder):
        if rung.reps == last.reps and math.isclose(rung.percent_of_tm, last.percent_of_tm, abs_tol=JOKER_EPSILON):
            return ladder[i + 1] if i + 1 < len(ladder) else None
    return None
