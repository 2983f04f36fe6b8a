"""
One-rep-max estimation.

Two independent estimators live here and serve different call sites:

  estimate_1rm     : display estimate for an AMRAP set.  Rounded to the
                     loading increment and guarded by a confidence policy:
                       reps == 1               → the weight itself
                       2 … soft_warn_at−1      → formula, no note
                       soft_warn_at … hard_cap → formula, low confidence
                       > hard_cap              → refused (0) or capped at hard_cap

  pr_estimate_1rm  : raw estimate used when comparing against stored bests
                     for PR detection.  No rounding, no policy; reps ≤ 1
                     returns the weight unchanged.

Formulas (w = weight, r = reps):

  Epley     w × (1 + r/30)
  Wendler   w × (1 + 0.0333 r)
  Brzycki   w × 36 / (37 − r)        (r clamped to 36)
  Mayhew    100 w / (52.2 + 41.9 e^(−0.055 r))
  Lombardi  w × r^0.10               (PR comparison only)
"""

import math
from typing import Callable

from .config import BRZYCKI_MAX_REPS, HARD_CAP_REPS, SOFT_WARN_REPS
from .models import NOTE_LOW_CONFIDENCE, NOTE_NONE, AmrapEstimate, AmrapNote
from .rounding import round_load


def epley(weight: float, reps: int) -> float:
    return weight * (1.0 + reps / 30.0)


def wendler(weight: float, reps: int) -> float:
    return weight * (1.0 + 0.0333 * reps)


def brzycki(weight: float, reps: int) -> float:
    r = min(reps, BRZYCKI_MAX_REPS)
    return weight * 36.0 / (37.0 - r)


def mayhew(weight: float, reps: int) -> float:
    return (100.0 * weight) / (52.2 + 41.9 * math.exp(-0.055 * reps))


def lombardi(weight: float, reps: int) -> float:
    return weight * reps ** 0.10


DISPLAY_FORMULAS: dict[str, Callable[[float, int], float]] = {
    "epley": epley,
    "wendler": wendler,
    "brzycki": brzycki,
    "mayhew": mayhew,
}

PR_FORMULAS: dict[str, Callable[[float, int], float]] = {
    "epley": epley,
    "brzycki": brzycki,
    "lombardi": lombardi,
}


def estimate_1rm(
    weight: float,
    reps: int,
    formula: str = "epley",
    soft_warn_at: int = SOFT_WARN_REPS,
    hard_cap: int = HARD_CAP_REPS,
    refuse_above_hard_cap: bool = True,
    round_to: float = 5.0,
) -> AmrapEstimate:
    """
    Estimate a one-rep max from an AMRAP set, with guardrails.

    Args:
        weight: Weight lifted
        reps: Reps completed
        formula: One of DISPLAY_FORMULAS; unknown names use Epley
        soft_warn_at: Reps at or above which the estimate is low confidence
        hard_cap: Reps above which the estimate is refused or capped
        refuse_above_hard_cap: Refuse (e1rm 0) instead of capping
        round_to: Rounding increment for the result

    Returns:
        AmrapEstimate with the rounded e1RM and its note
    """
    if not (weight > 0 and reps > 0):
        return AmrapEstimate(0.0, NOTE_NONE)

    if reps == 1:
        return AmrapEstimate(round_load(weight, round_to), NOTE_NONE)

    fn = DISPLAY_FORMULAS.get(formula, epley)

    if reps > hard_cap:
        if refuse_above_hard_cap:
            return AmrapEstimate(0.0, AmrapNote.invalid_too_many_reps(reps))
        return AmrapEstimate(round_load(fn(weight, hard_cap), round_to), AmrapNote.capped(hard_cap))

    note = NOTE_LOW_CONFIDENCE if reps >= soft_warn_at else NOTE_NONE
    return AmrapEstimate(round_load(fn(weight, reps), round_to), note)


def pr_estimate_1rm(weight: float, reps: int, formula: str = "epley") -> float:
    """
    Raw one-rep-max estimate for PR comparison.

    Returns weight unchanged for reps ≤ 1.
    """
    if reps <= 1:
        return weight
    return PR_FORMULAS.get(formula, epley)(weight, reps)
