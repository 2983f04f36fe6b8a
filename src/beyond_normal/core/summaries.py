"""
Training history summaries.

Two views over logged sessions:

  program_week_summary  → one (cycle, program week), broken down per lift
  weekly_summary        → one calendar interval, with every dated estimate

Records are read through HistoryAccessors (cycle, week, lift) and
MetricAccessors (volume, estimated 1RM, date), so any record shape works.
Estimated 1RMs are reported as whole numbers, rounded half away from zero.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from operator import attrgetter, itemgetter
from typing import Callable, Generic, Iterable, TypeVar

from .cycle_progress import HistoryAccessors
from .models import DatedOneRM, LiftWeekSummary, ProgramWeekSummary, WeeklySummary
from .rounding import round_half_away

E = TypeVar("E")


@dataclass(frozen=True)
class MetricAccessors(Generic[E]):
    """
    Per-record volume, estimated 1RM and date.

    ``e1rm`` may return None; only finite positive estimates are reported.
    """

    volume: Callable[[E], float]
    e1rm: Callable[[E], float | None]
    date: Callable[[E], date]

    @classmethod
    def from_attributes(
        cls,
        volume: str = "total_volume",
        e1rm: str = "est_1rm",
        day: str = "date",
    ) -> "MetricAccessors":
        return cls(volume=attrgetter(volume), e1rm=attrgetter(e1rm), date=attrgetter(day))

    @classmethod
    def from_keys(
        cls,
        volume: str = "total_volume",
        e1rm: str = "est_1rm",
        day: str = "date",
    ) -> "MetricAccessors":
        """Accessors reading mapping keys; a missing estimate reads as None."""
        return cls(volume=itemgetter(volume), e1rm=lambda e: e.get(e1rm), date=itemgetter(day))


def _day(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def _estimate(value: float | None) -> float | None:
    if value is None or not math.isfinite(value) or value <= 0:
        return None
    return value


def calendar_week(day: date) -> tuple[date, date]:
    """Monday-based week containing ``day`` as a half-open [start, end)."""
    start = _day(day) - timedelta(days=_day(day).weekday())
    return start, start + timedelta(days=7)


def program_week_summary(
    history: Iterable[E],
    cycle: int,
    week: int,
    accessors: HistoryAccessors[E],
    metrics: MetricAccessors[E],
) -> ProgramWeekSummary:
    """
    Summarize one program week of one cycle.

    Each lift reports its summed volume, its number of logged sessions and
    the most recently dated positive estimated 1RM (0 when there is none).

    Args:
        history: Logged sessions, any order
        cycle: Cycle number to summarize
        week: Program week within the cycle
        accessors: Reads cycle, week and lift from a record
        metrics: Reads volume, estimated 1RM and date from a record

    Returns:
        ProgramWeekSummary with lifts sorted by name
    """
    by_lift: dict[str, list[E]] = {}
    for e in history:
        if accessors.cycle(e) == cycle and accessors.week(e) == week:
            by_lift.setdefault(accessors.lift(e), []).append(e)

    lifts = []
    for lift in sorted(by_lift):
        records = by_lift[lift]
        dated = [(_day(metrics.date(e)), _estimate(metrics.e1rm(e))) for e in records]
        dated = [(d, est) for d, est in dated if est is not None]
        latest = max(dated, key=lambda pair: pair[0])[1] if dated else 0.0
        lifts.append(
            LiftWeekSummary(
                lift=lift,
                est_1rm=int(round_half_away(latest)),
                total_volume=sum(metrics.volume(e) for e in records),
                session_count=len(records),
            )
        )

    return ProgramWeekSummary(
        cycle=cycle,
        week=week,
        total_volume=sum(s.total_volume for s in lifts),
        lifts=tuple(lifts),
    )


def weekly_summary(
    history: Iterable[E],
    start: date,
    end: date,
    accessors: HistoryAccessors[E],
    metrics: MetricAccessors[E],
) -> WeeklySummary:
    """
    Summarize every session dated in [start, end).

    Returns:
        WeeklySummary with total volume and the positive estimated 1RMs,
        newest first
    """
    in_range = [e for e in history if start <= _day(metrics.date(e)) < end]

    one_rms = []
    for e in in_range:
        est = _estimate(metrics.e1rm(e))
        if est is not None:
            one_rms.append(DatedOneRM(accessors.lift(e), int(round_half_away(est)), _day(metrics.date(e))))
    one_rms.sort(key=lambda r: r.date, reverse=True)

    return WeeklySummary(
        start=start,
        end=end,
        total_volume=sum(metrics.volume(e) for e in in_range),
        one_rms=tuple(one_rms),
    )
