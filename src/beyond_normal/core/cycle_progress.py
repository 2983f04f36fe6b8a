"""
Cycle and week completion.

Works over any history-record shape: the caller describes how to read a
record through HistoryAccessors, so the same logic serves dataclasses,
ORM rows or plain dicts.
"""

from dataclasses import dataclass
from operator import attrgetter, itemgetter
from typing import Any, Callable, Generic, Iterable, TypeVar

from .models import CompletionPolicy, CycleKey

E = TypeVar("E")

MAIN_WEEKS: tuple[int, ...] = (1, 2, 3)
ALL_WEEKS: tuple[int, ...] = (1, 2, 3, 4)


def _always_none(_record: Any) -> None:
    return None


@dataclass(frozen=True)
class HistoryAccessors(Generic[E]):
    """
    Field accessors for one history-record type.

    ``is_main`` and ``is_deload`` may return None: a missing main flag
    counts as a main-lift entry, a missing deload flag as not deload.
    """

    cycle: Callable[[E], int]
    week: Callable[[E], int]
    lift: Callable[[E], str]
    is_main: Callable[[E], bool | None] = _always_none
    is_deload: Callable[[E], bool | None] = _always_none

    @classmethod
    def from_attributes(
        cls,
        cycle: str = "cycle",
        week: str = "week",
        lift: str = "lift",
        is_main: str | None = None,
        is_deload: str | None = None,
    ) -> "HistoryAccessors":
        """Accessors reading object attributes by name."""
        return cls(
            cycle=attrgetter(cycle),
            week=attrgetter(week),
            lift=attrgetter(lift),
            is_main=attrgetter(is_main) if is_main else _always_none,
            is_deload=attrgetter(is_deload) if is_deload else _always_none,
        )

    @classmethod
    def from_keys(
        cls,
        cycle: str = "cycle",
        week: str = "week",
        lift: str = "lift",
        is_main: str | None = None,
        is_deload: str | None = None,
    ) -> "HistoryAccessors":
        """Accessors reading mapping keys; optional flags use .get()."""
        return cls(
            cycle=itemgetter(cycle),
            week=itemgetter(week),
            lift=itemgetter(lift),
            is_main=(lambda e: e.get(is_main)) if is_main else _always_none,
            is_deload=(lambda e: e.get(is_deload)) if is_deload else _always_none,
        )

    def main_entry(self, record: E) -> bool:
        flag = self.is_main(record)
        return True if flag is None else bool(flag)

    def deload_entry(self, record: E) -> bool:
        return bool(self.is_deload(record))


def expected_keys(mains: Iterable[str], policy: CompletionPolicy) -> set[CycleKey]:
    """Every (week, lift) pair a complete cycle must contain."""
    weeks = ALL_WEEKS if policy == "include_deload" else MAIN_WEEKS
    lifts = list(mains)
    return {CycleKey(w, lift) for w in weeks for lift in lifts}


def completed_keys(
    history: Iterable[E],
    cycle: int,
    mains: Iterable[str],
    policy: CompletionPolicy,
    accessors: HistoryAccessors[E],
) -> set[CycleKey]:
    """
    (week, lift) pairs logged in the given cycle.

    Only main-lift entries for lifts in ``mains`` count; deload-flagged
    entries are skipped unless the policy includes the deload week.
    """
    main_set = set(mains)
    include_deload = policy == "include_deload"
    return {
        CycleKey(accessors.week(e), accessors.lift(e))
        for e in history
        if accessors.cycle(e) == cycle
        and accessors.lift(e) in main_set
        and accessors.main_entry(e)
        and (include_deload or not accessors.deload_entry(e))
    }


def is_week_complete(
    history: Iterable[E],
    cycle: int,
    week: int,
    mains: Iterable[str],
    accessors: HistoryAccessors[E],
) -> bool:
    """True when every main lift has a main-lift entry in (cycle, week)."""
    done = {
        accessors.lift(e)
        for e in history
        if accessors.cycle(e) == cycle and accessors.week(e) == week and accessors.main_entry(e)
    }
    return done >= set(mains)


def is_cycle_complete(
    history: Iterable[E],
    cycle: int,
    mains: Iterable[str],
    policy: CompletionPolicy,
    accessors: HistoryAccessors[E],
) -> bool:
    """True when the cycle's completed keys cover every expected key."""
    lifts = list(mains)
    return completed_keys(history, cycle, lifts, policy, accessors) >= expected_keys(lifts, policy)
