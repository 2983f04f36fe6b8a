"""
Data models for beyond-normal.

Every value here is transient: computed per call from caller-supplied
training maxes, week numbers and settings.  Nothing is persisted by the engine.
"""

from dataclasses import dataclass
from datetime import date
from typing import Literal, NamedTuple

SetKind = Literal["main", "bbb", "assistance", "joker"]
WeekKind = Literal["five", "three", "one", "deload"]
LiftClass = Literal["upper", "lower"]
ProgressionStyle = Literal["classic", "auto"]
CompletionPolicy = Literal["three_weeks_no_deload", "include_deload"]
PRMetric = Literal["one_rm", "estimated_one_rm"]
NoteKind = Literal["none", "low_confidence", "capped", "invalid_too_many_reps"]


class WarmupStep(NamedTuple):
    """One warm-up set: total load on the bar and reps."""

    weight: float
    reps: int


@dataclass(frozen=True)
class SetScheme:
    """Percentage/rep template for one main-lift set."""

    pct: float
    reps: int
    amrap: bool = False


@dataclass(frozen=True)
class WeekScheme:
    """
    Main-lift template for one program week.

    ``show_bbb`` is the assistance-work flag; ``top_line`` is the
    human-readable summary of the top set (e.g. "85% × 5+").
    """

    main: tuple[SetScheme, SetScheme, SetScheme]
    show_bbb: bool
    top_line: str


@dataclass(frozen=True)
class SetPrescription:
    """A prescribed set (main, BBB, assistance, or Joker)."""

    kind: SetKind
    percent_of_tm: float  # 1.00 = 100% TM
    reps: int
    weight: float  # already rounded to the configured increment
    label: str = ""

    @classmethod
    def joker_triple(cls, percent_of_tm: float, weight: float) -> "SetPrescription":
        return cls(kind="joker", percent_of_tm=percent_of_tm, reps=3, weight=weight, label="Joker")

    @classmethod
    def joker_single(cls, percent_of_tm: float, weight: float) -> "SetPrescription":
        return cls(kind="joker", percent_of_tm=percent_of_tm, reps=1, weight=weight, label="Joker")


@dataclass(frozen=True)
class AmrapNote:
    """
    Quality note attached to an AMRAP estimate.

    ``reps`` carries the rep count used for ``capped`` and the rep count
    reported for ``invalid_too_many_reps``; it is None otherwise.
    """

    kind: NoteKind = "none"
    reps: int | None = None

    @classmethod
    def capped(cls, at: int) -> "AmrapNote":
        return cls("capped", at)

    @classmethod
    def invalid_too_many_reps(cls, actual: int) -> "AmrapNote":
        return cls("invalid_too_many_reps", actual)

    def describe(self) -> str:
        """Short user-facing text for the note ("" when there is nothing to say)."""
        if self.kind == "low_confidence":
            return "low confidence (high-rep set)"
        if self.kind == "capped":
            return f"estimated using {self.reps} reps (capped)"
        if self.kind == "invalid_too_many_reps":
            return f"{self.reps} reps is too many to estimate a 1RM"
        return ""


NOTE_NONE = AmrapNote()
NOTE_LOW_CONFIDENCE = AmrapNote("low_confidence")


@dataclass(frozen=True)
class AmrapEstimate:
    """Estimated one-rep max (already rounded) plus its quality note."""

    e1rm: float
    note: AmrapNote = NOTE_NONE


@dataclass(frozen=True)
class JokerParams:
    """Controls joker ladder generation."""

    triple_step_pct: float = 0.05
    single_step_pct: float = 0.10
    max_over_tm_pct: float = 0.10
    round_to: float = 5.0


class CycleKey(NamedTuple):
    """A (program week, lift) pair that must be logged to complete a cycle."""

    week: int
    lift: str


@dataclass(frozen=True)
class LiftEntry:
    """A single logged set considered for PR detection."""

    lift: str
    weight: float
    reps: int
    date: date


@dataclass(frozen=True)
class PersonalRecord:
    """A recorded personal best for one lift and metric."""

    lift: str
    metric: PRMetric
    value: float
    date: date


@dataclass(frozen=True)
class LiftWeekSummary:
    """One lift's totals within a program week."""

    lift: str
    est_1rm: int  # Latest positive estimate, 0 when none was logged
    total_volume: float
    session_count: int


@dataclass(frozen=True)
class ProgramWeekSummary:
    """Totals for one (cycle, program week), lifts sorted by name."""

    cycle: int
    week: int
    total_volume: float
    lifts: tuple[LiftWeekSummary, ...]


class DatedOneRM(NamedTuple):
    lift: str
    est_1rm: int
    date: date


@dataclass(frozen=True)
class WeeklySummary:
    """Totals for a calendar interval [start, end), newest estimates first."""

    start: date
    end: date
    total_volume: float
    one_rms: tuple[DatedOneRM, ...]
