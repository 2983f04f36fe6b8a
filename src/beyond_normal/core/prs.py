"""
Personal-record detection.

The record store is injected: anything implementing PRRepository works,
whether it is backed by a file, a database or the in-memory list used in
tests.  Comparisons use the raw PR estimator, never the rounded display
estimate.
"""

from typing import Iterable, Protocol

from .config import PR_MARGIN
from .estimator import pr_estimate_1rm
from .models import LiftEntry, PersonalRecord, PRMetric


class PRRepository(Protocol):
    """Storage interface for personal records."""

    def records(self) -> Iterable[PersonalRecord]: ...

    def add(self, record: PersonalRecord) -> None: ...


class InMemoryPRRepository:
    """List-backed PRRepository."""

    def __init__(self, records: Iterable[PersonalRecord] = ()):
        self._records: list[PersonalRecord] = list(records)

    def records(self) -> list[PersonalRecord]:
        return list(self._records)

    def add(self, record: PersonalRecord) -> None:
        self._records.append(record)


class PRService:
    """Looks up bests and records new PRs through a repository."""

    def __init__(self, repository: PRRepository, margin: float = PR_MARGIN):
        self.repository = repository
        self.margin = margin

    def best(self, lift: str, metric: PRMetric) -> PersonalRecord | None:
        """Highest stored record for a lift and metric, or None."""
        candidates = [
            r for r in self.repository.records() if r.lift == lift and r.metric == metric
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda r: r.value)

    def value_for(self, entry: LiftEntry, metric: PRMetric, formula: str = "epley") -> float:
        """
        Value an entry is compared on.

        A true single is its own one-rep max; anything else goes through
        the PR estimator.
        """
        if metric == "one_rm" and entry.reps == 1:
            return entry.weight
        return pr_estimate_1rm(entry.weight, entry.reps, formula)

    def update_if_pr(
        self,
        entry: LiftEntry,
        metric: PRMetric = "estimated_one_rm",
        formula: str = "epley",
    ) -> PersonalRecord | None:
        """
        Store a new record if the entry beats the current best by the margin.

        Returns:
            The stored PersonalRecord, or None when the entry is not a PR
        """
        if entry.weight <= 0 or entry.reps <= 0:
            return None

        value = self.value_for(entry, metric, formula)
        current = self.best(entry.lift, metric)
        previous = current.value if current is not None else 0.0
        if value < previous + self.margin:
            return None

        record = PersonalRecord(lift=entry.lift, metric=metric, value=value, date=entry.date)
        self.repository.add(record)
        return record
