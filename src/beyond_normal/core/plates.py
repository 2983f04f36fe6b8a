"""
Per-side plate decomposition.

The calculator is greedy, not an optimal subset-sum: it walks the inventory
from the heaviest denomination down and loads each plate while it still fits.
When the inventory lacks fine denominations the bar is under-filled, never
over-filled:

    bar + 2 × sum(plates(target)) <= target
"""

import math
import threading

from .config import (
    DEFAULT_BAR_WEIGHT,
    DEFAULT_PLATE_INVENTORY,
    DEFAULT_ROUND_TO,
    PLATE_EPSILON,
    PLATE_GUARD_PER_DENOMINATION,
)
from .rounding import round_load


class PlateCalculator:
    """
    Computes per-side plates for a total barbell load.

    Results are memoized per (target, bar) for the lifetime of the instance.
    The memo is only valid for this instance's fixed bar, increment and
    inventory, and is guarded by a lock so one calculator can be shared.
    """

    def __init__(
        self,
        bar_weight: float = DEFAULT_BAR_WEIGHT,
        round_to: float = DEFAULT_ROUND_TO,
        inventory: tuple[float, ...] | list[float] = DEFAULT_PLATE_INVENTORY,
    ):
        """
        Args:
            bar_weight: Implement/bar weight
            round_to: Rounding increment used by round()
            inventory: Plate denominations available per side; non-finite and
                non-positive entries are dropped, duplicates collapsed
        """
        self.bar_weight = bar_weight
        self.round_to = round_to
        self.inventory: tuple[float, ...] = tuple(
            sorted({float(p) for p in inventory if math.isfinite(p) and p > 0}, reverse=True)
        )
        self._cache: dict[tuple[float, float], tuple[float, ...]] = {}
        self._lock = threading.Lock()

    def round(self, x: float) -> float:
        """Round x to this calculator's increment."""
        return round_load(x, self.round_to)

    def plates(self, target: float, bar_weight: float | None = None) -> list[float]:
        """
        Return the per-side plate list for a total target weight (bar + plates).

        Args:
            target: Total load on the bar
            bar_weight: Override for the configured bar

        Returns:
            Denominations for one side, heaviest first; empty when the input
            is invalid or the target does not exceed the bar
        """
        bar = self.bar_weight if bar_weight is None else bar_weight
        # NaN never equals itself, so it must not become a memo key
        if not (math.isfinite(target) and math.isfinite(bar)):
            return []
        key = (target, bar)

        with self._lock:
            cached = self._cache.get(key)
            if cached is None:
                cached = self._decompose(target, bar)
                self._cache[key] = cached
        return list(cached)

    def loaded_total(self, target: float, bar_weight: float | None = None) -> float:
        """Total weight actually on the bar after greedy loading."""
        bar = self.bar_weight if bar_weight is None else bar_weight
        return bar + 2 * sum(self.plates(target, bar))

    def _decompose(self, target: float, bar: float) -> tuple[float, ...]:
        if not (math.isfinite(target) and math.isfinite(bar)) or bar <= 0 or target < bar:
            return ()

        remaining_per_side = (target - bar) / 2.0
        if not math.isfinite(remaining_per_side) or remaining_per_side < 0:
            return ()

        out: list[float] = []
        for p in self.inventory:
            guard = 0
            while remaining_per_side + PLATE_EPSILON >= p and guard < PLATE_GUARD_PER_DENOMINATION:
                out.append(p)
                remaining_per_side -= p
                guard += 1
        return tuple(out)
