"""
Program settings.

ProgramSettings is the typed view of the merged YAML configuration.  Every
calculator still takes plain arguments; settings only supply the values.
"""

import math
import warnings
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .config import (
    AUTO_TM_PERCENT_DEFAULT,
    AUTO_TM_PERCENT_MAX,
    AUTO_TM_PERCENT_MIN,
    BBB_PERCENT_DEFAULT,
    BBB_PERCENT_MAX,
    BBB_PERCENT_MIN,
    DEFAULT_BAR_WEIGHT,
    DEFAULT_PLATE_INVENTORY,
    DEFAULT_ROUND_TO,
    DEFAULT_SSB_BAR_WEIGHT,
    DEFAULT_TRAINING_MAXES,
    JOKER_MAX_OVER_TM_DEFAULT,
    JOKER_SINGLE_STEP_DEFAULT,
    JOKER_STEP_MAX,
    JOKER_STEP_MIN,
    JOKER_TRIPLE_STEP_DEFAULT,
    PROGRESSION_STYLES,
)
from .engine.config_loader import load_settings_config
from .models import JokerParams, ProgressionStyle
from .plates import PlateCalculator


@dataclass(frozen=True)
class ProgramSettings:
    """User-adjustable program configuration."""

    bar_weight: float = DEFAULT_BAR_WEIGHT
    round_to: float = DEFAULT_ROUND_TO
    plate_inventory: tuple[float, ...] = DEFAULT_PLATE_INVENTORY
    bbb_percent: float = BBB_PERCENT_DEFAULT
    tm_progression_style: ProgressionStyle = "classic"
    auto_tm_percent: float = AUTO_TM_PERCENT_DEFAULT
    one_rm_formula: str = "epley"
    pr_formula: str = "epley"
    joker_triple_step_pct: float = JOKER_TRIPLE_STEP_DEFAULT
    joker_single_step_pct: float = JOKER_SINGLE_STEP_DEFAULT
    joker_max_over_tm_pct: float = JOKER_MAX_OVER_TM_DEFAULT
    upper_bump: float = 5.0
    lower_bump: float = 10.0
    upper_cap: float = 10.0
    lower_cap: float = 20.0
    training_maxes: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_TRAINING_MAXES))
    bar_weights: dict[str, float] = field(default_factory=dict)
    ssb_bar_weight: float = DEFAULT_SSB_BAR_WEIGHT

    def __post_init__(self):
        if not math.isfinite(self.bar_weight):
            raise ValueError("bar_weight must be a finite number")
        if not (math.isfinite(self.round_to) and self.round_to > 0):
            raise ValueError("round_to must be positive")
        if not (BBB_PERCENT_MIN <= self.bbb_percent <= BBB_PERCENT_MAX):
            raise ValueError(f"bbb_percent must be between {BBB_PERCENT_MIN} and {BBB_PERCENT_MAX}")
        if not (AUTO_TM_PERCENT_MIN <= self.auto_tm_percent <= AUTO_TM_PERCENT_MAX):
            raise ValueError(
                f"auto_tm_percent must be between {AUTO_TM_PERCENT_MIN} and {AUTO_TM_PERCENT_MAX}"
            )
        if self.tm_progression_style not in PROGRESSION_STYLES:
            raise ValueError(f"tm_progression_style must be one of {PROGRESSION_STYLES}")
        for name, step in (
            ("joker_triple_step_pct", self.joker_triple_step_pct),
            ("joker_single_step_pct", self.joker_single_step_pct),
        ):
            if not (JOKER_STEP_MIN <= step <= JOKER_STEP_MAX):
                raise ValueError(f"{name} must be between {JOKER_STEP_MIN} and {JOKER_STEP_MAX}")
        if not (math.isfinite(self.joker_max_over_tm_pct) and self.joker_max_over_tm_pct >= 0):
            raise ValueError("joker_max_over_tm_pct must be zero or more")
        for lift, weight in self.bar_weights.items():
            if not (math.isfinite(weight) and weight > 0):
                raise ValueError(f"bar weight for {lift} must be positive")
        if not (math.isfinite(self.ssb_bar_weight) and self.ssb_bar_weight > 0):
            raise ValueError("ssb_bar_weight must be positive")

    @property
    def bumps(self) -> dict[str, float]:
        return {"upper": self.upper_bump, "lower": self.lower_bump}

    @property
    def caps(self) -> dict[str, float]:
        return {"upper": self.upper_cap, "lower": self.lower_cap}

    def training_max(self, lift: str) -> float | None:
        return self.training_maxes.get(lift.lower())

    def bar_for(self, lift: str) -> float:
        """Bar used for a lift: its own entry in bar_weights, else bar_weight."""
        return self.bar_weights.get(lift.lower(), self.bar_weight)

    def joker_params(self) -> JokerParams:
        return JokerParams(
            triple_step_pct=self.joker_triple_step_pct,
            single_step_pct=self.joker_single_step_pct,
            max_over_tm_pct=self.joker_max_over_tm_pct,
            round_to=self.round_to,
        )

    def plate_calculator(self, bar: float | None = None, lift: str | None = None) -> PlateCalculator:
        """
        Build a PlateCalculator for this configuration.

        An explicit bar wins; otherwise the lift's own bar, then bar_weight.
        """
        if bar is None:
            bar = self.bar_weight if lift is None else self.bar_for(lift)
        return PlateCalculator(
            bar_weight=bar,
            round_to=self.round_to,
            inventory=self.plate_inventory,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _section(parent: dict[str, Any], key: str) -> dict[str, Any]:
    """A mapping-valued settings section; empty when missing or null."""
    value = parent.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"section '{key}' must be a mapping, got {type(value).__name__}")
    return value


def settings_from_dict(cfg: dict[str, Any]) -> ProgramSettings:
    """
    Build ProgramSettings from a merged YAML dict.

    Missing sections and keys keep their defaults.

    Raises:
        ValueError: If a section is not a mapping, or a value has the wrong
            type or is out of range
    """
    bar = _section(cfg, "bar")
    per_lift = _section(bar, "per_lift")
    bbb = _section(cfg, "bbb")
    prog = _section(cfg, "progression")
    bumps = _section(prog, "bumps")
    caps = _section(prog, "caps")
    est = _section(cfg, "estimator")
    jokers = _section(cfg, "jokers")
    tms = _section(cfg, "training_maxes")

    defaults = ProgramSettings()
    try:
        return ProgramSettings(
            bar_weight=float(bar.get("weight", defaults.bar_weight)),
            round_to=float(bar.get("round_to", defaults.round_to)),
            plate_inventory=tuple(float(p) for p in bar.get("plates", defaults.plate_inventory)),
            bar_weights={str(k).lower(): float(v) for k, v in per_lift.items()},
            ssb_bar_weight=float(bar.get("ssb", defaults.ssb_bar_weight)),
            bbb_percent=float(bbb.get("percent", defaults.bbb_percent)),
            tm_progression_style=str(prog.get("style", defaults.tm_progression_style)),
            auto_tm_percent=float(prog.get("auto_tm_percent", defaults.auto_tm_percent)),
            one_rm_formula=str(est.get("one_rm_formula", defaults.one_rm_formula)).lower(),
            pr_formula=str(est.get("pr_formula", defaults.pr_formula)).lower(),
            joker_triple_step_pct=float(jokers.get("triple_step_pct", defaults.joker_triple_step_pct)),
            joker_single_step_pct=float(jokers.get("single_step_pct", defaults.joker_single_step_pct)),
            joker_max_over_tm_pct=float(jokers.get("max_over_tm_pct", defaults.joker_max_over_tm_pct)),
            upper_bump=float(bumps.get("upper", defaults.upper_bump)),
            lower_bump=float(bumps.get("lower", defaults.lower_bump)),
            upper_cap=float(caps.get("upper", defaults.upper_cap)),
            lower_cap=float(caps.get("lower", defaults.lower_cap)),
            training_maxes={
                **defaults.training_maxes,
                **{str(k).lower(): float(v) for k, v in tms.items()},
            },
        )
    except (TypeError, AttributeError) as exc:
        raise ValueError(f"malformed settings ({exc})") from exc


def load_settings(path: str | Path | None = None) -> ProgramSettings:
    """
    Load effective settings: bundled YAML, user override, then ``path``.

    Invalid values are reported with a warning and the defaults are used.
    """
    cfg = load_settings_config(path)
    try:
        return settings_from_dict(cfg)
    except ValueError as exc:
        warnings.warn(
            f"beyond-normal: invalid settings ({exc}); using defaults.",
            stacklevel=2,
        )
        return ProgramSettings()
