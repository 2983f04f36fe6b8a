"""
Formula-focused unit tests for the 5/3/1 load engine.

Values are hand-computed from the formulas so the tests double as
documentation of each rule.
"""

import math
import threading
from datetime import date, datetime

import pytest

from beyond_normal.core.config import JOKER_MAX_RUNGS, lift_class
from beyond_normal.core.cycle_progress import (
    HistoryAccessors,
    completed_keys,
    expected_keys,
    is_cycle_complete,
    is_week_complete,
)
from beyond_normal.core.estimator import estimate_1rm, pr_estimate_1rm
from beyond_normal.core.jokers import generate_jokers, next_joker
from beyond_normal.core.models import (
    NOTE_LOW_CONFIDENCE,
    NOTE_NONE,
    AmrapNote,
    CycleKey,
    DatedOneRM,
    JokerParams,
    LiftEntry,
    LiftWeekSummary,
    PersonalRecord,
    SetPrescription,
    WarmupStep,
)
from beyond_normal.core.plates import PlateCalculator
from beyond_normal.core.program import (
    bbb_sets,
    deadlift_assistance,
    main_sets,
    recommended_db_rdl_per_hand,
    recommended_ssb_good_morning,
    session_sets,
    week_kind,
    week_scheme,
)
from beyond_normal.core.progression import (
    advance_training_maxes,
    clamp_auto_percent,
    next_training_max,
)
from beyond_normal.core.prs import InMemoryPRRepository, PRService
from beyond_normal.core.rounding import int_or_1dp, plate_list, round_load
from beyond_normal.core.summaries import MetricAccessors, calendar_week, program_week_summary, weekly_summary
from beyond_normal.core.warmup import build_warmup_plan, starting_point, suggested_movement, warmup_reps

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

MAINS = ["squat", "bench", "deadlift", "press"]


def _weights(steps: list[WarmupStep]) -> list[float]:
    return [s.weight for s in steps]


def _log(cycle: int, week: int, lift: str, is_main=None, is_deload=None) -> dict:
    entry = {"cycle": cycle, "week": week, "lift": lift}
    if is_main is not None:
        entry["main"] = is_main
    if is_deload is not None:
        entry["deload"] = is_deload
    return entry


def _full_cycle(cycle: int = 1, weeks=(1, 2, 3)) -> list[dict]:
    return [_log(cycle, w, lift) for w in weeks for lift in MAINS]


KEYS = HistoryAccessors.from_keys(is_main="main", is_deload="deload")


# =============================================================================
# Rounding and formatting
# =============================================================================


class TestRoundLoad:
    def test_rounds_to_nearest_increment(self):
        assert round_load(222.4, 5) == 220
        assert round_load(101.25, 2.5) == 102.5

    def test_ties_round_away_from_zero(self):
        assert round_load(227.5, 5) == 230
        assert round_load(-227.5, 5) == -230
        assert round_load(2.5, 5) == 5

    def test_bad_increment_falls_back_to_half(self):
        assert round_load(227.6, 0) == 227.5
        assert round_load(227.6, -5) == 227.5
        assert round_load(227.6, float("nan")) == 227.5

    def test_non_finite_input_returned_unchanged(self):
        assert math.isnan(round_load(float("nan"), 5))
        assert round_load(float("inf"), 5) == float("inf")

    @pytest.mark.parametrize("increment", [1, 2.5, 5, 10, 0])
    def test_rounding_is_idempotent(self, increment):
        for tenths in range(-5000, 5001, 7):
            x = tenths / 10.0
            once = round_load(x, increment)
            assert round_load(once, increment) == once


class TestFormatting:
    def test_int_or_1dp(self):
        assert int_or_1dp(215) == "215"
        assert int_or_1dp(215.5) == "215.5"

    def test_plate_list(self):
        assert plate_list([45, 10, 2.5]) == "45, 10, 2.5"
        assert plate_list([]) == ""


# =============================================================================
# Plates
# =============================================================================


class TestPlateCalculator:
    def test_exact_loads(self):
        calc = PlateCalculator()
        assert calc.plates(315) == [45, 45, 45]
        assert calc.plates(185) == [45, 25]
        assert calc.plates(230) == [45, 45, 2.5]

    def test_missing_denominations_underfill(self):
        calc = PlateCalculator()
        assert calc.plates(157.5) == [45, 10]
        assert calc.loaded_total(157.5) == 155

    def test_never_overfills(self):
        calc = PlateCalculator(inventory=[45, 25, 10])
        for target in range(45, 500, 5):
            assert 45 + 2 * sum(calc.plates(target)) <= target

    def test_degenerate_inputs(self):
        calc = PlateCalculator()
        assert calc.plates(45) == []
        assert calc.plates(40) == []
        assert calc.plates(float("nan")) == []
        assert calc.plates(float("inf")) == []
        assert calc.plates(135, bar_weight=0) == []
        assert calc.plates(135, bar_weight=-45) == []

    def test_non_finite_inputs_are_not_memoized(self):
        calc = PlateCalculator()
        for _ in range(100):
            assert calc.plates(float("nan")) == []
            assert calc.plates(135, bar_weight=float("nan")) == []
            assert calc.plates(float("-inf")) == []
        assert calc._cache == {}

    def test_bar_override(self):
        calc = PlateCalculator()
        assert calc.plates(135, bar_weight=35) == [45, 5]

    def test_inventory_is_cleaned(self):
        calc = PlateCalculator(inventory=[25, float("nan"), -5, 45, 0, 45])
        assert calc.inventory == (45.0, 25.0)

    def test_empty_inventory(self):
        calc = PlateCalculator(inventory=[])
        assert calc.plates(315) == []

    def test_huge_target_is_bounded(self):
        calc = PlateCalculator(inventory=[2.5])
        assert len(calc.plates(1e9)) == 200

    def test_cached_result_is_not_shared(self):
        calc = PlateCalculator()
        first = calc.plates(315)
        first.append(99)
        assert calc.plates(315) == [45, 45, 45]

    def test_concurrent_calls_agree(self):
        calc = PlateCalculator()
        results: list[list[float]] = []

        def work():
            for _ in range(50):
                results.append(calc.plates(275))

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(r == [45, 45, 25] for r in results)

    def test_round_uses_instance_increment(self):
        assert PlateCalculator(round_to=2.5).round(101.2) == 100


# =============================================================================
# Warm-up ramp
# =============================================================================


class TestWarmupPlan:
    def test_squat_one_plate_target(self):
        # span 90: medium band, thinned to first/middle/last
        assert _weights(build_warmup_plan(135, 45, 5)) == [45, 55, 95, 120]

    def test_squat_medium_target(self):
        steps = build_warmup_plan(225, 45, 5)
        assert steps == [
            WarmupStep(45, 10),
            WarmupStep(90, 8),
            WarmupStep(125, 5),
            WarmupStep(160, 3),
        ]

    def test_squat_heavy_target(self):
        # span 270: lowest three touches of 125/175/220/250/285
        assert _weights(build_warmup_plan(315, 45, 5)) == [45, 125, 175, 220]

    def test_small_span_midpoint_and_high(self):
        # span 55: midpoint 72.5 → 75, high 90% → 90
        assert build_warmup_plan(100, 45, 5) == [
            WarmupStep(45, 10),
            WarmupStep(75, 3),
            WarmupStep(90, 2),
        ]

    def test_deadlift_starts_at_135_from_two_plates(self):
        steps = build_warmup_plan(225, 45, 5, lift="deadlift")
        assert _weights(steps) == [135, 160, 180, 205]
        assert steps[0].reps == 10

    def test_deadlift_heavy(self):
        assert _weights(build_warmup_plan(405, 45, 5, lift="deadlift")) == [135, 160, 225, 285]

    def test_deadlift_below_threshold_starts_at_bar(self):
        assert starting_point(200, 45, "deadlift") == 45
        assert starting_point(225, 45, "Deadlift") == 135
        assert starting_point(500, 45, "squat") == 45

    def test_target_at_or_below_bar(self):
        assert build_warmup_plan(45, 45, 5) == [WarmupStep(45, 10)]
        assert build_warmup_plan(30, 45, 5) == [WarmupStep(45, 10)]

    def test_non_finite_target(self):
        assert build_warmup_plan(float("nan"), 45, 5) == [WarmupStep(45, 10)]

    def test_target_just_above_bar(self):
        assert build_warmup_plan(50, 45, 5) == [WarmupStep(45, 10)]

    def test_first_step_is_the_bar_under_coarse_rounding(self):
        # round_load(45, 10) would be 50, above the 48 target
        assert build_warmup_plan(48, 45, 10) == [WarmupStep(45, 10)]
        assert build_warmup_plan(135, 45, 10)[0] == WarmupStep(45, 10)

    @pytest.mark.parametrize("lift", ["squat", "bench", "deadlift", "press", "row"])
    @pytest.mark.parametrize("bar,round_to", [(45, 5), (20, 2.5), (35, 5), (45, 10)])
    def test_ramp_invariants(self, lift, bar, round_to):
        for target in range(int(bar) + 5, 605, 5):
            steps = build_warmup_plan(target, bar, round_to, lift=lift)
            weights = _weights(steps)
            assert 1 <= len(steps) <= 4
            assert steps[0].weight == starting_point(target, bar, lift)
            assert steps[0].reps == 10
            assert all(w < target for w in weights)
            assert all(a < b for a, b in zip(weights, weights[1:]))

    def test_rep_bands(self):
        assert warmup_reps(40, 100) == 8
        assert warmup_reps(50, 100) == 5
        assert warmup_reps(70, 100) == 3
        assert warmup_reps(82, 100) == 2
        assert warmup_reps(92, 100) == 1

    def test_suggested_movement(self):
        assert "kettlebell" in suggested_movement("deadlift")
        assert suggested_movement("curl") == "5 min easy general movement"


# =============================================================================
# One-rep-max estimation
# =============================================================================


class TestEstimate1RM:
    def test_epley(self):
        # 200 × (1 + 8/30) = 253.3 → 255
        est = estimate_1rm(200, 8)
        assert est.e1rm == 255
        assert est.note == NOTE_NONE

    def test_wendler(self):
        # 200 × 1.1665 = 233.3 → 235
        assert estimate_1rm(200, 5, formula="wendler").e1rm == 235

    def test_unknown_formula_uses_epley(self):
        assert estimate_1rm(200, 8, formula="nope").e1rm == 255

    def test_single_is_the_weight(self):
        assert estimate_1rm(225, 1) == estimate_1rm(225, 1, formula="wendler")
        assert estimate_1rm(225, 1).e1rm == 225
        assert estimate_1rm(227, 1).e1rm == 225

    def test_soft_warning_band(self):
        assert estimate_1rm(100, 10).note == NOTE_NONE
        low = estimate_1rm(100, 11)
        assert low.note == NOTE_LOW_CONFIDENCE
        assert low.e1rm == 135
        assert estimate_1rm(100, 15).note == NOTE_LOW_CONFIDENCE

    def test_over_hard_cap_is_refused(self):
        est = estimate_1rm(100, 16)
        assert est.e1rm == 0
        assert est.note == AmrapNote.invalid_too_many_reps(16)

    def test_over_hard_cap_can_be_capped(self):
        # 100 × (1 + 15/30) = 150
        est = estimate_1rm(100, 20, refuse_above_hard_cap=False)
        assert est.e1rm == 150
        assert est.note == AmrapNote.capped(15)

    @pytest.mark.parametrize("weight,reps", [(0, 5), (-100, 5), (100, 0), (100, -3), (float("nan"), 5)])
    def test_degenerate_inputs(self, weight, reps):
        est = estimate_1rm(weight, reps)
        assert est.e1rm == 0
        assert est.note == NOTE_NONE

    def test_note_text(self):
        assert AmrapNote.capped(15).describe() == "estimated using 15 reps (capped)"
        assert NOTE_NONE.describe() == ""


class TestPREstimate:
    def test_single_returns_weight(self):
        assert pr_estimate_1rm(227, 1) == 227
        assert pr_estimate_1rm(227, 0) == 227

    def test_formulas(self):
        assert pr_estimate_1rm(300, 5) == pytest.approx(350.0)
        assert pr_estimate_1rm(100, 10, "brzycki") == pytest.approx(133.333, abs=1e-3)
        assert pr_estimate_1rm(100, 10, "lombardi") == pytest.approx(125.893, abs=1e-3)

    def test_not_rounded_and_no_cap(self):
        # 200 × (1 + 20/30)
        assert pr_estimate_1rm(200, 20) == pytest.approx(333.333, abs=1e-3)

    def test_brzycki_reps_clamped(self):
        assert math.isfinite(pr_estimate_1rm(100, 37, "brzycki"))
        assert pr_estimate_1rm(100, 40, "brzycki") == pytest.approx(3600.0)


# =============================================================================
# Week schemes and prescriptions
# =============================================================================


class TestWeekScheme:
    def test_week_one(self):
        scheme = week_scheme(1)
        assert [(s.pct, s.reps, s.amrap) for s in scheme.main] == [
            (0.65, 5, False),
            (0.75, 5, False),
            (0.85, 5, True),
        ]
        assert scheme.show_bbb
        assert scheme.top_line == "85% × 5+"

    def test_deload(self):
        scheme = week_scheme(4)
        assert [s.pct for s in scheme.main] == [0.40, 0.50, 0.60]
        assert not any(s.amrap for s in scheme.main)
        assert not scheme.show_bbb
        assert scheme.top_line == "Deload: 60% × 5"

    @pytest.mark.parametrize("week", [0, -1, 5, 99])
    def test_unknown_weeks_fall_back_to_week_one(self, week):
        assert week_scheme(week) == week_scheme(1)
        assert week_kind(week) == "five"

    def test_week_kinds(self):
        assert [week_kind(w) for w in (1, 2, 3, 4)] == ["five", "three", "one", "deload"]


class TestPrescriptions:
    def test_main_sets(self):
        sets = main_sets(300, 1)
        assert [s.weight for s in sets] == [195, 225, 255]
        assert [s.label for s in sets] == ["5", "5", "5+"]

    def test_main_sets_later_weeks(self):
        assert [s.weight for s in main_sets(300, 2)] == [210, 240, 270]
        assert [s.weight for s in main_sets(300, 3)] == [225, 255, 285]
        assert [s.weight for s in main_sets(300, 4)] == [120, 150, 180]

    def test_bbb_sets(self):
        sets = bbb_sets(300, 0.5)
        assert len(sets) == 5
        assert all(s.weight == 150 and s.reps == 10 and s.kind == "bbb" for s in sets)

    def test_bbb_percent_clamped(self):
        assert bbb_sets(300, 0.9)[0].weight == 210
        assert bbb_sets(300, 0.1)[0].weight == 120
        assert bbb_sets(300, float("nan"))[0].weight == 150

    def test_session_skips_bbb_on_deload(self):
        assert len(session_sets(300, 1)) == 8
        assert len(session_sets(300, 4)) == 3

    def test_assistance(self):
        # 405 × 0.14 = 56.7 → 55; 405 × 0.30 = 121.5 → 120
        assert recommended_db_rdl_per_hand(405) == 55
        assert recommended_ssb_good_morning(405, 45) == 120
        assert recommended_db_rdl_per_hand(100) == 20
        assert recommended_ssb_good_morning(100, 65) == 65
        assert [s.label for s in deadlift_assistance(405, 65)] == ["DB RDL (per hand)", "SSB Good Morning"]


# =============================================================================
# Training max progression
# =============================================================================


class TestNextTrainingMax:
    def test_classic_ignores_estimate(self):
        assert next_training_max(225, 999, "classic", "upper") == 230
        assert next_training_max(315, None, "classic", "lower") == 325

    def test_auto_below_cap(self):
        # 260 × 0.90 = 234 → +9
        assert next_training_max(225, 260, "auto", "upper") == 234

    def test_auto_capped_per_class(self):
        assert next_training_max(225, 295, "auto", "upper") == 235
        assert next_training_max(300, 400, "auto", "lower") == 320

    def test_auto_never_lowers(self):
        assert next_training_max(225, 200, "auto", "upper") == 225

    @pytest.mark.parametrize("e1rm", [None, 0, -10, float("nan")])
    def test_auto_without_usable_estimate(self, e1rm):
        assert next_training_max(225, e1rm, "auto", "upper") == 225

    def test_auto_from_zero_tm(self):
        assert next_training_max(0, 200, "auto", "upper") == 10

    def test_auto_percent_clamped(self):
        assert clamp_auto_percent(100) == 95
        assert clamp_auto_percent(50) == 80
        assert clamp_auto_percent(float("nan")) == 90
        # 240 × 0.95 = 228
        assert next_training_max(225, 240, "auto", "upper", auto_percent=100) == 228

    def test_lift_class(self):
        assert lift_class("Squat") == "lower"
        assert lift_class("deadlift") == "lower"
        assert lift_class("press") == "upper"
        assert lift_class("curl") == "upper"


class TestAdvanceTrainingMaxes:
    ENTRIES = [
        {"lift": "squat", "e1rm": 350},
        {"lift": "squat", "e1rm": 380},
        {"lift": "bench", "e1rm": -1},
    ]

    def test_auto_uses_best_estimate(self):
        new = advance_training_maxes(
            {"squat": 300, "bench": 200},
            self.ENTRIES,
            "auto",
            lift_of=lambda e: e["lift"],
            e1rm_of=lambda e: e["e1rm"],
        )
        assert new == {"squat": 320, "bench": 200}

    def test_classic(self):
        new = advance_training_maxes(
            {"squat": 300, "bench": 200},
            self.ENTRIES,
            "classic",
            lift_of=lambda e: e["lift"],
            e1rm_of=lambda e: e["e1rm"],
        )
        assert new == {"squat": 310, "bench": 205}


# =============================================================================
# Jokers
# =============================================================================


class TestJokers:
    def test_triples(self):
        ladder = generate_jokers(400, "three", JokerParams())
        assert [s.weight for s in ladder] == [380, 400, 420, 440]
        assert all(s.reps == 3 and s.kind == "joker" for s in ladder)
        assert [s.percent_of_tm for s in ladder] == pytest.approx([0.95, 1.00, 1.05, 1.10])

    def test_singles(self):
        ladder = generate_jokers(400, "one", JokerParams())
        assert [s.weight for s in ladder] == [400, 440]
        assert all(s.reps == 1 for s in ladder)

    def test_hard_ceiling(self):
        ladder = generate_jokers(400, "one", JokerParams(max_over_tm_pct=0.5))
        assert [s.weight for s in ladder] == [400, 440, 480]

    @pytest.mark.parametrize("week", ["five", "deload"])
    def test_no_jokers(self, week):
        assert generate_jokers(400, week, JokerParams()) == []

    def test_ceiling_below_start(self):
        assert generate_jokers(400, "three", JokerParams(max_over_tm_pct=-0.1)) == []

    def test_non_positive_step_gives_one_rung(self):
        ladder = generate_jokers(400, "three", JokerParams(triple_step_pct=0))
        assert [s.weight for s in ladder] == [380]

    def test_tiny_step_is_bounded(self):
        ladder = generate_jokers(400, "three", JokerParams(triple_step_pct=1e-7))
        assert len(ladder) == JOKER_MAX_RUNGS
        assert all(s.weight == 380 for s in ladder)

    def test_bad_round_to_falls_back(self):
        ladder = generate_jokers(333, "one", JokerParams(round_to=0))
        assert ladder[0].weight == 335

    def test_next_walks_the_ladder(self):
        params = JokerParams()
        first = next_joker(400, "three", params, [])
        assert first.weight == 380
        second = next_joker(400, "three", params, [first])
        assert second.weight == 400
        ladder = generate_jokers(400, "three", params)
        assert next_joker(400, "three", params, ladder) is None

    def test_next_off_ladder(self):
        stray = SetPrescription.joker_triple(0.5, 200)
        assert next_joker(400, "three", JokerParams(), [stray]) is None
        assert next_joker(400, "five", JokerParams(), []) is None


# =============================================================================
# Cycle progress
# =============================================================================


class TestCycleProgress:
    def test_expected_keys(self):
        assert len(expected_keys(MAINS, "three_weeks_no_deload")) == 12
        keys = expected_keys(MAINS, "include_deload")
        assert len(keys) == 16
        assert CycleKey(4, "press") in keys

    def test_three_week_cycle_complete(self):
        assert is_cycle_complete(_full_cycle(), 1, MAINS, "three_weeks_no_deload", KEYS)
        assert not is_cycle_complete(_full_cycle(), 1, MAINS, "include_deload", KEYS)

    def test_missing_lift_incomplete(self):
        history = [e for e in _full_cycle() if not (e["week"] == 2 and e["lift"] == "press")]
        assert not is_cycle_complete(history, 1, MAINS, "three_weeks_no_deload", KEYS)

    def test_include_deload(self):
        history = _full_cycle() + [_log(1, 4, lift, is_deload=True) for lift in MAINS]
        assert is_cycle_complete(history, 1, MAINS, "include_deload", KEYS)

    def test_deload_entries_skipped_without_deload_policy(self):
        history = [_log(1, 4, lift, is_deload=True) for lift in MAINS]
        assert completed_keys(history, 1, MAINS, "three_weeks_no_deload", KEYS) == set()

    def test_non_main_entries_ignored(self):
        history = [_log(1, 1, lift, is_main=False) for lift in MAINS]
        assert completed_keys(history, 1, MAINS, "three_weeks_no_deload", KEYS) == set()
        assert not is_week_complete(history, 1, 1, MAINS, KEYS)

    def test_other_cycles_ignored(self):
        assert not is_cycle_complete(_full_cycle(cycle=2), 1, MAINS, "three_weeks_no_deload", KEYS)

    def test_week_complete(self):
        history = [_log(1, 2, lift) for lift in MAINS]
        assert is_week_complete(history, 1, 2, MAINS, KEYS)
        assert not is_week_complete(history[:-1], 1, 2, MAINS, KEYS)
        assert not is_week_complete(history, 1, 3, MAINS, KEYS)

    def test_attribute_accessors(self):
        entries = [LiftEntry(lift, 100, 5, date(2024, 1, 1)) for lift in MAINS]
        accessors = HistoryAccessors(
            cycle=lambda e: 1,
            week=lambda e: 1,
            lift=lambda e: e.lift,
        )
        assert is_week_complete(entries, 1, 1, MAINS, accessors)

        by_name = HistoryAccessors.from_attributes(cycle="reps", week="reps", lift="lift")
        assert is_week_complete(entries, 5, 5, MAINS, by_name)


# =============================================================================
# Summaries
# =============================================================================

METRICS = MetricAccessors.from_keys(volume="volume", e1rm="e1rm")


def _session(cycle: int, week: int, lift: str, volume: float, e1rm, day) -> dict:
    return {"cycle": cycle, "week": week, "lift": lift, "volume": volume, "e1rm": e1rm, "date": day}


HISTORY = [
    _session(1, 1, "squat", 3000, 300.2, date(2026, 3, 2)),
    _session(1, 1, "squat", 1500, 290.5, date(2026, 3, 5)),
    _session(1, 1, "bench", 2000, 0, date(2026, 3, 3)),
    _session(1, 1, "bench", 500, None, date(2026, 3, 4)),
    _session(1, 2, "squat", 4000, 310, date(2026, 3, 9)),
    _session(2, 1, "squat", 4000, 320, date(2026, 3, 30)),
]


class TestProgramWeekSummary:
    def test_per_lift_breakdown(self):
        summary = program_week_summary(HISTORY, 1, 1, KEYS, METRICS)
        assert (summary.cycle, summary.week, summary.total_volume) == (1, 1, 7000)
        assert summary.lifts == (
            LiftWeekSummary("bench", 0, 2500, 2),
            LiftWeekSummary("squat", 291, 4500, 2),
        )

    def test_latest_estimate_wins_over_highest(self):
        squat = program_week_summary(HISTORY, 1, 1, KEYS, METRICS).lifts[1]
        # 300.2 is higher but older than 290.5
        assert squat.est_1rm == 291

    def test_empty_week(self):
        summary = program_week_summary(HISTORY, 3, 1, KEYS, METRICS)
        assert summary.total_volume == 0
        assert summary.lifts == ()

    def test_attribute_records(self):
        entry = LiftEntry("press", 100, 5, date(2026, 3, 2))
        accessors = HistoryAccessors(cycle=lambda e: 1, week=lambda e: 1, lift=lambda e: e.lift)
        metrics = MetricAccessors(
            volume=lambda e: e.weight * e.reps,
            e1rm=lambda e: pr_estimate_1rm(e.weight, e.reps),
            date=lambda e: e.date,
        )
        summary = program_week_summary([entry], 1, 1, accessors, metrics)
        assert summary.lifts == (LiftWeekSummary("press", 117, 500, 1),)


class TestWeeklySummary:
    def test_calendar_week_is_monday_based(self):
        assert calendar_week(date(2026, 3, 4)) == (date(2026, 3, 2), date(2026, 3, 9))
        assert calendar_week(date(2026, 3, 2)) == (date(2026, 3, 2), date(2026, 3, 9))
        assert calendar_week(date(2026, 3, 8)) == (date(2026, 3, 2), date(2026, 3, 9))

    def test_interval_totals_and_estimates(self):
        start, end = calendar_week(date(2026, 3, 4))
        summary = weekly_summary(HISTORY, start, end, KEYS, METRICS)
        assert summary.total_volume == 7000
        assert summary.one_rms == (
            DatedOneRM("squat", 291, date(2026, 3, 5)),
            DatedOneRM("squat", 300, date(2026, 3, 2)),
        )

    def test_end_is_exclusive(self):
        summary = weekly_summary(HISTORY, date(2026, 3, 9), date(2026, 3, 16), KEYS, METRICS)
        assert summary.total_volume == 4000
        assert [r.est_1rm for r in summary.one_rms] == [310]

    def test_datetimes_count_by_day(self):
        late = _session(1, 1, "row", 800, float("nan"), datetime(2026, 3, 8, 23, 30))
        summary = weekly_summary([late], date(2026, 3, 2), date(2026, 3, 9), KEYS, METRICS)
        assert summary.total_volume == 800
        assert summary.one_rms == ()


# =============================================================================
# Personal records
# =============================================================================


class TestPRService:
    def _entry(self, weight, reps, lift="bench", day=1):
        return LiftEntry(lift, weight, reps, date(2024, 1, day))

    def test_first_entry_is_a_pr(self):
        service = PRService(InMemoryPRRepository())
        record = service.update_if_pr(self._entry(200, 5))
        assert record is not None
        assert record.value == pytest.approx(233.333, abs=1e-3)
        assert service.best("bench", "estimated_one_rm") == record

    def test_must_beat_best_by_margin(self):
        service = PRService(InMemoryPRRepository())
        service.update_if_pr(self._entry(225, 1), metric="one_rm")
        assert service.update_if_pr(self._entry(225.4, 1, day=2), metric="one_rm") is None
        record = service.update_if_pr(self._entry(225.5, 1, day=3), metric="one_rm")
        assert record is not None
        assert record.value == 225.5

    def test_one_rm_metric_estimates_multi_rep_sets(self):
        service = PRService(InMemoryPRRepository())
        record = service.update_if_pr(self._entry(300, 5), metric="one_rm")
        assert record.value == pytest.approx(350.0)

    def test_best_is_per_lift_and_metric(self):
        repo = InMemoryPRRepository(
            [
                PersonalRecord("bench", "one_rm", 225, date(2024, 1, 1)),
                PersonalRecord("bench", "one_rm", 245, date(2024, 2, 1)),
                PersonalRecord("squat", "one_rm", 405, date(2024, 2, 1)),
            ]
        )
        service = PRService(repo)
        assert service.best("bench", "one_rm").value == 245
        assert service.best("bench", "estimated_one_rm") is None
        assert service.best("press", "one_rm") is None

    def test_invalid_entry_ignored(self):
        repo = InMemoryPRRepository()
        assert PRService(repo).update_if_pr(self._entry(0, 5)) is None
        assert repo.records() == []
