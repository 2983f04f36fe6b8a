"""Program commands: week, jokers, next-tm, settings."""

import json
from typing import Annotated, Optional

import typer

from ...core.config import PROGRESSION_STYLES, lift_class
from ...core.jokers import generate_jokers
from ...core.program import deadlift_assistance, session_sets, week_kind, week_scheme
from ...core.progression import next_training_max
from ...core.rounding import int_or_1dp
from .. import views
from ..app import SettingsOption, WeekOption, app, check_lift, check_week, get_settings, resolve_tm

TmOption = Annotated[
    Optional[float],
    typer.Option("--tm", help="Training max (defaults to settings)"),
]

LiftArgument = Annotated[str, typer.Argument(help="Lift: squat, bench, deadlift, row, press")]


@app.command()
def week(
    lift: LiftArgument,
    week_number: WeekOption = 1,
    tm: TmOption = None,
    settings_path: SettingsOption = None,
) -> None:
    """
    Show the main sets, BBB block and jokers for a lift and week.
    """
    settings = get_settings(settings_path)
    lift = check_lift(lift)
    week_number = check_week(week_number)
    training_max = resolve_tm(settings, lift, tm)

    sets = session_sets(training_max, week_number, settings.bbb_percent, settings.round_to)
    if lift == "deadlift" and week_scheme(week_number).show_bbb:
        sets.extend(deadlift_assistance(training_max, settings.ssb_bar_weight, settings.round_to))
    jokers = generate_jokers(training_max, week_kind(week_number), settings.joker_params())

    views.print_week(
        lift,
        week_number,
        training_max,
        week_scheme(week_number),
        sets,
        jokers,
        settings.plate_calculator(lift=lift),
    )


@app.command()
def jokers(
    lift: LiftArgument,
    week_number: WeekOption = 3,
    tm: TmOption = None,
    settings_path: SettingsOption = None,
) -> None:
    """
    Show the full joker ladder for a lift and week.
    """
    settings = get_settings(settings_path)
    lift = check_lift(lift)
    week_number = check_week(week_number)
    training_max = resolve_tm(settings, lift, tm)

    ladder = generate_jokers(training_max, week_kind(week_number), settings.joker_params())
    views.print_jokers(lift, week_number, ladder, settings.plate_calculator(lift=lift))


@app.command("next-tm")
def next_tm(
    lift: LiftArgument,
    tm: TmOption = None,
    e1rm: Annotated[
        Optional[float],
        typer.Option("--e1rm", help="Latest AMRAP-estimated 1RM (auto style)"),
    ] = None,
    style: Annotated[
        Optional[str],
        typer.Option("--style", help="classic or auto (defaults to settings)"),
    ] = None,
    settings_path: SettingsOption = None,
) -> None:
    """
    Compute next cycle's training max.
    """
    settings = get_settings(settings_path)
    lift = check_lift(lift)
    training_max = resolve_tm(settings, lift, tm)
    chosen = (style or settings.tm_progression_style).lower()
    if chosen not in PROGRESSION_STYLES:
        views.print_error(f"Unknown style '{chosen}'. Choose from: {', '.join(PROGRESSION_STYLES)}")
        raise typer.Exit(1)

    new_tm = next_training_max(
        training_max,
        e1rm,
        chosen,
        lift_class(lift),
        auto_percent=settings.auto_tm_percent,
        bumps=settings.bumps,
        caps=settings.caps,
    )

    if chosen == "auto" and e1rm is None:
        views.print_warning("No --e1rm given; auto progression keeps the training max.")
    views.print_success(
        f"{lift.title()} TM: {int_or_1dp(training_max)} → {int_or_1dp(new_tm)} ({chosen})"
    )


@app.command("settings")
def show_settings(
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
    settings_path: SettingsOption = None,
) -> None:
    """
    Show the effective settings.
    """
    settings = get_settings(settings_path)
    if json_out:
        print(json.dumps(settings.to_dict(), indent=2))
        return
    views.print_settings(settings)
