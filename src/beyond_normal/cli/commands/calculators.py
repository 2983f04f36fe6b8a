"""Calculator commands: plates, warmup, e1rm."""

from typing import Annotated, Optional

import typer

from ...core.estimator import DISPLAY_FORMULAS, estimate_1rm
from ...core.warmup import build_warmup_plan, suggested_movement
from .. import views
from ..app import LiftOption, SettingsOption, app, check_lift, get_settings

BarOption = Annotated[
    Optional[float],
    typer.Option("--bar", "-b", help="Bar weight (defaults to settings)"),
]


@app.command()
def plates(
    target: Annotated[float, typer.Argument(help="Total weight on the bar")],
    bar: BarOption = None,
    settings_path: SettingsOption = None,
) -> None:
    """
    Show per-side plates for a target load.
    """
    settings = get_settings(settings_path)
    if target <= 0:
        views.print_error("Target must be positive")
        raise typer.Exit(1)

    calc = settings.plate_calculator(bar)
    views.print_plates(target, calc)


@app.command()
def warmup(
    target: Annotated[float, typer.Argument(help="Top working weight")],
    lift: LiftOption = "squat",
    bar: BarOption = None,
    settings_path: SettingsOption = None,
) -> None:
    """
    Show a warm-up ramp up to a working weight.
    """
    settings = get_settings(settings_path)
    lift = check_lift(lift)
    if target <= 0:
        views.print_error("Target must be positive")
        raise typer.Exit(1)

    calc = settings.plate_calculator(bar, lift)
    steps = build_warmup_plan(target, calc.bar_weight, settings.round_to, lift)
    views.print_warmup(lift, target, steps, calc, suggested_movement(lift))


@app.command()
def e1rm(
    weight: Annotated[float, typer.Argument(help="Weight lifted")],
    reps: Annotated[int, typer.Argument(help="Reps completed")],
    formula: Annotated[
        Optional[str],
        typer.Option("--formula", "-f", help="epley, wendler, brzycki or mayhew"),
    ] = None,
    allow_over_cap: Annotated[
        bool,
        typer.Option("--allow-over-cap", help="Cap very high-rep sets instead of refusing them"),
    ] = False,
    settings_path: SettingsOption = None,
) -> None:
    """
    Estimate a one-rep max from an AMRAP set.
    """
    settings = get_settings(settings_path)
    name = (formula or settings.one_rm_formula).lower()
    if name not in DISPLAY_FORMULAS:
        views.print_error(f"Unknown formula '{name}'. Choose from: {', '.join(DISPLAY_FORMULAS)}")
        raise typer.Exit(1)
    if weight <= 0 or reps <= 0:
        views.print_error("Weight and reps must be positive")
        raise typer.Exit(1)

    estimate = estimate_1rm(
        weight,
        reps,
        formula=name,
        refuse_above_hard_cap=not allow_over_cap,
        round_to=settings.round_to,
    )
    views.print_estimate(weight, reps, name, estimate)
