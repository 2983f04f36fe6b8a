"""Shared Typer app object, shared option types, and settings utility."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.config import LIFT_CLASSES
from ..core.settings import ProgramSettings, load_settings
from . import views

# Shared --settings option type used across all commands
SettingsOption = Annotated[
    Optional[Path],
    typer.Option("--settings", "-s", help="Extra settings YAML merged over the defaults"),
]

LiftOption = Annotated[
    str,
    typer.Option("--lift", "-l", help="Lift: squat, bench, deadlift, row, press"),
]

WeekOption = Annotated[
    int,
    typer.Option("--week", "-w", help="Program week 1-4"),
]

app = typer.Typer(
    name="beyond-normal",
    help="5/3/1 calculator: plates, warm-ups, training maxes and jokers.",
    no_args_is_help=True,
)


def get_settings(settings_path: Path | None) -> ProgramSettings:
    """Load settings, failing the command if an explicit file is missing."""
    if settings_path is not None and not settings_path.exists():
        views.print_error(f"Settings file not found: {settings_path}")
        raise typer.Exit(1)
    return load_settings(settings_path)


def check_lift(lift: str) -> str:
    """Normalise a lift name, failing the command on unknown lifts."""
    name = lift.strip().lower()
    if name not in LIFT_CLASSES:
        views.print_error(f"Unknown lift '{lift}'. Choose from: {', '.join(LIFT_CLASSES)}")
        raise typer.Exit(1)
    return name


def check_week(week: int) -> int:
    if week < 1 or week > 4:
        views.print_error("Week must be between 1 and 4")
        raise typer.Exit(1)
    return week


def resolve_tm(settings: ProgramSettings, lift: str, tm: float | None) -> float:
    """Training max from --tm, else from settings."""
    value = tm if tm is not None else settings.training_max(lift)
    if value is None or value <= 0:
        views.print_error(f"No training max for {lift}; pass --tm")
        raise typer.Exit(1)
    return value
