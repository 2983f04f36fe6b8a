"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of loads, ramps and prescriptions.
"""

from rich.console import Console
from rich.table import Table

from ..core.models import AmrapEstimate, SetPrescription, WarmupStep, WeekScheme
from ..core.plates import PlateCalculator
from ..core.rounding import int_or_1dp, plate_list
from ..core.settings import ProgramSettings

console = Console()


def _plates_cell(calc: PlateCalculator, weight: float) -> str:
    plates = calc.plates(weight)
    return plate_list(plates) if plates else "[dim]bar only[/dim]"


def print_plates(target: float, calc: PlateCalculator) -> None:
    """
    Print the per-side plate breakdown for a target load.

    Args:
        target: Total load requested
        calc: Calculator holding bar, increment and inventory
    """
    plates = calc.plates(target)
    loaded = calc.loaded_total(target)

    table = Table(title=f"Plates for {int_or_1dp(target)} (bar {int_or_1dp(calc.bar_weight)})")
    table.add_column("Plate", justify="right", style="cyan")
    table.add_column("Per side", justify="right")

    counts: dict[float, int] = {}
    for p in plates:
        counts[p] = counts.get(p, 0) + 1
    for p, n in counts.items():
        table.add_row(int_or_1dp(p), str(n))

    if plates:
        console.print(table)
    else:
        console.print("[yellow]Nothing to load: bar only.[/yellow]")

    if plates and target - loaded > 1e-9:
        print_warning(
            f"Closest loadable weight is {int_or_1dp(loaded)} "
            f"({int_or_1dp(target - loaded)} short with this inventory)"
        )


def print_warmup(
    lift: str,
    target: float,
    steps: list[WarmupStep],
    calc: PlateCalculator,
    movement: str,
) -> None:
    """Print a warm-up ramp with per-side plates for each step."""
    console.print(f"[dim]General: {movement}[/dim]")

    table = Table(title=f"{lift.title()} warm-up to {int_or_1dp(target)}")
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Weight", justify="right", style="cyan")
    table.add_column("Reps", justify="right")
    table.add_column("Per side")

    for i, step in enumerate(steps, start=1):
        table.add_row(str(i), int_or_1dp(step.weight), str(step.reps), _plates_cell(calc, step.weight))

    console.print(table)


def _set_name(s: SetPrescription) -> str:
    if s.kind == "assistance":
        return s.label
    if s.kind == "bbb":
        return "BBB"
    return s.kind.title()


def format_sets_table(title: str, sets: list[SetPrescription], calc: PlateCalculator) -> Table:
    """Build a table of prescribed sets."""
    table = Table(title=title)
    table.add_column("Set", style="magenta")
    table.add_column("%TM", justify="right", style="dim")
    table.add_column("Weight", justify="right", style="cyan")
    table.add_column("Reps", justify="right")
    table.add_column("Per side")

    for s in sets:
        table.add_row(
            _set_name(s),
            f"{s.percent_of_tm * 100:.0f}%",
            int_or_1dp(s.weight),
            s.label if s.kind == "main" else str(s.reps),
            "-" if s.kind == "assistance" else _plates_cell(calc, s.weight),
        )
    return table


def print_week(
    lift: str,
    week: int,
    training_max: float,
    scheme: WeekScheme,
    sets: list[SetPrescription],
    jokers: list[SetPrescription],
    calc: PlateCalculator,
) -> None:
    """Print one lift's session for a program week."""
    console.print()
    console.print(
        f"[bold]{lift.title()}[/bold] week {week}  "
        f"TM {int_or_1dp(training_max)}  [dim]{scheme.top_line}[/dim]"
    )
    console.print(format_sets_table("Prescribed sets", sets, calc))
    if jokers:
        console.print(format_sets_table("Joker ladder (stop when bar speed drops)", jokers, calc))


def print_jokers(lift: str, week: int, jokers: list[SetPrescription], calc: PlateCalculator) -> None:
    if not jokers:
        print_info(f"No joker sets in week {week}.")
        return
    console.print(format_sets_table(f"{lift.title()} jokers, week {week}", jokers, calc))


def print_estimate(weight: float, reps: int, formula: str, estimate: AmrapEstimate) -> None:
    """Print a one-rep-max estimate and its quality note."""
    if estimate.e1rm <= 0:
        print_warning(estimate.note.describe() or "No estimate for this set.")
        return

    console.print(
        f"{int_or_1dp(weight)} × {reps} → e1RM [bold cyan]{int_or_1dp(estimate.e1rm)}[/bold cyan] "
        f"[dim]({formula})[/dim]"
    )
    note = estimate.note.describe()
    if note:
        print_warning(note)


def print_settings(settings: ProgramSettings) -> None:
    """Print the effective configuration."""
    table = Table(title="Settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    for key, value in settings.to_dict().items():
        if key == "training_maxes":
            continue
        if key == "plate_inventory":
            value = plate_list(list(value))
        table.add_row(key, str(value))
    console.print(table)

    tms = Table(title="Training maxes")
    tms.add_column("Lift", style="cyan")
    tms.add_column("TM", justify="right")
    for lift, tm in settings.training_maxes.items():
        tms.add_row(lift, int_or_1dp(tm))
    console.print(tms)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
