"""
CLI entry point using Typer.

Provides commands for 5/3/1 load calculations:
- plates: Per-side plates for a load
- warmup: Warm-up ramp to a working weight
- e1rm: One-rep-max estimate from an AMRAP set
- week: Main sets, BBB and jokers for a week
- jokers: Joker ladder for a week
- next-tm: Next cycle's training max
- settings: Effective configuration
"""

from .app import app
from .commands import calculators, program  # noqa: F401  (registers commands)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
