#!/usr/bin/env python3
"""Show pairwise synergy and role balance for a team composition."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from analytics.engine import team_synergy
from analytics.synergy import MAX_ROSTER_SIZE

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Score a roster of up to five agents.",
)


@app.command()
def show_team_synergy(
    agents: Annotated[
        list[str],
        typer.Argument(help=f"Agent names, up to {MAX_ROSTER_SIZE}."),
    ],
) -> None:
    """Print pair synergies, role slots and the balance score."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    if len(agents) > MAX_ROSTER_SIZE:
        raise typer.BadParameter(f"At most {MAX_ROSTER_SIZE} agents can be analyzed")

    report = team_synergy(agents)

    if report.average_synergy is None:
        typer.echo("synergy=- (need at least two agents)")
    else:
        typer.echo(f"synergy={report.synergy_percent:.1f}% rating={report.rating.value}")
    for pair in report.pairs:
        marker = "" if pair.known else " (default)"
        typer.echo(f"  {pair.first:<10} + {pair.second:<10} {pair.score:.2f}{marker}")

    for slot in report.role_slots:
        typer.echo(
            f"{slot.role.value:<10} count={slot.count} optimal={slot.optimal} share={slot.percentage:5.1f}%"
        )
    if report.unassigned:
        typer.echo(f"unassigned={','.join(report.unassigned)}")
    typer.echo(f"balance_score={report.balance_score:.0f}/100")
    typer.echo(report.recommendation)


if __name__ == "__main__":
    app()
