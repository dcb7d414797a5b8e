#!/usr/bin/env python3
"""Show the performance summary, rank prediction and improvement areas for a match file."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from analytics.common import PerformanceSummary, RankPrediction
from analytics.config import AnalyticsConfig, load_analytics_configs, select_analytics_config
from analytics.engine import PerformanceAnalyzer

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "analytics"
DEFAULT_PROFILE = "default"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Analyze a player's match history file.",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_profile(config_dir: Path, profile: str) -> AnalyticsConfig:
    try:
        configs = load_analytics_configs(config_dir)
    except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config-dir") from exc
    try:
        return select_analytics_config(configs, profile)
    except KeyError as exc:
        raise typer.BadParameter(str(exc.args[0]), param_hint="--profile") from exc


def _load_matches(match_file: Path) -> list[Any]:
    try:
        payload = json.loads(match_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise typer.BadParameter(f"Cannot read matches from {match_file}: {exc}") from exc
    if isinstance(payload, dict):
        payload = payload.get("matches", [])
    if not isinstance(payload, list):
        raise typer.BadParameter(f"{match_file} must contain a JSON list of match records")
    return payload


def _render_summary(summary: PerformanceSummary) -> list[str]:
    quartiles = summary.kda_quartiles
    lines = [
        f"matches={summary.total_matches} reliability={summary.reliability:.1f}%",
        (
            f"kda avg={summary.avg_kda:.2f} median={summary.median_kda:.2f} "
            f"std={summary.kda_std_dev:.2f} q1={quartiles.q1:.2f} q2={quartiles.q2:.2f} q3={quartiles.q3:.2f}"
        ),
        f"win_rate={summary.win_rate:.1f}% wins={summary.wins} avg_score={summary.avg_score:.0f}",
        f"consistency={summary.consistency.value:.1f} ({summary.consistency.status.value})",
        (
            f"trend={summary.trend.trend.value} slope={summary.trend.slope:.3f} "
            f"r2={summary.trend.r_squared:.3f} confidence={summary.trend.confidence:.1f}"
        ),
    ]
    for agent in summary.agent_performance:
        lines.append(
            f"  {agent.agent_id:<12} matches={agent.matches:3d} kda={agent.avg_kda:5.2f} "
            f"win_rate={agent.win_rate:5.1f}% efficiency={agent.efficiency:6.1f}"
        )
    return lines


def _render_prediction(prediction: RankPrediction) -> list[str]:
    probabilities = prediction.probabilities
    benchmark = prediction.benchmark
    return [
        (
            f"rank={prediction.current_rank} tier={prediction.tier} ({prediction.tier_status.value}) "
            f"change={prediction.predicted_change:+d} score={prediction.overall_score:.1f} "
            f"confidence={prediction.confidence:.1f}"
        ),
        (
            f"promotion={probabilities.promotion:.1f}% stable={probabilities.stable:.1f}% "
            f"demotion={probabilities.demotion:.1f}%"
        ),
        (
            f"benchmark kda={benchmark.expected_kda:.2f} ({benchmark.kda_difference:+.2f}) "
            f"win_rate={benchmark.expected_win_rate:.1f}% ({benchmark.win_rate_difference:+.1f})"
        ),
    ]


@app.command()
def report(
    match_file: Annotated[
        Path,
        typer.Argument(help="JSON file with a list of match records, oldest first."),
    ],
    rank: Annotated[
        str,
        typer.Option("--rank", help="Current rank as tier-division, e.g. gold-2."),
    ] = "gold-2",
    profile: Annotated[
        str,
        typer.Option("--profile", help="Analytics profile name from the config directory."),
    ] = DEFAULT_PROFILE,
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of analytics profile TOML files."),
    ] = DEFAULT_CONFIG_DIR,
    window: Annotated[
        int | None,
        typer.Option("--window", help="Override the profile's recency window."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log dropped records and numeric fallbacks."),
    ] = False,
) -> None:
    """Print summary, rank prediction and improvement areas."""
    _configure_logging(verbose)
    if window is not None and window <= 0:
        raise typer.BadParameter("--window must be greater than 0")

    analyzer = PerformanceAnalyzer.from_config(_load_profile(config_dir, profile))
    matches = _load_matches(match_file)

    prediction = analyzer.predict_rank(matches, rank, window=window)
    areas = analyzer.improvement_areas(matches, window=window)

    typer.echo(f"profile={profile} records={len(matches)}")
    for line in _render_summary(prediction.summary):
        typer.echo(line)
    for line in _render_prediction(prediction):
        typer.echo(line)

    suitable = [fit.tier for fit in analyzer.tier_fit(prediction.summary) if fit.suitable]
    typer.echo(f"suitable_tiers={','.join(suitable) or '-'}")

    for index, area in enumerate(areas, start=1):
        typer.echo(
            f"{index:2d}. [{area.priority.value}] {area.category}: "
            f"{area.current} -> {area.target} ({'; '.join(area.tips)})"
        )


@app.command()
def show_config(
    profile: Annotated[
        str,
        typer.Option("--profile", help="Analytics profile name from the config directory."),
    ] = DEFAULT_PROFILE,
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of analytics profile TOML files."),
    ] = DEFAULT_CONFIG_DIR,
) -> None:
    """Print the effective parameters of one profile as JSON."""
    config = _load_profile(config_dir, profile)
    typer.echo(json.dumps({"name": config.name, **config.as_config_json()}, indent=2))


if __name__ == "__main__":
    app()
