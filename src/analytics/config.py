"""Load analytics profile definitions from TOML files."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from analytics.benchmarks import DEFAULT_BENCHMARKS

DEFAULT_WINDOW_SIZE = 20


@dataclass(frozen=True)
class AnalyticsParameters:
    window_size: int = DEFAULT_WINDOW_SIZE
    kda_weight: float = 30.0
    win_rate_weight: float = 0.5
    consistency_weight: float = 0.2
    promotion_threshold: float = 65.0
    demotion_threshold: float = 35.0
    base_promotion_probability: float = 0.3
    factor_cap: float = 2.0
    max_promotion: float = 85.0
    deficit_weight: float = 50.0
    max_demotion: float = 75.0
    min_stable: float = 10.0
    trend_min_points: int = 5
    trend_slope_threshold: float = 0.05
    consistency_min_points: int = 3
    neutral_consistency: float = 50.0
    low_kda_threshold: float = 1.0
    low_win_rate_threshold: float = 45.0
    low_consistency_threshold: float = 60.0
    default_tier: str = "gold"


@dataclass(frozen=True)
class AnalyticsConfig:
    """One named analytics profile loaded from a TOML file."""

    name: str
    description: str | None
    file_path: Path
    parameters: AnalyticsParameters

    @property
    def window_size(self) -> int:
        return self.parameters.window_size

    def as_config_json(self) -> dict[str, Any]:
        return asdict(self.parameters)


def load_analytics_configs(config_dir: Path) -> list[AnalyticsConfig]:
    """Load and validate all analytics profile TOML files in a directory."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    profiles: list[AnalyticsConfig] = []
    for file_path in config_files:
        with file_path.open("rb") as file:
            raw = tomllib.load(file)
        profiles.append(_parse_analytics_config(raw, file_path))

    names = [profile.name for profile in profiles]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate analytics profile names found in {config_dir}: {names}")

    return profiles


def select_analytics_config(profiles: list[AnalyticsConfig], name: str) -> AnalyticsConfig:
    for profile in profiles:
        if profile.name == name:
            return profile
    available = ", ".join(sorted(profile.name for profile in profiles))
    raise KeyError(f"No analytics profile named '{name}'. Available: {available}")


def _parse_analytics_config(raw: dict[str, Any], file_path: Path) -> AnalyticsConfig:
    system_raw = raw.get("system", {})
    scoring_raw = raw.get("scoring", {})
    statistics_raw = raw.get("statistics", {})
    advisor_raw = raw.get("advisor", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    window_size = int(system_raw.get("window_size", DEFAULT_WINDOW_SIZE))
    if window_size <= 0:
        raise ValueError(f"{file_path}: [system].window_size must be > 0")

    parameters = AnalyticsParameters(
        window_size=window_size,
        kda_weight=float(scoring_raw.get("kda_weight", 30.0)),
        win_rate_weight=float(scoring_raw.get("win_rate_weight", 0.5)),
        consistency_weight=float(scoring_raw.get("consistency_weight", 0.2)),
        promotion_threshold=float(scoring_raw.get("promotion_threshold", 65.0)),
        demotion_threshold=float(scoring_raw.get("demotion_threshold", 35.0)),
        base_promotion_probability=float(scoring_raw.get("base_promotion_probability", 0.3)),
        factor_cap=float(scoring_raw.get("factor_cap", 2.0)),
        max_promotion=float(scoring_raw.get("max_promotion", 85.0)),
        deficit_weight=float(scoring_raw.get("deficit_weight", 50.0)),
        max_demotion=float(scoring_raw.get("max_demotion", 75.0)),
        min_stable=float(scoring_raw.get("min_stable", 10.0)),
        trend_min_points=int(statistics_raw.get("trend_min_points", 5)),
        trend_slope_threshold=float(statistics_raw.get("trend_slope_threshold", 0.05)),
        consistency_min_points=int(statistics_raw.get("consistency_min_points", 3)),
        neutral_consistency=float(statistics_raw.get("neutral_consistency", 50.0)),
        low_kda_threshold=float(advisor_raw.get("low_kda_threshold", 1.0)),
        low_win_rate_threshold=float(advisor_raw.get("low_win_rate_threshold", 45.0)),
        low_consistency_threshold=float(advisor_raw.get("low_consistency_threshold", 60.0)),
        default_tier=str(scoring_raw.get("default_tier", "gold")).strip().lower(),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return AnalyticsConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: AnalyticsParameters) -> None:
    for field_name in ("kda_weight", "win_rate_weight", "consistency_weight"):
        if getattr(parameters, field_name) < 0.0:
            raise ValueError(f"{file_path}: [scoring].{field_name} must be >= 0")
    if parameters.demotion_threshold >= parameters.promotion_threshold:
        raise ValueError(
            f"{file_path}: [scoring].demotion_threshold must be < promotion_threshold"
        )
    if parameters.base_promotion_probability < 0.0 or parameters.base_promotion_probability > 1.0:
        raise ValueError(f"{file_path}: [scoring].base_promotion_probability must be between 0 and 1")
    if parameters.factor_cap <= 0.0:
        raise ValueError(f"{file_path}: [scoring].factor_cap must be > 0")
    for field_name in ("max_promotion", "max_demotion", "min_stable"):
        value = getattr(parameters, field_name)
        if value < 0.0 or value > 100.0:
            raise ValueError(f"{file_path}: [scoring].{field_name} must be between 0 and 100")
    if parameters.deficit_weight < 0.0:
        raise ValueError(f"{file_path}: [scoring].deficit_weight must be >= 0")
    if parameters.trend_min_points < 2:
        raise ValueError(f"{file_path}: [statistics].trend_min_points must be >= 2")
    if parameters.trend_slope_threshold < 0.0:
        raise ValueError(f"{file_path}: [statistics].trend_slope_threshold must be >= 0")
    if parameters.consistency_min_points < 2:
        raise ValueError(f"{file_path}: [statistics].consistency_min_points must be >= 2")
    if parameters.neutral_consistency < 0.0 or parameters.neutral_consistency > 100.0:
        raise ValueError(f"{file_path}: [statistics].neutral_consistency must be between 0 and 100")
    if not parameters.default_tier:
        raise ValueError(f"{file_path}: [scoring].default_tier must not be empty")
    if parameters.default_tier not in DEFAULT_BENCHMARKS.tiers:
        raise ValueError(
            f"{file_path}: [scoring].default_tier must be one of {', '.join(DEFAULT_BENCHMARKS.tiers)}"
        )


__all__ = [
    "AnalyticsConfig",
    "AnalyticsParameters",
    "DEFAULT_WINDOW_SIZE",
    "load_analytics_configs",
    "select_analytics_config",
]
