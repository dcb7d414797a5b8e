"""Per-tier expected KDA and win rate."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from analytics.common import BenchmarkComparison, PerformanceSummary, TierFit

logger = logging.getLogger(__name__)

DEFAULT_TIER = "gold"

# Tiers within these margins of the player's averages count as a fit.
TIER_FIT_KDA_MARGIN = 0.2
TIER_FIT_WIN_RATE_MARGIN = 5.0

_TIER_ALIASES = MappingProxyType(
    {
        "plat": "platinum",
        "asc": "ascendant",
        "imm": "immortal",
    }
)
_RANK_SEPARATOR = re.compile(r"[-_\s]")


@dataclass(frozen=True)
class RankBenchmark:
    tier: str
    expected_kda: float
    expected_win_rate: float


@dataclass(frozen=True)
class BenchmarkTable:
    """Read-only benchmark rows ordered from the lowest tier to the highest."""

    rows: tuple[RankBenchmark, ...]
    default_tier: str = DEFAULT_TIER

    def __post_init__(self) -> None:
        tiers = [row.tier for row in self.rows]
        if len(tiers) != len(set(tiers)):
            raise ValueError(f"Duplicate tiers in benchmark table: {tiers}")
        for row in self.rows:
            if row.expected_kda <= 0.0 or row.expected_win_rate <= 0.0:
                raise ValueError(f"Benchmark expectations for tier '{row.tier}' must be > 0")
        if self.default_tier not in tiers:
            raise ValueError(f"Default tier '{self.default_tier}' is not in the benchmark table")

    @property
    def tiers(self) -> tuple[str, ...]:
        return tuple(row.tier for row in self.rows)

    def by_tier(self) -> Mapping[str, RankBenchmark]:
        return MappingProxyType({row.tier: row for row in self.rows})

    def contains(self, tier: str) -> bool:
        return tier in self.by_tier()

    def lookup(self, tier: str | None) -> RankBenchmark:
        """Return the benchmark for a tier, falling back to the default tier."""
        rows = self.by_tier()
        if tier is not None and tier in rows:
            return rows[tier]
        logger.warning("Unknown tier %r; using default tier %r", tier, self.default_tier)
        return rows[self.default_tier]

    def with_default(self, tier: str) -> BenchmarkTable:
        return BenchmarkTable(rows=self.rows, default_tier=tier)


DEFAULT_BENCHMARKS = BenchmarkTable(
    rows=(
        RankBenchmark("iron", 0.75, 45.0),
        RankBenchmark("bronze", 0.85, 48.0),
        RankBenchmark("silver", 0.95, 50.0),
        RankBenchmark("gold", 1.05, 52.0),
        RankBenchmark("platinum", 1.15, 55.0),
        RankBenchmark("diamond", 1.25, 58.0),
        RankBenchmark("ascendant", 1.35, 62.0),
        RankBenchmark("immortal", 1.45, 65.0),
        RankBenchmark("radiant", 1.55, 70.0),
    )
)


def extract_tier(rank: str | None, default: str = DEFAULT_TIER) -> str:
    """Return the tier part of a ``tier-division`` rank string, lower-cased."""
    if rank is None:
        return default
    tier = _RANK_SEPARATOR.split(rank.strip(), maxsplit=1)[0].lower()
    if not tier:
        return default
    return _TIER_ALIASES.get(tier, tier)


def compare_to_benchmark(summary: PerformanceSummary, benchmark: RankBenchmark) -> BenchmarkComparison:
    return BenchmarkComparison(
        tier=benchmark.tier,
        expected_kda=benchmark.expected_kda,
        expected_win_rate=benchmark.expected_win_rate,
        actual_kda=summary.avg_kda,
        actual_win_rate=summary.win_rate,
        kda_difference=round(summary.avg_kda - benchmark.expected_kda, 2),
        win_rate_difference=round(summary.win_rate - benchmark.expected_win_rate, 1),
    )


def tier_fit(
    summary: PerformanceSummary,
    table: BenchmarkTable = DEFAULT_BENCHMARKS,
) -> tuple[TierFit, ...]:
    """Compare the player's averages against every tier."""
    fits: list[TierFit] = []
    for row in table.rows:
        kda_difference = summary.avg_kda - row.expected_kda
        win_rate_difference = summary.win_rate - row.expected_win_rate
        fits.append(
            TierFit(
                tier=row.tier,
                suitable=(
                    abs(kda_difference) < TIER_FIT_KDA_MARGIN
                    and abs(win_rate_difference) < TIER_FIT_WIN_RATE_MARGIN
                ),
                kda_difference=round(kda_difference, 2),
                win_rate_difference=round(win_rate_difference, 1),
            )
        )
    return tuple(fits)


__all__ = [
    "BenchmarkTable",
    "DEFAULT_BENCHMARKS",
    "DEFAULT_TIER",
    "RankBenchmark",
    "compare_to_benchmark",
    "extract_tier",
    "tier_fit",
]
