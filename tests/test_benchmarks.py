"""Unit tests for the tier benchmark table."""

from __future__ import annotations

import pytest

from analytics.benchmarks import (
    DEFAULT_BENCHMARKS,
    BenchmarkTable,
    RankBenchmark,
    compare_to_benchmark,
    extract_tier,
    tier_fit,
)
from analytics.common import Measurement, PerformanceSummary, Quartiles, TrendAnalysis
from analytics.protocol import MeasurementStatus, Trend


def _summary(avg_kda: float, win_rate: float) -> PerformanceSummary:
    return PerformanceSummary(
        total_matches=10,
        avg_kda=avg_kda,
        median_kda=avg_kda,
        kda_std_dev=0.0,
        kda_quartiles=Quartiles(q1=avg_kda, q2=avg_kda, q3=avg_kda),
        avg_score=0.0,
        win_rate=win_rate,
        wins=0,
        consistency=Measurement(value=80.0, status=MeasurementStatus.MEASURED),
        trend=TrendAnalysis(
            trend=Trend.STABLE,
            slope=0.0,
            r_squared=0.0,
            confidence=0.0,
            status=MeasurementStatus.MEASURED,
        ),
        agent_performance=(),
        reliability=50.0,
    )


def test_default_table_has_nine_ascending_tiers() -> None:
    assert DEFAULT_BENCHMARKS.tiers == (
        "iron",
        "bronze",
        "silver",
        "gold",
        "platinum",
        "diamond",
        "ascendant",
        "immortal",
        "radiant",
    )
    kdas = [row.expected_kda for row in DEFAULT_BENCHMARKS.rows]
    win_rates = [row.expected_win_rate for row in DEFAULT_BENCHMARKS.rows]
    assert kdas == sorted(kdas)
    assert win_rates == sorted(win_rates)


def test_lookup_known_tier() -> None:
    diamond = DEFAULT_BENCHMARKS.lookup("diamond")
    assert diamond.expected_kda == pytest.approx(1.25)
    assert diamond.expected_win_rate == pytest.approx(58.0)


def test_unknown_tier_falls_back_to_gold() -> None:
    assert DEFAULT_BENCHMARKS.lookup("unranked").tier == "gold"
    assert DEFAULT_BENCHMARKS.lookup(None).tier == "gold"
    assert not DEFAULT_BENCHMARKS.contains("unranked")


def test_default_tier_can_be_replaced() -> None:
    table = DEFAULT_BENCHMARKS.with_default("silver")
    assert table.lookup("unranked").tier == "silver"
    assert DEFAULT_BENCHMARKS.default_tier == "gold"


def test_table_validation() -> None:
    with pytest.raises(ValueError, match="Duplicate tiers"):
        BenchmarkTable(rows=(RankBenchmark("gold", 1.0, 50.0), RankBenchmark("gold", 1.1, 52.0)))
    with pytest.raises(ValueError, match="Default tier"):
        BenchmarkTable(rows=(RankBenchmark("silver", 1.0, 50.0),))
    with pytest.raises(ValueError, match="must be > 0"):
        BenchmarkTable(rows=(RankBenchmark("gold", 0.0, 50.0),))


def test_extract_tier_from_rank_strings() -> None:
    assert extract_tier("gold-2") == "gold"
    assert extract_tier("Diamond 3") == "diamond"
    assert extract_tier("radiant") == "radiant"
    assert extract_tier("plat-1") == "platinum"
    assert extract_tier("asc-3") == "ascendant"
    assert extract_tier("imm_2") == "immortal"
    assert extract_tier("") == "gold"
    assert extract_tier(None, default="silver") == "silver"


def test_compare_to_benchmark() -> None:
    comparison = compare_to_benchmark(_summary(1.2, 49.5), DEFAULT_BENCHMARKS.lookup("gold"))
    assert comparison.tier == "gold"
    assert comparison.expected_kda == pytest.approx(1.05)
    assert comparison.expected_win_rate == pytest.approx(52.0)
    assert comparison.kda_difference == pytest.approx(0.15)
    assert comparison.win_rate_difference == pytest.approx(-2.5)


def test_tier_fit_marks_nearby_tiers_suitable() -> None:
    fits = {fit.tier: fit for fit in tier_fit(_summary(1.1, 53.0))}
    assert fits["gold"].suitable
    assert fits["platinum"].suitable
    assert fits["silver"].suitable
    assert not fits["bronze"].suitable
    assert not fits["diamond"].suitable
    assert not fits["radiant"].suitable
    assert fits["radiant"].kda_difference == pytest.approx(-0.45)
