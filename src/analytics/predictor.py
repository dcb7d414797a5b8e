"""Closed-form rank-change scoring."""

from __future__ import annotations

from analytics.benchmarks import (
    DEFAULT_BENCHMARKS,
    BenchmarkTable,
    RankBenchmark,
    compare_to_benchmark,
    extract_tier,
)
from analytics.common import PerformanceSummary, RankPrediction, RankProbabilities
from analytics.config import AnalyticsParameters
from analytics.protocol import MeasurementStatus


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))


def calculate_overall_score(summary: PerformanceSummary, params: AnalyticsParameters) -> float:
    """Weighted sum of average KDA, win rate and consistency."""
    return (
        summary.avg_kda * params.kda_weight
        + summary.win_rate * params.win_rate_weight
        + summary.consistency.value * params.consistency_weight
    )


def predicted_change(score: float, params: AnalyticsParameters) -> int:
    if score > params.promotion_threshold:
        return 1
    if score < params.demotion_threshold:
        return -1
    return 0


def promotion_probability(
    summary: PerformanceSummary,
    benchmark: RankBenchmark,
    params: AnalyticsParameters,
) -> float:
    kda_factor = min(params.factor_cap, summary.avg_kda / benchmark.expected_kda)
    win_rate_factor = min(params.factor_cap, summary.win_rate / benchmark.expected_win_rate)
    consistency_factor = summary.consistency.value / 100.0
    adjusted = params.base_promotion_probability * kda_factor * win_rate_factor * consistency_factor
    return round(_clamp(adjusted * 100.0, 0.0, params.max_promotion), 1)


def demotion_probability(
    summary: PerformanceSummary,
    benchmark: RankBenchmark,
    params: AnalyticsParameters,
) -> float:
    kda_deficit = max(0.0, (benchmark.expected_kda - summary.avg_kda) / benchmark.expected_kda)
    win_rate_deficit = max(
        0.0,
        (benchmark.expected_win_rate - summary.win_rate) / benchmark.expected_win_rate,
    )
    risk = (kda_deficit + win_rate_deficit) * params.deficit_weight
    return round(_clamp(risk, 0.0, params.max_demotion), 1)


def rank_probabilities(
    summary: PerformanceSummary,
    benchmark: RankBenchmark,
    params: AnalyticsParameters,
) -> RankProbabilities:
    """Three independently clamped percentages; no normalization step is applied."""
    promotion = promotion_probability(summary, benchmark, params)
    demotion = demotion_probability(summary, benchmark, params)
    stable = round(_clamp(100.0 - promotion - demotion, params.min_stable, 100.0), 1)
    return RankProbabilities(promotion=promotion, stable=stable, demotion=demotion)


def predict_from_summary(
    summary: PerformanceSummary,
    current_rank: str | None,
    *,
    params: AnalyticsParameters | None = None,
    benchmarks: BenchmarkTable = DEFAULT_BENCHMARKS,
) -> RankPrediction:
    """Score a summary against the benchmark for the player's current tier."""
    params = params or AnalyticsParameters()
    table = benchmarks.with_default(params.default_tier)

    tier = extract_tier(current_rank, default=table.default_tier)
    tier_status = MeasurementStatus.MEASURED if table.contains(tier) else MeasurementStatus.UNKNOWN
    benchmark = table.lookup(tier)

    score = calculate_overall_score(summary, params)
    return RankPrediction(
        current_rank=current_rank or benchmark.tier,
        tier=benchmark.tier,
        tier_status=tier_status,
        predicted_change=predicted_change(score, params),
        overall_score=round(score, 1),
        confidence=round(_clamp(abs(score - 50.0) * 2.0, 0.0, 100.0), 1),
        probabilities=rank_probabilities(summary, benchmark, params),
        benchmark=compare_to_benchmark(summary, benchmark),
        summary=summary,
    )


__all__ = [
    "calculate_overall_score",
    "demotion_probability",
    "predict_from_summary",
    "predicted_change",
    "promotion_probability",
    "rank_probabilities",
]
