"""Unit tests for closed-form rank prediction."""

from __future__ import annotations

import pytest

from analytics.benchmarks import DEFAULT_BENCHMARKS
from analytics.common import Measurement, PerformanceSummary, Quartiles, TrendAnalysis
from analytics.config import AnalyticsParameters
from analytics.predictor import (
    calculate_overall_score,
    demotion_probability,
    predict_from_summary,
    predicted_change,
    promotion_probability,
    rank_probabilities,
)
from analytics.protocol import MeasurementStatus, Trend
from analytics.summarizer import empty_summary


def _summary(avg_kda: float, win_rate: float, consistency: float) -> PerformanceSummary:
    return PerformanceSummary(
        total_matches=20,
        avg_kda=avg_kda,
        median_kda=avg_kda,
        kda_std_dev=0.0,
        kda_quartiles=Quartiles(q1=avg_kda, q2=avg_kda, q3=avg_kda),
        avg_score=0.0,
        win_rate=win_rate,
        wins=0,
        consistency=Measurement(value=consistency, status=MeasurementStatus.MEASURED),
        trend=TrendAnalysis(
            trend=Trend.STABLE,
            slope=0.0,
            r_squared=0.0,
            confidence=0.0,
            status=MeasurementStatus.MEASURED,
        ),
        agent_performance=(),
        reliability=100.0,
    )


def test_gold_example_score_and_direction() -> None:
    prediction = predict_from_summary(_summary(1.05, 52.0, 80.0), "gold-2")

    assert prediction.current_rank == "gold-2"
    assert prediction.tier == "gold"
    assert prediction.tier_status is MeasurementStatus.MEASURED
    assert prediction.overall_score == pytest.approx(73.5)
    assert prediction.predicted_change == 1
    assert prediction.confidence == pytest.approx(47.0)


def test_gold_example_probabilities() -> None:
    probabilities = predict_from_summary(_summary(1.05, 52.0, 80.0), "gold-2").probabilities

    assert probabilities.promotion == pytest.approx(24.0)
    assert probabilities.demotion == pytest.approx(0.0)
    assert probabilities.stable == pytest.approx(76.0)


def test_weak_player_leans_toward_demotion() -> None:
    prediction = predict_from_summary(_summary(0.5, 20.0, 20.0), "gold-1")

    assert prediction.overall_score == pytest.approx(29.0)
    assert prediction.predicted_change == -1
    assert prediction.confidence == pytest.approx(42.0)
    assert prediction.probabilities.promotion == pytest.approx(1.1)
    assert prediction.probabilities.demotion == pytest.approx(57.0)
    assert prediction.probabilities.stable == pytest.approx(41.9)


def test_middle_score_is_neutral() -> None:
    params = AnalyticsParameters()
    assert predicted_change(65.0, params) == 0
    assert predicted_change(35.0, params) == 0
    assert predicted_change(65.1, params) == 1
    assert predicted_change(34.9, params) == -1


def test_overall_score_uses_configured_weights() -> None:
    params = AnalyticsParameters(kda_weight=10.0, win_rate_weight=1.0, consistency_weight=0.0)
    assert calculate_overall_score(_summary(2.0, 50.0, 90.0), params) == pytest.approx(70.0)


def test_promotion_probability_is_capped() -> None:
    probability = promotion_probability(
        _summary(3.0, 100.0, 100.0),
        DEFAULT_BENCHMARKS.lookup("iron"),
        AnalyticsParameters(),
    )
    assert probability == pytest.approx(85.0)


def test_demotion_probability_is_capped() -> None:
    probability = demotion_probability(
        _summary(0.0, 0.0, 0.0),
        DEFAULT_BENCHMARKS.lookup("radiant"),
        AnalyticsParameters(),
    )
    assert probability == pytest.approx(75.0)


def test_stable_probability_has_a_floor() -> None:
    probabilities = rank_probabilities(
        _summary(3.0, 100.0, 100.0),
        DEFAULT_BENCHMARKS.lookup("iron"),
        AnalyticsParameters(max_promotion=95.0),
    )
    assert probabilities.promotion == pytest.approx(95.0)
    assert probabilities.stable == pytest.approx(10.0)


def test_probabilities_are_not_renormalized() -> None:
    # The three values are clamped independently; a raised stable floor pushes the total past 100.
    probabilities = rank_probabilities(
        _summary(1.05, 52.0, 80.0),
        DEFAULT_BENCHMARKS.lookup("gold"),
        AnalyticsParameters(min_stable=80.0),
    )
    assert probabilities.promotion == pytest.approx(24.0)
    assert probabilities.demotion == pytest.approx(0.0)
    assert probabilities.stable == pytest.approx(80.0)
    assert probabilities.promotion + probabilities.stable + probabilities.demotion == pytest.approx(104.0)


def test_probabilities_stay_within_documented_ranges() -> None:
    params = AnalyticsParameters()
    for tier in DEFAULT_BENCHMARKS.tiers:
        for avg_kda in (0.0, 0.4, 1.0, 1.6, 3.5):
            for win_rate in (0.0, 35.0, 55.0, 80.0, 100.0):
                for consistency in (0.0, 50.0, 100.0):
                    probabilities = rank_probabilities(
                        _summary(avg_kda, win_rate, consistency),
                        DEFAULT_BENCHMARKS.lookup(tier),
                        params,
                    )
                    assert 0.0 <= probabilities.promotion <= 85.0
                    assert 0.0 <= probabilities.demotion <= 75.0
                    assert 10.0 <= probabilities.stable <= 100.0


def test_unknown_tier_uses_gold_and_is_flagged() -> None:
    prediction = predict_from_summary(_summary(1.05, 52.0, 80.0), "unranked-1")

    assert prediction.tier == "gold"
    assert prediction.tier_status is MeasurementStatus.UNKNOWN
    assert prediction.benchmark.expected_kda == pytest.approx(1.05)


def test_configured_default_tier_is_used_for_unknown_ranks() -> None:
    prediction = predict_from_summary(
        _summary(1.05, 52.0, 80.0),
        None,
        params=AnalyticsParameters(default_tier="silver"),
    )
    assert prediction.tier == "silver"
    assert prediction.current_rank == "silver"


def test_rank_aliases_resolve_to_tiers() -> None:
    prediction = predict_from_summary(_summary(1.2, 55.0, 70.0), "plat-3")
    assert prediction.tier == "platinum"
    assert prediction.tier_status is MeasurementStatus.MEASURED


def test_benchmark_comparison_is_attached() -> None:
    prediction = predict_from_summary(_summary(1.4, 60.0, 70.0), "diamond-1")
    assert prediction.benchmark.kda_difference == pytest.approx(0.15)
    assert prediction.benchmark.win_rate_difference == pytest.approx(2.0)


def test_empty_summary_prediction_is_defined() -> None:
    prediction = predict_from_summary(empty_summary(), "gold-2")

    assert prediction.overall_score == pytest.approx(0.0)
    assert prediction.predicted_change == -1
    assert prediction.probabilities.promotion == pytest.approx(0.0)
    assert prediction.probabilities.demotion == pytest.approx(75.0)
    assert prediction.probabilities.stable == pytest.approx(25.0)


def test_prediction_is_deterministic() -> None:
    summary = _summary(1.3, 57.5, 66.6)
    assert predict_from_summary(summary, "gold-3") == predict_from_summary(summary, "gold-3")
