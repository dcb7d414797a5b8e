"""Statistical summary of a normalized recency window."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
from scipy import stats

from analytics.common import (
    AgentPerformance,
    Measurement,
    NormalizedMatch,
    PerformanceSummary,
    Quartiles,
    TrendAnalysis,
)
from analytics.config import AnalyticsParameters
from analytics.protocol import MeasurementStatus, Trend

logger = logging.getLogger(__name__)

UNKNOWN_AGENT = "Unknown"


def calculate_consistency(
    kdas: Sequence[float],
    params: AnalyticsParameters | None = None,
) -> Measurement:
    """Score KDA stability as 100 minus the coefficient of variation in percent.

    Uses the sample variance. Fewer than ``consistency_min_points`` values yield
    the neutral score tagged ``insufficient``; a non-positive mean cannot be
    normalized and yields the neutral score tagged ``unknown``.
    """
    params = params or AnalyticsParameters()
    if len(kdas) == 0:
        return Measurement(value=0.0, status=MeasurementStatus.NO_DATA)
    if len(kdas) < params.consistency_min_points:
        return Measurement(value=params.neutral_consistency, status=MeasurementStatus.INSUFFICIENT)

    values = np.asarray(kdas, dtype=float)
    avg_kda = float(np.mean(values))
    if not math.isfinite(avg_kda) or avg_kda <= 0.0:
        logger.warning("Consistency undefined for mean KDA %.3f; using neutral value", avg_kda)
        return Measurement(value=params.neutral_consistency, status=MeasurementStatus.UNKNOWN)

    coefficient_of_variation = math.sqrt(float(np.var(values, ddof=1))) / avg_kda
    consistency = max(0.0, min(100.0 - coefficient_of_variation * 100.0, 100.0))
    return Measurement(value=round(consistency, 1), status=MeasurementStatus.MEASURED)


def calculate_trend(
    kdas: Sequence[float],
    params: AnalyticsParameters | None = None,
) -> TrendAnalysis:
    """Regress KDA against match index and classify the slope."""
    params = params or AnalyticsParameters()
    if len(kdas) == 0:
        return TrendAnalysis(
            trend=Trend.NO_DATA,
            slope=0.0,
            r_squared=0.0,
            confidence=0.0,
            status=MeasurementStatus.NO_DATA,
        )
    if len(kdas) < params.trend_min_points:
        return TrendAnalysis(
            trend=Trend.INSUFFICIENT_DATA,
            slope=0.0,
            r_squared=0.0,
            confidence=0.0,
            status=MeasurementStatus.INSUFFICIENT,
        )

    try:
        regression = stats.linregress(np.arange(len(kdas), dtype=float), np.asarray(kdas, dtype=float))
        slope = float(regression.slope)
        r_value = float(regression.rvalue)
        if not math.isfinite(slope):
            raise ValueError(f"non-finite regression slope {slope}")
    except (ValueError, FloatingPointError) as exc:
        logger.warning("KDA trend regression failed: %s", exc)
        return TrendAnalysis(
            trend=Trend.UNKNOWN,
            slope=0.0,
            r_squared=0.0,
            confidence=0.0,
            status=MeasurementStatus.UNKNOWN,
        )

    if slope > params.trend_slope_threshold:
        trend = Trend.IMPROVING
    elif slope < -params.trend_slope_threshold:
        trend = Trend.DECLINING
    else:
        trend = Trend.STABLE

    r_squared = r_value**2 if math.isfinite(r_value) else 0.0
    return TrendAnalysis(
        trend=trend,
        slope=round(slope, 3),
        r_squared=round(r_squared, 3),
        confidence=round(min(100.0, abs(slope) * 500.0), 1),
        status=MeasurementStatus.MEASURED,
    )


def analyze_agents(window: Sequence[NormalizedMatch]) -> tuple[AgentPerformance, ...]:
    """Group the window by agent, preserving first-appearance order."""
    grouped: dict[str, list[NormalizedMatch]] = {}
    for match in window:
        grouped.setdefault(match.record.agent_id or UNKNOWN_AGENT, []).append(match)

    breakdown: list[AgentPerformance] = []
    for agent_id, agent_matches in grouped.items():
        avg_kda = float(np.mean([match.kda for match in agent_matches]))
        win_fraction = sum(1 for match in agent_matches if match.record.won) / len(agent_matches)
        breakdown.append(
            AgentPerformance(
                agent_id=agent_id,
                matches=len(agent_matches),
                avg_kda=round(avg_kda, 2),
                win_rate=round(win_fraction * 100.0, 1),
                efficiency=round(avg_kda * 50.0 + win_fraction * 50.0, 1),
            )
        )
    return tuple(breakdown)


def best_agents(summary: PerformanceSummary, limit: int = 3) -> tuple[AgentPerformance, ...]:
    ranked = sorted(summary.agent_performance, key=lambda agent: agent.efficiency, reverse=True)
    return tuple(ranked[:limit])


def empty_summary() -> PerformanceSummary:
    return PerformanceSummary(
        total_matches=0,
        avg_kda=0.0,
        median_kda=0.0,
        kda_std_dev=0.0,
        kda_quartiles=Quartiles(q1=0.0, q2=0.0, q3=0.0),
        avg_score=0.0,
        win_rate=0.0,
        wins=0,
        consistency=Measurement(value=0.0, status=MeasurementStatus.NO_DATA),
        trend=calculate_trend(()),
        agent_performance=(),
        reliability=0.0,
    )


def summarize_window(
    window: Sequence[NormalizedMatch],
    params: AnalyticsParameters | None = None,
) -> PerformanceSummary:
    """Compute the performance summary for an already-normalized window."""
    params = params or AnalyticsParameters()
    if not window:
        return empty_summary()

    kdas = np.asarray([match.kda for match in window], dtype=float)
    scores = np.asarray([match.record.score for match in window], dtype=float)
    wins = sum(1 for match in window if match.record.won)
    q1, q2, q3 = np.quantile(kdas, [0.25, 0.5, 0.75])

    return PerformanceSummary(
        total_matches=len(window),
        avg_kda=round(float(np.mean(kdas)), 2),
        median_kda=round(float(np.median(kdas)), 2),
        kda_std_dev=round(float(np.std(kdas)), 2),
        kda_quartiles=Quartiles(
            q1=round(float(q1), 2),
            q2=round(float(q2), 2),
            q3=round(float(q3), 2),
        ),
        avg_score=float(round(float(np.mean(scores)))),
        win_rate=round(wins / len(window) * 100.0, 1),
        wins=wins,
        consistency=calculate_consistency(kdas.tolist(), params),
        trend=calculate_trend(kdas.tolist(), params),
        agent_performance=analyze_agents(window),
        reliability=round(min(100.0, len(window) / params.window_size * 100.0), 1),
    )


__all__ = [
    "UNKNOWN_AGENT",
    "analyze_agents",
    "best_agents",
    "calculate_consistency",
    "calculate_trend",
    "empty_summary",
    "summarize_window",
]
