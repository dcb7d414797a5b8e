"""Performance analytics and rank-prediction engine."""

from analytics.common import (
    ImprovementArea,
    MatchRecord,
    PerformanceSummary,
    RankPrediction,
    SynergyReport,
)
from analytics.engine import (
    PerformanceAnalyzer,
    improvement_areas,
    predict_rank,
    summarize,
    team_synergy,
)
from analytics.protocol import MatchResult, MeasurementStatus, Priority, Role, SynergyRating, Trend

__all__ = [
    "ImprovementArea",
    "MatchRecord",
    "MatchResult",
    "MeasurementStatus",
    "PerformanceAnalyzer",
    "PerformanceSummary",
    "Priority",
    "RankPrediction",
    "Role",
    "SynergyRating",
    "SynergyReport",
    "Trend",
    "improvement_areas",
    "predict_rank",
    "summarize",
    "team_synergy",
]
