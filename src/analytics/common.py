"""Shared types for the analytics engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from analytics.protocol import (
    MatchResult,
    MeasurementStatus,
    Priority,
    Role,
    SynergyRating,
    Trend,
)


@dataclass(frozen=True)
class MatchRecord:
    """One completed match for a single player, as supplied by a collaborator."""

    kills: int
    deaths: int
    assists: int
    score: float = 0.0
    agent_id: str | None = None
    map_id: str | None = None
    game_mode: str | None = None
    result: MatchResult | None = None
    timestamp: datetime | None = None

    @property
    def kda(self) -> float:
        return (self.kills + self.assists) / max(self.deaths, 1)

    @property
    def won(self) -> bool:
        return self.result is MatchResult.WIN


@dataclass(frozen=True)
class NormalizedMatch:
    """A validated record paired with its derived KDA."""

    record: MatchRecord
    kda: float


@dataclass(frozen=True)
class Measurement:
    """A statistic tagged with how it was obtained."""

    value: float
    status: MeasurementStatus

    @property
    def is_measured(self) -> bool:
        return self.status is MeasurementStatus.MEASURED


@dataclass(frozen=True)
class Quartiles:
    q1: float
    q2: float
    q3: float


@dataclass(frozen=True)
class TrendAnalysis:
    """Linear-regression trend of KDA against match index."""

    trend: Trend
    slope: float
    r_squared: float
    confidence: float
    status: MeasurementStatus


@dataclass(frozen=True)
class AgentPerformance:
    """Per-agent breakdown inside the recency window."""

    agent_id: str
    matches: int
    avg_kda: float
    win_rate: float
    efficiency: float


@dataclass(frozen=True)
class PerformanceSummary:
    """Statistics derived from one recency window of matches."""

    total_matches: int
    avg_kda: float
    median_kda: float
    kda_std_dev: float
    kda_quartiles: Quartiles
    avg_score: float
    win_rate: float
    wins: int
    consistency: Measurement
    trend: TrendAnalysis
    agent_performance: tuple[AgentPerformance, ...]
    reliability: float

    @property
    def is_empty(self) -> bool:
        return self.total_matches == 0


@dataclass(frozen=True)
class BenchmarkComparison:
    """Player averages set against one tier's expectations."""

    tier: str
    expected_kda: float
    expected_win_rate: float
    actual_kda: float
    actual_win_rate: float
    kda_difference: float
    win_rate_difference: float


@dataclass(frozen=True)
class TierFit:
    tier: str
    suitable: bool
    kda_difference: float
    win_rate_difference: float


@dataclass(frozen=True)
class RankProbabilities:
    """Independently clamped percentages; they are not normalized to sum to 100."""

    promotion: float
    stable: float
    demotion: float


@dataclass(frozen=True)
class RankPrediction:
    current_rank: str
    tier: str
    tier_status: MeasurementStatus
    predicted_change: int
    overall_score: float
    confidence: float
    probabilities: RankProbabilities
    benchmark: BenchmarkComparison
    summary: PerformanceSummary


@dataclass(frozen=True)
class ImprovementArea:
    category: str
    current: str
    target: str
    priority: Priority
    tips: tuple[str, ...]


@dataclass(frozen=True)
class PairSynergy:
    """Synergy for one unordered roster pair; known is False when the default was used."""

    first: str
    second: str
    score: float
    known: bool


@dataclass(frozen=True)
class RoleSlot:
    role: Role
    count: int
    optimal: int
    percentage: float


@dataclass(frozen=True)
class SynergyReport:
    """Team-composition analysis for a roster of up to five agents."""

    roster: tuple[str, ...]
    pairs: tuple[PairSynergy, ...]
    average_synergy: float | None
    synergy_percent: float | None
    rating: SynergyRating | None
    role_slots: tuple[RoleSlot, ...]
    unassigned: tuple[str, ...]
    balance_score: float
    recommendation: str

    @property
    def role_counts(self) -> dict[Role, int]:
        return {slot.role: slot.count for slot in self.role_slots}


__all__ = [
    "AgentPerformance",
    "BenchmarkComparison",
    "ImprovementArea",
    "MatchRecord",
    "Measurement",
    "NormalizedMatch",
    "PairSynergy",
    "PerformanceSummary",
    "Quartiles",
    "RankPrediction",
    "RankProbabilities",
    "RoleSlot",
    "SynergyReport",
    "TierFit",
    "TrendAnalysis",
]
