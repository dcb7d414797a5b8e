"""Public entry points for the analytics engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from analytics.advisor import advise
from analytics.benchmarks import DEFAULT_BENCHMARKS, BenchmarkTable, tier_fit
from analytics.common import (
    AgentPerformance,
    ImprovementArea,
    MatchRecord,
    NormalizedMatch,
    PerformanceSummary,
    RankPrediction,
    SynergyReport,
    TierFit,
)
from analytics.config import AnalyticsConfig, AnalyticsParameters
from analytics.normalizer import normalize_matches
from analytics.predictor import predict_from_summary
from analytics.summarizer import best_agents, summarize_window
from analytics.synergy import (
    DEFAULT_ROLE_TAXONOMY,
    DEFAULT_SYNERGY_TABLE,
    RoleTaxonomy,
    SynergyTable,
    analyze_roster,
)

MatchInput = MatchRecord | Mapping[str, Any]


class PerformanceAnalyzer:
    """Stateless analytics engine bound to one set of parameters and reference tables."""

    def __init__(
        self,
        params: AnalyticsParameters | None = None,
        *,
        benchmarks: BenchmarkTable = DEFAULT_BENCHMARKS,
        synergy_table: SynergyTable = DEFAULT_SYNERGY_TABLE,
        taxonomy: RoleTaxonomy = DEFAULT_ROLE_TAXONOMY,
    ) -> None:
        self.params = params or AnalyticsParameters()
        self.benchmarks = benchmarks.with_default(self.params.default_tier)
        self.synergy_table = synergy_table
        self.taxonomy = taxonomy

    @classmethod
    def from_config(cls, config: AnalyticsConfig, **kwargs: Any) -> PerformanceAnalyzer:
        return cls(config.parameters, **kwargs)

    def _params_for(self, window: int | None) -> AnalyticsParameters:
        if window is None or window == self.params.window_size:
            return self.params
        if window <= 0:
            raise ValueError("window must be greater than 0")
        return replace(self.params, window_size=window)

    def normalize(
        self,
        matches: Iterable[MatchInput] | None,
        *,
        window: int | None = None,
    ) -> tuple[NormalizedMatch, ...]:
        return normalize_matches(matches, window=self._params_for(window).window_size)

    def summarize(
        self,
        matches: Iterable[MatchInput] | None,
        *,
        window: int | None = None,
    ) -> PerformanceSummary:
        params = self._params_for(window)
        return summarize_window(normalize_matches(matches, window=params.window_size), params)

    def predict_rank(
        self,
        matches: Iterable[MatchInput] | None,
        current_rank: str | None = None,
        *,
        window: int | None = None,
    ) -> RankPrediction:
        params = self._params_for(window)
        summary = self.summarize(matches, window=window)
        return predict_from_summary(
            summary,
            current_rank,
            params=params,
            benchmarks=self.benchmarks,
        )

    def improvement_areas(
        self,
        matches: Iterable[MatchInput] | None,
        *,
        window: int | None = None,
    ) -> tuple[ImprovementArea, ...]:
        return advise(self.summarize(matches, window=window), self._params_for(window))

    def team_synergy(self, roster: Iterable[str] | None) -> SynergyReport:
        return analyze_roster(roster, table=self.synergy_table, taxonomy=self.taxonomy)

    def tier_fit(self, summary: PerformanceSummary) -> tuple[TierFit, ...]:
        return tier_fit(summary, self.benchmarks)

    def best_agents(self, summary: PerformanceSummary, limit: int = 3) -> tuple[AgentPerformance, ...]:
        return best_agents(summary, limit=limit)


_DEFAULT_ANALYZER = PerformanceAnalyzer()


def summarize(matches: Iterable[MatchInput] | None) -> PerformanceSummary:
    return _DEFAULT_ANALYZER.summarize(matches)


def predict_rank(matches: Iterable[MatchInput] | None, current_rank: str | None = None) -> RankPrediction:
    return _DEFAULT_ANALYZER.predict_rank(matches, current_rank)


def improvement_areas(matches: Iterable[MatchInput] | None) -> tuple[ImprovementArea, ...]:
    return _DEFAULT_ANALYZER.improvement_areas(matches)


def team_synergy(roster: Iterable[str] | None) -> SynergyReport:
    return _DEFAULT_ANALYZER.team_synergy(roster)


__all__ = [
    "MatchInput",
    "PerformanceAnalyzer",
    "improvement_areas",
    "predict_rank",
    "summarize",
    "team_synergy",
]
