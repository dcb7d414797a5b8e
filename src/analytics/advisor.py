"""Rule-based improvement areas."""

from __future__ import annotations

from analytics.common import ImprovementArea, PerformanceSummary
from analytics.config import AnalyticsParameters
from analytics.protocol import Priority

INSUFFICIENT_DATA_AREA = ImprovementArea(
    category="insufficient_data",
    current="not enough data",
    target="at least 10 matches",
    priority=Priority.HIGH,
    tips=("Play regularly", "Get experience on different maps", "Try several agents"),
)

MAINTAIN_AREA = ImprovementArea(
    category="maintain",
    current="good",
    target="maintain current level",
    priority=Priority.LOW,
    tips=("Keep practicing", "Adapt to the meta", "Work on teamwork"),
)


def advise(
    summary: PerformanceSummary,
    params: AnalyticsParameters | None = None,
) -> tuple[ImprovementArea, ...]:
    """Return every improvement area whose threshold rule fires.

    An empty summary yields only the insufficient-data area, and a summary that
    trips no rule yields only the maintain area, so the result is never empty.
    """
    params = params or AnalyticsParameters()
    if summary.is_empty:
        return (INSUFFICIENT_DATA_AREA,)

    areas: list[ImprovementArea] = []
    if summary.avg_kda < params.low_kda_threshold:
        areas.append(
            ImprovementArea(
                category="survivability",
                current=f"KDA {summary.avg_kda:.2f}",
                target="KDA 1.2+",
                priority=Priority.HIGH,
                tips=("Hold safer positions", "Move with the team", "Avoid forcing fights alone"),
            )
        )

    if summary.win_rate < params.low_win_rate_threshold:
        areas.append(
            ImprovementArea(
                category="teamplay",
                current=f"win rate {summary.win_rate:.1f}%",
                target="win rate 55%+",
                priority=Priority.HIGH,
                tips=("Communicate more", "Play for objectives", "Manage the team economy"),
            )
        )

    if summary.consistency.value < params.low_consistency_threshold:
        areas.append(
            ImprovementArea(
                category="consistency",
                current=f"consistency {summary.consistency.value:.1f}",
                target="75+ consistency",
                priority=Priority.MEDIUM,
                tips=("Build a warm-up routine", "Manage tilt", "Practice on a schedule"),
            )
        )

    return tuple(areas) if areas else (MAINTAIN_AREA,)


__all__ = ["INSUFFICIENT_DATA_AREA", "MAINTAIN_AREA", "advise"]
