"""Shared enums for the analytics engine."""

from __future__ import annotations

from enum import Enum


class MatchResult(str, Enum):
    """Outcome of one match from the player's point of view."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


class MeasurementStatus(str, Enum):
    """Whether a statistic is a real measurement or a documented fallback."""

    MEASURED = "measured"
    INSUFFICIENT = "insufficient"
    UNKNOWN = "unknown"
    NO_DATA = "no_data"


class Trend(str, Enum):
    """Direction of the KDA regression over the recency window."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"
    UNKNOWN = "unknown"
    NO_DATA = "no_data"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Role(str, Enum):
    """Agent roles used for team-composition balance."""

    DUELIST = "duelist"
    INITIATOR = "initiator"
    CONTROLLER = "controller"
    SENTINEL = "sentinel"


class SynergyRating(str, Enum):
    EXCELLENT = "excellent"
    GREAT = "great"
    GOOD = "good"
    AVERAGE = "average"
    NEEDS_IMPROVEMENT = "needs_improvement"


__all__ = [
    "MatchResult",
    "MeasurementStatus",
    "Priority",
    "Role",
    "SynergyRating",
    "Trend",
]
