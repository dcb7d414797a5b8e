"""Validate raw match records and select the recency window."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import asdict
from datetime import UTC, datetime
from typing import Any

from analytics.common import MatchRecord, NormalizedMatch
from analytics.config import DEFAULT_WINDOW_SIZE
from analytics.protocol import MatchResult

logger = logging.getLogger(__name__)

_RESULT_ALIASES = {
    "win": MatchResult.WIN,
    "won": MatchResult.WIN,
    "victory": MatchResult.WIN,
    "loss": MatchResult.LOSS,
    "lost": MatchResult.LOSS,
    "defeat": MatchResult.LOSS,
    "draw": MatchResult.DRAW,
    "tie": MatchResult.DRAW,
}

# Accepted mapping keys per field, first match wins.
_FIELD_KEYS = {
    "score": ("score",),
    "agent_id": ("agent_id", "agentId", "agent"),
    "map_id": ("map_id", "mapId", "map"),
    "game_mode": ("game_mode", "gameMode", "mode"),
    "result": ("result",),
    "timestamp": ("timestamp", "played_at", "playedAt"),
}


def parse_result(value: Any) -> MatchResult | None:
    if isinstance(value, MatchResult):
        return value
    if isinstance(value, bool):
        return MatchResult.WIN if value else MatchResult.LOSS
    if not isinstance(value, str):
        return None
    return _RESULT_ALIASES.get(value.strip().lower())


def parse_timestamp(value: Any) -> datetime | None:
    """Coerce a datetime, ISO-8601 string or epoch seconds into an aware datetime."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(float(value), tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def coerce_record(raw: MatchRecord | Mapping[str, Any]) -> MatchRecord | None:
    """Build a strict MatchRecord, or return None when kills/deaths/assists are unusable."""
    if isinstance(raw, MatchRecord):
        raw = asdict(raw)
    if not isinstance(raw, Mapping):
        return None

    kills = _parse_count(raw.get("kills"))
    deaths = _parse_count(raw.get("deaths"))
    assists = _parse_count(raw.get("assists"))
    if kills is None or deaths is None or assists is None:
        return None

    return MatchRecord(
        kills=kills,
        deaths=deaths,
        assists=assists,
        score=_parse_score(_first_value(raw, "score")),
        agent_id=_optional_str(_first_value(raw, "agent_id")),
        map_id=_optional_str(_first_value(raw, "map_id")),
        game_mode=_optional_str(_first_value(raw, "game_mode")),
        result=parse_result(_first_value(raw, "result")),
        timestamp=parse_timestamp(_first_value(raw, "timestamp")),
    )


def normalize_matches(
    matches: Iterable[MatchRecord | Mapping[str, Any]] | None,
    *,
    window: int = DEFAULT_WINDOW_SIZE,
) -> tuple[NormalizedMatch, ...]:
    """Drop malformed records, order oldest-first and keep the most recent window."""
    if window <= 0:
        raise ValueError("window must be greater than 0")
    if matches is None:
        return ()

    records: list[MatchRecord] = []
    dropped = 0
    for raw in matches:
        record = coerce_record(raw)
        if record is None:
            dropped += 1
            continue
        records.append(record)

    if dropped:
        logger.debug("Dropped %d malformed match records", dropped)

    if records and all(record.timestamp is not None for record in records):
        records.sort(key=lambda record: record.timestamp)

    recent = records[-window:]
    return tuple(NormalizedMatch(record=record, kda=record.kda) for record in recent)


def _first_value(raw: Mapping[str, Any], field_name: str) -> Any:
    for key in _FIELD_KEYS[field_name]:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _parse_count(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    if not isinstance(value, int) or value < 0:
        return None
    return value


def _parse_score(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0.0
    if score != score or score < 0.0:
        return 0.0
    return score


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "coerce_record",
    "normalize_matches",
    "parse_result",
    "parse_timestamp",
]
