"""Team-composition synergy and role balance."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from itertools import combinations
from types import MappingProxyType

from analytics.common import PairSynergy, RoleSlot, SynergyReport
from analytics.protocol import Role, SynergyRating

logger = logging.getLogger(__name__)

MAX_ROSTER_SIZE = 5
DEFAULT_PAIR_SYNERGY = 0.5
BALANCE_PENALTY_PER_SLOT = 15.0

# (share of roster, cap) used for the optimal count of each role.
OPTIMAL_ROLE_SHARES: Mapping[Role, tuple[float, int]] = MappingProxyType(
    {
        Role.DUELIST: (0.4, 2),
        Role.CONTROLLER: (0.3, 2),
        Role.INITIATOR: (0.2, 2),
        Role.SENTINEL: (0.2, 2),
    }
)

_RATING_THRESHOLDS: tuple[tuple[float, SynergyRating], ...] = (
    (0.8, SynergyRating.EXCELLENT),
    (0.7, SynergyRating.GREAT),
    (0.6, SynergyRating.GOOD),
    (0.5, SynergyRating.AVERAGE),
)


def _key(agent_id: str) -> str:
    return agent_id.strip().casefold()


@dataclass(frozen=True)
class SynergyTable:
    """Symmetric pairwise synergy lookup keyed case-insensitively."""

    pairs: Mapping[frozenset[str], float] = field(default_factory=dict)
    default: float = DEFAULT_PAIR_SYNERGY

    @classmethod
    def from_pairs(
        cls,
        entries: Iterable[tuple[str, str, float]],
        *,
        default: float = DEFAULT_PAIR_SYNERGY,
    ) -> SynergyTable:
        pairs: dict[frozenset[str], float] = {}
        for first, second, score in entries:
            if not 0.0 <= score <= 1.0:
                raise ValueError(f"Synergy for {first}/{second} must be between 0 and 1, got {score}")
            key = frozenset((_key(first), _key(second)))
            if key in pairs and pairs[key] != score:
                raise ValueError(f"Conflicting synergy values for {first}/{second}")
            pairs[key] = score
        return cls(pairs=MappingProxyType(pairs), default=default)

    def lookup(self, first: str, second: str) -> tuple[float, bool]:
        """Return (score, known) for an unordered pair."""
        score = self.pairs.get(frozenset((_key(first), _key(second))))
        if score is None:
            return self.default, False
        return score, True


@dataclass(frozen=True)
class RoleTaxonomy:
    """Maps agent identifiers onto the four roles."""

    roles: Mapping[str, Role]

    @classmethod
    def from_groups(cls, groups: Mapping[Role, Iterable[str]]) -> RoleTaxonomy:
        roles: dict[str, Role] = {}
        for role, agents in groups.items():
            for agent in agents:
                roles[_key(agent)] = role
        return cls(roles=MappingProxyType(roles))

    def role_of(self, agent_id: str) -> Role | None:
        return self.roles.get(_key(agent_id))


DEFAULT_SYNERGY_TABLE = SynergyTable.from_pairs(
    (
        ("Jett", "Sage", 0.85),
        ("Jett", "Sova", 0.80),
        ("Jett", "Omen", 0.75),
        ("Jett", "Cypher", 0.70),
        ("Reyna", "Sage", 0.75),
        ("Reyna", "Sova", 0.85),
        ("Reyna", "Omen", 0.80),
        ("Reyna", "Breach", 0.75),
        ("Phoenix", "Sage", 0.80),
        ("Phoenix", "Cypher", 0.75),
        ("Phoenix", "Omen", 0.85),
        ("Phoenix", "Breach", 0.70),
        ("Sage", "Sova", 0.90),
        ("Sage", "Omen", 0.80),
        ("Sova", "Raze", 0.85),
    )
)

DEFAULT_ROLE_TAXONOMY = RoleTaxonomy.from_groups(
    {
        Role.DUELIST: ("Jett", "Reyna", "Phoenix", "Raze", "Yoru", "Neon", "Iso"),
        Role.INITIATOR: ("Sova", "Breach", "Skye", "KAY/O", "Fade", "Gekko"),
        Role.CONTROLLER: ("Omen", "Viper", "Astra", "Harbor", "Clove"),
        Role.SENTINEL: ("Sage", "Cypher", "Killjoy", "Chamber", "Deadlock"),
    }
)


def optimal_role_count(role: Role, roster_size: int) -> int:
    share, cap = OPTIMAL_ROLE_SHARES[role]
    return min(cap, math.floor(roster_size * share))


def synergy_rating(average: float) -> SynergyRating:
    for threshold, rating in _RATING_THRESHOLDS:
        if average >= threshold:
            return rating
    return SynergyRating.NEEDS_IMPROVEMENT


def pair_synergies(roster: Sequence[str], table: SynergyTable) -> tuple[PairSynergy, ...]:
    pairs: list[PairSynergy] = []
    for first, second in combinations(roster, 2):
        score, known = table.lookup(first, second)
        pairs.append(PairSynergy(first=first, second=second, score=score, known=known))
    return tuple(pairs)


def role_slots(roster: Sequence[str], taxonomy: RoleTaxonomy) -> tuple[tuple[RoleSlot, ...], tuple[str, ...]]:
    """Tally roles in the roster; agents with no known role are returned separately."""
    counts = {role: 0 for role in Role}
    unassigned: list[str] = []
    for agent_id in roster:
        role = taxonomy.role_of(agent_id)
        if role is None:
            unassigned.append(agent_id)
            continue
        counts[role] += 1

    size = len(roster)
    slots = tuple(
        RoleSlot(
            role=role,
            count=counts[role],
            optimal=optimal_role_count(role, size),
            percentage=round(counts[role] / size * 100.0, 1) if size else 0.0,
        )
        for role in Role
    )
    return slots, tuple(unassigned)


def balance_score(slots: Sequence[RoleSlot], roster_size: int) -> float:
    if roster_size == 0:
        return 0.0
    deviation = sum(abs(slot.count - slot.optimal) for slot in slots)
    return max(0.0, min(100.0 - BALANCE_PENALTY_PER_SLOT * deviation, 100.0))


def balance_recommendation(slots: Sequence[RoleSlot], roster_size: int) -> str:
    if roster_size == 0:
        return "Select agents to analyze a team composition."
    if roster_size < MAX_ROSTER_SIZE:
        missing = MAX_ROSTER_SIZE - roster_size
        return f"Select {missing} more agent{'s' if missing > 1 else ''}."

    missing_roles = [
        f"add {'an' if slot.role.value[0] in 'aeiou' else 'a'} {slot.role.value}"
        for slot in slots
        if slot.count == 0
    ]
    if not missing_roles:
        return "Balanced team composition."
    return ", ".join(missing_roles).capitalize()


def analyze_roster(
    roster: Iterable[str] | None,
    *,
    table: SynergyTable = DEFAULT_SYNERGY_TABLE,
    taxonomy: RoleTaxonomy = DEFAULT_ROLE_TAXONOMY,
) -> SynergyReport:
    """Score pairwise synergy and role balance for up to five agents."""
    if isinstance(roster, str):
        roster = (roster,) if roster else ()
    members = tuple(str(agent_id) for agent_id in (roster or ()))
    if len(members) > MAX_ROSTER_SIZE:
        logger.warning(
            "Roster has %d agents; only the first %d are analyzed",
            len(members),
            MAX_ROSTER_SIZE,
        )
        members = members[:MAX_ROSTER_SIZE]

    pairs = pair_synergies(members, table)
    average: float | None = None
    if pairs:
        average = sum(pair.score for pair in pairs) / len(pairs)

    slots, unassigned = role_slots(members, taxonomy)
    return SynergyReport(
        roster=members,
        pairs=pairs,
        average_synergy=average,
        synergy_percent=None if average is None else round(average * 100.0, 1),
        rating=None if average is None else synergy_rating(average),
        role_slots=slots,
        unassigned=unassigned,
        balance_score=balance_score(slots, len(members)),
        recommendation=balance_recommendation(slots, len(members)),
    )


__all__ = [
    "DEFAULT_PAIR_SYNERGY",
    "DEFAULT_ROLE_TAXONOMY",
    "DEFAULT_SYNERGY_TABLE",
    "MAX_ROSTER_SIZE",
    "RoleTaxonomy",
    "SynergyTable",
    "analyze_roster",
    "balance_recommendation",
    "balance_score",
    "optimal_role_count",
    "pair_synergies",
    "role_slots",
    "synergy_rating",
]
