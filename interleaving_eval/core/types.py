"""Shared data types used across the codebase.

This module contains dataclasses that are used by multiple packages:
- InterleavedItem / InterleavedResult: Team Draft output with team provenance
- EventRecord: A single logged user event
- GroupOutcomes: Win/tie counts produced by the preference estimator
- ConfidenceInterval / BootstrapResult: Bootstrap inference output
- PreferenceReport: Combined result of a full preference analysis
"""

from dataclasses import dataclass, field
from typing import Any, Hashable, List, Optional, Sequence, Tuple

import numpy as np

from interleaving_eval.core.errors import InsufficientDataError


TEAM_A = "A"
TEAM_B = "B"
TEAMS: Tuple[str, str] = (TEAM_A, TEAM_B)

PER_SESSION = "per_session"
PER_SEARCH = "per_search"
MODES: Tuple[str, str] = (PER_SESSION, PER_SEARCH)

CLICK = "click"

# A ranked list is any ordered sequence of hashable result identifiers.
RankedList = Sequence[Hashable]


@dataclass(frozen=True)
class InterleavedItem:
    """One slot of an interleaved page.

    Attributes:
        position: 0-indexed display position.
        result_id: Identifier of the result shown at this position.
        team: Team label ("A" or "B") of the list that contributed it.
    """
    position: int
    result_id: Hashable
    team: str


@dataclass
class InterleavedResult:
    """Interleaved page with team provenance.

    Attributes:
        items: Slots in display order.
        rounds: Team that picked first in each draft round, in round order.
    """
    items: List[InterleavedItem] = field(default_factory=list)
    rounds: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def result_ids(self) -> List[Hashable]:
        """Result ids in display order."""
        return [item.result_id for item in self.items]

    @property
    def teams(self) -> List[str]:
        """Team labels in display order."""
        return [item.team for item in self.items]

    @property
    def team_a(self) -> List[InterleavedItem]:
        """Team Draft of ranker A (slots it contributed, in display order)."""
        return [item for item in self.items if item.team == TEAM_A]

    @property
    def team_b(self) -> List[InterleavedItem]:
        """Team Draft of ranker B (slots it contributed, in display order)."""
        return [item for item in self.items if item.team == TEAM_B]

    def team_of(self, result_id: Hashable) -> Optional[str]:
        """Return the team owning result_id on this page, or None if not shown."""
        for item in self.items:
            if item.result_id == result_id:
                return item.team
        return None

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"InterleavedResult(n_items={len(self.items)}, "
            f"team_a={len(self.team_a)}, team_b={len(self.team_b)}, "
            f"rounds={len(self.rounds)})"
        )


@dataclass(frozen=True)
class EventRecord:
    """A single logged user event.

    Attributes:
        grouping_key: Session id (per-session) or (session id, query id) (per-search).
        timestamp: Any orderable timestamp value.
        team: Team label of the result the event refers to, or None if unattributed.
        event_type: Event type; only "click" events participate in estimation.
    """
    grouping_key: Hashable
    timestamp: Any
    team: Optional[str]
    event_type: str = CLICK

    @property
    def is_click(self) -> bool:
        return self.event_type == CLICK


@dataclass(frozen=True)
class GroupOutcomes:
    """Per-group win/tie classification of click counts.

    Attributes:
        wins_a: Groups where team A received more clicks than team B.
        wins_b: Groups where team B received more clicks than team A.
        ties: Groups where both teams received the same, non-zero number of clicks.
        n_groups: Total number of distinct groups seen.
    """
    wins_a: int
    wins_b: int
    ties: int
    n_groups: int

    @property
    def n_informative(self) -> int:
        """Groups that carry signal (at least one attributed click)."""
        return self.wins_a + self.wins_b + self.ties

    @property
    def n_silent(self) -> int:
        """Groups with no attributed click for either team."""
        return self.n_groups - self.n_informative

    @property
    def delta(self) -> float:
        """Preference statistic Δ_AB in [-0.5, 0.5].

        Raises:
            InsufficientDataError: If no group carries signal.
        """
        total = self.n_informative
        if total == 0:
            raise InsufficientDataError(
                f"No informative clicks: none of {self.n_groups} groups has an "
                f"attributed click for either team.",
                reason=InsufficientDataError.NO_INFORMATIVE_CLICKS,
                min_required=1,
            )
        return (self.wins_a + 0.5 * self.ties) / total - 0.5


@dataclass(frozen=True)
class ConfidenceInterval:
    """Percentile confidence interval.

    Attributes:
        lower: Lower bound ((1 - level) / 2 percentile).
        upper: Upper bound (1 - (1 - level) / 2 percentile).
        level: Confidence level in (0, 1).
    """
    lower: float
    upper: float
    level: float

    def __iter__(self):
        # Allows `low, high = interval`
        return iter((self.lower, self.upper))

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def excludes_zero(self) -> bool:
        """True if the interval lies strictly on one side of zero."""
        return self.lower > 0 or self.upper < 0


@dataclass
class BootstrapResult:
    """Bootstrap distribution of the preference statistic.

    Attributes:
        sample: Δ_AB of every surviving iteration, in iteration order.
        iterations: Number of iterations requested.
        dropped: Iterations discarded because their resample had no informative group.
    """
    sample: np.ndarray
    iterations: int
    dropped: int = 0

    @property
    def n_valid(self) -> int:
        return int(len(self.sample))

    @property
    def drop_fraction(self) -> float:
        if self.iterations == 0:
            return 0.0
        return self.dropped / self.iterations

    def __repr__(self) -> str:
        """Concise representation for debugging (avoids printing the full sample)."""
        return (
            f"BootstrapResult(iterations={self.iterations}, "
            f"n_valid={self.n_valid}, dropped={self.dropped})"
        )


@dataclass
class PreferenceReport:
    """Result of a full preference analysis.

    Attributes:
        mode: Aggregation mode used ("per_session" or "per_search").
        delta: Point estimate of Δ_AB.
        outcomes: Win/tie counts behind the point estimate.
        interval: Bootstrap percentile confidence interval.
        bootstrap: Raw bootstrap distribution (for external visualization).
    """
    mode: str
    delta: float
    outcomes: GroupOutcomes
    interval: ConfidenceInterval
    bootstrap: BootstrapResult

    @property
    def significant(self) -> bool:
        """True if the interval does not contain zero."""
        return self.interval.excludes_zero()

    @property
    def preferred_team(self) -> Optional[str]:
        """Team favoured by a significant result, or None."""
        if not self.significant:
            return None
        return TEAM_A if self.interval.lower > 0 else TEAM_B

    def to_dict(self) -> dict:
        """Flat summary for logging/serialization."""
        return {
            "mode": self.mode,
            "delta": self.delta,
            "wins_a": self.outcomes.wins_a,
            "wins_b": self.outcomes.wins_b,
            "ties": self.outcomes.ties,
            "n_groups": self.outcomes.n_groups,
            "ci_lower": self.interval.lower,
            "ci_upper": self.interval.upper,
            "confidence_level": self.interval.level,
            "iterations": self.bootstrap.iterations,
            "dropped_iterations": self.bootstrap.dropped,
            "significant": self.significant,
        }
