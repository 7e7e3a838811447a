"""Preference statistic for interleaving experiments.

Clicks are grouped by key (a session, or a session/query pair) and every
group is classified as a win for A, a win for B, a tie, or silent:

    c_A > c_B            -> win A
    c_B > c_A            -> win B
    c_A == c_B > 0       -> tie
    c_A == c_B == 0      -> silent (ignored)

    Δ_AB = (wins_A + 0.5 * ties) / (wins_A + wins_B + ties) - 0.5

Δ_AB lies in [-0.5, 0.5]; positive values mean users prefer ranker A.
"""

from collections import OrderedDict
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from interleaving_eval.core.errors import InsufficientDataError, InvalidInputError
from interleaving_eval.core.types import (
    CLICK,
    MODES,
    PER_SESSION,
    TEAM_A,
    TEAM_B,
    GroupOutcomes,
)


def validate_mode(mode: str) -> str:
    """Check that mode is a known aggregation mode.

    Raises:
        InvalidInputError: If mode is not "per_session" or "per_search".
    """
    if mode not in MODES:
        raise InvalidInputError(f"Unknown aggregation mode: {mode!r}. Available: {list(MODES)}")
    return mode


def _validate_columns(
    grouping_keys: Sequence[Hashable],
    team_labels: Sequence[Optional[str]],
    event_types: Optional[Sequence[str]],
) -> None:
    if len(grouping_keys) != len(team_labels):
        raise InvalidInputError(
            f"grouping_keys and team_labels must be aligned "
            f"(got {len(grouping_keys)} and {len(team_labels)} records)"
        )
    if event_types is not None and len(event_types) != len(grouping_keys):
        raise InvalidInputError(
            f"event_types must be aligned with grouping_keys "
            f"(got {len(event_types)} and {len(grouping_keys)} records)"
        )


def count_group_clicks(
    grouping_keys: Sequence[Hashable],
    team_labels: Sequence[Optional[str]],
    event_types: Optional[Sequence[str]] = None,
) -> Dict[Hashable, Tuple[int, int]]:
    """Build the grouping key -> (c_A, c_B) mapping.

    Every key gets an entry, including keys whose records are all
    non-click events or unattributed clicks (team label None).

    Args:
        grouping_keys: Grouping key of each record.
        team_labels: Team label of each record ("A", "B" or None).
        event_types: Optional event type of each record. If given, only
            "click" records are counted.

    Returns:
        Ordered dict of key -> (clicks for A, clicks for B), in first-seen order.

    Raises:
        InvalidInputError: If the sequences are misaligned or a label is unknown.
    """
    _validate_columns(grouping_keys, team_labels, event_types)

    counts: Dict[Hashable, List[int]] = OrderedDict()
    for i, (key, team) in enumerate(zip(grouping_keys, team_labels)):
        group = counts.setdefault(key, [0, 0])
        if event_types is not None and event_types[i] != CLICK:
            continue
        # NaN, pd.NA and NaT read as unattributed clicks
        if pd.api.types.is_scalar(team) and pd.isna(team):
            team = None
        if team == TEAM_A:
            group[0] += 1
        elif team == TEAM_B:
            group[1] += 1
        elif team is not None:
            raise InvalidInputError(
                f"Unknown team label {team!r} at record {i}; expected 'A', 'B' or None"
            )

    return OrderedDict((key, (c[0], c[1])) for key, c in counts.items())


def count_arrays(counts: Dict[Hashable, Tuple[int, int]]) -> Tuple[np.ndarray, np.ndarray]:
    """Split a key -> (c_A, c_B) mapping into two aligned count arrays."""
    if not counts:
        return np.zeros(0, dtype=np.int64), np.zeros(0, dtype=np.int64)
    pairs = np.asarray(list(counts.values()), dtype=np.int64)
    return pairs[:, 0], pairs[:, 1]


def classify_counts(
    count_a: np.ndarray,
    count_b: np.ndarray,
    weights: Optional[np.ndarray] = None,
) -> GroupOutcomes:
    """Classify groups into wins/ties from per-group click counts.

    Args:
        count_a: Clicks for team A per group.
        count_b: Clicks for team B per group.
        weights: Optional multiplicity of each group (e.g. how often a
            bootstrap resample drew it). Defaults to 1 for every group.

    Returns:
        GroupOutcomes with weighted win/tie counts.
    """
    count_a = np.asarray(count_a)
    count_b = np.asarray(count_b)
    if weights is None:
        weights = np.ones(len(count_a), dtype=np.int64)

    wins_a = int(weights[count_a > count_b].sum())
    wins_b = int(weights[count_b > count_a].sum())
    ties = int(weights[(count_a == count_b) & (count_a > 0)].sum())

    return GroupOutcomes(
        wins_a=wins_a,
        wins_b=wins_b,
        ties=ties,
        n_groups=int(weights.sum()),
    )


def _count_clicks(
    team_labels: Sequence[Optional[str]],
    event_types: Optional[Sequence[str]],
) -> int:
    if event_types is None:
        return len(team_labels)
    return sum(1 for event_type in event_types if event_type == CLICK)


def estimate_outcomes(
    grouping_keys: Sequence[Hashable],
    team_labels: Sequence[Optional[str]],
    mode: str = PER_SESSION,
    event_types: Optional[Sequence[str]] = None,
) -> GroupOutcomes:
    """Group click records by key and classify each group.

    The estimator only aggregates by the key values given; building
    session ids or (session, query) pairs for the chosen mode is the
    caller's job (see interleaving_eval.preference.events).

    Raises:
        InvalidInputError: On unknown mode, misaligned inputs or unknown labels.
        InsufficientDataError: If there are no click records ("no_clicks")
            or no group has an attributed click ("no_informative_clicks").
    """
    validate_mode(mode)
    counts = count_group_clicks(grouping_keys, team_labels, event_types)

    n_clicks = _count_clicks(team_labels, event_types)
    if n_clicks == 0:
        raise InsufficientDataError(
            f"No click data: {len(grouping_keys)} records across {len(counts)} groups "
            f"contain no click events.",
            reason=InsufficientDataError.NO_CLICKS,
            min_required=1,
        )

    count_a, count_b = count_arrays(counts)
    outcomes = classify_counts(count_a, count_b)
    if outcomes.n_informative == 0:
        raise InsufficientDataError(
            f"No informative clicks: {n_clicks} clicks across {len(counts)} groups, "
            f"none attributed to team A or B.",
            reason=InsufficientDataError.NO_INFORMATIVE_CLICKS,
            min_required=1,
        )
    return outcomes


def preference(
    grouping_keys: Sequence[Hashable],
    team_labels: Sequence[Optional[str]],
    mode: str = PER_SESSION,
    event_types: Optional[Sequence[str]] = None,
) -> float:
    """Compute the preference statistic Δ_AB.

    Args:
        grouping_keys: Grouping key of each click record.
        team_labels: Team label of each click record ("A", "B" or None).
        mode: "per_session" or "per_search".
        event_types: Optional event type per record; non-click records are ignored.

    Returns:
        Δ_AB in [-0.5, 0.5].

    Raises:
        InvalidInputError: On unknown mode, misaligned inputs or unknown labels.
        InsufficientDataError: If no group carries signal.

    Example:
        >>> preference(["s1", "s1", "s2"], ["A", "A", "B"])
        0.0
    """
    return estimate_outcomes(grouping_keys, team_labels, mode, event_types).delta
