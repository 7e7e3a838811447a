"""Event log adapter.

Turns a tabular click log (one row per logged event) into the aligned
(grouping key, team label) columns consumed by the preference estimator
and the bootstrap engine.
"""

from typing import Hashable, List, Optional, Sequence, Tuple

import pandas as pd

from interleaving_eval.core.errors import InvalidInputError
from interleaving_eval.core.types import CLICK, PER_SEARCH, PER_SESSION, EventRecord
from interleaving_eval.preference.estimator import validate_mode


def grouping_columns(
    mode: str,
    session_col: str = "session_id",
    query_col: str = "query_id",
) -> List[str]:
    """Columns that make up the grouping key for a mode.

    per_session groups strictly by session id over all clicks regardless of
    query; per_search groups strictly by the (session, query) pair.
    """
    validate_mode(mode)
    if mode == PER_SEARCH:
        return [session_col, query_col]
    return [session_col]


def prepare_click_events(
    events: pd.DataFrame,
    mode: str = PER_SESSION,
    session_col: str = "session_id",
    query_col: str = "query_id",
    timestamp_col: str = "timestamp",
    team_col: str = "team",
    event_col: Optional[str] = "event_type",
    click_value: str = CLICK,
) -> Tuple[List[Hashable], List[Optional[str]]]:
    """Filter an event log to clicks and build estimator inputs.

    Rows are sorted by (grouping key, timestamp) with a stable sort, so
    events sharing a timestamp keep their logged order.

    Args:
        events: Event log, one row per event.
        mode: "per_session" or "per_search".
        session_col: Session id column.
        query_col: Query id column (only required for per_search).
        timestamp_col: Timestamp column.
        team_col: Team label column ("A", "B"; missing values mean unattributed).
        event_col: Event type column, or None if the log is already click-only.
        click_value: Value of event_col that marks a click.

    Returns:
        Tuple of (grouping_keys, team_labels). Per-session keys are session
        ids; per-search keys are (session_id, query_id) tuples.

    Raises:
        InvalidInputError: If a required column is missing or mode is unknown.
    """
    key_cols = grouping_columns(mode, session_col, query_col)
    required = key_cols + [timestamp_col, team_col]
    if event_col is not None:
        required.append(event_col)

    missing = [c for c in required if c not in events.columns]
    if missing:
        raise InvalidInputError(
            f"Event log is missing columns {missing}. Available: {list(events.columns)}"
        )

    clicks = events
    if event_col is not None:
        clicks = events[events[event_col] == click_value]
    clicks = clicks.sort_values(key_cols + [timestamp_col], kind="mergesort")

    if mode == PER_SEARCH:
        grouping_keys = list(zip(clicks[session_col].tolist(), clicks[query_col].tolist()))
    else:
        grouping_keys = clicks[session_col].tolist()

    team_labels = [None if pd.isna(team) else team for team in clicks[team_col].tolist()]
    return grouping_keys, team_labels


def records_from_frame(
    events: pd.DataFrame,
    mode: str = PER_SESSION,
    session_col: str = "session_id",
    query_col: str = "query_id",
    timestamp_col: str = "timestamp",
    team_col: str = "team",
    event_col: str = "event_type",
) -> List[EventRecord]:
    """Convert an event log into EventRecords, keeping non-click events."""
    key_cols = grouping_columns(mode, session_col, query_col)
    missing = [
        c for c in key_cols + [timestamp_col, team_col, event_col] if c not in events.columns
    ]
    if missing:
        raise InvalidInputError(
            f"Event log is missing columns {missing}. Available: {list(events.columns)}"
        )

    ordered = events.sort_values(key_cols + [timestamp_col], kind="mergesort")
    records = []
    for row in ordered.to_dict("records"):
        if mode == PER_SEARCH:
            key = (row[session_col], row[query_col])
        else:
            key = row[session_col]
        team = row[team_col]
        records.append(
            EventRecord(
                grouping_key=key,
                timestamp=row[timestamp_col],
                team=None if pd.isna(team) else team,
                event_type=row[event_col],
            )
        )
    return records


def records_to_columns(
    records: Sequence[EventRecord],
) -> Tuple[List[Hashable], List[Optional[str]], List[str]]:
    """Split EventRecords into aligned (grouping_keys, team_labels, event_types)."""
    return (
        [r.grouping_key for r in records],
        [r.team for r in records],
        [r.event_type for r in records],
    )
