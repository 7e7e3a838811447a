"""Preference estimation from team-attributed clicks."""

from .estimator import (
    preference,
    estimate_outcomes,
    count_group_clicks,
    count_arrays,
    classify_counts,
    validate_mode,
)
from .events import (
    grouping_columns,
    prepare_click_events,
    records_from_frame,
    records_to_columns,
)

__all__ = [
    # Estimator
    "preference",
    "estimate_outcomes",
    "count_group_clicks",
    "count_arrays",
    "classify_counts",
    "validate_mode",
    # Event log adapter
    "grouping_columns",
    "prepare_click_events",
    "records_from_frame",
    "records_to_columns",
]
