"""Shared fixtures for interleaving_eval tests."""

import pandas as pd
import pytest


@pytest.fixture
def one_sided_clicks() -> tuple:
    """100 sessions, each with a single click on team A."""
    keys = [f"s{i}" for i in range(100)]
    teams = ["A"] * 100
    return keys, teams


@pytest.fixture
def balanced_clicks() -> tuple:
    """100 sessions alternating A-only and B-only clicks (50/50 split)."""
    keys = [f"s{i}" for i in range(100)]
    teams = ["A" if i % 2 == 0 else "B" for i in range(100)]
    return keys, teams


@pytest.fixture
def event_log() -> pd.DataFrame:
    """Small event log with impressions, unattributed clicks and unsorted rows."""
    return pd.DataFrame(
        [
            {"session_id": "s2", "query_id": "q1", "timestamp": 5, "team": "B", "event_type": "click"},
            {"session_id": "s1", "query_id": "q2", "timestamp": 3, "team": "B", "event_type": "click"},
            {"session_id": "s1", "query_id": "q1", "timestamp": 1, "team": "A", "event_type": "click"},
            {"session_id": "s1", "query_id": "q1", "timestamp": 0, "team": None, "event_type": "impression"},
            {"session_id": "s1", "query_id": "q1", "timestamp": 2, "team": "A", "event_type": "click"},
            {"session_id": "s3", "query_id": "q1", "timestamp": 7, "team": None, "event_type": "click"},
            {"session_id": "s2", "query_id": "q1", "timestamp": 4, "team": None, "event_type": "impression"},
        ]
    )
