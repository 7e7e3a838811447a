"""Interleaving evaluation: Team Draft interleaving, click preference and bootstrap CIs.

Example usage:
    from interleaving_eval import interleave, preference, BootstrapEngine

    page = interleave(ranking_a, ranking_b, page_size=10, rng=42)
    delta = preference(session_ids, teams)
    result = BootstrapEngine(iterations=1000, rng=42).run(session_ids, teams)
"""

from interleaving_eval.core import (
    TEAM_A,
    TEAM_B,
    PER_SESSION,
    PER_SEARCH,
    InterleavingEvalError,
    InvalidInputError,
    InsufficientDataError,
    InterleavedResult,
    GroupOutcomes,
    ConfidenceInterval,
    BootstrapResult,
    PreferenceReport,
)
from interleaving_eval.interleaving import interleave, create_interleaver, attribute_clicks
from interleaving_eval.preference import preference, estimate_outcomes, prepare_click_events
from interleaving_eval.bootstrap import BootstrapEngine, bootstrap, confidence_interval
from interleaving_eval.config import AnalysisConfig
from interleaving_eval.analysis import analyze_preference, analyze_event_log, interleave_page

__version__ = "0.1.0"

__all__ = [
    # Constants
    "TEAM_A",
    "TEAM_B",
    "PER_SESSION",
    "PER_SEARCH",
    # Errors
    "InterleavingEvalError",
    "InvalidInputError",
    "InsufficientDataError",
    # Types
    "InterleavedResult",
    "GroupOutcomes",
    "ConfidenceInterval",
    "BootstrapResult",
    "PreferenceReport",
    # Interleaving
    "interleave",
    "create_interleaver",
    "attribute_clicks",
    "interleave_page",
    # Preference
    "preference",
    "estimate_outcomes",
    "prepare_click_events",
    # Bootstrap
    "BootstrapEngine",
    "bootstrap",
    "confidence_interval",
    # Analysis
    "AnalysisConfig",
    "analyze_preference",
    "analyze_event_log",
]
