"""One-call interleaving experiment analysis.

Wires the pieces together:
1. Team Draft interleaving of two rankings (serving time).
2. Point estimate of Δ_AB from team-attributed clicks.
3. Bootstrap percentile interval around it.
"""

import logging
from typing import Hashable, Optional, Sequence

import numpy as np
import pandas as pd

from interleaving_eval.bootstrap.engine import BootstrapEngine, confidence_interval
from interleaving_eval.config import AnalysisConfig
from interleaving_eval.core.types import InterleavedResult, PreferenceReport, RankedList
from interleaving_eval.interleaving.factory import create_interleaver
from interleaving_eval.preference.estimator import estimate_outcomes
from interleaving_eval.preference.events import prepare_click_events

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG: Optional[AnalysisConfig] = None


def _default_config() -> AnalysisConfig:
    global _DEFAULT_CONFIG
    if _DEFAULT_CONFIG is None:
        _DEFAULT_CONFIG = AnalysisConfig()
    return _DEFAULT_CONFIG


def interleave_page(
    ranking_a: RankedList,
    ranking_b: RankedList,
    config: Optional[AnalysisConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> InterleavedResult:
    """Interleave two rankings with the configured scheme and page size.

    Every call draws fresh coin flips: the generator is never reseeded
    between queries.

    Args:
        ranking_a: Ranked result ids of ranker A.
        ranking_b: Ranked result ids of ranker B.
        config: Analysis configuration (a shared default if None).
        rng: Generator shared across queries. If None, config.page_rng is used.
    """
    if config is None:
        config = _default_config()
    if rng is None:
        rng = config.page_rng
    interleaver = create_interleaver(config.interleaving_scheme)
    return interleaver(ranking_a, ranking_b, page_size=config.page_size, rng=rng)


def analyze_preference(
    grouping_keys: Sequence[Hashable],
    team_labels: Sequence[Optional[str]],
    config: Optional[AnalysisConfig] = None,
    event_types: Optional[Sequence[str]] = None,
) -> PreferenceReport:
    """Estimate Δ_AB and its bootstrap confidence interval.

    Args:
        grouping_keys: Grouping key of each click record (built for config.mode).
        team_labels: Team label of each click record ("A", "B" or None).
        config: Analysis configuration (defaults if None).
        event_types: Optional event type per record; non-click records are ignored.

    Returns:
        PreferenceReport with point estimate, outcomes, interval and raw sample.

    Raises:
        InvalidInputError: On invalid inputs.
        InsufficientDataError: If the data cannot support an estimate.
    """
    config = config or AnalysisConfig()

    outcomes = estimate_outcomes(grouping_keys, team_labels, config.mode, event_types)
    delta = outcomes.delta

    engine = BootstrapEngine(
        iterations=config.iterations,
        rng=config.random_seed,
        n_workers=config.n_workers,
        min_valid_fraction=config.min_valid_fraction,
    )
    result = engine.run(grouping_keys, team_labels, config.mode, event_types)
    interval = confidence_interval(result.sample, config.confidence_level)

    report = PreferenceReport(
        mode=config.mode,
        delta=delta,
        outcomes=outcomes,
        interval=interval,
        bootstrap=result,
    )
    logger.info(
        "Preference (%s): delta=%.4f, %d%% CI [%.4f, %.4f], wins A/B/ties=%d/%d/%d, "
        "groups=%d, dropped iterations=%d",
        config.mode, delta, round(100 * config.confidence_level),
        interval.lower, interval.upper,
        outcomes.wins_a, outcomes.wins_b, outcomes.ties,
        outcomes.n_groups, result.dropped,
    )
    return report


def analyze_event_log(
    events: pd.DataFrame,
    config: Optional[AnalysisConfig] = None,
    **column_names,
) -> PreferenceReport:
    """Analyze a tabular event log.

    Args:
        events: Event log with session, query, timestamp, team and event type columns.
        config: Analysis configuration (defaults if None).
        **column_names: Column overrides passed to prepare_click_events
            (session_col, query_col, timestamp_col, team_col, event_col, click_value).
    """
    config = config or AnalysisConfig()
    grouping_keys, team_labels = prepare_click_events(events, mode=config.mode, **column_names)
    logger.debug("Prepared %d click events from %d logged rows", len(grouping_keys), len(events))
    return analyze_preference(grouping_keys, team_labels, config)
