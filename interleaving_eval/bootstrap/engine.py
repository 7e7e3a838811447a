"""Bootstrap confidence intervals for the preference statistic.

Grouping keys (sessions, or session/query pairs) are the resampling unit:
each iteration draws n keys with replacement from the n distinct keys and
recomputes Δ_AB. A key drawn k times contributes its group k times, each
draw as a separate group, exactly as if its records had been duplicated
under fresh keys.

Every iteration owns a random stream spawned from one SeedSequence, so a
thread pool produces the same distribution as a sequential run.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Hashable, List, Optional, Sequence, Union

import numpy as np

from interleaving_eval.core.errors import InsufficientDataError, InvalidInputError
from interleaving_eval.core.types import (
    PER_SESSION,
    BootstrapResult,
    ConfidenceInterval,
)
from interleaving_eval.preference.estimator import (
    classify_counts,
    count_arrays,
    count_group_clicks,
    estimate_outcomes,
)

logger = logging.getLogger(__name__)

RandomSource = Optional[Union[np.random.Generator, np.random.SeedSequence, int]]

DEFAULT_ITERATIONS = 2000
DEFAULT_CONFIDENCE_LEVEL = 0.95


def validate_confidence_level(level: float) -> float:
    """Raises InvalidInputError unless 0 < level < 1."""
    if not 0 < level < 1:
        raise InvalidInputError(f"confidence level must be in (0, 1), got {level}")
    return level


def spawn_streams(rng: RandomSource, iterations: int) -> List[np.random.SeedSequence]:
    """Derive one independent seed sequence per iteration.

    Args:
        rng: Seed, SeedSequence or Generator. A Generator is consumed once to
            draw the root entropy; None uses fresh OS entropy.
        iterations: Number of streams.

    Returns:
        List of child SeedSequences, indexed by iteration.
    """
    if isinstance(rng, np.random.SeedSequence):
        root = rng
    elif isinstance(rng, np.random.Generator):
        root = np.random.SeedSequence(int(rng.integers(0, 2**63 - 1)))
    else:
        root = np.random.SeedSequence(rng)
    return root.spawn(iterations)


def resample_delta(
    count_a: np.ndarray,
    count_b: np.ndarray,
    stream: np.random.SeedSequence,
) -> float:
    """Δ_AB of one group-level resample, or NaN if it has no informative group.

    Args:
        count_a: Clicks for team A per distinct group.
        count_b: Clicks for team B per distinct group.
        stream: Seed sequence owned by this iteration.
    """
    gen = np.random.default_rng(stream)
    n = len(count_a)
    draws = gen.integers(0, n, size=n)
    weights = np.bincount(draws, minlength=n)

    outcomes = classify_counts(count_a, count_b, weights)
    if outcomes.n_informative == 0:
        return np.nan
    return outcomes.delta


def confidence_interval(
    sample: Sequence[float],
    level: float = DEFAULT_CONFIDENCE_LEVEL,
) -> ConfidenceInterval:
    """Percentile confidence interval of a bootstrap sample.

    Bounds are the (1 - level) / 2 and 1 - (1 - level) / 2 percentiles,
    linearly interpolated between order statistics.

    Raises:
        InvalidInputError: If level is not in (0, 1).
        InsufficientDataError: If the sample is empty.
    """
    validate_confidence_level(level)
    sample = np.asarray(sample, dtype=np.float64)
    if sample.size == 0:
        raise InsufficientDataError(
            "Cannot compute a confidence interval from an empty bootstrap sample",
            reason=InsufficientDataError.TOO_MANY_DROPPED,
            min_required=1,
        )

    alpha = 1 - level
    lower, upper = np.percentile(sample, [100 * (alpha / 2), 100 * (1 - alpha / 2)])
    return ConfidenceInterval(lower=float(lower), upper=float(upper), level=level)


class BootstrapEngine:
    """Bootstrap resampling of Δ_AB over grouping keys.

    Iterations whose resample has no informative group are dropped and
    counted. A warning is logged once more than DROP_WARNING_FRACTION of
    the iterations were dropped; if fewer than min_valid_fraction of them
    survive, the run fails with InsufficientDataError.

    Usage:
        engine = BootstrapEngine(iterations=1000, rng=42)
        result = engine.run(session_ids, teams)
        low, high = confidence_interval(result.sample, 0.95)
    """

    DEFAULT_ITERATIONS = DEFAULT_ITERATIONS
    DEFAULT_MIN_VALID_FRACTION = 0.5
    DROP_WARNING_FRACTION = 0.01

    def __init__(
        self,
        iterations: int = DEFAULT_ITERATIONS,
        rng: RandomSource = None,
        n_workers: int = 1,
        min_valid_fraction: float = DEFAULT_MIN_VALID_FRACTION,
    ):
        """Initialize the engine.

        Args:
            iterations: Number of bootstrap iterations (> 0).
            rng: Seed, SeedSequence or Generator for the per-iteration streams.
            n_workers: Thread pool size; 1 runs sequentially.
            min_valid_fraction: Fraction of iterations in (0, 1] that must survive.

        Raises:
            InvalidInputError: If any parameter is out of range.
        """
        if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)):
            raise InvalidInputError(f"iterations must be an integer, got {iterations!r}")
        if iterations <= 0:
            raise InvalidInputError(f"iterations must be > 0, got {iterations}")
        if n_workers < 1:
            raise InvalidInputError(f"n_workers must be >= 1, got {n_workers}")
        if not 0 < min_valid_fraction <= 1:
            raise InvalidInputError(
                f"min_valid_fraction must be in (0, 1], got {min_valid_fraction}"
            )

        self.iterations = int(iterations)
        self.rng = rng
        self.n_workers = n_workers
        self.min_valid_fraction = min_valid_fraction

    def __repr__(self) -> str:
        return (
            f"BootstrapEngine(iterations={self.iterations}, "
            f"n_workers={self.n_workers}, min_valid_fraction={self.min_valid_fraction})"
        )

    @property
    def min_valid_iterations(self) -> int:
        """Minimum number of surviving iterations for a usable distribution."""
        return max(1, int(np.ceil(self.min_valid_fraction * self.iterations)))

    def run(
        self,
        grouping_keys: Sequence[Hashable],
        team_labels: Sequence[Optional[str]],
        mode: str = PER_SESSION,
        event_types: Optional[Sequence[str]] = None,
    ) -> BootstrapResult:
        """Build the bootstrap distribution of Δ_AB.

        Args:
            grouping_keys: Grouping key of each record.
            team_labels: Team label of each record ("A", "B" or None).
            mode: "per_session" or "per_search".
            event_types: Optional event type per record; non-click records
                only contribute (silent) groups.

        Returns:
            BootstrapResult with surviving Δ_AB values in iteration order.

        Raises:
            InvalidInputError: On invalid inputs.
            InsufficientDataError: If the full data has no informative group,
                or too many iterations were dropped.
        """
        # Fails fast on data that can never yield a statistic
        estimate_outcomes(grouping_keys, team_labels, mode, event_types)

        counts = count_group_clicks(grouping_keys, team_labels, event_types)
        count_a, count_b = count_arrays(counts)
        streams = spawn_streams(self.rng, self.iterations)

        logger.debug(
            "Bootstrapping %d groups: %d iterations, %d workers",
            len(count_a), self.iterations, self.n_workers,
        )

        buffer = np.full(self.iterations, np.nan, dtype=np.float64)
        if self.n_workers == 1:
            for i, stream in enumerate(streams):
                buffer[i] = resample_delta(count_a, count_b, stream)
        else:
            with ThreadPoolExecutor(max_workers=self.n_workers) as executor:
                futures = {
                    executor.submit(resample_delta, count_a, count_b, stream): i
                    for i, stream in enumerate(streams)
                }
                for future in as_completed(futures):
                    buffer[futures[future]] = future.result()

        sample = buffer[~np.isnan(buffer)]
        result = BootstrapResult(
            sample=sample,
            iterations=self.iterations,
            dropped=self.iterations - len(sample),
        )
        self._check_dropped(result)
        return result

    def _check_dropped(self, result: BootstrapResult) -> None:
        """Enforce the minimum-viable-iterations floor and warn on heavy drops."""
        if result.n_valid < self.min_valid_iterations:
            raise InsufficientDataError(
                f"Only {result.n_valid} of {result.iterations} bootstrap iterations had "
                f"informative clicks (need at least {self.min_valid_iterations}); "
                f"too many resamples drew only silent groups.",
                reason=InsufficientDataError.TOO_MANY_DROPPED,
                min_required=self.min_valid_iterations,
            )
        if result.drop_fraction > self.DROP_WARNING_FRACTION:
            logger.warning(
                "Dropped %d of %d bootstrap iterations (%.1f%%) with no informative "
                "clicks; effective sample size is %d",
                result.dropped, result.iterations, 100 * result.drop_fraction, result.n_valid,
            )

    def confidence_interval(
        self,
        grouping_keys: Sequence[Hashable],
        team_labels: Sequence[Optional[str]],
        mode: str = PER_SESSION,
        level: float = DEFAULT_CONFIDENCE_LEVEL,
        event_types: Optional[Sequence[str]] = None,
    ) -> ConfidenceInterval:
        """Run the bootstrap and return its percentile confidence interval."""
        validate_confidence_level(level)
        result = self.run(grouping_keys, team_labels, mode, event_types)
        return confidence_interval(result.sample, level)


def bootstrap(
    grouping_keys: Sequence[Hashable],
    team_labels: Sequence[Optional[str]],
    mode: str = PER_SESSION,
    iterations: int = DEFAULT_ITERATIONS,
    rng: RandomSource = None,
    event_types: Optional[Sequence[str]] = None,
    n_workers: int = 1,
) -> np.ndarray:
    """Bootstrap distribution of Δ_AB (surviving iterations only).

    See BootstrapEngine for the resampling and drop policy. The array holds
    iterations - dropped values; callers that need the dropped count should
    call BootstrapEngine.run, whose BootstrapResult carries it.

    Returns:
        Array of Δ_AB values, one per surviving iteration.
    """
    engine = BootstrapEngine(iterations=iterations, rng=rng, n_workers=n_workers)
    return engine.run(grouping_keys, team_labels, mode, event_types).sample
