"""
Settings for an interleaving preference analysis. Changing these values
changes how results are interleaved, how clicks are aggregated and how the
confidence interval is estimated.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import numpy as np

from interleaving_eval.core.errors import InvalidInputError
from interleaving_eval.core.types import MODES, PER_SESSION
from interleaving_eval.interleaving.factory import INTERLEAVER_REGISTRY


@dataclass
class AnalysisConfig:
    """Configuration for an interleaving preference analysis.

    Attributes:
        mode: Aggregation unit.
               "per_session" = one win/tie/loss per session.
               "per_search" = one win/tie/loss per (session, query) pair.
        iterations: Bootstrap resamples. More = smoother interval, slower run.
        confidence_level: Interval coverage, e.g. 0.95 for a 95% interval.
        page_size: Screen Real Estate.
               How many interleaved results to show per query.
        random_seed: Reproducibility Key.
               Seeds the Team Draft coin flips and the bootstrap streams.
               None = fresh entropy on every run.
        n_workers: Bootstrap thread pool size (1 = sequential).
        min_valid_fraction: Share of bootstrap iterations that must have
               informative clicks for the interval to be reported.
        interleaving_scheme: Name of the interleaving algorithm.
    """

    mode: str = PER_SESSION
    iterations: int = 2000
    confidence_level: float = 0.95

    page_size: int = 10
    random_seed: Optional[int] = 42

    n_workers: int = 1
    min_valid_fraction: float = 0.5

    interleaving_scheme: str = "team_draft"

    def __post_init__(self):
        """Sanity checks to prevent invalid configurations."""
        if self.mode not in MODES:
            raise InvalidInputError(f"mode must be one of {list(MODES)}, got {self.mode!r}")
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, (int, np.integer)):
            raise InvalidInputError(f"iterations must be an integer, got {self.iterations!r}")
        if self.iterations <= 0:
            raise InvalidInputError("iterations must be > 0")
        if not 0 < self.confidence_level < 1:
            raise InvalidInputError("confidence_level must be between 0 and 1")
        if self.page_size <= 0:
            raise InvalidInputError("page_size must be > 0")
        if self.n_workers < 1:
            raise InvalidInputError("n_workers must be >= 1")
        if not 0 < self.min_valid_fraction <= 1:
            raise InvalidInputError("min_valid_fraction must be in (0, 1]")
        if self.interleaving_scheme not in INTERLEAVER_REGISTRY:
            raise InvalidInputError(
                f"Unknown interleaving scheme '{self.interleaving_scheme}'. "
                f"Available: {list(INTERLEAVER_REGISTRY.keys())}"
            )

        # Built once; every page served with this config draws from it
        self._page_rng: Optional[np.random.Generator] = None

    @property
    def page_rng(self) -> np.random.Generator:
        """Generator for Team Draft coin flips, seeded from random_seed on first use."""
        if self._page_rng is None:
            self._page_rng = np.random.default_rng(self.random_seed)
        return self._page_rng

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
