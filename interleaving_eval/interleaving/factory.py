"""Interleaving schemes aligned with published algorithms."""

from typing import Callable, Dict

from .team_draft import interleave as team_draft_interleave


# Registry of available interleaving schemes
INTERLEAVER_REGISTRY: Dict[str, Callable] = {
    "team_draft": team_draft_interleave,
}


def create_interleaver(
    scheme: str = "team_draft",
) -> Callable:
    """Factory for interleaving callables.

    Args:
        scheme: Interleaving scheme to use. Currently only "team_draft" is supported.

    Returns:
        Callable with signature (ranking_a, ranking_b, page_size, rng) -> InterleavedResult.

    Raises:
        ValueError: If scheme is not recognized.
    """
    if scheme not in INTERLEAVER_REGISTRY:
        available = list(INTERLEAVER_REGISTRY.keys())
        raise ValueError(f"Unknown interleaving scheme: {scheme}. Available: {available}")
    return INTERLEAVER_REGISTRY[scheme]
