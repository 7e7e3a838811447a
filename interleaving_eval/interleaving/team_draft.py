"""Team Draft Interleaving implementation.

Implements the two-ranker team draft algorithm as described in
Radlinski et al. (2008) and Chapelle et al. (2012).
"""

from typing import Dict, Hashable, List, Optional, Set, Union

import numpy as np

from interleaving_eval.core.errors import InvalidInputError
from interleaving_eval.core.types import (
    TEAM_A,
    TEAM_B,
    InterleavedItem,
    InterleavedResult,
    RankedList,
)


def _next_unused(
    ranking: List[Hashable],
    pointer: int,
    drafted_items: Set[Hashable],
) -> Optional[int]:
    """Return the index of the first not-yet-drafted item at or after pointer."""
    while pointer < len(ranking):
        if ranking[pointer] not in drafted_items:
            return pointer
        pointer += 1
    return None


def interleave(
    ranking_a: RankedList,
    ranking_b: RankedList,
    page_size: int = 10,
    rng: Optional[Union[np.random.Generator, int]] = None,
) -> InterleavedResult:
    """Construct an interleaved page using Team Draft.

    Each round a fresh fair coin decides which ranker drafts first:
        Round 1 (coin = A): A picks its best unused item, then B
        Round 2 (coin = B): B picks its best unused item, then A
        ...

    An item drafted by one team is skipped by the other, so the page never
    contains duplicates. A round places two items, or one when a ranker has
    nothing left to give. Drafting stops at page_size or when both rankers
    are exhausted; a partial page is not an error.

    Args:
        ranking_a: Ranked result ids of ranker A.
        ranking_b: Ranked result ids of ranker B.
        page_size: Target size of the interleaved page.
        rng: Random number generator or seed for the per-round coin flips.

    Returns:
        InterleavedResult with team provenance for every slot and the
        first-drafting team of every round.

    Raises:
        InvalidInputError: If either ranking is empty or page_size <= 0.
    """
    if len(ranking_a) == 0 or len(ranking_b) == 0:
        raise InvalidInputError(
            f"Both rankings must be non-empty (got {len(ranking_a)} and {len(ranking_b)} items)"
        )
    if page_size <= 0:
        raise InvalidInputError(f"page_size must be > 0, got {page_size}")

    rng = np.random.default_rng(rng)

    rankings: Dict[str, List[Hashable]] = {TEAM_A: list(ranking_a), TEAM_B: list(ranking_b)}
    pointers = {TEAM_A: 0, TEAM_B: 0}

    items: List[InterleavedItem] = []
    rounds: List[str] = []
    drafted_items: Set[Hashable] = set()

    while len(items) < page_size:
        first = TEAM_A if rng.random() < 0.5 else TEAM_B
        draft_order = (first, TEAM_B if first == TEAM_A else TEAM_A)
        items_added_this_round = 0

        for team in draft_order:
            if len(items) >= page_size:
                break

            idx = _next_unused(rankings[team], pointers[team], drafted_items)
            if idx is None:
                pointers[team] = len(rankings[team])
                continue

            result_id = rankings[team][idx]
            items.append(InterleavedItem(position=len(items), result_id=result_id, team=team))
            drafted_items.add(result_id)
            pointers[team] = idx + 1
            items_added_this_round += 1

        # Both rankers exhausted
        if items_added_this_round == 0:
            break

        rounds.append(first)

    return InterleavedResult(items=items, rounds=rounds)
