"""Click attribution for Team Draft pages.

Every slot of an interleaved page belongs to the team that drafted it, so a
click is credited to the team owning the clicked result.
"""

from typing import Dict, Hashable, List, Optional, Sequence

from interleaving_eval.core.errors import InvalidInputError
from interleaving_eval.core.types import TEAM_A, TEAM_B, InterleavedResult


def attribute_clicks(
    interleaved: InterleavedResult,
    clicked_ids: Sequence[Hashable],
) -> List[Optional[str]]:
    """Map clicked result ids to the team that contributed them.

    Args:
        interleaved: The page the clicks were observed on.
        clicked_ids: Clicked result ids, in click order.

    Returns:
        Team label per click, or None for ids that were not on the page.
    """
    owner = {item.result_id: item.team for item in interleaved.items}
    return [owner.get(result_id) for result_id in clicked_ids]


def attribute_click_positions(
    interleaved: InterleavedResult,
    clicked_positions: Sequence[int],
) -> List[str]:
    """Map clicked positions (0-indexed) to the team that drafted that slot.

    Raises:
        InvalidInputError: If a position is outside the page.
    """
    teams = []
    for pos in clicked_positions:
        if not 0 <= pos < len(interleaved):
            raise InvalidInputError(
                f"Click position {pos} outside page of {len(interleaved)} items"
            )
        teams.append(interleaved.items[pos].team)
    return teams


def compute_credit(
    interleaved: InterleavedResult,
    clicked_ids: Sequence[Hashable],
) -> Dict[str, int]:
    """Count attributed clicks per team for one page.

    Returns:
        Dict with click counts for both teams (zero if a team got none).
    """
    credit = {TEAM_A: 0, TEAM_B: 0}
    for team in attribute_clicks(interleaved, clicked_ids):
        if team is not None:
            credit[team] += 1
    return credit
