from .team_draft import interleave
from .factory import create_interleaver, INTERLEAVER_REGISTRY
from .attribution import (
    attribute_clicks,
    attribute_click_positions,
    compute_credit,
)

__all__ = [
    # Team Draft
    "interleave",
    # Schemes
    "create_interleaver",
    "INTERLEAVER_REGISTRY",
    # Click attribution
    "attribute_clicks",
    "attribute_click_positions",
    "compute_credit",
]
