"""Core module: Shared types, constants and errors.

Example usage:
    from interleaving_eval.core import TEAM_A, PER_SESSION, InterleavedResult
    from interleaving_eval.core import InsufficientDataError
"""

from interleaving_eval.core.errors import (
    InterleavingEvalError,
    InvalidInputError,
    InsufficientDataError,
)
from interleaving_eval.core.types import (
    TEAM_A,
    TEAM_B,
    TEAMS,
    PER_SESSION,
    PER_SEARCH,
    MODES,
    CLICK,
    RankedList,
    InterleavedItem,
    InterleavedResult,
    EventRecord,
    GroupOutcomes,
    ConfidenceInterval,
    BootstrapResult,
    PreferenceReport,
)

__all__ = [
    # Errors
    "InterleavingEvalError",
    "InvalidInputError",
    "InsufficientDataError",
    # Constants
    "TEAM_A",
    "TEAM_B",
    "TEAMS",
    "PER_SESSION",
    "PER_SEARCH",
    "MODES",
    "CLICK",
    # Types
    "RankedList",
    "InterleavedItem",
    "InterleavedResult",
    "EventRecord",
    "GroupOutcomes",
    "ConfidenceInterval",
    "BootstrapResult",
    "PreferenceReport",
]
