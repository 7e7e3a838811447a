"""Exception classes for interleaving evaluation."""

from typing import Optional


class InterleavingEvalError(Exception):
    """Base exception for interleaving evaluation errors."""

    pass


class InvalidInputError(InterleavingEvalError, ValueError):
    """Raised when a call is made with invalid arguments.

    Examples: an empty ranked list, a non-positive page size or iteration
    count, a confidence level outside (0, 1), misaligned input sequences.
    """

    pass


class InsufficientDataError(InterleavingEvalError):
    """Raised when the data cannot support the requested statistic.

    Attributes:
        reason: Machine-readable cause. One of:
            - "no_clicks": no click records at all
            - "no_informative_clicks": clicks exist but no group has an
              attributed click for either team
            - "too_many_dropped": too few bootstrap iterations survived
        min_required: Minimum count that would have been required, if any.
    """

    NO_CLICKS = "no_clicks"
    NO_INFORMATIVE_CLICKS = "no_informative_clicks"
    TOO_MANY_DROPPED = "too_many_dropped"

    def __init__(
        self,
        message: str,
        reason: str = NO_INFORMATIVE_CLICKS,
        min_required: Optional[int] = None,
    ) -> None:
        self.reason = reason
        self.min_required = min_required
        super().__init__(message)
