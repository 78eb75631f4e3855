"""Validation of a market's margin ratios."""

from __future__ import annotations

from .constants import MAXIMUM_MARGIN_RATIO, MINIMUM_MARGIN_RATIO
from .errors import ClearingHouseError, ErrorCode


def _in_bounds(ratio: int) -> bool:
    return MINIMUM_MARGIN_RATIO <= ratio <= MAXIMUM_MARGIN_RATIO


def validate_margin_ratios(
    margin_ratio_initial: int,
    margin_ratio_partial: int,
    margin_ratio_maintenance: int,
) -> None:
    """Check that each ratio is within bounds and initial >= partial >= maintenance."""
    if (
        not _in_bounds(margin_ratio_initial)
        or margin_ratio_initial < margin_ratio_partial
        or not _in_bounds(margin_ratio_partial)
        or margin_ratio_partial < margin_ratio_maintenance
        or not _in_bounds(margin_ratio_maintenance)
    ):
        raise ClearingHouseError(ErrorCode.INVALID_MARGIN_RATIO)