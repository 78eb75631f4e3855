"""Price calculations for the automated market maker."""

from __future__ import annotations

from .bignum import U192
from .constants import PRICE_TO_PEG_PRECISION_RATIO
from .errors import ClearingHouseError, ErrorCode

_U128_MAX = (1 << 128) - 1


def calculate_price(quote_asset_reserve: int, base_asset_reserve: int, peg_multiplier: int) -> int:
    """Mark price of the pool at MARK_PRICE_PRECISION.

    Computes quote/base * (peg/PEG_PRECISION), scaled to the mark price precision.
    """
    peg_quote_asset_amount = quote_asset_reserve * peg_multiplier
    if not 0 <= peg_quote_asset_amount <= _U128_MAX:
        raise ClearingHouseError(ErrorCode.MATH_ERROR)

    return (
        U192(peg_quote_asset_amount)
        .checked_mul(PRICE_TO_PEG_PRECISION_RATIO)
        .checked_div(base_asset_reserve)
        .try_to_u128()
    )