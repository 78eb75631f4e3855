import pytest

from clearinghouse.amm import calculate_price
from clearinghouse.constants import MARK_PRICE_PRECISION
from clearinghouse.errors import ClearingHouseError, ErrorCode


def test_calculate_price():
    assert calculate_price(1000, 1000, 1000) == MARK_PRICE_PRECISION


def test_price_scales_with_peg():
    assert calculate_price(1000, 1000, 2000) == 2 * calculate_price(1000, 1000, 1000)


def test_zero_base_reserve_is_math_error():
    with pytest.raises(ClearingHouseError) as info:
        calculate_price(1000, 0, 1000)
    assert info.value.code is ErrorCode.MATH_ERROR


def test_quote_peg_overflow_is_math_error():
    with pytest.raises(ClearingHouseError) as info:
        calculate_price(2**127, 1, 4)
    assert info.value.code is ErrorCode.MATH_ERROR


def test_result_too_large_for_u128():
    with pytest.raises(ClearingHouseError) as info:
        calculate_price(2**127, 1, 1)
    assert info.value.code is ErrorCode.BN_CONVERSION_ERROR