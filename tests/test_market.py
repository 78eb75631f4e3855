import pytest

from clearinghouse.constants import MARK_PRICE_PRECISION
from clearinghouse.errors import ClearingHouseError, ErrorCode
from clearinghouse.market import Amm, Market, Markets, OraclePriceData
from clearinghouse.oracle import initialize_price


def _oracle(price, conf, exponent, ema_price, posted_slot=0):
    update = initialize_price(price, conf, exponent, ema_price, 0)
    update.posted_slot = posted_slot
    return update.serialize()


def test_mark_price_at_equal_reserves():
    amm = Amm(base_asset_reserve=1000, quote_asset_reserve=1000, peg_multiplier=1000)
    assert amm.mark_price() == MARK_PRICE_PRECISION


def test_mark_price_zero_base_reserve_is_math_error():
    amm = Amm(base_asset_reserve=0, quote_asset_reserve=1000, peg_multiplier=1000)
    with pytest.raises(ClearingHouseError) as info:
        amm.mark_price()
    assert info.value.code is ErrorCode.MATH_ERROR


def test_pyth_price_scaled_up():
    data = _oracle(100 * 10**8, 5 * 10**8, -8, 99 * 10**8, posted_slot=10)
    result = Amm().get_pyth_price(data, 15)
    assert result == OraclePriceData(
        price=100 * MARK_PRICE_PRECISION,
        confidence=5 * MARK_PRICE_PRECISION,
        delay=5,
        has_sufficient_number_of_data_points=True,
    )


def test_pyth_price_scaled_down():
    data = _oracle(3 * 10**12, 10**12, -12, 3 * 10**12)
    result = Amm().get_pyth_price(data, 0)
    assert result.price == 3 * MARK_PRICE_PRECISION
    assert result.confidence == MARK_PRICE_PRECISION


def test_pyth_negative_price_truncates_toward_zero():
    data = _oracle(-15, 0, -11, -15)
    assert Amm().get_pyth_price(data, 0).price == -1
    assert Amm().get_pyth_ema_price(data) == -1


def test_pyth_delay_may_be_negative():
    data = _oracle(1, 0, -10, 1, posted_slot=20)
    assert Amm().get_pyth_price(data, 5).delay == -15


def test_pyth_ema_price_scaled():
    data = _oracle(1, 0, -6, 42 * 10**6)
    assert Amm().get_pyth_ema_price(data) == 42 * MARK_PRICE_PRECISION


def test_pyth_price_slot_overflow_is_cast_error():
    data = _oracle(1, 0, -8, 1)
    with pytest.raises(ClearingHouseError) as info:
        Amm().get_pyth_price(data, 2**63)
    assert info.value.code is ErrorCode.FAIL_TO_CAST


def test_pyth_price_bad_data_is_deserialize_error():
    with pytest.raises(ClearingHouseError) as info:
        Amm().get_pyth_price(b"\0" * 12, 0)
    assert info.value.code is ErrorCode.FAIL_TO_DESERIALIZE


def test_pyth_price_missing_data_is_load_error():
    with pytest.raises(ClearingHouseError) as info:
        Amm().get_pyth_ema_price(None)
    assert info.value.code is ErrorCode.FAIL_TO_LOAD_ORACLE


def test_pyth_price_huge_exponent_is_math_error():
    data = _oracle(1, 0, -39, 1)
    with pytest.raises(ClearingHouseError) as info:
        Amm().get_pyth_price(data, 0)
    assert info.value.code is ErrorCode.MATH_ERROR


def test_markets_start_uninitialized():
    markets = Markets()
    assert len(markets) == 64
    assert all(not market.is_initialized() for market in markets)


def test_markets_set_and_get():
    markets = Markets()
    markets[3] = Market(initialized=True, margin_ratio_initial=2000)
    assert markets[3].is_initialized()
    assert markets[3].margin_ratio_initial == 2000
    assert not markets[2].is_initialized()


@pytest.mark.parametrize("index", [64, -1])
def test_markets_index_out_of_range(index):
    with pytest.raises(IndexError):
        Markets()[index]


def test_markets_reject_non_market():
    markets = Markets()
    with pytest.raises(TypeError):
        markets[0] = "market"
    slot = markets[0]
    assert isinstance(slot, Market)
    assert slot.is_initialized() is False