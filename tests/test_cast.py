import pytest

from clearinghouse.cast import IntType, cast, cast_to_i128, cast_to_i64, cast_to_u128
from clearinghouse.errors import ClearingHouseError, ErrorCode

I128_MAX = 2**127 - 1
I64_MAX = 2**63 - 1


def test_cast_to_i128():
    assert cast_to_i128(I128_MAX) == I128_MAX
    with pytest.raises(ClearingHouseError) as info:
        cast_to_i128(I128_MAX + 1)
    assert info.value.code is ErrorCode.FAIL_TO_CAST


def test_cast_to_i64():
    assert cast_to_i64(I64_MAX) == I64_MAX
    with pytest.raises(ClearingHouseError) as info:
        cast_to_i64(I64_MAX + 1)
    assert info.value.code is ErrorCode.FAIL_TO_CAST


def test_cast_to_u128_rejects_negative():
    assert cast_to_u128(0) == 0
    with pytest.raises(ClearingHouseError):
        cast_to_u128(-1)


def test_generic_cast_bounds():
    assert cast(IntType.U8.max, IntType.U8) == IntType.U8.max
    assert cast(IntType.I32.min, IntType.I32) == IntType.I32.min
    with pytest.raises(ClearingHouseError):
        cast(IntType.U8.max + 1, IntType.U8)
    with pytest.raises(ClearingHouseError):
        cast(IntType.I64.min - 1, IntType.I64)